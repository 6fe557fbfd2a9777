"""Tests for the value parser shared by the token readers."""

from designindex.indexer.extractors.values import format_number, leading_number, parse_value
from designindex.indexer.models import ParsedValue


class TestParseValue:
    """parse_value splits a raw scalar into number and unit."""

    def test_pixel_value(self):
        assert parse_value("16px") == ParsedValue(raw="16px", number=16.0, unit="px")

    def test_rem_fraction(self):
        parsed = parse_value("0.75rem")
        assert parsed.number == 0.75
        assert parsed.unit == "rem"

    def test_percentage_and_negative(self):
        assert parse_value("50%").unit == "%"
        assert parse_value("-2px").number == -2.0

    def test_bare_number_has_no_unit(self):
        parsed = parse_value("1.5")
        assert parsed.number == 1.5
        assert parsed.unit is None

    def test_hex_color_keeps_only_raw(self):
        """Hex colors are not numeric even when they start with digits."""
        parsed = parse_value("#188803")
        assert parsed.raw == "#188803"
        assert parsed.number is None
        assert parsed.unit is None

    def test_unknown_unit_keeps_only_raw(self):
        parsed = parse_value("12pt")
        assert parsed.number is None
        assert parsed.unit is None

    def test_numeric_input_is_formatted(self):
        parsed = parse_value(16.0)
        assert parsed.raw == "16"
        assert parsed.number == 16.0
        assert parsed.unit is None

    def test_boolean_is_not_a_number(self):
        parsed = parse_value(True)
        assert parsed.raw == "True"
        assert parsed.number is None


class TestNumberHelpers:

    def test_format_number_drops_trailing_zero(self):
        assert format_number(16.0) == "16"
        assert format_number(0.25) == "0.25"
        assert format_number(12) == "12"

    def test_leading_number(self):
        assert leading_number("2px solid") == 2.0
        assert leading_number(".5rem") == 0.5
        assert leading_number(3) == 3.0
        assert leading_number("auto") is None
