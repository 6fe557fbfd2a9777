"""Tests for the token extractor.

Covers the naming helpers, the generated magic-unit scale and every JSON
reader against the in-memory design system fixture.
"""

import pytest

from designindex.indexer.config import SPACING_SCALE
from designindex.indexer.core import MemoryFileSource
from designindex.indexer.extractors.tokens import (
    TokenExtractor,
    color_subcategory,
    css_variable,
    is_value_leaf,
    magic_unit_token,
    scss_variable,
    spacing_token,
)

from conftest import STYLES, TOKENS


@pytest.fixture
def tokens(memory_source):
    extractor = TokenExtractor(TOKENS, memory_source, styles_dir=STYLES)
    return extractor.extract()


def by_path(tokens):
    return {token.path: token for token in tokens}


# ============================================================================
# Naming helpers
# ============================================================================

class TestNamingHelpers:

    def test_css_and_scss_variables(self):
        assert css_variable("color", "primary-01.100") == "--color-primary-01-100"
        assert scss_variable("color", "primary-01.100") == "$color-primary-01-100"

    def test_color_subcategory_strips_numeric_suffix(self):
        assert color_subcategory("primary-01.100") == "primary"
        assert color_subcategory("grey.000") == "grey"

    def test_single_segment_color_has_no_subcategory(self):
        assert color_subcategory("white") is None

    def test_value_leaf(self):
        assert is_value_leaf({"value": "#fff"})
        assert not is_value_leaf({"value": 12})
        assert not is_value_leaf({"100": {"value": "#fff"}})


class TestSpacingScale:

    def test_spacing_step(self):
        token = spacing_token("mu100", 1)
        assert token.value_raw == "1rem"
        assert token.value_computed == "16px"
        assert token.css_variable == "--spacing-mu100"
        assert token.scss_variable == "$mu100"
        assert token.subcategory == "magic-unit"

    def test_fractional_step(self):
        token = spacing_token("mu025", 0.25)
        assert token.value_raw == "0.25rem"
        assert token.value_computed == "4px"

    def test_magic_unit(self):
        token = magic_unit_token()
        assert token.path == "spacing.magic-unit"
        assert token.value_raw == "16px"
        assert token.value_unit == "px"


# ============================================================================
# Extraction
# ============================================================================

class TestTokenExtractor:

    def test_total_count(self, tokens):
        assert len(tokens) == 31

    def test_paths_are_unique(self, tokens):
        paths = [token.path for token in tokens]
        assert len(paths) == len(set(paths))

    def test_colors(self, tokens):
        colors = [t for t in tokens if t.category == "color"]
        assert len(colors) == 3

        token = by_path(tokens)["color.primary-01.500"]
        assert token.name == "primary-01-500"
        assert token.value_raw == "#188803"
        assert token.value_number is None
        assert token.subcategory == "primary"
        assert token.description == "Main brand color"
        assert token.css_variable == "--color-primary-01-500"
        assert token.source_file == "properties/color/primary.json"

    def test_spacing_is_generated(self, tokens):
        spacing = [t for t in tokens if t.category == "spacing"]
        assert len(spacing) == len(SPACING_SCALE) + 1
        assert by_path(tokens)["spacing.mu200"].value_computed == "32px"

    def test_shadow_properties(self, tokens):
        shadow = by_path(tokens)["shadow.s"]
        assert shadow.value_raw == "0 1px 5px 0"
        assert [p.property for p in shadow.properties] == ["x", "y", "blur", "spread", "opacity"]

        blur = shadow.properties[2]
        assert blur.value == "5px"
        assert blur.value_number == 5.0
        assert blur.value_unit == "px"

    def test_border_and_radius(self, tokens):
        border = by_path(tokens)["border.s"]
        assert border.subcategory == "width"
        assert border.value_computed == "1px"

        radius = by_path(tokens)["radius.m"]
        assert radius.value_number == 4.0
        assert radius.description == "Border radius m"

    def test_screen(self, tokens):
        screen = by_path(tokens)["screen.m"]
        assert screen.subcategory == "breakpoint"
        assert screen.value_unit == "px"

    def test_typography(self, tokens):
        font = by_path(tokens)["typography.font.100"]
        assert font.subcategory == "font-size"
        assert font.value_computed == "12px"
        assert font.css_variable == "--font-size-100"

        line = by_path(tokens)["typography.line.100.s"]
        assert line.name == "line-100-s"
        assert line.value_computed == "16px"

    def test_grid(self, tokens):
        gutter = by_path(tokens)["grid.gutter.screen.s"]
        assert gutter.value_raw == "1mu"
        assert gutter.value_computed == "16px"

        rem = by_path(tokens)["grid.local-rem-value"]
        assert rem.value_raw == "16px"


class TestTokenExtractorRecovery:
    """A malformed file is skipped; the rest of the category survives."""

    def test_invalid_json_is_skipped(self):
        source = MemoryFileSource({
            "tokens/properties/color/broken.json": "{not json",
            "tokens/properties/color/ok.json": '{"color": {"white": {"value": "#fff"}}}',
        })
        tokens = TokenExtractor("tokens", source).extract()

        colors = [t for t in tokens if t.category == "color"]
        assert [t.path for t in colors] == ["color.white"]

    def test_duplicate_path_keeps_first(self):
        source = MemoryFileSource({
            "tokens/properties/color/a.json": '{"color": {"white": {"value": "#fff"}}}',
            "tokens/properties/color/b.json": '{"color": {"white": {"value": "#fefefe"}}}',
        })
        tokens = TokenExtractor("tokens", source).extract()

        white = by_path(tokens)["color.white"]
        assert white.value_raw == "#fff"

    def test_empty_package_still_yields_spacing(self):
        tokens = TokenExtractor("tokens", MemoryFileSource({})).extract()
        assert {t.category for t in tokens} == {"spacing"}

    def test_wrong_shape_json_is_skipped(self):
        source = MemoryFileSource({
            "tokens/properties/color/bad.json": '{"color": "oops"}',
            "tokens/properties/color/good.json": '{"color": {"white": {"value": "#fff"}}}',
            "tokens/properties/shadow/bad.json": '{"shadow": ["x"]}',
            "tokens/properties/border/bad.json": '{"border": 3}',
            "tokens/properties/radius/bad.json": '{"radius": {"s": {"value": ["4px"]}}}',
            "tokens/properties/size/screens.json": '{"screen": null}',
            "tokens/properties/size/font.json": '{"size": {"font": [1, 2], "line": "tall"}}',
            "tokens/properties/size/grid.json": '{"size": {"gutter": {"screen": 8}}}',
        })
        tokens = TokenExtractor("tokens", source).extract()

        assert {t.category for t in tokens} == {"color", "spacing"}
        assert [t.path for t in tokens if t.category == "color"] == ["color.white"]

    def test_missing_size_sections_are_not_an_error(self):
        source = MemoryFileSource({"tokens/properties/size/font.json": '{"other": {}}'})
        assert TokenExtractor("tokens", source).extract_typography() == []
