"""Tests for the generated CSS utility catalogs."""

from designindex.indexer.config import MAJOR_SCREENS, UTILITY_SIDES, UTILITY_SIZES
from designindex.indexer.extractors.css_utilities import (
    CssUtilityExtractor,
    generate_utilities,
    responsive,
    spacing_classes,
)


def utilities():
    return {u.slug: u for u in generate_utilities()}


class TestGenerators:

    def test_responsive_variants(self):
        assert responsive(".ml-container--fluid") == [
            ".ml-container--fluid@from-s",
            ".ml-container--fluid@from-m",
            ".ml-container--fluid@from-l",
            ".ml-container--fluid@from-xl",
        ]

    def test_spacing_grid_size(self):
        classes = spacing_classes("m")
        assert len(classes) == len(UTILITY_SIDES) * len(UTILITY_SIZES) == 119

    def test_all_side_drops_side_letter(self):
        classes = spacing_classes("p")
        assert ".mu-p-100" in classes
        assert ".mu-pt-100" in classes
        assert ".mu-pall-100" not in classes


class TestCatalog:

    def test_six_utilities_layouts_first(self):
        catalog = generate_utilities()
        assert [u.slug for u in catalog] == ["flexy", "container", "margin", "padding", "ratio", "scroll"]
        assert [u.category for u in catalog[:2]] == ["layout", "layout"]

    def test_margin(self):
        margin = utilities()["margin"]
        assert len(margin.classes) == 119
        assert margin.classes[0] == ".mu-mt-025"
        assert ".mu-mv-200" in margin.classes
        assert len(margin.examples) == 3

    def test_container(self):
        container = utilities()["container"]
        assert container.classes[:2] == [".ml-container", ".ml-container--fluid"]
        assert len(container.classes) == 2 + len(MAJOR_SCREENS)

    def test_flexy_contains_responsive_fractions(self):
        classes = utilities()["flexy"].classes
        assert ".ml-flexy__col--6of12@from-m" in classes
        assert ".ml-flexy__col--push-1of3@from-xl" in classes
        assert ".ml-flexy--gutter" in classes
        assert ".ml-flexy--gutter@from-s" not in classes
        assert len(classes) == len(set(classes))

    def test_ratio_and_scroll(self):
        assert ".mu-ratio--16x9" in utilities()["ratio"].classes
        assert utilities()["scroll"].classes == [".mu-prevent-body-scroll"]

    def test_generation_is_deterministic(self):
        first = [(u.slug, u.classes) for u in generate_utilities()]
        second = [(u.slug, u.classes) for u in generate_utilities()]
        assert first == second


class TestCssUtilityExtractor:

    def test_extract_does_not_read_the_styles_package(self):
        """The catalog is generated, so a root with no files still yields all six."""
        assert len(CssUtilityExtractor("does-not-exist").extract()) == 6
