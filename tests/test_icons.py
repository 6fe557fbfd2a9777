"""Tests for the icon registry extractor and SVG rendering."""

import pytest

from designindex.indexer.core import MemoryFileSource
from designindex.indexer.extractors.icons import (
    IconExtractor,
    load_shape_tree,
    parse_icon_block,
    parse_icons_module,
    render_svg,
    usage_snippets,
)
from designindex.indexer.models import Icon

from conftest import DESIGN_SYSTEM, ICONS


class TestParseIconBlock:

    def test_full_block(self):
        block = """ArrowDown16 = {
  viewBox: "0 0 16 16",
  paths: [{ tagName: "path", attrs: { d: "M1 1h14" } }],
  type: "navigation",
  iconName: "ArrowDown16",
};
"""
        icon = parse_icon_block(block)
        assert icon.name == "ArrowDown16"
        assert icon.icon_name == "ArrowDown"
        assert icon.size == 16
        assert icon.type == "navigation"
        assert icon.view_box == "0 0 16 16"
        assert icon.paths == '[{ tagName: "path", attrs: { d: "M1 1h14" } }]'

    def test_defaults_when_fields_missing(self):
        icon = parse_icon_block('Logo = {\n  paths: [{ tagName: "path", attrs: { d: "M0 0" } }]\n};\n')
        assert icon.icon_name == "Logo"
        assert icon.size == 16
        assert icon.type == "unknown"
        assert icon.view_box == "0 0 16 16"

    def test_block_without_paths_is_not_an_icon(self):
        assert parse_icon_block('iconsVersion = "1.0.0";') is None


class TestParseIconsModule:

    @pytest.fixture
    def icons(self):
        return {icon.name: icon for icon in parse_icons_module(DESIGN_SYSTEM[ICONS])}

    def test_every_icon_export(self, icons):
        assert sorted(icons) == ["ArrowArrowBottom16", "ArrowArrowBottom24", "MediaCamera32"]

    def test_nested_shape_tree_is_kept_whole(self, icons):
        paths = icons["MediaCamera32"].paths
        assert paths.startswith('[{ tagName: "g"')
        assert paths.endswith("}] }]")

    def test_duplicate_export_keeps_first(self):
        content = (
            'export const A16 = { paths: [{ tagName: "path", attrs: { d: "M1" } }], type: "x" };\n'
            'export const A16 = { paths: [{ tagName: "path", attrs: { d: "M2" } }], type: "y" };\n'
        )
        icons = parse_icons_module(content)
        assert len(icons) == 1
        assert icons[0].type == "x"


class TestRendering:

    def test_shape_tree_with_bare_keys(self):
        tree = load_shape_tree('[{ tagName: "path", attrs: { d: "M1 1" } }]')
        assert tree == [{"tagName": "path", "attrs": {"d": "M1 1"}}]

    def test_render_leaf_paints_current_color(self):
        icon = parse_icons_module(DESIGN_SYSTEM[ICONS])[0]
        svg = render_svg(icon)
        assert svg.startswith('<svg viewBox="0 0 16 16" xmlns="http://www.w3.org/2000/svg">')
        assert '<path d="M8 11 3 6h10z" fill="currentColor"/>' in svg
        assert svg.endswith("</svg>")

    def test_render_nested_group(self):
        icon = {i.name: i for i in parse_icons_module(DESIGN_SYSTEM[ICONS])}["MediaCamera32"]
        svg = render_svg(icon)
        assert "<g>" in svg
        assert '<circle cx="16" cy="16" r="6" fill="currentColor"/>' in svg
        assert "</g>" in svg

    def test_unparseable_tree_falls_back_to_first_path(self):
        icon = Icon(name="X16", icon_name="X", type="t", size=16, view_box="0 0 16 16",
                    paths='[{ tagName: "path", attrs: { d: "M0 0h4" }, broken }]')
        assert '<path d="M0 0h4" fill="currentColor"/>' in render_svg(icon)

    def test_empty_svg_as_last_resort(self):
        icon = Icon(name="X16", icon_name="X", type="t", size=16, view_box="0 0 16 16", paths="[oops")
        assert render_svg(icon) == '<svg viewBox="0 0 16 16" xmlns="http://www.w3.org/2000/svg"></svg>'

    def test_usage_snippets(self):
        icon = Icon(name="ArrowDown16", icon_name="ArrowDown", type="navigation", size=16,
                    view_box="0 0 16 16", paths="[]")
        snippets = usage_snippets(icon)
        assert set(snippets) == {"react", "vue"}
        assert '<MIcon name="ArrowDown16" />' in snippets["react"]
        assert "import { ArrowDown16 }" in snippets["vue"]


class TestIconExtractor:

    def test_root_is_the_module_file(self, memory_source):
        extractor = IconExtractor(ICONS, memory_source)
        assert extractor.source_exists()
        assert len(extractor.extract()) == 3

    def test_directory_is_not_a_source(self):
        source = MemoryFileSource({"icons/js/icons.js": ""})
        assert not IconExtractor("icons/js", source).source_exists()
