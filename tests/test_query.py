"""Query engine tests over a store built from the fixture design system."""

import pytest

from designindex.context import DesignQueryEngine, group_icons
from designindex.context.query import (
    clean_snippet,
    icon_search_queries,
    prepare_fts_query,
    text_search_queries,
)
from designindex.indexer.exceptions import QueryError
from designindex.indexer.models import Icon
from designindex.indexer.runner import run_rebuild

from conftest import EXPECTED_COUNTS


@pytest.fixture
def engine(design_system):
    result = run_rebuild(root_path=str(design_system))
    engine = DesignQueryEngine.open(result["db_path"])
    yield engine
    engine.close()


# ============================================================================
# FTS query preparation
# ============================================================================

class TestQueryHelpers:

    def test_prepare_fts_query(self):
        assert prepare_fts_query("mc-button  focus!") == "mc AND button AND focus"
        assert prepare_fts_query("a") == "a"

    def test_text_search_forms_in_order(self):
        assert text_search_queries("modal focus") == [
            "modal AND focus",
            "modal* focus*",
            '"modal" OR "focus"',
        ]

    def test_single_term_forms_are_deduplicated(self):
        forms = text_search_queries("modal")
        assert len(forms) == len(set(forms))
        assert forms[0] == "modal"

    def test_icon_forms(self):
        assert icon_search_queries("arrow") == ["arrow*"]
        assert icon_search_queries("arrow bottom") == ["arrow* AND bottom*", "arrow* OR bottom*"]

    def test_clean_snippet(self):
        assert clean_snippet("the <mark>modal</mark>\n  dialog") == "the **modal** dialog"
        assert clean_snippet(None) == ""
        assert clean_snippet("x" * 30, max_chars=10) == "x" * 10 + "..."

    def test_group_icons_by_display_name(self):
        icons = [
            Icon(name=f"Arrow{size}", icon_name="Arrow", type="navigation", size=size,
                 view_box="", paths="[]")
            for size in (24, 16)
        ]
        [group] = group_icons(icons)
        assert group["sizes"] == [16, 24]
        assert group["usage"]["vue"] == '<MIcon name="Arrow16" />'


# ============================================================================
# Typed reads
# ============================================================================

class TestTokens:

    def test_by_category(self, engine):
        colors = engine.tokens_by_category("color")
        assert {t.path for t in colors} == {"color.primary-01.100", "color.primary-01.500", "color.grey.000"}
        assert len(engine.tokens_by_category("all")) == EXPECTED_COUNTS["tokens"]

    def test_by_path_with_properties(self, engine):
        shadow = engine.token_by_path("shadow.s")
        assert shadow is not None
        assert len(shadow.properties) == 5
        assert engine.token_by_path("color.nope") is None

    def test_search(self, engine):
        result = engine.search_tokens("primary")
        assert result.ok
        assert {t.path for t in result.items} == {"color.primary-01.100", "color.primary-01.500"}

    def test_search_limit(self, engine):
        assert len(engine.search_tokens("primary", limit=1).items) == 1


class TestComponents:

    def test_slug_shared_across_frameworks(self, engine):
        vue = engine.component_by_slug("button")
        assert vue.name == "MButton"
        assert vue.frameworks == ["vue"]
        assert [p.name for p in vue.props] == ["size", "disabled", "label"]

        react = engine.component_by_slug("button", framework="react")
        assert react.name == "Button"
        assert react.slots[0].name == "children"

    def test_case_sensitivity(self, engine):
        assert engine.component_by_slug("BUTTON") is not None
        assert engine.component_by_slug("BUTTON", case_insensitive=False) is None

    def test_unknown_slug(self, engine):
        assert engine.component_by_slug("carousel") is None

    def test_list(self, engine):
        assert [row["name"] for row in engine.list_components()] == ["Button", "MButton", "MModal", "Tag"]
        assert [row["name"] for row in engine.list_components("feedback")] == ["MModal"]


class TestCssUtilities:

    def test_by_slug(self, engine):
        margin = engine.css_utility_by_slug("Margin")
        assert margin.category == "utility"
        assert len(margin.classes) == 119
        assert margin.examples

    def test_list_with_class_counts(self, engine):
        rows = engine.list_css_utilities("layout")
        assert {row["slug"] for row in rows} == {"flexy", "container"}
        assert all(row["class_count"] > 0 for row in rows)


class TestDocumentation:

    def test_by_path(self, engine):
        page = engine.documentation_by_path("/getting-started")
        assert page.title == "Getting started"
        assert engine.documentation_by_path("/missing") is None

    def test_search_highlights_match(self, engine):
        result = engine.search_documentation("modal")
        assert result.ok
        top = result.items[0]
        assert top["path"] == "/components/modal"
        assert "**" in top["snippet"]

    def test_punctuation_is_not_a_syntax_error(self, engine):
        result = engine.search_documentation("mc-modal--s")
        assert result.ok
        assert [hit["path"] for hit in result.items] == ["/components/modal"]

    def test_no_match_is_ok_and_empty(self, engine):
        result = engine.search_documentation("zebra")
        assert result.ok
        assert result.items == []

    def test_empty_query_fails(self, engine):
        result = engine.search_documentation("   ")
        assert not result.ok
        assert result.error == "Empty search query"

    def test_raw_syntax_error_is_reported(self, engine):
        result = engine.search_documentation('"unterminated', raw=True)
        assert not result.ok
        assert result.error

    def test_raise_for_error(self, engine):
        with pytest.raises(QueryError, match="Search failed"):
            engine.search_documentation('"unterminated', raw=True).raise_for_error()
        ok = engine.search_documentation("modal")
        assert ok.raise_for_error() is ok


class TestIcons:

    def test_search_prefix(self, engine):
        result = engine.search_icons("arrow")
        assert {icon.name for icon in result.items} == {"ArrowArrowBottom16", "ArrowArrowBottom24"}

    def test_search_filters(self, engine):
        assert [i.name for i in engine.search_icons("arrow", size=24).items] == ["ArrowArrowBottom24"]
        assert engine.search_icons("arrow", type="media").items == []

    def test_grouped_result(self, engine):
        [group] = group_icons(engine.search_icons("arrow").items)
        assert group["icon_name"] == "ArrowArrowBottom"
        assert group["sizes"] == [16, 24]

    def test_types_and_lookup(self, engine):
        assert engine.list_icon_types() == [
            {"type": "media", "count": 1},
            {"type": "navigation", "count": 2},
        ]
        assert engine.icon_by_name("MediaCamera32").size == 32
        assert [i.name for i in engine.list_icons(type="navigation", size=16)] == ["ArrowArrowBottom16"]


class TestStats:

    def test_counts(self, engine):
        stats = engine.stats()
        for table, expected in EXPECTED_COUNTS.items():
            assert stats[table] == expected, table
        assert stats["component_props"] > 0

    def test_open_missing_store(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="dsi build"):
            DesignQueryEngine.open(tmp_path / "absent.db")
