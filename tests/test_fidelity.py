"""Tests for manifest/receipt reconciliation and the orchestrator's recovery rules."""

import pytest

from designindex.indexer.config import SPACING_SCALE
from designindex.indexer.core import MemoryFileSource
from designindex.indexer.exceptions import DataFidelityError, EmptyResultError, MissingSourceError
from designindex.indexer.fallback import FALLBACK_DATASETS, fallback_for
from designindex.indexer.fidelity import build_manifest, reconcile_counts
from designindex.indexer.models import Component, Event, Prop, Token, TokenProperty
from designindex.indexer.orchestrator import CATEGORY_SOURCES, IndexerOrchestrator

from conftest import DESIGN_SYSTEM, DOCS, ICONS, REACT, STYLES, TOKENS, VUE

PATHS = {
    "tokens_dir": TOKENS,
    "styles_dir": STYLES,
    "vue_components_dir": VUE,
    "react_components_dir": REACT,
    "docs_dir": DOCS,
    "icons_file": ICONS,
}


class TestBuildManifest:

    def test_counts_children(self):
        records = [
            Token(category="shadow", name="s", path="shadow.s", value_raw="0",
                  properties=[TokenProperty(property="x", value="0")]),
            Token(category="color", name="white", path="color.white", value_raw="#fff"),
        ]
        assert build_manifest(records) == {"tokens": 2, "token_properties": 1}

    def test_zero_count_tables_are_omitted(self):
        component = Component(name="MTag", slug="tag", category="data-display",
                              props=[Prop(name="label")], events=[Event(name="remove")])
        assert build_manifest([component]) == {
            "components": 1,
            "component_props": 1,
            "component_events": 1,
        }

    def test_unsupported_record(self):
        with pytest.raises(TypeError, match="str"):
            build_manifest(["not a record"])


class TestReconcileCounts:

    def test_ok(self):
        result = reconcile_counts({"documentation": 3}, {"documentation": 3}, "docs")
        assert result == {"status": "OK", "errors": [], "warnings": []}

    def test_partial_loss_is_a_warning(self):
        result = reconcile_counts({"component_props": 4}, {"component_props": 3}, "vue")
        assert result["status"] == "WARNING"
        assert result["warnings"] == ["component_props: extracted 4 -> stored 3 (delta: 1)"]

    def test_total_loss_raises_in_strict_mode(self):
        with pytest.raises(DataFidelityError, match="100% LOSS") as exc_info:
            reconcile_counts({"icons": 5}, {}, "icons")
        assert exc_info.value.details["status"] == "FAILED"

    def test_total_loss_reported_when_not_strict(self):
        result = reconcile_counts({"icons": 5}, {"icons": 0}, "icons", strict=False)
        assert result["status"] == "FAILED"
        assert result["errors"] == ["icons: extracted 5 -> stored 0 (100% LOSS)"]


class TestFallbackDatasets:

    def test_every_category_has_a_dataset(self):
        assert set(FALLBACK_DATASETS) == set(CATEGORY_SOURCES)

    def test_fresh_records_per_call(self):
        assert fallback_for("tokens") is not fallback_for("tokens")
        assert fallback_for("tokens")[0] is not fallback_for("tokens")[0]

    def test_default_contents(self):
        tokens = fallback_for("tokens")
        assert sum(1 for t in tokens if t.category == "color") == 5
        assert sum(1 for t in tokens if t.subcategory == "magic-unit") == len(SPACING_SCALE)
        assert tokens[-1].path == "spacing.magic-unit"
        assert [c.name for c in fallback_for("vue")] == ["MButton"]
        assert [c.name for c in fallback_for("react")] == ["Button"]
        assert [d.path for d in fallback_for("docs")] == ["/getting-started"]
        assert [i.name for i in fallback_for("icons")] == ["ArrowArrowBottom16"]
        assert len(fallback_for("css_utilities")) == 6

    def test_fallback_manifests_are_consistent(self, db_manager):
        """Bundled records store without fidelity loss."""
        receipt = db_manager.insert_documentation(fallback_for("docs"))
        assert reconcile_counts(build_manifest(fallback_for("docs")), receipt, "docs")["status"] == "OK"


class TestOrchestrator:

    def source_without(self, prefix):
        return MemoryFileSource({k: v for k, v in DESIGN_SYSTEM.items() if not k.startswith(prefix)})

    def test_index_from_memory(self, db_manager, memory_source):
        orchestrator = IndexerOrchestrator(db_manager, PATHS, source=memory_source)
        categories = orchestrator.index()

        assert orchestrator.counts["docs"] == 3
        assert categories["tokens"]["fidelity"] == "OK"
        assert db_manager.table_counts()["components"] == 4

    def test_malformed_token_file_does_not_abort(self, db_manager):
        files = dict(DESIGN_SYSTEM)
        files[f"{TOKENS}/properties/color/bad.json"] = '{"color": "oops"}'
        orchestrator = IndexerOrchestrator(db_manager, PATHS, source=MemoryFileSource(files))

        categories = orchestrator.index()

        assert categories["tokens"]["fidelity"] == "OK"
        assert db_manager.table_counts()["icons"] == 3

    def test_strict_missing_source(self, db_manager):
        orchestrator = IndexerOrchestrator(db_manager, PATHS, source=self.source_without(DOCS))
        with pytest.raises(MissingSourceError) as exc_info:
            orchestrator.index()
        assert exc_info.value.category == "docs"
        # categories before docs were committed
        assert db_manager.table_counts()["tokens"] > 0

    def test_strict_empty_result(self, db_manager):
        files = {k: v for k, v in DESIGN_SYSTEM.items() if not k.startswith(VUE)}
        files[f"{VUE}/readme.md"] = "# Components"
        orchestrator = IndexerOrchestrator(db_manager, PATHS, source=MemoryFileSource(files))
        with pytest.raises(EmptyResultError, match="No vue records"):
            orchestrator.index()

    def test_lenient_missing_source(self, db_manager):
        orchestrator = IndexerOrchestrator(db_manager, PATHS, mode="lenient",
                                           source=self.source_without(DOCS))
        categories = orchestrator.index()

        assert categories["docs"]["fallback_used"] is True
        rows = db_manager.conn.execute("SELECT path FROM documentation").fetchall()
        assert rows == [("/getting-started",)]

    def test_optional_category_never_falls_back(self, db_manager):
        orchestrator = IndexerOrchestrator(db_manager, PATHS, mode="lenient",
                                           source=self.source_without(STYLES))
        categories = orchestrator.index()
        assert categories["css_utilities"] == {
            "records": 0, "source": STYLES, "fallback_used": False, "skipped": True,
        }

    def test_unknown_mode(self, db_manager):
        with pytest.raises(ValueError, match="build mode"):
            IndexerOrchestrator(db_manager, PATHS, mode="best-effort")

