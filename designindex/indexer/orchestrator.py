"""Indexer orchestration logic."""

from typing import Any

from designindex.utils.logging import logger

from .config import PIPELINE_ORDER
from .core import FileSource
from .database import DatabaseManager
from .exceptions import DataFidelityError, EmptyResultError, IndexerError, MissingSourceError
from .extractors import BaseExtractor, ExtractorRegistry
from .fallback import fallback_for
from .fidelity import build_manifest, reconcile_counts

# category -> key of its source location in the ``paths`` config section
CATEGORY_SOURCES = {
    "tokens": "tokens_dir",
    "vue": "vue_components_dir",
    "react": "react_components_dir",
    "css_utilities": "styles_dir",
    "docs": "docs_dir",
    "icons": "icons_file",
}

MODES = ("strict", "lenient")


class IndexerOrchestrator:
    """Runs every category through extract -> store -> reconcile, in PIPELINE_ORDER.

    Each category commits on its own; a failure in a later category leaves
    the earlier ones stored. Missing or empty sources either abort the run
    (``strict``) or are replaced by the bundled defaults (``lenient``).
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        paths: dict[str, str],
        mode: str = "strict",
        source: FileSource | None = None,
        registry: ExtractorRegistry | None = None,
    ):
        if mode not in MODES:
            raise ValueError(f"Unknown build mode '{mode}'. Expected one of: {', '.join(MODES)}")

        self.db_manager = db_manager
        self.paths = paths
        self.mode = mode
        self.source = source
        self.extractor_registry = registry or ExtractorRegistry()
        self._extractors: list[BaseExtractor] = []

        self.counts = {category: 0 for category, _ in PIPELINE_ORDER}
        self.categories: dict[str, dict[str, Any]] = {}

        self.storers = {
            "tokens": db_manager.insert_tokens,
            "vue": lambda records: db_manager.insert_components(records, category="vue"),
            "react": lambda records: db_manager.insert_components(records, category="react"),
            "css_utilities": db_manager.insert_css_utilities,
            "docs": db_manager.insert_documentation,
            "icons": db_manager.insert_icons,
        }

    @property
    def strict(self) -> bool:
        return self.mode == "strict"

    def index(self) -> dict[str, dict[str, Any]]:
        """Run the complete pipeline. Returns per-category info."""
        logger.info(f"Rebuilding design index ({self.mode} mode)")
        try:
            for category, mandatory in PIPELINE_ORDER:
                self._index_category(category, mandatory)
        finally:
            self._cleanup_extractors()
        return self.categories

    def _create_extractor(self, category: str) -> BaseExtractor:
        root = self.paths[CATEGORY_SOURCES[category]]
        options = {}
        if category == "tokens":
            options["styles_dir"] = self.paths.get("styles_dir")

        extractor = self.extractor_registry.create(category, root, self.source, **options)
        self._extractors.append(extractor)
        return extractor

    def _index_category(self, category: str, mandatory: bool) -> None:
        extractor = self._create_extractor(category)
        info = {"records": 0, "source": extractor.root, "fallback_used": False, "skipped": False}
        self.categories[category] = info

        if not extractor.source_exists():
            if not mandatory:
                logger.info(f"Skipping {category}: {extractor.root} not found")
                info["skipped"] = True
                return
            records = self._recover(MissingSourceError(category, extractor.root))
            info["fallback_used"] = True
        else:
            logger.info(f"Extracting {category} from {extractor.root}")
            records = extractor.extract()
            if not records and mandatory:
                records = self._recover(EmptyResultError(category, extractor.root))
                info["fallback_used"] = True

        if not records:
            logger.warning(f"No {category} records to store")
            return

        self._store_extracted_data(category, records)
        info["records"] = len(records)
        self.counts[category] = len(records)

    def _recover(self, error: IndexerError) -> list:
        """Strict mode re-raises ``error``; lenient mode returns the bundled defaults."""
        category = error.details["category"]
        if self.strict:
            logger.error(f"[STRICT] {error}")
            raise error

        records = fallback_for(category)
        logger.warning(f"{error} - using {len(records)} bundled default records")
        return records

    def _store_extracted_data(self, category: str, records: list) -> None:
        """Insert one category's records, then check nothing was lost on the way."""
        receipt = self.storers[category](records)
        manifest = build_manifest(records)

        try:
            result = reconcile_counts(manifest, receipt, category, strict=True)
        except DataFidelityError as e:
            logger.error(f"[FATAL] Fidelity Check Failed for {category}: {e}")
            raise

        self.categories[category]["fidelity"] = result["status"]
        logger.info(f"Stored {len(records)} {category} records")

    def _cleanup_extractors(self) -> None:
        """Call cleanup() on every extractor created during this run."""
        for extractor in self._extractors:
            try:
                extractor.cleanup()
            except Exception as e:
                logger.debug(f"Extractor cleanup failed: {e}")
        self._extractors.clear()
