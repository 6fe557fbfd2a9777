"""Extractor framework for the indexer.

This module defines the BaseExtractor abstract class and the ExtractorRegistry
for discovery and registration of per-category extractors.

Every extractor reads through a FileSource (never ``os`` directly), returns a
fully materialized list of records, and recovers from per-entry failures by
logging and skipping: a single bad token, component, page or icon never
aborts the batch.
"""

import importlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from designindex.utils.logging import logger

from ..core import LOCAL_SOURCE, FileSource


class BaseExtractor(ABC):
    """Abstract base class for all category extractors.

    Attributes:
        category: Pipeline category this extractor serves (e.g. ``"vue"``)
        requires_source: False for purely generative extractors
    """

    category: str = ""
    requires_source: bool = True

    def __init__(self, root: str | Path, source: FileSource | None = None, **options: Any):
        """Initialize the extractor.

        Args:
            root: Source location for this category (directory or file)
            source: FileSource to read through, the real disk by default
            options: Extractor-specific settings (e.g. the styles dir for tokens)
        """
        self.root = str(root)
        self.source = source or LOCAL_SOURCE
        self.options = options

    def source_exists(self) -> bool:
        return self.source.exists(self.root)

    @abstractmethod
    def extract(self) -> list:
        """Extract all records for this category.

        Returns:
            List of typed records (see models.py)
        """

    def read_text(self, path: str) -> str | None:
        """Read ``path``, logging and returning None on failure."""
        try:
            return self.source.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return None

    def cleanup(self) -> None:
        """Release resources held across extraction. Default: no-op."""
        pass


class ExtractorRegistry:
    """Registry mapping pipeline categories to extractor classes.

    Design:
    - One extractor class per module (vue.py -> VueExtractor)
    - Extractors register themselves through their ``category`` attribute
    - No hardcoded mapping - pure discovery pattern
    """

    def __init__(self):
        self.extractors: dict[str, type[BaseExtractor]] = {}
        self._discover()

    def _discover(self):
        """Import every extractor module and register its BaseExtractor subclasses."""
        extractor_dir = Path(__file__).parent

        for file_path in sorted(extractor_dir.glob("*.py")):
            if file_path.name.startswith("_"):
                continue

            module = importlib.import_module(
                f".{file_path.stem}", package="designindex.indexer.extractors"
            )
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, BaseExtractor)
                    and attr is not BaseExtractor
                    and attr.category
                ):
                    self.extractors[attr.category] = attr

    def create(self, category: str, root: str | Path, source: FileSource | None = None,
               **options: Any) -> BaseExtractor:
        """Instantiate the extractor registered for ``category``."""
        try:
            extractor_cls = self.extractors[category]
        except KeyError:
            raise ValueError(
                f"No extractor for category '{category}'. "
                f"Available: {', '.join(sorted(self.extractors))}"
            ) from None
        return extractor_cls(root, source, **options)

    def categories(self) -> list[str]:
        return sorted(self.extractors)
