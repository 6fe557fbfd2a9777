"""designindex Indexer Package.

Turns a design system checkout into one searchable SQLite store:
- FileSource / list_files for restartable directory walks (disk or in-memory)
- One extractor per category, discovered by ExtractorRegistry
- DatabaseManager for batched, per-category transactional inserts
- IndexerOrchestrator for the fixed category order and strict/lenient policy

CONTRACT: Extractors vs Store
=============================
Extractors RETURN fully materialized lists of records (models.py) and never
touch the database. The store RECEIVES those lists and owns every id: child
rows are attached to their parent inside the same transaction, so an
extractor never sees or invents row ids.
"""

from .core import LocalFileSource, MemoryFileSource, list_files
from .database import DatabaseManager
from .extractors import ExtractorRegistry
from .integrity import IntegrityReport, check_integrity
from .orchestrator import IndexerOrchestrator
from .runner import run_rebuild

__all__ = [
    "IndexerOrchestrator",
    "DatabaseManager",
    "ExtractorRegistry",
    "LocalFileSource",
    "MemoryFileSource",
    "list_files",
    "IntegrityReport",
    "check_integrity",
    "run_rebuild",
]
