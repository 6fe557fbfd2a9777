"""Custom exceptions for the indexer module.

Contains exception classes for the failure modes that need explicit
handling instead of generic error propagation. Per-entry parse failures
are NOT represented here: extractors log and skip them.
"""


class IndexerError(Exception):
    """Base class for indexer failures.

    Attributes:
        message: Human-readable error description
        details: Dict with structured context for debugging
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}


class MissingSourceError(IndexerError):
    """A required input directory or file is absent."""

    def __init__(self, category: str, path: str):
        super().__init__(
            f"{category} source not found: {path}",
            details={"category": category, "path": str(path)},
        )
        self.category = category
        self.path = str(path)


class EmptyResultError(IndexerError):
    """A mandatory category produced zero records although its source existed."""

    def __init__(self, category: str, path: str):
        super().__init__(
            f"No {category} records were extracted from {path}",
            details={"category": category, "path": str(path)},
        )
        self.category = category
        self.path = str(path)


class IntegrityViolationError(IndexerError):
    """A write broke a uniqueness or parent-reference constraint."""


class DataFidelityError(IndexerError):
    """Raised when extracted record counts do not match what was stored."""


class QueryError(IndexerError):
    """A query could not be executed (e.g. malformed full-text syntax)."""
