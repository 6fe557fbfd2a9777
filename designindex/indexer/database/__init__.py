"""Database operations for the indexer.

ARCHITECTURE: Schema-Driven Database Layer
- schema.py is the Single Source of Truth for all table definitions
- This module consumes the TABLES registry to generate SQL dynamically
- NO hardcoded CREATE TABLE or INSERT statements

REFACTORED ARCHITECTURE:
- BaseDatabaseManager: Core infrastructure (transactions, schema, batching)
- TokensDatabaseMixin: tokens and their composite properties
- ComponentsDatabaseMixin: framework components and CSS-only utilities
- ContentDatabaseMixin: documentation pages and icons

DatabaseManager uses multiple inheritance to combine all capabilities.
"""

from .base_database import BaseDatabaseManager, connect_store
from .components_database import ComponentsDatabaseMixin
from .content_database import ContentDatabaseMixin
from .tokens_database import TokensDatabaseMixin


class DatabaseManager(
    BaseDatabaseManager,
    TokensDatabaseMixin,
    ComponentsDatabaseMixin,
    ContentDatabaseMixin,
):
    """Complete database manager combining all category-specific capabilities."""

    pass


def create_database_schema(conn, batch_size: int | None = None) -> DatabaseManager:
    """Create the full schema on ``conn`` and return a manager bound to it."""
    manager = DatabaseManager(conn, batch_size) if batch_size else DatabaseManager(conn)
    manager.create_schema()
    return manager


__all__ = ["DatabaseManager", "connect_store", "create_database_schema"]
