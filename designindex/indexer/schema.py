"""Store schema definitions - Single Source of Truth."""

import sqlite3

from .schemas.components_schema import COMPONENTS_TABLES
from .schemas.content_schema import CONTENT_TABLES, DOCS_FTS, ICONS_FTS
from .schemas.tokens_schema import TOKENS_FTS, TOKENS_TABLES
from .schemas.utils import FullTextMirror, TableSchema

TABLES: dict[str, TableSchema] = {
    **TOKENS_TABLES,
    **COMPONENTS_TABLES,
    **CONTENT_TABLES,
}


assert len(TABLES) == 13, f"Schema contract violation: Expected 13 tables, got {len(TABLES)}"


FTS_MIRRORS: dict[str, FullTextMirror] = {
    "tokens_fts": TOKENS_FTS,
    "docs_fts": DOCS_FTS,
    "icons_fts": ICONS_FTS,
}


TOKENS = TABLES["tokens"]
TOKEN_PROPERTIES = TABLES["token_properties"]
COMPONENTS = TABLES["components"]
CSS_UTILITIES = TABLES["css_utilities"]
DOCUMENTATION = TABLES["documentation"]
ICONS = TABLES["icons"]


# Parents strictly before children. Wipes walk this list in reverse.
FLUSH_ORDER: list[str] = [
    "tokens",
    "token_properties",
    "components",
    "component_props",
    "component_slots",
    "component_events",
    "component_examples",
    "component_css_classes",
    "css_utilities",
    "css_utility_classes",
    "css_utility_examples",
    "documentation",
    "icons",
]

assert set(FLUSH_ORDER) == set(TABLES), "FLUSH_ORDER must list every table exactly once"


# child table -> (parent table, child column holding the parent id)
CHILD_TABLES: dict[str, tuple[str, str]] = {
    name: (schema.foreign_keys[0].foreign_table, schema.foreign_keys[0].local_columns[0])
    for name, schema in TABLES.items()
    if schema.foreign_keys
}


def validate_all_tables(cursor: sqlite3.Cursor) -> dict[str, list[str]]:
    """Validate all table schemas against actual database."""
    results = {}
    for table_name, schema in TABLES.items():
        is_valid, errors = schema.validate_against_db(cursor)
        if not is_valid:
            results[table_name] = errors
    return results


def validate_foreign_keys() -> dict[str, list[str]]:
    """Check every declared foreign key against the registry itself."""
    results = {}
    for table_name, schema in TABLES.items():
        errors = []
        for fk in schema.foreign_keys:
            errors.extend(fk.validate(table_name, TABLES))
        if errors:
            results[table_name] = errors
    return results


def get_table_schema(table_name: str) -> TableSchema:
    """Get schema for a specific table."""
    if table_name not in TABLES:
        raise ValueError(
            f"Unknown table: {table_name}. Available tables: {', '.join(sorted(TABLES.keys()))}"
        )
    return TABLES[table_name]
