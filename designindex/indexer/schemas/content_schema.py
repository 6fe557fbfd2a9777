"""
Content schema definitions - documentation pages and the icon registry.

Both are full-text searched, so each carries an FTS5 mirror.
"""

from .utils import Column, FullTextMirror, TableSchema


DOCUMENTATION = TableSchema(
    name="documentation",
    columns=[
        Column("id", "INTEGER", primary_key=True, autoincrement=True),
        Column("title", "TEXT", nullable=False),
        Column("path", "TEXT", nullable=False, unique=True),   # "/components/button"
        Column("content", "TEXT", nullable=False),
        Column("category", "TEXT"),
        Column("keywords", "TEXT"),                            # JSON array
    ],
    indexes=[
        ("idx_documentation_category", ["category"]),
    ],
)

ICONS = TableSchema(
    name="icons",
    columns=[
        Column("id", "INTEGER", primary_key=True, autoincrement=True),
        Column("name", "TEXT", nullable=False, unique=True),   # "ArrowDown16"
        Column("icon_name", "TEXT", nullable=False),           # "ArrowDown"
        Column("type", "TEXT", nullable=False),
        Column("size", "INTEGER", nullable=False),
        Column("view_box", "TEXT", nullable=False),
        Column("paths", "TEXT", nullable=False),
    ],
    indexes=[
        ("idx_icons_type", ["type"]),
        ("idx_icons_icon_name", ["icon_name"]),
    ],
)


CONTENT_TABLES: dict[str, TableSchema] = {
    "documentation": DOCUMENTATION,
    "icons": ICONS,
}

DOCS_FTS = FullTextMirror(
    name="docs_fts",
    base_table="documentation",
    columns=["title", "content", "keywords"],
)

ICONS_FTS = FullTextMirror(
    name="icons_fts",
    base_table="icons",
    columns=["name", "icon_name", "type"],
)
