"""
Token schema definitions - design tokens and their composite sub-fields.

TOKENS holds one row per named design value; TOKEN_PROPERTIES holds the
decomposition of composite tokens (shadows), keyed by its parent token id.
"""

from .utils import Column, ForeignKey, FullTextMirror, TableSchema


TOKENS = TableSchema(
    name="tokens",
    columns=[
        Column("id", "INTEGER", primary_key=True, autoincrement=True),
        Column("category", "TEXT", nullable=False),
        Column("subcategory", "TEXT"),
        Column("name", "TEXT", nullable=False),
        Column("path", "TEXT", nullable=False, unique=True),   # "color.primary-01.100"
        Column("css_variable", "TEXT"),                        # "--color-primary-01-100"
        Column("scss_variable", "TEXT"),                       # "$color-primary-01-100"
        Column("value_raw", "TEXT", nullable=False),
        Column("value_number", "REAL"),
        Column("value_unit", "TEXT"),
        Column("value_computed", "TEXT"),
        Column("description", "TEXT"),
        Column("platform", "TEXT", nullable=False, default="'all'"),
        Column("source_file", "TEXT"),
    ],
    indexes=[
        ("idx_tokens_category", ["category"]),
        ("idx_tokens_subcategory", ["category", "subcategory"]),
    ],
    keyed=True,
)

TOKEN_PROPERTIES = TableSchema(
    name="token_properties",
    columns=[
        Column("id", "INTEGER", primary_key=True, autoincrement=True),
        Column("token_id", "INTEGER", nullable=False),
        Column("property", "TEXT", nullable=False),            # "x", "blur", "opacity"
        Column("value", "TEXT", nullable=False),
        Column("value_number", "REAL"),
        Column("value_unit", "TEXT"),
    ],
    indexes=[
        ("idx_token_properties_token", ["token_id"]),
    ],
    foreign_keys=[ForeignKey(["token_id"], "tokens", ["id"])],
)


TOKENS_TABLES: dict[str, TableSchema] = {
    "tokens": TOKENS,
    "token_properties": TOKEN_PROPERTIES,
}

TOKENS_FTS = FullTextMirror(
    name="tokens_fts",
    base_table="tokens",
    columns=["name", "path", "description"],
)
