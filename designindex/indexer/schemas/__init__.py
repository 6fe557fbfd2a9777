"""
Schema module: domain-split store schema definitions.

Each submodule defines the tables of one artifact family; schema.py merges
them into the TABLES registry consumed by the database layer.
"""

from .components_schema import COMPONENTS_TABLES
from .content_schema import CONTENT_TABLES, DOCS_FTS, ICONS_FTS
from .tokens_schema import TOKENS_FTS, TOKENS_TABLES
from .utils import Column, ForeignKey, FullTextMirror, TableSchema

__all__ = [
    "Column",
    "ForeignKey",
    "FullTextMirror",
    "TableSchema",
    "TOKENS_TABLES",
    "COMPONENTS_TABLES",
    "CONTENT_TABLES",
    "TOKENS_FTS",
    "DOCS_FTS",
    "ICONS_FTS",
]
