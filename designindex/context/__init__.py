"""Design index query module."""

from designindex.context.query import (
    DesignQueryEngine,
    QueryResult,
    clean_snippet,
    group_icons,
    prepare_fts_query,
)

__all__ = ["DesignQueryEngine", "QueryResult", "clean_snippet", "group_icons", "prepare_fts_query"]
