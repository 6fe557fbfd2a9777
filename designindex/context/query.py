"""Direct database query interface over the design index.

This module provides typed reads over a built store.
NO re-parsing of sources - just SQL queries and FTS5 lookups.

Architecture:
- DesignQueryEngine: Main query interface, bound to one explicit connection
- QueryResult: Outcome of a full-text search (never raises on bad syntax)
- Records come back as the same dataclasses the extractors produce

Usage:
    from designindex.context import DesignQueryEngine

    engine = DesignQueryEngine.open(".dsi/design_index.db")

    tokens = engine.tokens_by_category("color")
    button = engine.component_by_slug("button")
    result = engine.search_documentation("modal focus")
    if result.ok:
        for hit in result.items:
            print(hit["title"], hit["snippet"])
"""

import json
import re
import sqlite3
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from designindex.config_runtime import DEFAULTS
from designindex.indexer.exceptions import QueryError
from designindex.indexer.models import (
    Component,
    CssUtility,
    Documentation,
    Event,
    Example,
    Icon,
    Prop,
    Slot,
    Token,
    TokenProperty,
    UtilityExample,
)
from designindex.utils.logging import logger

STATS_TABLES = (
    "tokens",
    "token_properties",
    "components",
    "component_props",
    "css_utilities",
    "css_utility_classes",
    "documentation",
    "icons",
)

NON_WORD = re.compile(r"[^\w\s]")
WHITESPACE = re.compile(r"\s+")


@dataclass
class QueryResult:
    """Outcome of a search.

    Attributes:
        ok: False when every query form was rejected by the FTS engine
        items: Matching records, best match first
        error: Engine message when ``ok`` is False
        query: The FTS expression that produced ``items`` (or the input text)
    """

    ok: bool
    items: list = field(default_factory=list)
    error: str | None = None
    query: str | None = None

    @classmethod
    def failure(cls, query: str, error: str) -> "QueryResult":
        return cls(ok=False, items=[], error=error, query=query)

    def raise_for_error(self) -> "QueryResult":
        """Return self, or raise QueryError when the search failed."""
        if not self.ok:
            raise QueryError(
                f"Search failed for {self.query!r}: {self.error}",
                details={"query": self.query, "error": self.error},
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "query": self.query,
            "error": self.error,
            "items": [asdict(item) if hasattr(item, "__dataclass_fields__") else item
                      for item in self.items],
        }


# ============================================================================
# FTS QUERY HELPERS
# ============================================================================

def query_terms(text: str) -> list[str]:
    """Words of ``text`` with punctuation removed, single characters dropped."""
    return [term for term in NON_WORD.sub(" ", text).split() if len(term) > 1]


def prepare_fts_query(text: str) -> str:
    """``"mc-button  focus!"`` -> ``"mc AND button AND focus"``.

    Falls back to the stripped input when no term survives.
    """
    terms = query_terms(text)
    if not terms:
        return text.strip()
    return " AND ".join(terms)


def text_search_queries(text: str) -> list[str]:
    """Query forms tried in order for tokens and documentation.

    Exact AND of all terms, then every term as a prefix, then a quoted OR
    of the raw words.
    """
    terms = query_terms(text)
    words = [word for word in text.split() if len(word) > 1]

    candidates = [prepare_fts_query(text)]
    if terms:
        candidates.append(" ".join(f"{term}*" for term in terms))
    if words:
        candidates.append(" OR ".join('"' + word.replace('"', '""') + '"' for word in words))
    return list(dict.fromkeys(c for c in candidates if c))


def icon_search_queries(text: str) -> list[str]:
    """Icon names are searched by prefix: all terms, then any term."""
    terms = query_terms(text)
    if not terms:
        return [f"{text.strip()}*"]
    if len(terms) == 1:
        return [f"{terms[0]}*"]
    return [
        " AND ".join(f"{term}*" for term in terms),
        " OR ".join(f"{term}*" for term in terms),
    ]


def clean_snippet(snippet: str | None, max_chars: int = 200) -> str:
    """Turn ``<mark>`` highlights into ``**`` and cap the length."""
    if not snippet:
        return ""
    cleaned = snippet.replace("<mark>", "**").replace("</mark>", "**")
    cleaned = WHITESPACE.sub(" ", cleaned).strip()
    if len(cleaned) > max_chars:
        cleaned = cleaned[:max_chars] + "..."
    return cleaned


def group_icons(icons: list[Icon]) -> list[dict[str, Any]]:
    """Collapse per-size exports into one entry per display name."""
    grouped: dict[str, dict[str, Any]] = {}
    for icon in icons:
        entry = grouped.setdefault(
            icon.icon_name, {"icon_name": icon.icon_name, "type": icon.type, "sizes": []}
        )
        entry["sizes"].append(icon.size)

    for entry in grouped.values():
        entry["sizes"].sort()
        first = f"{entry['icon_name']}{entry['sizes'][0]}"
        entry["usage"] = {
            "react": f'import {{ {first} }} from "@mozaic-ds/icons/js/icons"',
            "vue": f'<MIcon name="{first}" />',
        }
    return list(grouped.values())


# ============================================================================
# ROW CONVERSION
# ============================================================================

def _json_list(value: str | None) -> list | None:
    return json.loads(value) if value else None


def _row_to_token(row: sqlite3.Row, properties: list[sqlite3.Row]) -> Token:
    return Token(
        category=row["category"],
        subcategory=row["subcategory"],
        name=row["name"],
        path=row["path"],
        css_variable=row["css_variable"],
        scss_variable=row["scss_variable"],
        value_raw=row["value_raw"],
        value_number=row["value_number"],
        value_unit=row["value_unit"],
        value_computed=row["value_computed"],
        description=row["description"],
        platform=row["platform"],
        source_file=row["source_file"],
        properties=[
            TokenProperty(
                property=p["property"],
                value=p["value"],
                value_number=p["value_number"],
                value_unit=p["value_unit"],
            )
            for p in properties
        ],
    )


def _row_to_icon(row: sqlite3.Row) -> Icon:
    return Icon(
        name=row["name"],
        icon_name=row["icon_name"],
        type=row["type"],
        size=row["size"],
        view_box=row["view_box"],
        paths=row["paths"],
    )


def _row_to_documentation(row: sqlite3.Row) -> Documentation:
    return Documentation(
        title=row["title"],
        path=row["path"],
        content=row["content"],
        category=row["category"],
        keywords=_json_list(row["keywords"]) or [],
    )


class DesignQueryEngine:
    """Query engine over a built design index.

    Bound to the connection it is given; ``open`` creates a read-only one.
    Lookups return None when nothing matches. Searches return a QueryResult
    so a malformed query never escapes as an exception.
    """

    def __init__(self, conn: sqlite3.Connection, search: dict[str, int] | None = None):
        self.conn = conn
        self.conn.row_factory = sqlite3.Row
        self.search_config = {**DEFAULTS["search"], **(search or {})}

    @classmethod
    def open(cls, db_path: str | Path, search: dict[str, int] | None = None) -> "DesignQueryEngine":
        """Open ``db_path`` for reading alongside a possible rebuild writer.

        Raises:
            FileNotFoundError: If the store does not exist
        """
        db_file = Path(db_path)
        if not db_file.exists():
            raise FileNotFoundError(
                f"Database not found: {db_file}\nRun 'dsi build' first to build the index."
            )
        conn = sqlite3.connect(str(db_file), timeout=30)
        conn.execute("PRAGMA query_only = ON")
        return cls(conn, search)

    def close(self):
        """Close the database connection."""
        if self.conn:
            self.conn.close()

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def _token_properties(self, token_id: int) -> list[sqlite3.Row]:
        return self.conn.execute(
            "SELECT property, value, value_number, value_unit FROM token_properties "
            "WHERE token_id = ? ORDER BY id",
            (token_id,),
        ).fetchall()

    def _tokens(self, rows: list[sqlite3.Row]) -> list[Token]:
        return [_row_to_token(row, self._token_properties(row["id"])) for row in rows]

    def tokens_by_category(self, category: str) -> list[Token]:
        """Every token of ``category``; ``"all"`` returns every token."""
        if category == "all":
            rows = self.conn.execute("SELECT * FROM tokens ORDER BY id").fetchall()
        else:
            rows = self.conn.execute(
                "SELECT * FROM tokens WHERE category = ? ORDER BY id", (category,)
            ).fetchall()
        return self._tokens(rows)

    def tokens_by_subcategory(self, category: str, subcategory: str) -> list[Token]:
        rows = self.conn.execute(
            "SELECT * FROM tokens WHERE category = ? AND subcategory = ? ORDER BY id",
            (category, subcategory),
        ).fetchall()
        return self._tokens(rows)

    def token_by_path(self, path: str) -> Token | None:
        row = self.conn.execute("SELECT * FROM tokens WHERE path = ?", (path,)).fetchone()
        if row is None:
            return None
        return _row_to_token(row, self._token_properties(row["id"]))

    def search_tokens(self, query: str, limit: int | None = None, raw: bool = False) -> QueryResult:
        """Ranked full-text search over token name, path and description."""
        limit = limit or self.search_config["token_limit"]

        def run(fts_query: str) -> list[Token]:
            rows = self.conn.execute(
                "SELECT t.* FROM tokens_fts JOIN tokens t ON tokens_fts.rowid = t.id "
                "WHERE tokens_fts MATCH ? ORDER BY rank LIMIT ?",
                (fts_query, limit),
            ).fetchall()
            return self._tokens(rows)

        return self._search(query, run, text_search_queries, raw)

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def component_by_slug(
        self, slug: str, case_insensitive: bool = True, framework: str | None = None
    ) -> Component | None:
        """A component with all of its child collections populated.

        Several components can share a slug (``MButton`` and ``Button`` are
        both ``button``); ``framework`` picks the one implemented in that
        framework, otherwise the first stored wins.
        """
        sql = "SELECT * FROM components WHERE slug = ?"
        if case_insensitive:
            sql += " COLLATE NOCASE"
        params: list[Any] = [slug]
        if framework:
            sql += " AND frameworks LIKE ?"
            params.append(f'%"{framework}"%')
        sql += " ORDER BY id LIMIT 1"

        row = self.conn.execute(sql, params).fetchone()
        if row is None:
            return None
        return self._load_component(row)

    def _load_component(self, row: sqlite3.Row) -> Component:
        component_id = row["id"]

        def children(table: str) -> list[sqlite3.Row]:
            return self.conn.execute(
                f"SELECT * FROM {table} WHERE component_id = ? ORDER BY id", (component_id,)
            ).fetchall()

        return Component(
            name=row["name"],
            slug=row["slug"],
            category=row["category"] or "other",
            description=row["description"],
            frameworks=_json_list(row["frameworks"]) or [],
            props=[
                Prop(
                    name=p["name"],
                    type=p["type"],
                    default_value=p["default_value"],
                    required=p["required"] == 1,
                    options=_json_list(p["options"]),
                    description=p["description"],
                )
                for p in children("component_props")
            ],
            slots=[Slot(name=s["name"], description=s["description"])
                   for s in children("component_slots")],
            events=[Event(name=e["name"], payload=e["payload"], description=e["description"])
                    for e in children("component_events")],
            examples=[
                Example(framework=x["framework"], title=x["title"], code=x["code"],
                        description=x["description"])
                for x in children("component_examples")
            ],
            css_classes=[c["class_name"] for c in children("component_css_classes")],
        )

    def list_components(self, category: str | None = None) -> list[dict[str, Any]]:
        """Summary rows; ``None`` or ``"all"`` lists every component."""
        sql = "SELECT name, slug, category, description FROM components"
        params: tuple = ()
        if category and category != "all":
            sql += " WHERE category = ?"
            params = (category,)
        sql += " ORDER BY name"
        return [dict(row) for row in self.conn.execute(sql, params).fetchall()]

    # ------------------------------------------------------------------
    # CSS utilities
    # ------------------------------------------------------------------

    def css_utility_by_slug(self, slug: str) -> CssUtility | None:
        row = self.conn.execute(
            "SELECT * FROM css_utilities WHERE slug = ? COLLATE NOCASE", (slug,)
        ).fetchone()
        if row is None:
            return None

        classes = self.conn.execute(
            "SELECT class_name FROM css_utility_classes WHERE utility_id = ? ORDER BY id", (row["id"],)
        ).fetchall()
        examples = self.conn.execute(
            "SELECT title, code FROM css_utility_examples WHERE utility_id = ? ORDER BY id", (row["id"],)
        ).fetchall()

        return CssUtility(
            name=row["name"],
            slug=row["slug"],
            category=row["category"],
            description=row["description"],
            classes=[c["class_name"] for c in classes],
            examples=[UtilityExample(title=e["title"], code=e["code"]) for e in examples],
        )

    def list_css_utilities(self, category: str | None = None) -> list[dict[str, Any]]:
        sql = (
            "SELECT u.name, u.slug, u.category, u.description, COUNT(c.id) AS class_count "
            "FROM css_utilities u LEFT JOIN css_utility_classes c ON c.utility_id = u.id"
        )
        params: tuple = ()
        if category and category != "all":
            sql += " WHERE u.category = ?"
            params = (category,)
        sql += " GROUP BY u.id ORDER BY u.id"
        return [dict(row) for row in self.conn.execute(sql, params).fetchall()]

    # ------------------------------------------------------------------
    # Documentation
    # ------------------------------------------------------------------

    def documentation_by_path(self, path: str) -> Documentation | None:
        row = self.conn.execute("SELECT * FROM documentation WHERE path = ?", (path,)).fetchone()
        return _row_to_documentation(row) if row else None

    def search_documentation(self, query: str, limit: int | None = None, raw: bool = False) -> QueryResult:
        """Ranked pages as ``{title, path, category, snippet}``, match marked with ``**``."""
        limit = limit or self.search_config["docs_limit"]
        max_chars = self.search_config["snippet_chars"]

        def run(fts_query: str) -> list[dict[str, Any]]:
            rows = self.conn.execute(
                "SELECT d.title, d.path, d.category, "
                "snippet(docs_fts, 1, '<mark>', '</mark>', '...', 64) AS snippet "
                "FROM docs_fts JOIN documentation d ON docs_fts.rowid = d.id "
                "WHERE docs_fts MATCH ? ORDER BY rank LIMIT ?",
                (fts_query, limit),
            ).fetchall()
            return [
                {
                    "title": row["title"],
                    "path": row["path"],
                    "category": row["category"],
                    "snippet": clean_snippet(row["snippet"], max_chars),
                }
                for row in rows
            ]

        return self._search(query, run, text_search_queries, raw)

    # ------------------------------------------------------------------
    # Icons
    # ------------------------------------------------------------------

    def icon_by_name(self, name: str) -> Icon | None:
        row = self.conn.execute("SELECT * FROM icons WHERE name = ?", (name,)).fetchone()
        return _row_to_icon(row) if row else None

    def search_icons(
        self,
        query: str,
        type: str | None = None,
        size: int | None = None,
        limit: int | None = None,
        raw: bool = False,
    ) -> QueryResult:
        limit = limit or self.search_config["icon_limit"]

        def run(fts_query: str) -> list[Icon]:
            sql = (
                "SELECT i.* FROM icons_fts JOIN icons i ON icons_fts.rowid = i.id "
                "WHERE icons_fts MATCH ?"
            )
            params: list[Any] = [fts_query]
            if type:
                sql += " AND i.type = ?"
                params.append(type)
            if size:
                sql += " AND i.size = ?"
                params.append(size)
            sql += " ORDER BY rank LIMIT ?"
            params.append(limit)
            return [_row_to_icon(row) for row in self.conn.execute(sql, params).fetchall()]

        return self._search(query, run, icon_search_queries, raw)

    def list_icon_types(self) -> list[dict[str, Any]]:
        rows = self.conn.execute(
            "SELECT type, COUNT(*) AS count FROM icons GROUP BY type ORDER BY type"
        ).fetchall()
        return [dict(row) for row in rows]

    def list_icons(self, type: str | None = None, size: int | None = None) -> list[Icon]:
        sql = "SELECT * FROM icons"
        clauses = []
        params: list[Any] = []
        if type:
            clauses.append("type = ?")
            params.append(type)
        if size:
            clauses.append("size = ?")
            params.append(size)
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY name"
        return [_row_to_icon(row) for row in self.conn.execute(sql, params).fetchall()]

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def stats(self) -> dict[str, int]:
        """Row counts per entity type."""
        return {
            table: self.conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
            for table in STATS_TABLES
        }

    # ------------------------------------------------------------------

    def _search(
        self,
        query: str,
        run: Callable[[str], list],
        strategies: Callable[[str], list[str]],
        raw: bool,
    ) -> QueryResult:
        """Try each query form until one matches.

        A form the FTS engine rejects is skipped; only when every form was
        rejected does the result carry ``ok=False``. ``raw`` sends ``query``
        to the engine untouched, with no fallbacks.
        """
        if not query or not query.strip():
            return QueryResult.failure(query, "Empty search query")

        forms = [query] if raw else strategies(query)
        last_error = None
        attempted = 0

        for fts_query in forms:
            try:
                items = run(fts_query)
            except sqlite3.OperationalError as e:
                logger.debug(f"FTS query {fts_query!r} rejected: {e}")
                last_error = str(e)
                continue
            attempted += 1
            if items:
                return QueryResult(ok=True, items=items, query=fts_query)

        if attempted == 0:
            return QueryResult.failure(query, last_error or "Invalid search query")
        return QueryResult(ok=True, items=[], query=query)
