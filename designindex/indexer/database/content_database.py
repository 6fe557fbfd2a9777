"""Content database operations - documentation pages and icons."""

import json

from ..models import Documentation, Icon


class ContentDatabaseMixin:
    """Mixin providing add_* methods for CONTENT_TABLES.

    CRITICAL: This mixin assumes self.generic_batches exists (from BaseDatabaseManager).
    DO NOT instantiate directly - only use as mixin for DatabaseManager.
    """

    def add_documentation(self, doc: Documentation):
        self.generic_batches["documentation"].append(
            (doc.title, doc.path, doc.content, doc.category, json.dumps(doc.keywords))
        )
        self.maybe_flush()

    def add_icon(self, icon: Icon):
        self.generic_batches["icons"].append(
            (icon.name, icon.icon_name, icon.type, icon.size, icon.view_box, icon.paths)
        )
        self.maybe_flush()

    def insert_documentation(self, docs: list[Documentation]) -> dict[str, int]:
        with self.category_transaction("docs") as receipt:
            for doc in docs:
                self.add_documentation(doc)
        return dict(receipt)

    def insert_icons(self, icons: list[Icon]) -> dict[str, int]:
        with self.category_transaction("icons") as receipt:
            for icon in icons:
                self.add_icon(icon)
        return dict(receipt)
