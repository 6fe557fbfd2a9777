"""Component database operations.

add_* methods for COMPONENTS_TABLES: framework components with their five
child tables, and CSS-only utilities with their class catalog and examples.
"""

import json

from designindex.utils.logging import logger

from ..models import Component, CssUtility


class ComponentsDatabaseMixin:
    """Mixin providing add_* methods for COMPONENTS_TABLES.

    CRITICAL: This mixin assumes self.generic_batches exists (from BaseDatabaseManager).
    DO NOT instantiate directly - only use as mixin for DatabaseManager.
    """

    # ========================================================
    # FRAMEWORK COMPONENTS
    # ========================================================

    def add_component(self, component: Component) -> int:
        """Stage a component and its children.

        A component whose name is already stored (written by an earlier
        category, e.g. vue before react) is merged: its framework list is
        extended and children not yet present are attached to the stored row.
        Children already present count as stored in the receipt.
        Returns the parent id children were staged against.
        """
        row = self.conn.execute(
            "SELECT id, frameworks FROM components WHERE name = ?", (component.name,)
        ).fetchone()

        if row is None:
            parent_id = self.next_temp_id()
            self.generic_batches["components"].append((
                parent_id,
                component.name,
                component.slug,
                component.category,
                component.description,
                json.dumps(component.frameworks),
            ))
            known = {"props": set(), "slots": set(), "events": set(), "classes": set()}
        else:
            parent_id = row[0]
            known = self._merge_component(parent_id, row[1], component)

        for prop in component.props:
            if prop.name in known["props"]:
                self.receipt["component_props"] += 1
                continue
            self.generic_batches["component_props"].append((
                parent_id,
                prop.name,
                prop.type,
                prop.default_value,
                1 if prop.required else 0,
                json.dumps(prop.options) if prop.options else None,
                prop.description,
            ))

        for slot in component.slots:
            if slot.name in known["slots"]:
                self.receipt["component_slots"] += 1
                continue
            self.generic_batches["component_slots"].append((parent_id, slot.name, slot.description))

        for event in component.events:
            if event.name in known["events"]:
                self.receipt["component_events"] += 1
                continue
            self.generic_batches["component_events"].append(
                (parent_id, event.name, event.payload, event.description)
            )

        for example in component.examples:
            self.generic_batches["component_examples"].append(
                (parent_id, example.framework, example.title, example.code, example.description)
            )

        for class_name in component.css_classes:
            if class_name in known["classes"]:
                self.receipt["component_css_classes"] += 1
                continue
            self.generic_batches["component_css_classes"].append((parent_id, class_name))

        self.maybe_flush()
        return parent_id

    def _merge_component(self, component_id: int, frameworks_json: str | None,
                         component: Component) -> dict[str, set[str]]:
        frameworks = json.loads(frameworks_json) if frameworks_json else []
        for framework in component.frameworks:
            if framework not in frameworks:
                frameworks.append(framework)

        self.conn.execute(
            "UPDATE components SET frameworks = ? WHERE id = ?",
            (json.dumps(frameworks), component_id),
        )
        self.receipt["components"] += 1
        logger.debug(f"Merged {component.name} into stored component {component_id}: {frameworks}")

        def names(table: str, column: str = "name") -> set[str]:
            rows = self.conn.execute(
                f"SELECT {column} FROM {table} WHERE component_id = ?", (component_id,)
            )
            return {r[0] for r in rows}

        return {
            "props": names("component_props"),
            "slots": names("component_slots"),
            "events": names("component_events"),
            "classes": names("component_css_classes", "class_name"),
        }

    def insert_components(self, components: list[Component], category: str = "components") -> dict[str, int]:
        """Store ``components`` in one transaction. Returns rows stored per table."""
        with self.category_transaction(category) as receipt:
            for component in components:
                self.add_component(component)
        return dict(receipt)

    # ========================================================
    # CSS-ONLY UTILITIES
    # ========================================================

    def add_css_utility(self, utility: CssUtility) -> int:
        temp_id = self.next_temp_id()
        self.generic_batches["css_utilities"].append(
            (temp_id, utility.name, utility.slug, utility.category, utility.description)
        )
        for class_name in utility.classes:
            self.generic_batches["css_utility_classes"].append((temp_id, class_name))
        for example in utility.examples:
            self.generic_batches["css_utility_examples"].append((temp_id, example.title, example.code))

        self.maybe_flush()
        return temp_id

    def insert_css_utilities(self, utilities: list[CssUtility]) -> dict[str, int]:
        with self.category_transaction("css_utilities") as receipt:
            for utility in utilities:
                self.add_css_utility(utility)
        return dict(receipt)
