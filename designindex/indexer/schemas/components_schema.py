"""
Component schema definitions - framework components and CSS-only utilities.

COMPONENTS is the parent of five child tables (props, slots, events,
examples, css classes); CSS_UTILITIES is the parent of its class catalog
and usage examples. Every child row carries its parent id.
"""

from .utils import Column, ForeignKey, TableSchema


def _component_child(name: str, columns: list[Column], indexes=None) -> TableSchema:
    return TableSchema(
        name=name,
        columns=[
            Column("id", "INTEGER", primary_key=True, autoincrement=True),
            Column("component_id", "INTEGER", nullable=False),
            *columns,
        ],
        indexes=indexes or [(f"idx_{name}_component", ["component_id"])],
        foreign_keys=[ForeignKey(["component_id"], "components", ["id"])],
    )


# ============================================================================
# FRAMEWORK COMPONENTS
# ============================================================================

COMPONENTS = TableSchema(
    name="components",
    columns=[
        Column("id", "INTEGER", primary_key=True, autoincrement=True),
        Column("name", "TEXT", nullable=False, unique=True),   # "MButton"
        Column("slug", "TEXT", nullable=False),                # "button"
        Column("category", "TEXT"),
        Column("description", "TEXT"),
        Column("frameworks", "TEXT"),                          # JSON array: ["vue", "react"]
    ],
    indexes=[
        ("idx_components_category", ["category"]),
        ("idx_components_slug", ["slug"]),
    ],
    keyed=True,
)

COMPONENT_PROPS = _component_child(
    "component_props",
    [
        Column("name", "TEXT", nullable=False),
        Column("type", "TEXT"),
        Column("default_value", "TEXT"),
        Column("required", "INTEGER", nullable=False, default="0"),
        Column("options", "TEXT"),                             # JSON array or NULL
        Column("description", "TEXT"),
    ],
)

COMPONENT_SLOTS = _component_child(
    "component_slots",
    [
        Column("name", "TEXT", nullable=False),
        Column("description", "TEXT"),
    ],
)

COMPONENT_EVENTS = _component_child(
    "component_events",
    [
        Column("name", "TEXT", nullable=False),
        Column("payload", "TEXT"),
        Column("description", "TEXT"),
    ],
)

COMPONENT_EXAMPLES = _component_child(
    "component_examples",
    [
        Column("framework", "TEXT", nullable=False),
        Column("title", "TEXT"),
        Column("code", "TEXT", nullable=False),
        Column("description", "TEXT"),
    ],
    indexes=[
        ("idx_component_examples_component", ["component_id"]),
        ("idx_component_examples_framework", ["framework"]),
    ],
)

COMPONENT_CSS_CLASSES = _component_child(
    "component_css_classes",
    [
        Column("class_name", "TEXT", nullable=False),
    ],
)


# ============================================================================
# CSS-ONLY UTILITIES
# ============================================================================

CSS_UTILITIES = TableSchema(
    name="css_utilities",
    columns=[
        Column("id", "INTEGER", primary_key=True, autoincrement=True),
        Column("name", "TEXT", nullable=False, unique=True),   # "Margin"
        Column("slug", "TEXT", nullable=False),
        Column("category", "TEXT", nullable=False),            # "layout" | "utility"
        Column("description", "TEXT"),
    ],
    indexes=[
        ("idx_css_utilities_category", ["category"]),
        ("idx_css_utilities_slug", ["slug"]),
    ],
    keyed=True,
)

CSS_UTILITY_CLASSES = TableSchema(
    name="css_utility_classes",
    columns=[
        Column("id", "INTEGER", primary_key=True, autoincrement=True),
        Column("utility_id", "INTEGER", nullable=False),
        Column("class_name", "TEXT", nullable=False),          # ".mu-mt-100"
    ],
    indexes=[("idx_css_utility_classes_utility", ["utility_id"])],
    foreign_keys=[ForeignKey(["utility_id"], "css_utilities", ["id"])],
)

CSS_UTILITY_EXAMPLES = TableSchema(
    name="css_utility_examples",
    columns=[
        Column("id", "INTEGER", primary_key=True, autoincrement=True),
        Column("utility_id", "INTEGER", nullable=False),
        Column("title", "TEXT"),
        Column("code", "TEXT", nullable=False),
    ],
    indexes=[("idx_css_utility_examples_utility", ["utility_id"])],
    foreign_keys=[ForeignKey(["utility_id"], "css_utilities", ["id"])],
)


COMPONENTS_TABLES: dict[str, TableSchema] = {
    "components": COMPONENTS,
    "component_props": COMPONENT_PROPS,
    "component_slots": COMPONENT_SLOTS,
    "component_events": COMPONENT_EVENTS,
    "component_examples": COMPONENT_EXAMPLES,
    "component_css_classes": COMPONENT_CSS_CLASSES,
    "css_utilities": CSS_UTILITIES,
    "css_utility_classes": CSS_UTILITY_CLASSES,
    "css_utility_examples": CSS_UTILITY_EXAMPLES,
}
