"""Indexer configuration - constants and parameter tables.

This module contains the fixed tables every extractor is driven by.
It holds ONLY configuration constants: no extraction logic.
"""

import os

# =============================================================================
# PERFORMANCE CONFIGURATION
# =============================================================================

def _get_batch_size(env_var: str, default: int, max_value: int) -> int:
    """Get batch size from environment or use default."""
    try:
        value = int(os.environ.get(env_var, default))
        return min(value, max_value)
    except (ValueError, TypeError):
        return default


MAX_BATCH_SIZE = 5000
DEFAULT_BATCH_SIZE = _get_batch_size("DESIGNINDEX_DB_BATCH_SIZE", 200, MAX_BATCH_SIZE)


# =============================================================================
# CATEGORIES
# =============================================================================

TOKEN_CATEGORIES = (
    "color", "spacing", "typography", "shadow", "border", "radius", "screen", "grid",
)

COMPONENT_CATEGORIES = (
    "action", "form", "navigation", "feedback", "layout", "data-display", "other",
)

FRAMEWORKS = ("vue", "react", "html")

UTILITY_CATEGORIES = ("layout", "utility")

# Rebuild order. Each entry: (category, mandatory)
PIPELINE_ORDER = (
    ("tokens", True),
    ("vue", True),
    ("react", True),
    ("css_utilities", False),
    ("docs", True),
    ("icons", True),
)


# =============================================================================
# VALUES & TOKENS
# =============================================================================

VALUE_UNITS = ("rem", "px", "em", "%", "vh", "vw")

MAGIC_UNIT_PX = 16

# (name, multiplier) - 1mu = 16px
SPACING_SCALE = (
    ("mu025", 0.25),
    ("mu050", 0.5),
    ("mu075", 0.75),
    ("mu100", 1),
    ("mu125", 1.25),
    ("mu150", 1.5),
    ("mu175", 1.75),
    ("mu200", 2),
    ("mu250", 2.5),
    ("mu300", 3),
    ("mu350", 3.5),
    ("mu400", 4),
    ("mu500", 5),
    ("mu600", 6),
    ("mu700", 7),
    ("mu800", 8),
    ("mu900", 9),
    ("mu1000", 10),
)

SPACING_SOURCE_FILE = "settings-tools/_s.magic-unit.scss"

SHADOW_FIELDS = ("x", "y", "blur", "spread", "opacity")


# =============================================================================
# COMPONENTS
# =============================================================================

# First match wins, checked in this order
CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("action", ("button", "link", "optionbutton", "optioncard")),
    ("form", (
        "input", "select", "checkbox", "radio", "toggle", "textarea", "field",
        "autocomplete", "datepicker", "dropdown", "fileuploader", "password",
        "phone", "quantity",
    )),
    ("navigation", ("accordion", "breadcrumb", "menu", "pagination", "sidebar", "stepper", "tabs")),
    ("feedback", ("badge", "flag", "loader", "modal", "notification", "progress", "tooltip")),
    ("layout", ("card", "divider", "layer")),
    ("data-display", ("table", "heading", "hero", "listbox", "rating", "tag")),
)

COMPONENT_CLASS_PREFIX = "mc-"
VUE_NAME_PREFIX = "M"

CALLBACK_PREFIX = "on"
EXCLUDED_PROP_NAMES = frozenset({"children", "className"})


# =============================================================================
# CSS UTILITIES
# =============================================================================

MAJOR_SCREENS = ("s", "m", "l", "xl")

UTILITY_SIZES = (
    "025", "050", "075", "100", "125", "150", "200", "250", "300",
    "350", "400", "500", "600", "700", "800", "900", "1000",
)

# side key -> label. "all" renders as a 2-segment class name
UTILITY_SIDES = (
    ("t", "top"),
    ("r", "right"),
    ("l", "left"),
    ("b", "bottom"),
    ("all", "all"),
    ("v", "vertical"),
    ("h", "horizontal"),
)

ASPECT_RATIOS = ("1x1", "2x3", "3x2", "3x4", "4x3", "16x9")

FLEXY_MODIFIERS = (
    "gutter", "space-around", "justify-between", "justify-evenly", "justify-start",
    "justify-center", "justify-end", "items-stretch", "items-start", "items-center", "items-end",
)

FLEXY_RESPONSIVE_MODIFIERS = (
    "space-around", "justify-between", "justify-evenly", "justify-start",
    "justify-center", "justify-end",
)

FLEXY_FRACTIONS = (
    (1, 2), (1, 3), (2, 3), (1, 4), (3, 4), (1, 6), (5, 6),
    (1, 12), (2, 12), (3, 12), (4, 12), (5, 12), (6, 12),
    (7, 12), (8, 12), (9, 12), (10, 12), (11, 12),
)

FLEXY_CUSTOM_COLUMNS = ("fill", "full", "initial", "grow", "first", "last")


# =============================================================================
# DOCUMENTATION
# =============================================================================

DOC_EXTENSIONS = (".md", ".mdx")

DOC_VOCABULARY = ("props", "slots", "events", "emit", "component", "style")

# (category, path substrings) - first match wins
DOC_CATEGORY_RULES = (
    ("components", ("component",)),
    ("foundations", ("foundation", "token")),
    ("patterns", ("pattern",)),
    ("guides", ("getting-started", "guide")),
)

DOC_UTILITY_CLASS_PREFIX = "mc-"


# =============================================================================
# ICONS
# =============================================================================

ICON_DEFAULT_VIEWBOX = "0 0 16 16"
ICON_DEFAULT_TYPE = "unknown"
ICON_DEFAULT_SIZE = 16


# =============================================================================
# FILE SYSTEM CONFIGURATION
# =============================================================================

# Directories never descended into while walking sources
SKIP_DIRS: frozenset[str] = frozenset({
    ".git",
    "node_modules",
    "dist",
    "build",
    "coverage",
    "__pycache__",
})
