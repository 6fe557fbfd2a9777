"""Typed records produced by the extractors and returned by the query layer.

Every optional field is an explicit ``X | None`` with its defaulting rule
stated on the field. Collections default to empty lists, never None.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ParsedValue:
    """A raw scalar split into number and unit.

    ``number`` and ``unit`` are both None unless the raw string matched the
    numeric grammar; ``unit`` is also None for a bare number.
    """

    raw: str
    number: float | None = None
    unit: str | None = None


@dataclass
class TokenProperty:
    """Named sub-field of a composite token (e.g. a shadow's ``blur``)."""

    property: str
    value: str
    value_number: float | None = None  # None when value is not numeric
    value_unit: str | None = None


@dataclass
class Token:
    """A named design value.

    Attributes:
        category: One of TOKEN_CATEGORIES
        name: Short name, unique within the category
        path: Dotted, globally unique path (e.g. ``color.primary-01.100``)
        value_raw: Value exactly as declared
    """

    category: str
    name: str
    path: str
    value_raw: str
    subcategory: str | None = None
    css_variable: str | None = None
    scss_variable: str | None = None
    value_number: float | None = None
    value_unit: str | None = None
    value_computed: str | None = None  # pixel rendering when derivable, else None
    description: str | None = None
    platform: str = "all"  # "all" unless a source says otherwise
    source_file: str | None = None  # relative to the tokens root
    properties: list[TokenProperty] = field(default_factory=list)


@dataclass
class Prop:
    """Component input.

    ``required`` is False unless the source declares it: an options-style
    ``required: true``, or a TypeScript member written without a ``?`` marker.
    """

    name: str
    type: str | None = None
    default_value: str | None = None
    required: bool = False
    options: list[str] | None = None  # enumerated value set, None when unconstrained
    description: str | None = None


@dataclass
class Slot:
    name: str
    description: str | None = None


@dataclass
class Event:
    name: str
    payload: str | None = None
    description: str | None = None


@dataclass
class Example:
    framework: str
    code: str
    title: str | None = None
    description: str | None = None


@dataclass
class Component:
    """A UI component, possibly implemented in several frameworks."""

    name: str
    slug: str
    category: str = "other"
    description: str | None = None
    frameworks: list[str] = field(default_factory=list)
    props: list[Prop] = field(default_factory=list)
    slots: list[Slot] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    examples: list[Example] = field(default_factory=list)
    css_classes: list[str] = field(default_factory=list)


@dataclass
class UtilityExample:
    code: str
    title: str | None = None


@dataclass
class CssUtility:
    """A CSS-only layout or utility family with its generated class catalog."""

    name: str
    slug: str
    category: str
    description: str
    classes: list[str] = field(default_factory=list)
    examples: list[UtilityExample] = field(default_factory=list)


@dataclass
class Documentation:
    """One documentation page.

    ``path`` is the URL-style path (``/components/button``), unique across pages.
    """

    title: str
    path: str
    content: str
    category: str | None = None
    keywords: list[str] = field(default_factory=list)


@dataclass
class Icon:
    """One export of the icon registry module.

    Attributes:
        name: Export identifier, including the size suffix (``ArrowDown16``)
        icon_name: Display name with trailing size digits stripped (``ArrowDown``)
        size: Pixel size taken from the export identifier, 16 when absent
        paths: Serialized shape tree, verbatim from the source
    """

    name: str
    icon_name: str
    type: str
    size: int
    view_box: str
    paths: str
