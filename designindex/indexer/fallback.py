"""Bundled default datasets substituted in lenient mode.

Each category maps to a zero-argument factory so every call returns fresh
record objects. The datasets are deliberately small: enough for queries to
answer something meaningful when a source checkout is missing.
"""

from collections.abc import Callable

from .config import SPACING_SCALE
from .extractors.css_utilities import generate_utilities
from .extractors.tokens import magic_unit_token, spacing_token
from .models import Component, Documentation, Event, Example, Icon, Prop, Slot, Token


def default_tokens() -> list[Token]:
    colors = [
        ("primary-01.100", "#78be20", "primary"),
        ("primary-01.500", "#188803", "primary"),
        ("grey.000", "#ffffff", "grey"),
        ("grey.900", "#191919", "grey"),
        ("danger.500", "#c61112", "danger"),
    ]
    tokens = [
        Token(
            category="color",
            subcategory=subcategory,
            name=path.replace(".", "-"),
            path=f"color.{path}",
            css_variable=f"--color-{path.replace('.', '-')}",
            scss_variable=f"$color-{path.replace('.', '-')}",
            value_raw=value,
            source_file="fallback",
        )
        for path, value, subcategory in colors
    ]
    tokens.extend(spacing_token(name, multiplier) for name, multiplier in SPACING_SCALE)
    tokens.append(magic_unit_token())
    return tokens


def _button(name: str, slug: str, framework: str) -> Component:
    size = Prop(name="size", type="string", default_value="m", options=["s", "m", "l"])
    theme = Prop(name="theme", type="string", default_value="solid",
                 options=["solid", "bordered", "bordered-neutral"])
    if framework == "vue":
        events = [Event(name="click")]
        slots = [Slot(name="default")]
        code = '<MButton label="Button" size="m" />'
    else:
        events = [Event(name="onClick", payload="event", description="Click event callback")]
        slots = [Slot(name="children", description="Component children")]
        code = '<Button size="m">Button</Button>'

    return Component(
        name=name,
        slug=slug,
        category="action",
        description="Buttons trigger an action.",
        frameworks=[framework],
        props=[size, theme, Prop(name="disabled", type="boolean", default_value="false")],
        slots=slots,
        events=events,
        examples=[Example(framework=framework, title="Basic", code=code)],
        css_classes=["mc-button", "mc-button--s", "mc-button--l"],
    )


def default_vue_components() -> list[Component]:
    return [_button("MButton", "button", "vue")]


def default_react_components() -> list[Component]:
    return [_button("Button", "button", "react")]


def default_docs() -> list[Documentation]:
    return [
        Documentation(
            title="Getting started",
            path="/getting-started",
            content=(
                "# Getting started\n\n"
                "Install the styles package and import the component you need, "
                "for example MButton with the mc-button class."
            ),
            category="guides",
            keywords=["getting", "started", "mbutton", "mc-button", "component", "style"],
        )
    ]


def default_icons() -> list[Icon]:
    return [
        Icon(
            name="ArrowArrowBottom16",
            icon_name="ArrowArrowBottom",
            type="navigation",
            size=16,
            view_box="0 0 16 16",
            paths='[{tagName: "path", attrs: {d: "M8 11.5 3.5 7l1-1L8 9.5 11.5 6l1 1z"}}]',
        )
    ]


FALLBACK_DATASETS: dict[str, Callable[[], list]] = {
    "tokens": default_tokens,
    "vue": default_vue_components,
    "react": default_react_components,
    "css_utilities": generate_utilities,
    "docs": default_docs,
    "icons": default_icons,
}


def fallback_for(category: str) -> list:
    return FALLBACK_DATASETS[category]()
