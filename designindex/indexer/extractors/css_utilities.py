"""CSS Utility Extractor.

Purely generative: the class catalogs are the cartesian products of the
fixed parameter tables in config.py, so the same tables always produce the
same classes in the same order. The styles directory is only checked for
presence by the pipeline.
"""

from ..config import (
    ASPECT_RATIOS,
    FLEXY_CUSTOM_COLUMNS,
    FLEXY_FRACTIONS,
    FLEXY_MODIFIERS,
    FLEXY_RESPONSIVE_MODIFIERS,
    MAJOR_SCREENS,
    UTILITY_SIDES,
    UTILITY_SIZES,
)
from ..models import CssUtility, UtilityExample
from . import BaseExtractor


def responsive(class_name: str) -> list[str]:
    """``.x`` -> ``[".x@from-s", ".x@from-m", ...]`` over the major breakpoints."""
    return [f"{class_name}@from-{screen}" for screen in MAJOR_SCREENS]


def spacing_classes(prefix: str) -> list[str]:
    """Side x size grid; the ``all`` side drops its side letter (``.mu-m-100``)."""
    classes = []
    for side, _label in UTILITY_SIDES:
        for size in UTILITY_SIZES:
            if side == "all":
                classes.append(f".mu-{prefix}-{size}")
            else:
                classes.append(f".mu-{prefix}{side}-{size}")
    return classes


def flexy() -> CssUtility:
    classes = [".ml-flexy", ".ml-flexy__col"]
    classes += [f".ml-flexy--{modifier}" for modifier in FLEXY_MODIFIERS]
    for screen in MAJOR_SCREENS:
        classes += [f".ml-flexy--{modifier}@from-{screen}" for modifier in FLEXY_RESPONSIVE_MODIFIERS]

    for num, denom in FLEXY_FRACTIONS:
        width = f".ml-flexy__col--{num}of{denom}"
        push = f".ml-flexy__col--push-{num}of{denom}"
        classes += [width, push]
        for screen in MAJOR_SCREENS:
            classes += [f"{width}@from-{screen}", f"{push}@from-{screen}"]

    for column in FLEXY_CUSTOM_COLUMNS:
        classes.append(f".ml-flexy__col--{column}")
        classes += responsive(f".ml-flexy__col--{column}")

    classes.append(".ml-flexy__col--push--reset")
    classes += responsive(".ml-flexy__col--push--reset")

    return CssUtility(
        name="Flexy",
        slug="flexy",
        category="layout",
        description=(
            "Flexbox-based grid system for creating responsive layouts. Uses 12-column grid "
            "with responsive breakpoints and utility modifiers for alignment and spacing."
        ),
        classes=classes,
        examples=[
            UtilityExample(
                title="Basic 2-column layout",
                code=(
                    '<div class="ml-flexy ml-flexy--gutter">\n'
                    '  <div class="ml-flexy__col ml-flexy__col--6of12">Column 1</div>\n'
                    '  <div class="ml-flexy__col ml-flexy__col--6of12">Column 2</div>\n'
                    "</div>"
                ),
            ),
            UtilityExample(
                title="Responsive columns",
                code=(
                    '<div class="ml-flexy ml-flexy--gutter">\n'
                    '  <div class="ml-flexy__col ml-flexy__col--full ml-flexy__col--6of12@from-m '
                    'ml-flexy__col--4of12@from-l">\n'
                    "    Responsive column\n"
                    "  </div>\n"
                    "</div>"
                ),
            ),
            UtilityExample(
                title="Centered content",
                code=(
                    '<div class="ml-flexy ml-flexy--justify-center ml-flexy--items-center">\n'
                    '  <div class="ml-flexy__col ml-flexy__col--initial">Centered content</div>\n'
                    "</div>"
                ),
            ),
        ],
    )


def container() -> CssUtility:
    return CssUtility(
        name="Container",
        slug="container",
        category="layout",
        description=(
            "Responsive container with automatic max-width and padding. Centers content and "
            "provides consistent horizontal spacing across breakpoints."
        ),
        classes=[".ml-container", ".ml-container--fluid", *responsive(".ml-container--fluid")],
        examples=[
            UtilityExample(
                title="Basic container",
                code='<div class="ml-container">\n  <p>Content within max-width container</p>\n</div>',
            ),
            UtilityExample(
                title="Fluid container",
                code=(
                    '<div class="ml-container ml-container--fluid">\n'
                    "  <p>Full-width content with padding</p>\n"
                    "</div>"
                ),
            ),
        ],
    )


def _spacing_utility(name: str, prefix: str, noun: str, plural: str) -> CssUtility:
    return CssUtility(
        name=name,
        slug=name.lower(),
        category="utility",
        description=(
            f"{name} utility classes using magic unit scale (mu). Supports all sides, "
            f"individual sides, vertical, and horizontal {plural}."
        ),
        classes=spacing_classes(prefix),
        examples=[
            UtilityExample(
                title=f"{name} all sides",
                code=f'<div class="mu-{prefix}-100">16px {noun} on all sides</div>',
            ),
            UtilityExample(
                title=f"{name} specific sides",
                code=(
                    f'<div class="mu-{prefix}t-200 mu-{prefix}b-100">\n'
                    f"  32px top {noun}, 16px bottom {noun}\n"
                    "</div>"
                ),
            ),
            UtilityExample(
                title=f"Horizontal/vertical {noun}",
                code=(
                    f'<div class="mu-{prefix}v-200 mu-{prefix}h-100">\n'
                    f"  32px vertical {noun}, 16px horizontal {noun}\n"
                    "</div>"
                ),
            ),
        ],
    )


def margin() -> CssUtility:
    return _spacing_utility("Margin", "m", "margin", "margins")


def padding() -> CssUtility:
    return _spacing_utility("Padding", "p", "padding", "padding")


def ratio() -> CssUtility:
    return CssUtility(
        name="Ratio",
        slug="ratio",
        category="utility",
        description=(
            "Aspect ratio utility for maintaining element proportions. Supports common aspect "
            "ratios like 16:9, 4:3, 1:1, etc."
        ),
        classes=[".mu-ratio", ".mu-ratio__item", *[f".mu-ratio--{r}" for r in ASPECT_RATIOS]],
        examples=[
            UtilityExample(
                title="16:9 aspect ratio",
                code=(
                    '<div class="mu-ratio mu-ratio--16x9">\n'
                    '  <img class="mu-ratio__item" src="image.jpg" alt="Image with 16:9 ratio" />\n'
                    "</div>"
                ),
            ),
            UtilityExample(
                title="Square ratio",
                code=(
                    '<div class="mu-ratio mu-ratio--1x1">\n'
                    '  <div class="mu-ratio__item">Square content</div>\n'
                    "</div>"
                ),
            ),
        ],
    )


def scroll() -> CssUtility:
    return CssUtility(
        name="Scroll",
        slug="scroll",
        category="utility",
        description=(
            "Scroll utility for preventing body scroll. Useful when modals or overlays are open."
        ),
        classes=[".mu-prevent-body-scroll"],
        examples=[
            UtilityExample(
                title="Prevent body scroll",
                code=(
                    "<!-- Add to html or body element when modal is open -->\n"
                    '<html class="mu-prevent-body-scroll">\n'
                    '  <body class="mu-prevent-body-scroll">\n'
                    "    <!-- Content -->\n"
                    "  </body>\n"
                    "</html>"
                ),
            ),
        ],
    )


UTILITY_BUILDERS = (flexy, container, margin, padding, ratio, scroll)


def generate_utilities() -> list[CssUtility]:
    """All six utilities with their class catalogs, layouts first."""
    return [build() for build in UTILITY_BUILDERS]


class CssUtilityExtractor(BaseExtractor):
    """Extractor for CSS-only layouts and utilities (root: the styles package)."""

    category = "css_utilities"

    def extract(self) -> list[CssUtility]:
        return generate_utilities()
