"""Icon Extractor.

The registry is one generated ES module of ``export const Name = {...}``
blocks. Each block is read with targeted field patterns; the shape tree is
kept verbatim and only interpreted when rendering SVG.
"""

import html
import json
import re

from designindex.utils.logging import logger

from ..config import ICON_DEFAULT_SIZE, ICON_DEFAULT_TYPE, ICON_DEFAULT_VIEWBOX
from ..models import Icon
from . import BaseExtractor

EXPORT_BOUNDARY = re.compile(r"export\s+const\s+")
EXPORT_NAME = re.compile(r"^(\w+)\s*=")
VIEWBOX_FIELD = re.compile(r"[\"']?viewBox[\"']?\s*:\s*[\"']([^\"']+)[\"']")
TYPE_FIELD = re.compile(r"[\"']?type[\"']?\s*:\s*[\"']([^\"']+)[\"']")
ICON_NAME_FIELD = re.compile(r"[\"']?iconName[\"']?\s*:\s*[\"']([^\"']+)[\"']")
PATHS_FIELD = re.compile(
    r"[\"']?paths[\"']?\s*:\s*(\[[\s\S]*?\])\s*,?\s*(?:[\"']?(?:type|iconName)[\"']?\s*:|\}\s*;?\s*$)"
)
TRAILING_DIGITS = re.compile(r"(\d+)$")
UNQUOTED_KEY = re.compile(r"([{,]\s*)([A-Za-z_$][\w$-]*)\s*:")
D_ATTRIBUTE = re.compile(r"[\"']?d[\"']?\s*:\s*[\"']([^\"']+)[\"']")

SVG_NS = "http://www.w3.org/2000/svg"


def parse_icon_block(block: str) -> Icon | None:
    """One export block -> Icon; None when the block has no name or shape tree."""
    name_match = EXPORT_NAME.match(block)
    if not name_match:
        return None
    export_name = name_match.group(1)

    paths_match = PATHS_FIELD.search(block)
    if not paths_match:
        return None

    view_box = VIEWBOX_FIELD.search(block)
    icon_type = TYPE_FIELD.search(block)
    icon_name = ICON_NAME_FIELD.search(block)
    size = TRAILING_DIGITS.search(export_name)

    display_name = icon_name.group(1) if icon_name else export_name
    return Icon(
        name=export_name,
        icon_name=TRAILING_DIGITS.sub("", display_name),
        type=icon_type.group(1) if icon_type else ICON_DEFAULT_TYPE,
        size=int(size.group(1)) if size else ICON_DEFAULT_SIZE,
        view_box=view_box.group(1) if view_box else ICON_DEFAULT_VIEWBOX,
        paths=paths_match.group(1),
    )


def parse_icons_module(content: str) -> list[Icon]:
    icons: dict[str, Icon] = {}
    for block in EXPORT_BOUNDARY.split(content)[1:]:
        try:
            icon = parse_icon_block(block)
        except (ValueError, IndexError) as e:
            logger.warning(f"Could not parse icon block: {e}")
            continue
        if icon is None:
            logger.debug(f"Skipped export without icon fields: {block[:40].strip()}")
            continue
        if icon.name in icons:
            logger.warning(f"Duplicate icon export {icon.name}, skipped")
            continue
        icons[icon.name] = icon
    return list(icons.values())


# ============================================================================
# RENDERING
# ============================================================================

def load_shape_tree(paths: str) -> list[dict]:
    """Parse the serialized shape tree, quoting bare object keys first."""
    normalized = UNQUOTED_KEY.sub(r'\1"\2":', paths).replace("'", '"')
    tree = json.loads(normalized)
    if not isinstance(tree, list):
        raise ValueError("shape tree is not a list")
    return tree


def _render_element(element: dict, indent: str = "  ") -> str:
    attrs = " ".join(
        f'{key}="{html.escape(str(value), quote=True)}"'
        for key, value in (element.get("attrs") or {}).items()
    )
    open_tag = f"<{element['tagName']}{' ' + attrs if attrs else ''}"
    children = element.get("children") or []
    if children:
        inner = "\n".join(_render_element(child, indent + "  ") for child in children)
        return f"{indent}{open_tag}>\n{inner}\n{indent}</{element['tagName']}>"
    return f'{indent}{open_tag} fill="currentColor"/>'


def render_svg(icon: Icon) -> str:
    """SVG markup for ``icon``; leaves are painted with ``currentColor``.

    Falls back to the first ``d`` attribute, then to an empty ``<svg>``,
    when the shape tree cannot be parsed.
    """
    try:
        tree = load_shape_tree(icon.paths)
        body = "\n".join(_render_element(element) for element in tree)
    except (ValueError, KeyError, TypeError, AttributeError):
        d_match = D_ATTRIBUTE.search(icon.paths)
        if d_match:
            return (
                f'<svg viewBox="{icon.view_box}" xmlns="{SVG_NS}">\n'
                f'  <path d="{d_match.group(1)}" fill="currentColor"/>\n'
                "</svg>"
            )
        return f'<svg viewBox="{icon.view_box}" xmlns="{SVG_NS}"></svg>'

    return f'<svg viewBox="{icon.view_box}" xmlns="{SVG_NS}">\n{body}\n</svg>'


def usage_snippets(icon: Icon) -> dict[str, str]:
    """React and Vue usage code for an icon export."""
    react = (
        'import { MIcon } from "@mozaic-ds/react";\n\n'
        "// Using the Mozaic React icon component\n"
        f'<MIcon name="{icon.name}" />\n\n'
        "// Or import directly from the icons package\n"
        f'import {{ {icon.name} }} from "@mozaic-ds/icons/js/icons";'
    )
    vue = (
        "<template>\n"
        f'  <MIcon name="{icon.name}" />\n'
        "</template>\n\n"
        "<script setup>\n"
        'import { MIcon } from "@mozaic-ds/vue-3";\n'
        "</script>\n\n"
        "<!-- Or use directly from icons package -->\n"
        "<script>\n"
        f'import {{ {icon.name} }} from "@mozaic-ds/icons/js/icons";\n'
        "</script>"
    )
    return {"react": react, "vue": vue}


class IconExtractor(BaseExtractor):
    """Extractor for the generated icon registry module (root: the module file)."""

    category = "icons"

    def source_exists(self) -> bool:
        return self.source.exists(self.root) and not self.source.is_dir(self.root)

    def extract(self) -> list[Icon]:
        content = self.read_text(self.root)
        if content is None:
            return []
        icons = parse_icons_module(content)
        logger.info(f"Parsed {len(icons)} icons")
        return icons
