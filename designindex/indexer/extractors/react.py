"""React (TSX) component extractor.

Component directories are PascalCase (``Button/``); the primary file is
``<Name>.tsx`` or ``index.tsx``. Props come from the external ``.types.ts``
file when the component imports its props interface from one, otherwise
from inline interfaces. Callback props become events, never props.
"""

import re

from designindex.utils.logging import logger

from ..config import CALLBACK_PREFIX, EXCLUDED_PROP_NAMES
from ..core import first_existing, join, list_dirs
from ..models import Component, Prop, Slot
from . import BaseExtractor
from .strategies import (
    ComponentContext,
    Member,
    PropStrategy,
    balanced_block,
    extract_callback_events,
    extract_css_classes,
    infer_category,
    parse_members,
    parse_stories,
    run_strategies,
    split_top_level_commas,
    union_options,
)

TYPES_IMPORT = re.compile(
    r"import\s*(?:type\s*)?\{[^}]*?\b(I\w*Props)\b[^}]*\}\s*from\s*['\"]\./([\w.-]+?)\.types['\"]"
)
CONST_ARRAY = re.compile(r"const\s+(\w+)\s*=\s*\[([^\]]+)\]\s*as\s+const")
INTERFACE_HEAD = re.compile(r"(?:export\s+)?interface\s+(\w+)\s*(?:<[^{]*?>)?\s*(?:extends\s+([^{]+))?\{")
TYPE_ALIAS_HEAD = re.compile(r"(?:export\s+)?type\s+(\w+)\s*(?:<[^=]*?>)?\s*=\s*\{")
INLINE_PROPS_HEADS = (
    re.compile(r"interface\s+\w*Props\w*\s*(?:<[^{]*?>)?\s*(?:extends[^{]+)?\{"),
    re.compile(r"type\s+\w*Props\w*\s*=\s*\{"),
)
CONST_TYPE_REF = re.compile(r"^T(\w+)$")
GENERIC_ARGS = re.compile(r"<[^<>]*>")
CHILDREN_MARKERS = ("children", "PropsWithChildren", "ReactNode")
STORY_RENDER = re.compile(r"render\s*:\s*\([^)]*\)\s*=>\s*(<[\s\S]*?>)")


def is_callback(member: Member) -> bool:
    return "=>" in member.type or bool(re.match(rf"{CALLBACK_PREFIX}[A-Z]", member.name))


def is_prop_member(member: Member) -> bool:
    """Function-typed members, callbacks, ``children`` and ``className`` are not props."""
    return not is_callback(member) and member.name not in EXCLUDED_PROP_NAMES


def extract_const_arrays(content: str) -> dict[str, list[str]]:
    """``const sizes = ['s', 'm'] as const`` -> ``{"sizes": ["s", "m"]}``."""
    arrays = {}
    for name, values in CONST_ARRAY.findall(content):
        items = [v.strip().strip("'\"`") for v in values.split(",")]
        arrays[name] = [v for v in items if v]
    return arrays


def collect_interfaces(content: str) -> dict[str, tuple[list[str], str]]:
    """Map interface/type-literal name -> (extended names, body)."""
    interfaces: dict[str, tuple[list[str], str]] = {}

    for match in INTERFACE_HEAD.finditer(content):
        body = balanced_block(content, match.end() - 1)
        if body is None:
            continue
        interfaces.setdefault(match.group(1), (parse_extends(match.group(2) or ""), body))

    for match in TYPE_ALIAS_HEAD.finditer(content):
        body = balanced_block(content, match.end() - 1)
        if body is not None:
            interfaces.setdefault(match.group(1), ([], body))

    return interfaces


def parse_extends(clause: str) -> list[str]:
    """Extended interface names, generics removed, Omit/HTML attribute bases dropped."""
    names = []
    for part in split_top_level_commas(clause):
        stripped = part.strip()
        previous = None
        while previous != stripped:
            previous, stripped = stripped, GENERIC_ARGS.sub("", stripped)
        stripped = stripped.strip()
        if not stripped or stripped.startswith("Omit") or "HTMLAttributes" in stripped:
            continue
        names.append(stripped)
    return names


def resolve_const_options(type_text: str, const_arrays: dict[str, list[str]]) -> list[str] | None:
    """``TButtonSize`` -> values of the first const whose name occurs in ``buttonsize``."""
    match = CONST_TYPE_REF.match(type_text)
    if not match:
        return None
    type_name = match.group(1).lower()
    for const_name, values in const_arrays.items():
        if const_name.lower() in type_name:
            return values
    return None


def props_from_interface(name: str, interfaces: dict[str, tuple[list[str], str]],
                         const_arrays: dict[str, list[str]],
                         visiting: frozenset[str] = frozenset()) -> list[Prop]:
    """Props of ``name`` with extended interfaces merged first; first occurrence wins."""
    if name in visiting or name not in interfaces:
        return []
    visiting = visiting | {name}
    extends, body = interfaces[name]

    props: dict[str, Prop] = {}
    for base in extends:
        for prop in props_from_interface(base, interfaces, const_arrays, visiting):
            props.setdefault(prop.name, prop)

    for member in parse_members(body):
        if member.name in props or not is_prop_member(member):
            continue
        options = resolve_const_options(member.type, const_arrays)
        union = union_options(member.type)
        if union:
            options = union
        props[member.name] = Prop(
            name=member.name,
            type=member.type,
            required=not member.optional,
            options=options if options and len(options) > 1 else None,
            description=member.description,
        )
    return list(props.values())


# ============================================================================
# PROP STRATEGIES
# ============================================================================

class ExternalTypesStrategy(PropStrategy):
    """``import { IButtonProps } from './Button.types'`` resolved into the sibling file."""

    name = "external-types"

    def precondition(self, text, ctx):
        match = TYPES_IMPORT.search(text)
        if not match:
            return False
        return ctx.source.exists(ctx.sibling(f"{match.group(2)}.types.ts"))

    def extract(self, text, ctx):
        match = TYPES_IMPORT.search(text)
        interface_name, types_stem = match.group(1), match.group(2)
        types_content = ctx.read_sibling(f"{types_stem}.types.ts") or ""
        ctx.notes["types_content"] = types_content

        return props_from_interface(
            interface_name,
            collect_interfaces(types_content),
            extract_const_arrays(types_content),
        )


class InlineInterfaceStrategy(PropStrategy):
    """Every ``interface *Props*`` / ``type *Props* = {...}`` in the component file.

    Any union type is reported as ``string`` with its members as options.
    """

    name = "inline-interface"

    def precondition(self, text, ctx):
        return any(head.search(text) for head in INLINE_PROPS_HEADS)

    def extract(self, text, ctx):
        props: dict[str, Prop] = {}
        for head in INLINE_PROPS_HEADS:
            for match in head.finditer(text):
                body = balanced_block(text, match.end() - 1)
                if body is None:
                    continue
                for member in parse_members(body):
                    if member.name in props or not is_prop_member(member):
                        continue
                    props[member.name] = self._prop(member)
        return list(props.values())

    @staticmethod
    def _prop(member: Member) -> Prop:
        if "|" in member.type:
            options = union_options(member.type, literals_only=False)
            return Prop(
                name=member.name,
                type="string",
                required=not member.optional,
                options=options,
                description=member.description,
            )
        return Prop(
            name=member.name,
            type=member.type.lower(),
            required=not member.optional,
            description=member.description,
        )


REACT_PROP_STRATEGIES: tuple[PropStrategy, ...] = (
    ExternalTypesStrategy(),
    InlineInterfaceStrategy(),
)


# ============================================================================
# EXTRACTOR
# ============================================================================

class ReactExtractor(BaseExtractor):
    """Extractor for a React components directory."""

    category = "react"

    def extract(self) -> list[Component]:
        components = []
        for directory in list_dirs(self.root, lambda name: name[:1].isupper(), self.source):
            try:
                component = self.extract_component(directory)
            except Exception as e:
                logger.warning(f"Could not parse React component in {directory}: {e}")
                continue
            if component is not None:
                components.append(component)

        logger.info(f"Parsed {len(components)} React components")
        return components

    def extract_component(self, directory: str) -> Component | None:
        name = directory.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]

        tsx_file = first_existing(
            [join(self.source, directory, f"{name}.tsx"), join(self.source, directory, "index.tsx")],
            self.source,
        )
        if tsx_file is None:
            logger.debug(f"No TSX source file in {directory}")
            return None

        content = self.source.read_text(tsx_file)
        ctx = ComponentContext(name=name, directory=directory, source=self.source)
        _, props = run_strategies(REACT_PROP_STRATEGIES, content, ctx)

        stem = tsx_file.replace("\\", "/").rsplit("/", 1)[-1][: -len(".tsx")]
        type_sources = [content]
        if ctx.notes.get("types_content"):
            type_sources.append(ctx.notes["types_content"])
        own_types = ctx.read_sibling(f"{stem}.types.ts")
        if own_types and own_types not in type_sources:
            type_sources.append(own_types)

        slots = []
        if any(marker in content for marker in CHILDREN_MARKERS):
            slots.append(Slot(name="children", description="Component children"))

        return Component(
            name=name,
            slug=name.lower(),
            category=infer_category(name),
            frameworks=["react"],
            props=props,
            slots=slots,
            events=extract_callback_events(*type_sources),
            examples=self._examples(directory, name),
            css_classes=extract_css_classes(content),
        )

    def _story_files(self, directory: str, name: str) -> list[str]:
        files = []
        primary = first_existing(
            [
                join(self.source, directory, "stories", f"{name}.stories.tsx"),
                join(self.source, directory, f"{name}.stories.tsx"),
            ],
            self.source,
        )
        if primary:
            files.append(primary)

        stories_dir = join(self.source, directory, "stories")
        if self.source.is_dir(stories_dir):
            files.extend(
                join(self.source, stories_dir, entry)
                for entry in self.source.list_dir(stories_dir)
                if entry.endswith(".stories.tsx")
            )
        return list(dict.fromkeys(files))

    def _examples(self, directory: str, name: str):
        examples = []
        for story_file in self._story_files(directory, name):
            content = self.read_text(story_file)
            if content is None:
                continue
            examples.extend(parse_stories(content, "react", extra_patterns=(STORY_RENDER,)))
        return examples
