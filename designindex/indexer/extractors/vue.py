"""Vue single-file component extractor.

Component directories are lowercase (``button/``); the component is named
``M<Capitalized dir>`` and its primary file is found by a fixed priority
list. Props come from the first strategy in VUE_PROP_STRATEGIES that yields
anything.
"""

import re

from designindex.utils.logging import logger

from ..config import VUE_NAME_PREFIX
from ..core import first_existing, join, list_dirs
from ..models import Component, Event, Prop, Slot
from . import BaseExtractor
from .strategies import (
    ComponentContext,
    PropStrategy,
    balanced_block,
    block_after,
    dedupe_by_name,
    extract_css_classes,
    infer_category,
    parse_members,
    parse_stories,
    run_strategies,
    split_top_level,
    strip_quotes,
    union_options,
)

SLOT_TAG = re.compile(r"<slot\b([^>]*)>")
SLOT_NAME = re.compile(r"(?<![:\w-])name\s*=\s*[\"']([^\"']+)[\"']")
EMIT_CALL = re.compile(r"\$?\bemit\s*\(\s*['\"`]([^'\"`]+)['\"`]")
EMITS_OPTION = re.compile(r"\bemits\s*:\s*\[")
DEFINE_EMITS = re.compile(r"\bdefineEmits\s*(<|\()")
QUOTED = re.compile(r"['\"`]([^'\"`]+)['\"`]")
TYPED_EMIT = re.compile(r"\(\s*\w+\s*:\s*['\"]([^'\"]+)['\"]\s*(?:,\s*([^)]*))?\)")
NAMED_TUPLE_EMIT = re.compile(r"^['\"]?([\w:-]+)['\"]?\s*:\s*\[([^\]]*)\]")
STORY_TEMPLATE = re.compile(r"template\s*:\s*`([^`]+)`")

PROP_ENTRY = re.compile(r"^(['\"]?)([\w-]+)\1\s*:\s*([\s\S]+)$")
PROP_TYPE = re.compile(r"\btype\s*:\s*(\[[^\]]*\]|\w+)")
PROP_DEFAULT = re.compile(r"\bdefault\s*:\s*(?:['\"`]([^'\"`]*)['\"`]|(-?[\w.]+))")
PROP_REQUIRED = re.compile(r"\brequired\s*:\s*(true|false)")
PROP_VALIDATOR = re.compile(r"\bvalidator[\s\S]*?(?:=>|return)\s*\[([^\]]+)\]")


def component_name(dir_name: str) -> str:
    """``button`` -> ``MButton``."""
    return VUE_NAME_PREFIX + dir_name[:1].upper() + dir_name[1:]


def component_slug(name: str) -> str:
    """``MButton`` -> ``button``."""
    if name.startswith(VUE_NAME_PREFIX):
        name = name[len(VUE_NAME_PREFIX):]
    return name.lower()


# ============================================================================
# PROP STRATEGIES
# ============================================================================

class OptionsObjectStrategy(PropStrategy):
    """``props: { size: { type: String, default: 'm', validator: ... } }``.

    Also matches the runtime form ``defineProps({ ... })``.
    """

    name = "options-object"
    pattern = re.compile(r"(?:\bprops\s*:\s*|\bdefineProps\s*\(\s*)\{")

    def precondition(self, text, ctx):
        return bool(self.pattern.search(text))

    def extract(self, text, ctx):
        body = block_after(text, self.pattern)
        if body is None:
            return []

        props = []
        for entry, doc in split_top_level(body, separators=","):
            match = PROP_ENTRY.match(entry)
            if not match:
                continue
            prop_name, definition = match.group(2), match.group(3).strip()

            if not definition.startswith("{"):
                # shorthand: `size: String` or `size: [String, Number]`
                props.append(Prop(name=prop_name, type=self._type_name(definition), description=doc))
                continue

            definition = balanced_block(definition, 0) or definition
            prop = Prop(name=prop_name, description=doc)

            type_match = PROP_TYPE.search(definition)
            if type_match:
                prop.type = self._type_name(type_match.group(1))

            default_match = PROP_DEFAULT.search(definition)
            if default_match:
                prop.default_value = default_match.group(1) if default_match.group(1) is not None \
                    else default_match.group(2)

            required_match = PROP_REQUIRED.search(definition)
            if required_match:
                prop.required = required_match.group(1) == "true"

            validator_match = PROP_VALIDATOR.search(definition)
            if validator_match:
                options = [strip_quotes(o) for o in validator_match.group(1).split(",")]
                prop.options = [o for o in options if o] or None

            props.append(prop)
        return props

    @staticmethod
    def _type_name(text: str) -> str:
        text = text.strip()
        if text.startswith("["):
            return " | ".join(t.strip().lower() for t in text.strip("[]").split(",") if t.strip())
        return text.split()[0].rstrip(",").lower()


class DefinePropsTypeStrategy(PropStrategy):
    """``withDefaults(defineProps<{ size?: 's' | 'm' }>(), { size: 'm' })``.

    The type argument may be an inline literal or the name of an interface
    declared in the same file. JSDoc comments become descriptions.
    """

    name = "define-props-type"
    pattern = re.compile(r"\bdefineProps\s*<")

    def precondition(self, text, ctx):
        return bool(self.pattern.search(text))

    def extract(self, text, ctx):
        match = self.pattern.search(text)
        after = text[match.end():].lstrip()

        if after.startswith("{"):
            body = balanced_block(after, 0)
        else:
            type_name = re.match(r"(\w+)", after)
            body = None
            if type_name:
                body = block_after(
                    text, rf"(?:interface\s+{type_name.group(1)}\b[^{{]*|type\s+{type_name.group(1)}\s*=\s*)\{{"
                )
        if body is None:
            return []

        defaults = self._defaults(text)
        return [
            Prop(
                name=member.name,
                type=member.type,
                default_value=defaults.get(member.name),
                required=not member.optional,
                options=union_options(member.type),
                description=member.description,
            )
            for member in parse_members(body)
        ]

    @staticmethod
    def _defaults(text: str) -> dict[str, str]:
        start = re.search(r"\bwithDefaults\s*\(", text)
        if not start:
            return {}
        call = balanced_block(text, start.end() - 1)
        if call is None:
            return {}

        # second argument of withDefaults(defineProps<...>(), { ... })
        parts = [segment for segment, _ in split_top_level(call, separators=",")]
        if len(parts) < 2 or not parts[1].startswith("{"):
            return {}
        body = balanced_block(parts[1], 0) or ""

        defaults = {}
        for entry, _ in split_top_level(body, separators=","):
            entry_match = PROP_ENTRY.match(entry)
            if entry_match:
                defaults[entry_match.group(2)] = strip_quotes(entry_match.group(3))
        return defaults


class PropsInterfaceStrategy(PropStrategy):
    """Any ``interface *Props* { ... }`` in the file."""

    name = "props-interface"
    pattern = re.compile(r"interface\s+\w*Props\w*\s*(?:extends[^{]+)?\{")

    def precondition(self, text, ctx):
        return bool(self.pattern.search(text))

    def extract(self, text, ctx):
        body = block_after(text, self.pattern)
        if body is None:
            return []
        return [
            Prop(
                name=member.name,
                type=member.type,
                required=not member.optional,
                options=union_options(member.type),
                description=member.description,
            )
            for member in parse_members(body)
        ]


VUE_PROP_STRATEGIES: tuple[PropStrategy, ...] = (
    OptionsObjectStrategy(),
    DefinePropsTypeStrategy(),
    PropsInterfaceStrategy(),
)


# ============================================================================
# SLOTS & EVENTS
# ============================================================================

def extract_slots(content: str) -> list[Slot]:
    """``<slot>`` tags; an unnamed slot is ``default``. First occurrence wins."""
    slots = []
    for match in SLOT_TAG.finditer(content):
        name_match = SLOT_NAME.search(match.group(1))
        slots.append(Slot(name=name_match.group(1) if name_match else "default"))
    return dedupe_by_name(slots)


def extract_events(content: str) -> list[Event]:
    """``emit('x')`` / ``$emit('x')`` call sites plus ``emits``/``defineEmits`` declarations."""
    events = [Event(name=name) for name in EMIT_CALL.findall(content)]

    emits_match = EMITS_OPTION.search(content)
    if emits_match:
        body = balanced_block(content, emits_match.end() - 1) or ""
        events.extend(Event(name=name) for name in QUOTED.findall(body))

    define_match = DEFINE_EMITS.search(content)
    if define_match:
        events.extend(_define_emits_events(content, define_match))

    return dedupe_by_name(events)


def _define_emits_events(content: str, match: re.Match) -> list[Event]:
    rest = content[match.end():].lstrip()

    if match.group(1) == "(":
        # defineEmits(['change', 'update'])
        if rest.startswith("["):
            body = balanced_block(rest, 0) or ""
            return [Event(name=name) for name in QUOTED.findall(body)]
        return []

    # defineEmits<{ (e: 'change', value: string): void }>() or { change: [value: string] }
    if not rest.startswith("{"):
        return []
    body = balanced_block(rest, 0) or ""
    events = []
    for name, payload in TYPED_EMIT.findall(body):
        events.append(Event(name=name, payload=payload.strip() or None))
    if not events:
        for segment, doc in split_top_level(body):
            tuple_match = NAMED_TUPLE_EMIT.match(segment)
            if tuple_match:
                events.append(Event(
                    name=tuple_match.group(1),
                    payload=tuple_match.group(2).strip() or None,
                    description=doc,
                ))
    return events


# ============================================================================
# EXTRACTOR
# ============================================================================

class VueExtractor(BaseExtractor):
    """Extractor for a Vue components directory."""

    category = "vue"

    def extract(self) -> list[Component]:
        components = []
        for directory in list_dirs(self.root, lambda name: name[:1].islower(), self.source):
            try:
                component = self.extract_component(directory)
            except Exception as e:
                logger.warning(f"Could not parse Vue component in {directory}: {e}")
                continue
            if component is not None:
                components.append(component)

        logger.info(f"Parsed {len(components)} Vue components")
        return components

    def extract_component(self, directory: str) -> Component | None:
        dir_name = directory.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
        name = component_name(dir_name)

        vue_file = first_existing(
            [
                join(self.source, directory, f"{name}.vue"),
                join(self.source, directory, f"{dir_name}.vue"),
                join(self.source, directory, "index.vue"),
            ],
            self.source,
        )
        if vue_file is None:
            logger.debug(f"No Vue source file in {directory}")
            return None

        content = self.source.read_text(vue_file)
        ctx = ComponentContext(name=name, directory=directory, source=self.source)
        _, props = run_strategies(VUE_PROP_STRATEGIES, content, ctx)

        return Component(
            name=name,
            slug=component_slug(name),
            category=infer_category(name),
            frameworks=["vue"],
            props=props,
            slots=extract_slots(content),
            events=extract_events(content),
            examples=self._examples(directory, dir_name, name),
            css_classes=extract_css_classes(content),
        )

    def _story_files(self, directory: str, dir_name: str, name: str) -> list[str]:
        files = []
        primary = first_existing(
            [
                join(self.source, directory, f"{name}.stories.ts"),
                join(self.source, directory, f"{dir_name}.stories.ts"),
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
                if entry.endswith(".stories.ts")
            )
        return list(dict.fromkeys(files))

    def _examples(self, directory: str, dir_name: str, name: str):
        examples = []
        for story_file in self._story_files(directory, dir_name, name):
            content = self.read_text(story_file)
            if content is None:
                continue
            examples.extend(parse_stories(content, "vue", extra_patterns=(STORY_TEMPLATE,)))
        return examples
