"""Shared source-scanning helpers and the prop-strategy contract.

Both component extractors read TypeScript-flavoured source with regular
expressions plus a small balanced-brace scanner. Prop extraction is an
ordered tuple of named strategies per framework: each has a precondition
and an extract step, and the first strategy that yields a non-empty prop
list wins.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from designindex.utils.logging import logger

from ..config import CALLBACK_PREFIX, CATEGORY_KEYWORDS, COMPONENT_CLASS_PREFIX
from ..core import FileSource, join
from ..models import Event, Example, Prop

OPENERS = {"{": "}", "(": ")", "[": "]"}
CLOSERS = {"}", ")", "]"}

MEMBER = re.compile(r"^(?:readonly\s+)?(['\"]?)([\w$-]+)\1(\?)?\s*:\s*([\s\S]+)$")
GENERIC_OPEN = re.compile(r"[\w$]<\s*[A-Za-z_${\['\"(]")
LINE_COMMENT = re.compile(r"(?<![:'\"])//[^\n]*")
CAMEL_BOUNDARY = re.compile(r"([A-Z])")
CSS_CLASS = re.compile(r"['\"`](" + re.escape(COMPONENT_CLASS_PREFIX) + r"[a-z0-9-]+)['\"`]")
CALLBACK_ARROW = re.compile(r"\b(" + CALLBACK_PREFIX + r"[A-Z]\w*)\??\s*:\s*\(([^)]*)\)\s*=>\s*\w+")
CALLBACK_HANDLER = re.compile(r"\b(" + CALLBACK_PREFIX + r"[A-Z]\w*)\??\s*:\s*(\w*EventHandler\w*)")
STORY_EXPORT = re.compile(r"export\s+const\s+(\w+)\s*(?::\s*[\w.<>\[\], ]+)?\s*=")
INLINE_ARGS = re.compile(r"\bargs\s*:\s*\{")


@dataclass
class Member:
    """One ``name?: type`` entry of an interface or type literal."""

    name: str
    type: str
    optional: bool
    description: str | None = None


# ============================================================================
# SCANNING
# ============================================================================

def balanced_block(text: str, open_index: int) -> str | None:
    """Contents between the bracket at ``open_index`` and its partner.

    Quoted strings are skipped so brackets inside literals do not count.
    Returns None when the bracket is never closed.
    """
    opener = text[open_index]
    closer = OPENERS[opener]
    depth = 0
    quote = None
    i = open_index
    while i < len(text):
        char = text[i]
        if quote:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif char == opener:
            depth += 1
        elif char == closer:
            depth -= 1
            if depth == 0:
                return text[open_index + 1:i]
        i += 1
    return None


def block_after(text: str, pattern: re.Pattern | str, start: int = 0) -> str | None:
    """Balanced ``{...}`` body for the first ``pattern`` match ending at an opening brace."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    match = regex.search(text, start)
    if not match:
        return None
    brace = text.find("{", match.end() - 1)
    if brace == -1:
        return None
    return balanced_block(text, brace)


def opens_generic(text: str, i: int) -> bool:
    """``Array<string>`` opens a type argument list; ``v < 10`` does not."""
    return i > 0 and GENERIC_OPEN.match(text, i - 1) is not None


def split_top_level(body: str, separators: str = ";,\n") -> list[tuple[str, str | None]]:
    """Split a type or object body into ``(segment, doc comment)`` pairs at depth 0.

    ``/** ... */`` comments attach to the segment that follows them; line
    comments are dropped. Continuation lines (leading ``|`` or a segment
    ending in ``:``/``|``/``=>``) are folded into the previous segment.
    """
    body = LINE_COMMENT.sub("", body)
    segments: list[list] = []
    current: list[str] = []
    started = False
    pending_doc: str | None = None
    doc_for_current: str | None = None
    depth = 0
    angles = 0
    quote = None
    i = 0

    def flush():
        nonlocal current, doc_for_current, started
        text = "".join(current).strip()
        current = []
        started = False
        if not text:
            return
        if segments and (
            text.startswith("|") or segments[-1][0].rstrip().endswith((":", "|", "=>"))
        ):
            segments[-1][0] = f"{segments[-1][0]} {text}"
        else:
            segments.append([text, doc_for_current])
        doc_for_current = None

    while i < len(body):
        char = body[i]
        if quote:
            current.append(char)
            if char == quote and body[i - 1] != "\\":
                quote = None
            i += 1
            continue
        if body.startswith("/*", i):
            end = body.find("*/", i + 2)
            end = len(body) if end == -1 else end
            if depth == 0:
                pending_doc = clean_doc_comment(body[i + 2:end])
            i = end + 2
            continue
        if char in "'\"`":
            quote = char
        elif char in OPENERS:
            depth += 1
        elif char == "<" and opens_generic(body, i):
            depth += 1
            angles += 1
        elif char in CLOSERS:
            depth = max(depth - 1, 0)
        elif char == ">" and angles and body[i - 1:i] != "=":
            angles -= 1
            depth = max(depth - 1, 0)

        if depth == 0 and char in separators:
            flush()
        else:
            if not started and char.strip():
                started = True
                doc_for_current, pending_doc = pending_doc, None
            current.append(char)
        i += 1
    flush()
    return [(text, doc) for text, doc in segments]


def clean_doc_comment(text: str) -> str | None:
    lines = [line.strip().lstrip("*").strip() for line in text.strip("*").splitlines()]
    cleaned = " ".join(line for line in lines if line and not line.startswith("@"))
    return cleaned or None


def parse_members(body: str) -> list[Member]:
    """Parse ``name?: type`` members of an interface/type-literal body."""
    members = []
    for segment, doc in split_top_level(body):
        match = MEMBER.match(segment)
        if not match:
            continue
        members.append(Member(
            name=match.group(2),
            type=" ".join(match.group(4).split()).rstrip(",;").strip(),
            optional=bool(match.group(3)),
            description=doc,
        ))
    return members


def union_options(type_text: str, literals_only: bool = True) -> list[str] | None:
    """``'s' | 'm' | 'l'`` -> ``["s", "m", "l"]``.

    With ``literals_only`` every member must be a quoted literal (``undefined``
    aside). Fewer than two options yields None.
    """
    if "|" not in type_text:
        return None
    parts = [p.strip() for p in type_text.split("|")]
    parts = [p for p in parts if p and p != "undefined"]
    if literals_only and not all(re.fullmatch(r"(['\"`]).*\1", p) for p in parts):
        return None
    options = [p.strip("'\"`") for p in parts]
    return options if len(options) > 1 else None


def strip_quotes(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"`":
        return value[1:-1]
    return value


def split_top_level_commas(text: str) -> list[str]:
    return [segment for segment, _ in split_top_level(text, separators=",")]


# ============================================================================
# SHARED EXTRACTION
# ============================================================================

def infer_category(component_name: str) -> str:
    """First keyword group whose keyword is a substring of the lowercased name."""
    name = component_name.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return "other"


def extract_css_classes(content: str) -> list[str]:
    """Quoted ``mc-`` class names, de-duplicated, in order of appearance."""
    return list(dict.fromkeys(CSS_CLASS.findall(content)))


def story_title(identifier: str) -> str:
    """``WithIcon`` -> ``With Icon``."""
    return CAMEL_BOUNDARY.sub(r" \1", identifier).strip()


def extract_callback_events(*contents: str) -> list[Event]:
    """Callback props (``onClick?: (e) => void``) surfaced as events."""
    events: dict[str, Event] = {}
    for content in contents:
        for pattern in (CALLBACK_ARROW, CALLBACK_HANDLER):
            for match in pattern.finditer(content):
                name = match.group(1)
                if name in events:
                    continue
                payload = match.group(2).strip() or None
                events[name] = Event(
                    name=name,
                    payload=payload,
                    description=f"{name[len(CALLBACK_PREFIX):]} event callback",
                )
    return list(events.values())


def parse_stories(content: str, framework: str,
                  extra_patterns: Iterable[re.Pattern] = ()) -> list[Example]:
    """Examples from a stories module.

    Every capitalized exported story except ``Default`` contributes its args,
    taken from ``Story.args = {...}`` or from an inline ``args: {...}`` inside
    the export. ``extra_patterns`` capture additional literal snippets
    (templates, render bodies) titled "Example".
    """
    examples = []
    exports = list(STORY_EXPORT.finditer(content))

    for index, match in enumerate(exports):
        story = match.group(1)
        if story in ("default", "Default") or not story[0].isupper():
            continue

        args = block_after(content, rf"\b{re.escape(story)}\.args\s*=\s*\{{")
        if args is None:
            end = exports[index + 1].start() if index + 1 < len(exports) else len(content)
            segment = content[match.end():end]
            args = block_after(segment, INLINE_ARGS)
        if args is None:
            continue

        examples.append(Example(framework=framework, title=story_title(story), code=args.strip()))

    for pattern in extra_patterns:
        for match in pattern.finditer(content):
            examples.append(Example(framework=framework, title="Example", code=match.group(1).strip()))

    return examples


# ============================================================================
# STRATEGY CONTRACT
# ============================================================================

@dataclass
class ComponentContext:
    """What a strategy may consult beyond the primary file's text."""

    name: str
    directory: str
    source: FileSource
    notes: dict = field(default_factory=dict)

    def sibling(self, filename: str) -> str:
        return join(self.source, self.directory, filename)

    def read_sibling(self, filename: str) -> str | None:
        path = self.sibling(filename)
        if not self.source.exists(path):
            return None
        return self.source.read_text(path)


class PropStrategy(ABC):
    """A named way of finding a component's props.

    Subclasses set ``name`` and implement ``precondition`` (cheap check that
    the source uses this declaration style) and ``extract``.
    """

    name: str = ""

    @abstractmethod
    def precondition(self, text: str, ctx: ComponentContext) -> bool:
        pass

    @abstractmethod
    def extract(self, text: str, ctx: ComponentContext) -> list[Prop]:
        pass


def run_strategies(strategies: Iterable[PropStrategy], text: str,
                   ctx: ComponentContext) -> tuple[str | None, list[Prop]]:
    """Apply ``strategies`` in order; the first non-empty result wins."""
    for strategy in strategies:
        if not strategy.precondition(text, ctx):
            continue
        props = strategy.extract(text, ctx)
        if props:
            logger.debug(f"{ctx.name}: {len(props)} props via {strategy.name}")
            return strategy.name, props
    return None, []


def dedupe_by_name(items: Iterable, key: Callable = lambda item: item.name) -> list:
    seen: dict = {}
    for item in items:
        seen.setdefault(key(item), item)
    return list(seen.values())
