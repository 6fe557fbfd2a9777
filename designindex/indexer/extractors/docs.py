"""Documentation Extractor - Markdown/MDX pages into Documentation records."""

import re

from designindex.utils.logging import logger

from ..config import (
    DOC_CATEGORY_RULES,
    DOC_EXTENSIONS,
    DOC_UTILITY_CLASS_PREFIX,
    DOC_VOCABULARY,
    VUE_NAME_PREFIX,
)
from ..core import list_files, relative_posix
from ..models import Documentation
from . import BaseExtractor

FRONTMATTER = re.compile(r"^---\n([\s\S]*?)\n---\n([\s\S]*)$")
MARKDOWN_H1 = re.compile(r"^#\s+(.+)$", re.MULTILINE)
HTML_H1 = re.compile(r"<h1[^>]*>([^<]+)</h1>", re.IGNORECASE)
IMPORT_LINE = re.compile(r"^import\s+.*$", re.MULTILINE)
JSX_ELEMENT = re.compile(r"<([A-Z][a-zA-Z]*)[^>]*>([\s\S]*?)</[A-Z][a-zA-Z]*>")
EMPTY_FENCE = re.compile(r"```\s*```")
EXTRA_BLANK_LINES = re.compile(r"\n{3,}")
COMPONENT_NAME = re.compile(rf"\b{VUE_NAME_PREFIX}[A-Z][a-zA-Z]+")
UTILITY_CLASS = re.compile(rf"\b{re.escape(DOC_UTILITY_CLASS_PREFIX)}[a-z0-9-]+")
DOC_SUFFIX = re.compile(r"\.(mdx?|md)$")


def extract_frontmatter(content: str) -> tuple[dict[str, str], str]:
    """Split a leading ``---`` block of ``key: value`` lines from the body.

    Without the block the frontmatter is empty and the whole input is the body.
    """
    match = FRONTMATTER.match(content)
    if not match:
        return {}, content

    frontmatter = {}
    for line in match.group(1).split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        frontmatter[key.strip()] = re.sub(r"^['\"]|['\"]$", "", value.strip())
    return frontmatter, match.group(2)


def extract_title(body: str) -> str:
    """First Markdown H1, then first HTML ``<h1>``, else ``Untitled``."""
    match = MARKDOWN_H1.search(body)
    if match:
        return match.group(1).strip()
    match = HTML_H1.search(body)
    if match:
        return match.group(1).strip()
    return "Untitled"


def clean_content(body: str) -> str:
    cleaned = IMPORT_LINE.sub("", body)
    # unwrap capitalized JSX elements, keeping their inner text
    previous = None
    while previous != cleaned:
        previous, cleaned = cleaned, JSX_ELEMENT.sub(r"\2", cleaned)
    cleaned = EMPTY_FENCE.sub("", cleaned)
    cleaned = EXTRA_BLANK_LINES.sub("\n\n", cleaned)
    return cleaned.strip()


def extract_keywords(content: str, title: str) -> list[str]:
    keywords: dict[str, None] = {}

    for word in title.split():
        if len(word) > 2:
            keywords[word.lower()] = None
    for name in COMPONENT_NAME.findall(content):
        keywords[name.lower()] = None
    for class_name in UTILITY_CLASS.findall(content):
        keywords[class_name] = None

    lowered = content.lower()
    for word in DOC_VOCABULARY:
        if word in lowered:
            keywords[word] = None

    return list(keywords)


def infer_doc_category(file_path: str) -> str:
    lowered = file_path.lower()
    for category, needles in DOC_CATEGORY_RULES:
        if any(needle in lowered for needle in needles):
            return category
    return "other"


def generate_url_path(file_path: str, base_path: str) -> str:
    """``/docs/Components/Button/index.mdx`` under ``/docs`` -> ``/components/button``."""
    url = DOC_SUFFIX.sub("", relative_posix(file_path, base_path))
    url = "/" + url.lower()
    url = re.sub(r"/index$", "", url)
    return url or "/"


def parse_document(content: str, file_path: str, base_path: str) -> Documentation:
    content = content.replace("\r\n", "\n")
    frontmatter, body = extract_frontmatter(content)

    title = frontmatter.get("title") or extract_title(body)
    cleaned = clean_content(body)
    return Documentation(
        title=title,
        path=generate_url_path(file_path, base_path),
        content=cleaned,
        category=frontmatter.get("category") or infer_doc_category(relative_posix(file_path, base_path)),
        keywords=extract_keywords(cleaned, title),
    )


class DocsExtractor(BaseExtractor):
    """Extractor for a documentation tree of ``.md``/``.mdx`` pages."""

    category = "docs"

    def extract(self) -> list[Documentation]:
        docs: dict[str, Documentation] = {}

        for file_path in list_files(self.root, lambda name: name.endswith(DOC_EXTENSIONS), self.source):
            content = self.read_text(file_path)
            if content is None:
                continue
            try:
                doc = parse_document(content, file_path, self.root)
            except Exception as e:
                logger.warning(f"Could not parse {file_path}: {e}")
                continue

            if doc.path in docs:
                logger.warning(f"Duplicate documentation path {doc.path} from {file_path}, skipped")
                continue
            docs[doc.path] = doc

        logger.info(f"Parsed {len(docs)} documentation pages")
        return list(docs.values())
