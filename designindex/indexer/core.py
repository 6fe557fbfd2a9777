"""Core functionality for file system access and directory traversal.

Extractors never touch ``os`` directly: they go through a ``FileSource`` so
the same walk can run over the real disk or over an in-memory fixture tree.
"""

import os
import posixpath
from collections.abc import Callable, Iterator
from typing import Protocol

from .config import SKIP_DIRS


class FileSource(Protocol):
    """Minimal read-only filesystem used by the extractors."""

    def exists(self, path: str) -> bool: ...

    def is_dir(self, path: str) -> bool: ...

    def list_dir(self, path: str) -> list[str]: ...

    def read_text(self, path: str) -> str: ...


class LocalFileSource:
    """FileSource backed by the real filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def list_dir(self, path: str) -> list[str]:
        return sorted(os.listdir(path))

    def read_text(self, path: str) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()


class MemoryFileSource:
    """FileSource over a ``{posix path: text}`` mapping.

    Directories are implied by the file paths; there are no empty directories.
    """

    def __init__(self, files: dict[str, str]):
        self.files = {self._norm(path): text for path, text in files.items()}

    @staticmethod
    def _norm(path: str) -> str:
        return posixpath.normpath(str(path).replace("\\", "/"))

    def exists(self, path: str) -> bool:
        return self._norm(path) in self.files or self.is_dir(path)

    def is_dir(self, path: str) -> bool:
        prefix = self._norm(path).rstrip("/") + "/"
        return any(key.startswith(prefix) for key in self.files)

    def list_dir(self, path: str) -> list[str]:
        prefix = self._norm(path).rstrip("/") + "/"
        names = {key[len(prefix):].split("/", 1)[0] for key in self.files if key.startswith(prefix)}
        return sorted(names)

    def read_text(self, path: str) -> str:
        try:
            return self.files[self._norm(path)]
        except KeyError:
            raise FileNotFoundError(path) from None


LOCAL_SOURCE = LocalFileSource()


def join(source: FileSource, *parts: str) -> str:
    """Join path segments in the separator style of ``source``."""
    if isinstance(source, MemoryFileSource):
        return posixpath.join(*[str(p) for p in parts])
    return os.path.join(*[str(p) for p in parts])


def list_files(
    root: str, predicate: Callable[[str], bool], source: FileSource | None = None
) -> Iterator[str]:
    """Yield every file under ``root`` whose basename satisfies ``predicate``.

    Depth-first, entries visited in sorted order, SKIP_DIRS never entered.
    Holds no state between calls: each call walks the tree afresh, and a
    missing root yields nothing.
    """
    source = source or LOCAL_SOURCE
    root = str(root)
    if not source.is_dir(root):
        return

    for name in source.list_dir(root):
        path = join(source, root, name)
        if source.is_dir(path):
            if name in SKIP_DIRS:
                continue
            yield from list_files(path, predicate, source)
        elif predicate(name):
            yield path


def list_dirs(
    root: str, predicate: Callable[[str], bool], source: FileSource | None = None
) -> list[str]:
    """Return immediate child directories of ``root`` whose name satisfies ``predicate``."""
    source = source or LOCAL_SOURCE
    root = str(root)
    if not source.is_dir(root):
        return []

    return [
        join(source, root, name)
        for name in source.list_dir(root)
        if predicate(name) and source.is_dir(join(source, root, name))
    ]


def first_existing(candidates: list[str], source: FileSource | None = None) -> str | None:
    """Return the first candidate path that exists as a file, in priority order."""
    source = source or LOCAL_SOURCE
    for candidate in candidates:
        if source.exists(candidate) and not source.is_dir(candidate):
            return candidate
    return None


def relative_posix(path: str, base: str) -> str:
    """Path of ``path`` relative to ``base``, always with forward slashes."""
    return os.path.relpath(str(path), str(base)).replace("\\", "/")
