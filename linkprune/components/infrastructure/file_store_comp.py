"""
In-memory file store shared by the deep linking and optimization passes.

Components read and write source text through a FileStore and never touch
the disk. Only load_tree() and write_dirty() do I/O, and only the CLI calls
them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

from linkprune.helpers.exceptions import FileNotInStoreError
from linkprune.helpers.paths_helper import normalize_path

logger = logging.getLogger(__name__)

SKIP_DIRS = {"node_modules", ".git", "www", "platforms", "plugins", ".sourcemaps"}


class FileStore:
    """
    Ordered map of path -> content.

    Iteration order is insertion order, which is the discovery order the
    registry builder relies on. Paths are normalized on every access.
    """

    def __init__(self, files: Mapping[str, str] | None = None) -> None:
        self._files: dict[str, str] = {}
        self._dirty: set[str] = set()
        for path, content in (files or {}).items():
            self._files[normalize_path(path)] = content

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and normalize_path(path) in self._files

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[str]:
        return iter(self._files)

    def get(self, path: str) -> str | None:
        """Content of path, or None when absent."""
        return self._files.get(normalize_path(path))

    def get_content(self, path: str) -> str:
        """Content of path; raises FileNotInStoreError when absent."""
        content = self.get(path)
        if content is None:
            raise FileNotInStoreError(normalize_path(path))
        return content

    def set(self, path: str, content: str) -> None:
        """Store content and mark the path dirty if it changed."""
        key = normalize_path(path)
        if self._files.get(key) != content:
            self._dirty.add(key)
        self._files[key] = content

    def paths(self, suffixes: Iterable[str] | None = None) -> list[str]:
        """All stored paths in insertion order, optionally filtered by suffix."""
        if suffixes is None:
            return list(self._files)
        wanted = tuple(suffixes)
        return [p for p in self._files if p.endswith(wanted)]

    def dirty_paths(self) -> list[str]:
        return [p for p in self._files if p in self._dirty]

    @classmethod
    def load_tree(cls, root: str | Path, suffixes: Iterable[str] = (".ts", ".js")) -> FileStore:
        """
        Read every file under root with one of the given suffixes.

        Files are added in sorted path order so discovery order is stable
        between runs.
        """
        root_path = Path(root)
        wanted = tuple(suffixes)
        store = cls()
        for file_path in sorted(root_path.rglob("*")):
            if not file_path.is_file() or not file_path.name.endswith(wanted):
                continue
            if any(parent.name in SKIP_DIRS for parent in file_path.relative_to(root_path).parents):
                continue
            store._files[normalize_path(file_path.as_posix())] = file_path.read_text(encoding="utf-8")
        logger.debug(f"[file-store] Loaded {len(store)} files from {root_path}")
        return store

    def add_file(self, path: str | Path) -> str:
        """Read one file from disk into the store (clean) and return its content."""
        file_path = Path(path)
        content = file_path.read_text(encoding="utf-8")
        self._files[normalize_path(file_path.as_posix())] = content
        return content

    def write_dirty(self) -> list[str]:
        """Write every changed file back to disk and clear the dirty set."""
        written = []
        for path in self.dirty_paths():
            Path(path).write_text(self._files[path], encoding="utf-8")
            written.append(path)
            logger.info(f"[file-store] Wrote {path}")
        self._dirty.clear()
        return written
