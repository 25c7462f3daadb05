"""Enumerate project files matching include/exclude globs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Sequence

from codeindex.index.classifier import matches_any

logger = logging.getLogger(__name__)

SKIP_DIRS = frozenset({
    ".git", "node_modules", "__pycache__", "venv", ".venv",
    "dist", "build", ".next", ".turbo", ".vercel", "coverage",
    ".tox", ".mypy_cache", ".pytest_cache", ".ruff_cache",
})

# (root, include, exclude) → project-relative POSIX paths
FileEnumerator = Callable[[Path, Sequence[str], Sequence[str]], Iterable[str]]


class FileScanner:
    """Walk a project tree and yield the paths selected by glob patterns.

    A file is selected when its POSIX path relative to *root* matches at
    least one include pattern and no exclude pattern.  Directories in
    ``SKIP_DIRS`` are never entered.
    """

    def __init__(
        self,
        root: Path,
        include: Sequence[str],
        exclude: Sequence[str] = (),
        skip_dirs: frozenset[str] = SKIP_DIRS,
    ) -> None:
        self._root = root.resolve()
        self._include = tuple(include)
        self._exclude = tuple(exclude)
        self._skip_dirs = skip_dirs

    def scan(self) -> list[str]:
        """Return selected paths, sorted for reproducibility."""
        result: list[str] = []
        try:
            for path in self._root.rglob("*"):
                rel_parts = path.relative_to(self._root).parts
                if any(part in self._skip_dirs for part in rel_parts[:-1]):
                    continue
                if not path.is_file():
                    continue
                rel = "/".join(rel_parts)
                if not matches_any(rel, self._include):
                    continue
                if matches_any(rel, self._exclude):
                    logger.debug("Excluded by pattern: %s", rel)
                    continue
                result.append(rel)
        except OSError as exc:
            logger.warning("Error scanning project dir %s: %s", self._root, exc)
        return sorted(result)


def scan_files(root: Path, include: Sequence[str], exclude: Sequence[str]) -> list[str]:
    """Default ``FileEnumerator``."""
    return FileScanner(root, include, exclude).scan()
