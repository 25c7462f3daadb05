"""Glob-rule classification of source files into role types."""

from __future__ import annotations

import functools
import logging
import re
from typing import Iterable, Mapping

from codeindex.index.schema import DEFAULT_FILE_TYPE

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=512)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a path glob into an anchored regular expression.

    ``**`` matches across ``/`` (and ``**/`` may match no directory at all),
    ``*`` and ``?`` stay inside one path segment, ``{a,b}`` becomes an
    alternation.  Everything else is matched literally.
    """
    return re.compile(f"^{_translate(pattern)}$")


def _translate(pattern: str) -> str:
    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif ch == "*":
            parts.append("[^/]*")
            i += 1
        elif ch == "?":
            parts.append("[^/]")
            i += 1
        elif ch == "{":
            close = pattern.find("}", i)
            if close == -1:
                parts.append(re.escape(ch))
                i += 1
                continue
            alternatives = [
                _translate(alt.strip()) for alt in pattern[i + 1:close].split(",")
            ]
            parts.append("(?:" + "|".join(alternatives) + ")")
            i = close + 1
        else:
            parts.append(re.escape(ch))
            i += 1
    return "".join(parts)


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    """Return True if *path* matches at least one glob in *patterns*."""
    return any(glob_to_regex(p).match(path) for p in patterns)


class SourceClassifier:
    """Map a project-relative path to a role type using ordered glob rules.

    Usage::

        classifier = SourceClassifier({"app/**/page.tsx": "route"})
        classifier.classify("app/dashboard/page.tsx")   # "route"
    """

    def __init__(
        self,
        rules: Mapping[str, str] | Iterable[tuple[str, str]],
        default: str = DEFAULT_FILE_TYPE,
    ) -> None:
        items = rules.items() if isinstance(rules, Mapping) else rules
        self._rules: tuple[tuple[re.Pattern[str], str], ...] = tuple(
            (glob_to_regex(pattern), file_type) for pattern, file_type in items
        )
        self._default = default

    def classify(self, path: str) -> str:
        """Return the type of the first rule matching *path*."""
        normalized = path.replace("\\", "/")
        for regex, file_type in self._rules:
            if regex.match(normalized):
                return file_type
        logger.debug("No classification rule matched %s", normalized)
        return self._default
