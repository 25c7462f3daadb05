"""Search keyword derivation from names, paths, exports and props."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

from codeindex.index.keyword_map import KOREAN_KEYWORD_MAP, find_korean_keywords
from codeindex.index.naming import (
    extract_acronyms,
    split_camel_case,
    split_pascal_case,
    split_snake_case,
)

# Structural directory names that say nothing about a file's purpose
PATH_STOPWORDS = frozenset({
    "src",
    "app",
    "components",
    "hooks",
    "services",
    "lib",
    "utils",
    "pages",
    "api",
})

_EXTENSION = re.compile(r"\.[^/.]+$")


class KeywordExtractor:
    """Build the bilingual keyword set for one file.

    Parameters
    ----------
    custom_map:
        English keyword → Korean terms.  An entry here replaces the built-in
        lookup for that exact keyword.
    base_map:
        The built-in dictionary; overridable for tests.
    """

    def __init__(
        self,
        custom_map: Mapping[str, Sequence[str]] | None = None,
        base_map: Mapping[str, Sequence[str]] = KOREAN_KEYWORD_MAP,
    ) -> None:
        self._custom = MappingProxyType(
            {k.lower(): tuple(v) for k, v in (custom_map or {}).items()}
        )
        self._base = base_map

    def extract(
        self,
        name: str,
        path: str,
        exports: Iterable[str] = (),
        props: Iterable[str] = (),
    ) -> list[str]:
        """Return the sorted keyword list; never contains 1-character tokens."""
        keywords: set[str] = set()

        _add_name_tokens(name, keywords)
        for segment in path_segments(path):
            _add_name_tokens(segment, keywords)
        for export_name in exports:
            _add_name_tokens(export_name, keywords)
        for prop_name in props:
            _add_name_tokens(prop_name, keywords)

        # Expand only the English base set; translations are not re-expanded.
        for keyword in list(keywords):
            keywords.update(self.translate(keyword))

        return sorted(k for k in keywords if len(k) > 1)

    def translate(self, keyword: str) -> list[str]:
        """Korean terms for *keyword*, custom dictionary first."""
        custom = self._custom.get(keyword.lower())
        if custom is not None:
            return list(custom)
        return find_korean_keywords(keyword, self._base)


def path_segments(path: str) -> list[str]:
    """Meaningful segments of *path*: extension dropped, stopwords removed."""
    stripped = _EXTENSION.sub("", path.replace("\\", "/"))
    return [s for s in stripped.split("/") if s and s not in PATH_STOPWORDS]


def _add_name_tokens(name: str, keywords: set[str]) -> None:
    if not name:
        return
    keywords.add(name.lower())
    for part in split_camel_case(name):
        keywords.add(part.lower())
    for part in split_pascal_case(name):
        keywords.add(part.lower())
    for part in split_snake_case(name):
        keywords.add(part.lower())
    for acronym in extract_acronyms(name):
        keywords.add(acronym.lower())
