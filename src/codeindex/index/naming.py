"""Identifier splitting helpers shared by keyword extraction and naming."""

from __future__ import annotations

import re

_LOWER_UPPER = re.compile(r"([a-z])([A-Z])")
_UPPER_RUN_CAPITALIZED = re.compile(r"([A-Z])([A-Z][a-z])")
_ACRONYM = re.compile(r"[A-Z]{2,}")
_SEPARATORS = re.compile(r"[-_]")


def split_camel_case(value: str) -> list[str]:
    """``"attendanceCheck"`` → ``["attendance", "Check"]``."""
    return [p for p in _LOWER_UPPER.sub(r"\1 \2", value).split(" ") if p]


def split_pascal_case(value: str) -> list[str]:
    """``"XMLParserModal"`` → ``["XML", "Parser", "Modal"]``.

    Unlike :func:`split_camel_case` this also breaks an upper-case run before
    a capitalised word.
    """
    spaced = _UPPER_RUN_CAPITALIZED.sub(r"\1 \2", value)
    spaced = _LOWER_UPPER.sub(r"\1 \2", spaced)
    return [p for p in spaced.split(" ") if p]


def split_snake_case(value: str) -> list[str]:
    return [p for p in value.split("_") if p]


def split_kebab_case(value: str) -> list[str]:
    return [p for p in value.split("-") if p]


def extract_acronyms(value: str) -> list[str]:
    """Runs of two or more capitals: ``"XMLHTTPRequest"`` → ``["XMLHTTPR"]``."""
    return _ACRONYM.findall(value)


def split_into_words(value: str) -> list[str]:
    """Split on ``-``/``_`` and camel humps; lowercased, order kept, no dupes."""
    words: dict[str, None] = {}
    for part in _SEPARATORS.split(value):
        for word in split_camel_case(part):
            words[word.lower()] = None
    return list(words)


def to_all_cases(value: str) -> dict[str, str]:
    """Render *value* as camel, pascal, snake and kebab case."""
    words = split_into_words(value)
    return {
        "camel": "".join(
            w.lower() if i == 0 else w.capitalize() for i, w in enumerate(words)
        ),
        "pascal": "".join(w.capitalize() for w in words),
        "snake": "_".join(words),
        "kebab": "-".join(words),
    }
