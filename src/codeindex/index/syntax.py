"""Syntax-tree capability backed by tree-sitter.

The extractors never talk to tree-sitter directly; they consume a
``SyntaxTree`` produced by a ``SyntaxEngine``.  ``TreeSitterEngine`` is the
production engine (TypeScript and TSX grammars from ``tree-sitter-typescript``);
tests may inject anything with the same ``parse`` signature.

An engine never raises for bad input: it returns a ``ParseFailure`` value that
the orchestrator records as a per-file parse error.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Protocol

logger = logging.getLogger(__name__)

# kind hint → tree-sitter-typescript grammar.  Plain JS goes through TSX so
# that JSX in .js files still parses.
KIND_TO_GRAMMAR: dict[str, str] = {
    "ts": "typescript",
    "tsx": "tsx",
    "js": "tsx",
    "jsx": "tsx",
}

EXTENSION_TO_KIND: dict[str, str] = {
    ".ts": "ts",
    ".mts": "ts",
    ".cts": "ts",
    ".tsx": "tsx",
    ".js": "js",
    ".mjs": "js",
    ".cjs": "js",
    ".jsx": "jsx",
}

# Statement wrappers whose payload is a declaration
_WRAPPERS = frozenset({"export_statement", "ambient_declaration"})


def kind_hint_for(path: str) -> str:
    """Return the kind hint for *path* from its extension (``ts`` by default)."""
    return EXTENSION_TO_KIND.get(PurePosixPath(path).suffix.lower(), "ts")


@dataclass(frozen=True)
class ParseFailure:
    """Returned instead of a tree when parsing could not happen."""

    message: str
    kind_hint: str = ""

    def __str__(self) -> str:
        return self.message


class SyntaxTree:
    """A parsed source file: root node plus the bytes it was parsed from."""

    def __init__(self, root: Any, source: bytes, kind_hint: str = "ts") -> None:
        self.root = root
        self.source = source
        self.kind_hint = kind_hint

    @property
    def has_error(self) -> bool:
        return bool(getattr(self.root, "has_error", False))

    def statements(self) -> list[Any]:
        """Top-level named nodes, comments excluded."""
        return [c for c in self.root.named_children if c.type != "comment"]

    def text(self, node: Any | None) -> str:
        """Verbatim source text covered by *node*."""
        if node is None:
            return ""
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def declaration(statement: Any) -> Any | None:
        """Unwrap ``export``/``declare`` wrappers down to the declaration node.

        Plain declarations are returned unchanged; ``export default <expr>``
        and re-export statements give None.
        """
        node = statement
        while node is not None and node.type in _WRAPPERS:
            if node.type == "export_statement":
                node = node.child_by_field_name("declaration")
            else:
                node = node.named_children[0] if node.named_children else None
        return node


def has_token(node: Any, token: str) -> bool:
    """True if *node* has a direct anonymous child spelled *token*."""
    return any(not c.is_named and c.type == token for c in node.children)


class SyntaxEngine(Protocol):
    """Anything that can turn source text into a ``SyntaxTree``."""

    def parse(self, source_text: str, kind_hint: str) -> SyntaxTree | ParseFailure:
        ...


class TreeSitterEngine:
    """Parse TypeScript / TSX / JS sources with tree-sitter.

    Grammar objects are loaded once and shared; a fresh ``Parser`` is built
    per call so the engine can be used from several worker threads.
    """

    def __init__(self) -> None:
        self._languages: dict[str, Any] = {}
        self._lock = threading.Lock()

    def _language(self, grammar: str) -> Any:
        with self._lock:
            language = self._languages.get(grammar)
            if language is None:
                import tree_sitter_typescript  # type: ignore[import-untyped]
                from tree_sitter import Language  # type: ignore[import-untyped]

                if grammar == "tsx":
                    language = Language(tree_sitter_typescript.language_tsx())
                else:
                    language = Language(tree_sitter_typescript.language_typescript())
                self._languages[grammar] = language
                logger.debug("Loaded tree-sitter grammar for %s", grammar)
            return language

    def parse(self, source_text: str, kind_hint: str) -> SyntaxTree | ParseFailure:
        grammar = KIND_TO_GRAMMAR.get(kind_hint)
        if grammar is None:
            return ParseFailure(f"Unsupported kind hint '{kind_hint}'", kind_hint)

        try:
            from tree_sitter import Parser  # type: ignore[import-untyped]

            parser = Parser(self._language(grammar))
            source = source_text.encode("utf-8")
            tree = parser.parse(source)
        except Exception as exc:
            logger.debug("tree-sitter failed for kind %s: %s", kind_hint, exc)
            return ParseFailure(f"{type(exc).__name__}: {exc}", kind_hint)

        return SyntaxTree(tree.root_node, source, kind_hint)
