"""Immutable dataclass models for the code index.

Every record produced by the analysis pipeline lives here.  Records are
frozen: a ``ParsedFile`` is created once during the parse phase and never
touched again; ``CodeIndexItem`` is assembled only after the call graph is
built.  The ``to_dict`` methods render the camelCase JSON shape consumed by
result writers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# ── Vocabularies ──────────────────────────────────────────────────────────────

DEFAULT_FILE_TYPE = "unknown"

# Valid values for ParsedFile.type / CodeIndexItem.type
FILE_TYPES = frozenset({
    "route",
    "api",
    "component",
    "hook",
    "service",
    "utility",
    "table",
    DEFAULT_FILE_TYPE,
})

# Valid values for ExportInfo.kind
EXPORT_KINDS = frozenset({
    "function",
    "class",
    "variable",
    "type",
    "interface",
})

ANY_TYPE = "any"
UNKNOWN_TYPE = "unknown"


# ── Extraction records ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ImportInfo:
    """One import declaration.

    ``specifiers`` holds the bindings in source order, rendered as ``name``,
    ``name as alias`` or ``* as ns``.
    """

    source: str
    specifiers: tuple[str, ...] = ()
    is_default: bool = False
    is_type_only: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "specifiers": list(self.specifiers),
            "isDefault": self.is_default,
            "isTypeOnly": self.is_type_only,
        }


@dataclass(frozen=True)
class ExportInfo:
    """One exported symbol."""

    name: str
    is_default: bool = False
    is_type_only: bool = False
    kind: str = "variable"  # see EXPORT_KINDS

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "isDefault": self.is_default,
            "isTypeOnly": self.is_type_only,
            "kind": self.kind,
        }


@dataclass(frozen=True)
class PropInfo:
    """A component property, from a ``*Props`` type or a destructured parameter."""

    name: str
    type: str = ANY_TYPE
    required: bool = True
    default_value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "required": self.required,
        }
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        return data


@dataclass(frozen=True)
class ColumnReference:
    """Target of a ``REFERENCES table(column)`` clause."""

    table: str
    column: str

    def to_dict(self) -> dict[str, str]:
        return {"table": self.table, "column": self.column}


@dataclass(frozen=True)
class TableColumn:
    """A column recovered from DDL text."""

    name: str
    type: str
    nullable: bool = True
    is_primary_key: bool = False
    is_foreign_key: bool = False
    references: ColumnReference | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "nullable": self.nullable,
            "isPrimaryKey": self.is_primary_key,
            "isForeignKey": self.is_foreign_key,
        }
        if self.references is not None:
            data["references"] = self.references.to_dict()
        return data


# ── Per-file records ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ParsedFile:
    """Parse-phase output for a single file."""

    path: str           # project-relative POSIX path, unique key
    type: str           # see FILE_TYPES
    name: str
    imports: tuple[ImportInfo, ...] = ()
    exports: tuple[ExportInfo, ...] = ()
    props: tuple[PropInfo, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CallGraphEntry:
    """Resolved in-project edges of one file."""

    calls: tuple[str, ...] = ()
    called_by: tuple[str, ...] = ()


@dataclass(frozen=True)
class CodeIndexItem:
    """Final per-file aggregate handed to writers."""

    id: str
    type: str
    name: str
    path: str
    keywords: tuple[str, ...]
    search_text: str
    calls: tuple[str, ...] = ()
    called_by: tuple[str, ...] = ()
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "path": self.path,
            "keywords": list(self.keywords),
            "searchText": self.search_text,
            "calls": list(self.calls),
            "calledBy": list(self.called_by),
            "metadata": self.metadata,
        }


# ── Run-level records ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AnalysisStats:
    """Counters for one analysis run."""

    total_files: int
    by_type: dict[str, int]
    parse_errors: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "byType": dict(self.by_type),
            "parseErrors": self.parse_errors,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Everything one run produced.  Read-only once assembled."""

    items: tuple[CodeIndexItem, ...]
    stats: AnalysisStats
    timestamp: str      # ISO-8601, UTC

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "stats": self.stats.to_dict(),
            "timestamp": self.timestamp,
        }
