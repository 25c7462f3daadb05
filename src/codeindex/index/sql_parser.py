"""Regex-driven table/column extraction from SQL migration files.

This is deliberately not a SQL parser.  It understands ``CREATE TABLE`` blocks
and ``ALTER TABLE ... ADD [COLUMN]`` statements well enough to index table
names and columns.  Column blocks are split on commas, so a comma nested in a
type argument (``numeric(10,2)``) or an inline ``CHECK (...)`` breaks the
column apart; such fragments are skipped or misread rather than reported.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from codeindex.index.schema import ColumnReference, ExportInfo, ParsedFile, TableColumn

logger = logging.getLogger(__name__)

_NAME = r"[\"'`]?(\w+)[\"'`]?"
_QUALIFIED_NAME = r"(?:[\"'`]?\w+[\"'`]?\.)?" + _NAME

_CREATE_TABLE = re.compile(
    r"CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?" + _QUALIFIED_NAME + r"\s*\(([\s\S]*?)\);",
    re.IGNORECASE,
)
_ALTER_ADD_COLUMN = re.compile(
    r"ALTER\s+TABLE\s+(?:IF\s+EXISTS\s+)?(?:ONLY\s+)?" + _QUALIFIED_NAME
    + r"\s+ADD\s+(?:COLUMN\s+)?(?:IF\s+NOT\s+EXISTS\s+)?"
    + r"(?!(?:CONSTRAINT|PRIMARY|FOREIGN|UNIQUE|CHECK)\b)"
    + _NAME + r"\s+(\w+)",
    re.IGNORECASE,
)
_COLUMN_DEFINITION = re.compile(r"^[\"'`]?(\w+)[\"'`]?\s+(\w+(?:\([^)]+\))?)", re.IGNORECASE)
_REFERENCES = re.compile(
    r"REFERENCES\s+" + _QUALIFIED_NAME + r"\s*\(\s*[\"'`]?(\w+)[\"'`]?\s*\)",
    re.IGNORECASE,
)
_TABLE_FROM_FILENAME = re.compile(r"create_(\w+)_table", re.IGNORECASE)

# Table-level clauses inside a CREATE TABLE block
_CONSTRAINT_PREFIXES = ("CONSTRAINT", "PRIMARY KEY", "FOREIGN KEY", "UNIQUE", "CHECK")


@dataclass
class ParsedTable:
    """A table and the columns found for it so far."""

    name: str
    columns: list[TableColumn] = field(default_factory=list)


class SqlParser:
    """Turn migration text into a ``table`` ParsedFile.

    Usage::

        parsed = SqlParser().parse(sql_text, "supabase/migrations/001_users.sql")
        parsed.metadata["tableName"], parsed.metadata["columns"]
    """

    def parse(self, content: str, relative_path: str) -> ParsedFile:
        tables = self.extract_tables(content)
        table_name = tables[0].name if tables else table_name_from_path(relative_path)
        columns = tuple(tables[0].columns) if tables else ()

        return ParsedFile(
            path=relative_path,
            type="table",
            name=table_name,
            exports=tuple(ExportInfo(name=t.name, kind="variable") for t in tables),
            metadata={
                "tableName": table_name,
                "columns": columns,
                "tables": tuple(t.name for t in tables),
            },
        )

    def extract_tables(self, content: str) -> list[ParsedTable]:
        """All tables in *content*, CREATE TABLE order first, then ALTER-only ones."""
        tables: list[ParsedTable] = []
        by_name: dict[str, ParsedTable] = {}

        for match in _CREATE_TABLE.finditer(content):
            table = ParsedTable(match.group(1), parse_columns(match.group(2)))
            tables.append(table)
            by_name.setdefault(table.name, table)

        for match in _ALTER_ADD_COLUMN.finditer(content):
            table_name, column_name, column_type = match.group(1), match.group(2), match.group(3)
            table = by_name.get(table_name)
            if table is None:
                table = ParsedTable(table_name)
                tables.append(table)
                by_name[table_name] = table
            table.columns.append(TableColumn(name=column_name, type=column_type.upper()))

        return tables


def parse_columns(block: str) -> list[TableColumn]:
    """Column definitions of a CREATE TABLE body; constraint lines are dropped."""
    columns: list[TableColumn] = []
    for raw in block.split(","):
        line = raw.strip()
        if not line or line.upper().startswith(_CONSTRAINT_PREFIXES):
            continue
        column = parse_column_definition(line)
        if column is None:
            logger.debug("Skipping unparseable column fragment: %r", line[:60])
            continue
        columns.append(column)
    return columns


def parse_column_definition(line: str) -> TableColumn | None:
    match = _COLUMN_DEFINITION.match(line)
    if match is None:
        return None

    upper = line.upper()
    return TableColumn(
        name=match.group(1),
        type=match.group(2).upper(),
        nullable="NOT NULL" not in upper,
        is_primary_key="PRIMARY KEY" in upper,
        is_foreign_key="REFERENCES" in upper,
        references=_reference(line),
    )


def _reference(line: str) -> ColumnReference | None:
    match = _REFERENCES.search(line)
    if match is None:
        return None
    return ColumnReference(table=match.group(1), column=match.group(2))


def table_name_from_path(path: str) -> str:
    """``20240101_create_users_table.sql`` → ``users``; otherwise the file stem."""
    filename = PurePosixPath(path.replace("\\", "/")).name
    match = _TABLE_FROM_FILENAME.search(filename)
    if match:
        return match.group(1)
    return filename[:-4] if filename.lower().endswith(".sql") else filename
