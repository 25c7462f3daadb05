"""Import declarations → ``ImportInfo`` records."""

from __future__ import annotations

import logging
from typing import Any

from codeindex.index.schema import ImportInfo
from codeindex.index.syntax import SyntaxTree, has_token

logger = logging.getLogger(__name__)


def extract_imports(tree: SyntaxTree) -> list[ImportInfo]:
    """Return one record per top-level ``import`` with a literal specifier.

    A declaration that mixes inline ``type`` bindings with value bindings
    (``import { type A, b } from "./x"``) is split into a value record and a
    type-only record for the same source, value record first.
    """
    imports: list[ImportInfo] = []
    for statement in tree.statements():
        if statement.type != "import_statement":
            continue
        imports.extend(_parse_import(statement, tree))
    return imports


def _parse_import(node: Any, tree: SyntaxTree) -> list[ImportInfo]:
    source_node = node.child_by_field_name("source")
    if source_node is None or source_node.type != "string":
        # import x = require("y") and friends
        return []
    source = string_value(source_node, tree)

    clause = _first_named(node, "import_clause")
    if clause is None:
        # side-effect import: import "./styles.css"
        return [ImportInfo(source=source)]

    declaration_type_only = has_token(node, "type")
    value_specs: list[str] = []
    type_specs: list[str] = []
    is_default = False

    for child in clause.named_children:
        if child.type == "identifier":
            value_specs.append(tree.text(child))
            is_default = True
        elif child.type == "namespace_import":
            alias = _first_named(child, "identifier")
            value_specs.append(f"* as {tree.text(alias)}")
        elif child.type == "named_imports":
            for spec in child.named_children:
                if spec.type != "import_specifier":
                    continue
                rendered = _render_specifier(spec, tree)
                if has_token(spec, "type"):
                    type_specs.append(rendered)
                else:
                    value_specs.append(rendered)

    if declaration_type_only:
        return [ImportInfo(source, tuple(value_specs + type_specs), is_default, True)]
    if not type_specs:
        return [ImportInfo(source, tuple(value_specs), is_default, False)]
    if not value_specs:
        return [ImportInfo(source, tuple(type_specs), False, True)]

    logger.debug("Splitting mixed type/value import from %s", source)
    return [
        ImportInfo(source, tuple(value_specs), is_default, False),
        ImportInfo(source, tuple(type_specs), False, True),
    ]


def _render_specifier(spec: Any, tree: SyntaxTree) -> str:
    name_node = spec.child_by_field_name("name")
    alias_node = spec.child_by_field_name("alias")
    name = _identifier_text(name_node, tree)
    if alias_node is not None:
        return f"{name} as {_identifier_text(alias_node, tree)}"
    return name


def _identifier_text(node: Any, tree: SyntaxTree) -> str:
    if node is not None and node.type == "string":
        return string_value(node, tree)
    return tree.text(node)


def _first_named(node: Any, node_type: str) -> Any | None:
    for child in node.named_children:
        if child.type == node_type:
            return child
    return None


def string_value(node: Any, tree: SyntaxTree) -> str:
    """Contents of a string literal node without its quotes."""
    raw = tree.text(node)
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "'\"`":
        return raw[1:-1]
    return raw
