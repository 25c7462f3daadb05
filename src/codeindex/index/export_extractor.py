"""Export statements → ``ExportInfo`` records."""

from __future__ import annotations

from typing import Any

from codeindex.index.import_extractor import string_value
from codeindex.index.schema import ExportInfo
from codeindex.index.syntax import SyntaxTree, has_token

DEFAULT_EXPORT_NAME = "default"
ANONYMOUS_NAME = "anonymous"

_FUNCTION_DECLARATIONS = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_signature",
})
_CLASS_DECLARATIONS = frozenset({"class_declaration", "abstract_class_declaration"})
_VARIABLE_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})
_FUNCTION_EXPRESSIONS = frozenset({
    "function_expression",
    "function",
    "generator_function",
})
_CLASS_EXPRESSIONS = frozenset({"class"})


def extract_exports(tree: SyntaxTree) -> list[ExportInfo]:
    """Return every export declared at the top level of *tree*, in source order."""
    exports: list[ExportInfo] = []
    for statement in tree.statements():
        if statement.type != "export_statement":
            continue
        exports.extend(_from_export_statement(statement, tree))
    return exports


def _from_export_statement(node: Any, tree: SyntaxTree) -> list[ExportInfo]:
    # export = x;  export as namespace X;
    if has_token(node, "=") or has_token(node, "namespace"):
        return []

    is_default = has_token(node, "default")

    declaration = SyntaxTree.declaration(node)
    if declaration is not None:
        return _from_declaration(declaration, is_default, tree)

    value = node.child_by_field_name("value")
    if value is not None and is_default:
        return [_from_default_value(value, tree)]

    clause = next((c for c in node.named_children if c.type == "export_clause"), None)
    if clause is not None:
        return _from_export_clause(clause, has_token(node, "type"), tree)

    # export * from "./x" / export * as ns from "./x"
    return []


def _from_declaration(node: Any, is_default: bool, tree: SyntaxTree) -> list[ExportInfo]:
    node_type = node.type

    if node_type in _FUNCTION_DECLARATIONS:
        return [ExportInfo(_name_of(node, tree), is_default, False, "function")]

    if node_type in _CLASS_DECLARATIONS:
        return [ExportInfo(_name_of(node, tree), is_default, False, "class")]

    if node_type in _VARIABLE_DECLARATIONS:
        results: list[ExportInfo] = []
        for declarator in node.named_children:
            if declarator.type != "variable_declarator":
                continue
            name_node = declarator.child_by_field_name("name")
            if name_node is not None and name_node.type == "identifier":
                results.append(ExportInfo(tree.text(name_node), False, False, "variable"))
        return results

    if node_type == "type_alias_declaration":
        return [ExportInfo(_name_of(node, tree), False, True, "type")]

    if node_type == "interface_declaration":
        return [ExportInfo(_name_of(node, tree), False, True, "interface")]

    return []


def _from_default_value(value: Any, tree: SyntaxTree) -> ExportInfo:
    if value.type in _FUNCTION_EXPRESSIONS:
        return ExportInfo(_name_of(value, tree), True, False, "function")
    if value.type in _CLASS_EXPRESSIONS:
        return ExportInfo(_name_of(value, tree), True, False, "class")
    return ExportInfo(default_export_name(value, tree), True, False, "variable")


def default_export_name(expr: Any, tree: SyntaxTree) -> str:
    """Name carried by ``export default <expr>``.

    ``export default Foo`` → ``Foo``; ``export default memo(Foo)`` → ``Foo``;
    anything else (arrow functions, literals, calls without an identifier
    first argument) → ``"default"``.
    """
    while expr.type == "parenthesized_expression" and expr.named_children:
        expr = expr.named_children[0]

    if expr.type == "identifier":
        return tree.text(expr)

    if expr.type == "call_expression":
        arguments = expr.child_by_field_name("arguments")
        if arguments is not None:
            args = [a for a in arguments.named_children if a.type != "comment"]
            if args and args[0].type == "identifier":
                return tree.text(args[0])

    return DEFAULT_EXPORT_NAME


def _from_export_clause(clause: Any, type_only: bool, tree: SyntaxTree) -> list[ExportInfo]:
    results: list[ExportInfo] = []
    for spec in clause.named_children:
        if spec.type != "export_specifier":
            continue
        alias = spec.child_by_field_name("alias")
        exported = alias if alias is not None else spec.child_by_field_name("name")
        if exported is None:
            continue
        name = string_value(exported, tree) if exported.type == "string" else tree.text(exported)
        results.append(ExportInfo(
            name=name,
            is_default=False,
            is_type_only=type_only or has_token(spec, "type"),
            kind="variable",
        ))
    return results


def _name_of(node: Any, tree: SyntaxTree) -> str:
    name_node = node.child_by_field_name("name")
    return tree.text(name_node) if name_node is not None else ANONYMOUS_NAME
