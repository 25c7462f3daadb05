"""Component props from ``*Props`` types and destructured parameters.

Two independent sources are unioned:

  1. the last top-level interface / type alias whose name ends in ``Props``
     (intersections flattened, type references ignored);
  2. the first parameter of the last exported top-level function, when that
     parameter is an object-destructuring pattern.

Entries are deduplicated by name and the first one wins, so a type-declared
prop hides the destructured one and its default value.
"""

from __future__ import annotations

from typing import Any

from codeindex.index.import_extractor import string_value
from codeindex.index.schema import ANY_TYPE, UNKNOWN_TYPE, PropInfo
from codeindex.index.syntax import SyntaxTree, has_token

PROPS_SUFFIX = "Props"

_OBJECT_BODIES = frozenset({"interface_body", "object_type"})
_FUNCTION_VALUES = frozenset({"arrow_function", "function_expression", "function"})
_PARAMETERS = frozenset({"required_parameter", "optional_parameter"})


def extract_props(tree: SyntaxTree) -> list[PropInfo]:
    props: list[PropInfo] = []

    props_type = find_props_type(tree)
    if props_type is not None:
        props.extend(_props_from_type(props_type, tree))

    component = find_component_function(tree)
    if component is not None:
        props.extend(_props_from_parameters(component, tree))

    return _deduplicate(props)


def find_props_type(tree: SyntaxTree) -> Any | None:
    """Type node (interface body or alias value) of the last ``*Props`` type."""
    found = None
    for statement in tree.statements():
        decl = SyntaxTree.declaration(statement)
        if decl is None:
            continue
        if decl.type == "interface_declaration" and _name_ends_with_props(decl, tree):
            found = decl.child_by_field_name("body")
        elif decl.type == "type_alias_declaration" and _name_ends_with_props(decl, tree):
            found = decl.child_by_field_name("value")
    return found


def find_component_function(tree: SyntaxTree) -> Any | None:
    """The last exported top-level function declaration or function-valued const."""
    found = None
    for statement in tree.statements():
        if statement.type != "export_statement":
            continue

        decl = SyntaxTree.declaration(statement)
        if decl is None:
            value = statement.child_by_field_name("value")
            # export default function ({ ... }) {}
            if value is not None and value.type in ("function_expression", "function"):
                found = value
            continue

        if decl.type in ("function_declaration", "generator_function_declaration"):
            found = decl
        elif decl.type in ("lexical_declaration", "variable_declaration"):
            for declarator in decl.named_children:
                if declarator.type != "variable_declarator":
                    continue
                value = declarator.child_by_field_name("value")
                if value is not None and value.type in _FUNCTION_VALUES:
                    found = value
    return found


def _name_ends_with_props(decl: Any, tree: SyntaxTree) -> bool:
    return tree.text(decl.child_by_field_name("name")).endswith(PROPS_SUFFIX)


def _props_from_type(node: Any, tree: SyntaxTree) -> list[PropInfo]:
    if node.type in _OBJECT_BODIES:
        props = []
        for member in node.named_children:
            prop = _prop_from_member(member, tree)
            if prop is not None:
                props.append(prop)
        return props

    if node.type in ("intersection_type", "parenthesized_type"):
        props = []
        for member_type in node.named_children:
            props.extend(_props_from_type(member_type, tree))
        return props

    return []


def _prop_from_member(member: Any, tree: SyntaxTree) -> PropInfo | None:
    if member.type != "property_signature":
        return None

    name_node = member.child_by_field_name("name")
    if name_node is None:
        return None
    if name_node.type == "property_identifier":
        name = tree.text(name_node)
    elif name_node.type == "string":
        name = string_value(name_node, tree)
    else:
        return None

    prop_type = ANY_TYPE
    annotation = member.child_by_field_name("type")
    if annotation is not None:
        inner = annotation.named_children
        prop_type = tree.text(inner[0]) if inner else ANY_TYPE

    return PropInfo(name=name, type=prop_type, required=not has_token(member, "?"))


def _props_from_parameters(func: Any, tree: SyntaxTree) -> list[PropInfo]:
    parameters = func.child_by_field_name("parameters")
    if parameters is None:
        return []
    params = [p for p in parameters.named_children if p.type in _PARAMETERS]
    if not params:
        return []

    pattern = params[0].child_by_field_name("pattern")
    if pattern is None or pattern.type != "object_pattern":
        return []

    props: list[PropInfo] = []
    for element in pattern.named_children:
        name, default = _binding(element, tree)
        if name is None:
            continue
        props.append(PropInfo(
            name=name,
            type=UNKNOWN_TYPE,
            required=default is None,
            default_value=default,
        ))
    return props


def _binding(element: Any, tree: SyntaxTree) -> tuple[str | None, str | None]:
    """(local name, default text) of one destructuring element."""
    kind = element.type

    if kind == "shorthand_property_identifier_pattern":
        return tree.text(element), None

    if kind in ("object_assignment_pattern", "assignment_pattern"):
        left = element.child_by_field_name("left")
        right = element.child_by_field_name("right")
        if left is not None and left.type in (
            "shorthand_property_identifier_pattern",
            "identifier",
        ):
            return tree.text(left), tree.text(right) if right is not None else None
        return None, None

    if kind == "pair_pattern":
        value = element.child_by_field_name("value")
        if value is None:
            return None, None
        if value.type == "identifier":
            return tree.text(value), None
        if value.type == "assignment_pattern":
            return _binding(value, tree)
        return None, None

    if kind == "rest_pattern":
        target = next((c for c in element.named_children if c.type == "identifier"), None)
        return (tree.text(target), None) if target is not None else (None, None)

    return None, None


def _deduplicate(props: list[PropInfo]) -> list[PropInfo]:
    seen: set[str] = set()
    unique: list[PropInfo] = []
    for prop in props:
        if prop.name in seen:
            continue
        seen.add(prop.name)
        unique.append(prop)
    return unique
