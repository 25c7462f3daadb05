"""Tests for export extraction over real tree-sitter trees."""

from __future__ import annotations

import pytest

from codeindex.index.export_extractor import extract_exports
from codeindex.index.schema import EXPORT_KINDS, ExportInfo
from codeindex.index.syntax import SyntaxTree, TreeSitterEngine


@pytest.fixture()
def parse(engine: TreeSitterEngine):
    def _parse(source: str, kind: str = "tsx") -> list[ExportInfo]:
        tree = engine.parse(source, kind)
        assert isinstance(tree, SyntaxTree)
        return extract_exports(tree)

    return _parse


class TestDeclarations:
    def test_function(self, parse) -> None:
        assert parse("export function load() {}\n") == [
            ExportInfo("load", False, False, "function")
        ]

    def test_async_function(self, parse) -> None:
        (exp,) = parse("export async function GET() { return 1; }\n", "ts")
        assert exp.name == "GET"
        assert exp.kind == "function"

    def test_class(self, parse) -> None:
        assert parse("export class Store {}\n") == [ExportInfo("Store", False, False, "class")]

    def test_const_declarators(self, parse) -> None:
        exports = parse("export const a = 1, b = () => 2;\n")
        assert [(e.name, e.kind) for e in exports] == [("a", "variable"), ("b", "variable")]

    def test_destructured_const_skipped(self, parse) -> None:
        assert parse("export const { a, b } = obj;\n") == []

    def test_type_alias(self, parse) -> None:
        assert parse("export type Id = string;\n", "ts") == [ExportInfo("Id", False, True, "type")]

    def test_interface(self, parse) -> None:
        assert parse("export interface User { id: string }\n", "ts") == [
            ExportInfo("User", False, True, "interface")
        ]

    def test_unexported_ignored(self, parse) -> None:
        assert parse("function hidden() {}\nconst x = 1;\n") == []


class TestDefaultExports:
    def test_default_function_declaration(self, parse) -> None:
        assert parse("export default function Page() { return null; }\n") == [
            ExportInfo("Page", True, False, "function")
        ]

    def test_anonymous_default_function(self, parse) -> None:
        (exp,) = parse("export default function () { return null; }\n")
        assert exp.is_default is True
        assert exp.kind == "function"
        assert exp.name == "anonymous"

    def test_default_class(self, parse) -> None:
        (exp,) = parse("export default class Service {}\n")
        assert (exp.name, exp.is_default, exp.kind) == ("Service", True, "class")

    def test_default_identifier(self, parse) -> None:
        (exp,) = parse("const Button = () => null;\nexport default Button;\n")
        assert exp == ExportInfo("Button", True, False, "variable")

    def test_default_call_wrapping_identifier(self, parse) -> None:
        (exp,) = parse("export default memo(Card);\n")
        assert exp.name == "Card"
        assert exp.is_default is True

    def test_default_call_without_identifier(self, parse) -> None:
        (exp,) = parse("export default connect()({});\n")
        assert exp.name == "default"

    def test_default_arrow(self, parse) -> None:
        (exp,) = parse("export default () => null;\n")
        assert exp.name == "default"

    def test_default_literal(self, parse) -> None:
        (exp,) = parse("export default { a: 1 };\n")
        assert exp.name == "default"


class TestReExports:
    def test_named_clause(self, parse) -> None:
        exports = parse("const a = 1, b = 2;\nexport { a, b as bee };\n")
        assert [e.name for e in exports] == ["a", "bee"]
        assert all(not e.is_default and e.kind == "variable" for e in exports)

    def test_re_export_from(self, parse) -> None:
        exports = parse('export { Button } from "./Button";\n')
        assert [e.name for e in exports] == ["Button"]

    def test_type_re_export(self, parse) -> None:
        (exp,) = parse('export type { User } from "./types";\n', "ts")
        assert exp.is_type_only is True

    def test_inline_type_specifier(self, parse) -> None:
        exports = parse('export { type User, load } from "./api";\n', "ts")
        assert [(e.name, e.is_type_only) for e in exports] == [("User", True), ("load", False)]

    def test_star_re_export_ignored(self, parse) -> None:
        assert parse('export * from "./all";\n') == []

    def test_export_assignment_ignored(self, parse) -> None:
        assert parse("const x = 1;\nexport = x;\n", "ts") == []


def test_kinds_are_known(parse) -> None:
    exports = parse(
        "export function f() {}\n"
        "export class C {}\n"
        "export const v = 1;\n"
        "export type T = string;\n"
        "export interface I {}\n",
        "ts",
    )
    assert {e.kind for e in exports} == set(EXPORT_KINDS)
