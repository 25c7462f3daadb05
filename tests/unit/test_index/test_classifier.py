"""Tests for glob translation and SourceClassifier."""

from __future__ import annotations

import pytest

from codeindex.core.config import DEFAULT_FILE_TYPE_MAPPING
from codeindex.index.classifier import SourceClassifier, glob_to_regex, matches_any


# ── glob_to_regex ─────────────────────────────────────────────────────────────


class TestGlobToRegex:
    def test_single_star_stays_in_segment(self) -> None:
        regex = glob_to_regex("src/*.ts")
        assert regex.match("src/a.ts")
        assert not regex.match("src/nested/a.ts")

    def test_double_star_crosses_segments(self) -> None:
        assert glob_to_regex("app/**/page.tsx").match("app/a/b/c/page.tsx")

    def test_double_star_slash_matches_zero_dirs(self) -> None:
        assert glob_to_regex("app/**/page.tsx").match("app/page.tsx")

    def test_braces_become_alternation(self) -> None:
        regex = glob_to_regex("src/**/*.{ts,tsx}")
        assert regex.match("src/x/a.ts")
        assert regex.match("src/x/a.tsx")
        assert not regex.match("src/x/a.js")

    def test_question_mark_is_one_char(self) -> None:
        regex = glob_to_regex("v?.sql")
        assert regex.match("v1.sql")
        assert not regex.match("v10.sql")
        assert not regex.match("v/.sql")

    def test_dots_are_literal(self) -> None:
        assert not glob_to_regex("a.ts").match("abts")

    def test_anchored(self) -> None:
        assert not glob_to_regex("lib/*.ts").match("src/lib/a.ts")

    def test_unclosed_brace_is_literal(self) -> None:
        assert glob_to_regex("a{b").match("a{b")

    def test_leading_double_star(self) -> None:
        regex = glob_to_regex("**/*.test.{ts,tsx}")
        assert regex.match("Button.test.tsx")
        assert regex.match("src/components/Button.test.ts")
        assert not regex.match("src/components/Button.tsx")


class TestMatchesAny:
    def test_any_pattern(self) -> None:
        assert matches_any("hooks/useX.ts", ["lib/**/*.ts", "hooks/**/*.ts"])

    def test_no_patterns(self) -> None:
        assert not matches_any("hooks/useX.ts", [])


# ── SourceClassifier ──────────────────────────────────────────────────────────


@pytest.fixture()
def classifier() -> SourceClassifier:
    return SourceClassifier(DEFAULT_FILE_TYPE_MAPPING)


class TestSourceClassifier:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("app/dashboard/page.tsx", "route"),
            ("app/page.tsx", "route"),
            ("app/layout.tsx", "route"),
            ("app/api/users/route.ts", "api"),
            ("pages/index.tsx", "route"),
            ("components/ui/Button.tsx", "component"),
            ("src/components/Button.tsx", "component"),
            ("src/hooks/useAuth.ts", "hook"),
            ("src/services/userService.ts", "service"),
            ("lib/format.ts", "utility"),
            ("supabase/migrations/001_init.sql", "table"),
            ("prisma/migrations/2024/migration.sql", "table"),
        ],
    )
    def test_default_mapping(self, classifier: SourceClassifier, path: str, expected: str) -> None:
        assert classifier.classify(path) == expected

    def test_unmatched_is_unknown(self, classifier: SourceClassifier) -> None:
        assert classifier.classify("scripts/seed.ts") == "unknown"

    def test_first_rule_wins(self) -> None:
        classifier = SourceClassifier([
            ("app/api/**/*.ts", "api"),
            ("app/**/*.ts", "route"),
        ])
        assert classifier.classify("app/api/x.ts") == "api"
        assert classifier.classify("app/x.ts") == "route"

    def test_backslashes_normalized(self, classifier: SourceClassifier) -> None:
        assert classifier.classify("src\\hooks\\useAuth.ts") == "hook"

    def test_custom_default(self) -> None:
        assert SourceClassifier({}, default="utility").classify("x.ts") == "utility"

    def test_pages_api_order(self, classifier: SourceClassifier) -> None:
        # pages/**/*.ts is listed before pages/api/**/*.ts
        assert classifier.classify("pages/api/hello.ts") == "route"
