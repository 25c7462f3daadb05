"""Tests for codeindex.__main__ — CLI entry point dispatch."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from codeindex.__main__ import IndexFlags, _parse_index_flags, main


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    for var in ("CODEINDEX_PROJECT_ID", "CODEINDEX_MAX_WORKERS", "CODEINDEX_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


def _run(*argv: str) -> int:
    with patch("sys.argv", ["codeindex", *argv]):
        with pytest.raises(SystemExit) as exc_info:
            main()
    return exc_info.value.code


# ── main() dispatch ───────────────────────────────────────────────────────────


class TestMainDispatch:
    def test_help(self, capsys) -> None:
        assert _run("--help") == 0
        assert "codeindex index" in capsys.readouterr().out

    def test_no_args_prints_help(self, capsys) -> None:
        assert _run() == 0
        assert "Usage" in capsys.readouterr().out

    def test_index_dispatches_to_run_index(self) -> None:
        with patch("codeindex.__main__._run_index", return_value=0) as mock_index:
            assert _run("index", "--verbose") == 0
        (flags,), _ = mock_index.call_args
        assert flags.verbose is True

    def test_unknown_subcommand_exits_with_error(self) -> None:
        assert _run("serve") == 1

    def test_unknown_flag_exits_with_error(self) -> None:
        assert _run("index", "--incremental") == 1


# ── _parse_index_flags ────────────────────────────────────────────────────────


class TestParseIndexFlags:
    def test_defaults(self) -> None:
        flags = _parse_index_flags([])
        assert flags == IndexFlags(project_dir=Path.cwd())

    def test_all_flags(self) -> None:
        flags = _parse_index_flags([
            "--dir", "web", "--output", "out.json", "--project-id", "shop", "--verbose",
        ])
        assert flags.project_dir == Path("web")
        assert flags.output == Path("out.json")
        assert flags.project_id == "shop"
        assert flags.verbose is True

    def test_missing_value_is_an_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _parse_index_flags(["--dir"])
        assert exc_info.value.code == 1


# ── index run ─────────────────────────────────────────────────────────────────


class TestRunIndex:
    def test_writes_output(self, next_project: Path) -> None:
        out = next_project / "build" / "index.json"
        code = _run("index", "--dir", str(next_project), "--output", str(out), "--project-id", "cli")
        assert code == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["projectId"] == "cli"
        assert data["stats"]["totalFiles"] == 6

    def test_default_output_path(self, next_project: Path) -> None:
        assert _run("index", "--dir", str(next_project)) == 0
        assert (next_project / "project-metadata.json").exists()

    def test_summary_table(self, next_project: Path, capsys) -> None:
        _run("index", "--dir", str(next_project))
        out = capsys.readouterr().out
        assert "codeindex summary" in out
        assert "component" in out

    def test_missing_dir(self, tmp_path: Path) -> None:
        assert _run("index", "--dir", str(tmp_path / "nope")) == 1

    def test_invalid_config(self, next_project: Path) -> None:
        (next_project / ".codeindex").mkdir()
        (next_project / ".codeindex" / "config.yaml").write_text("mode: staging\n")
        assert _run("index", "--dir", str(next_project)) == 1
        assert not (next_project / "project-metadata.json").exists()

    def test_output_disabled(self, next_project: Path) -> None:
        (next_project / ".codeindex").mkdir()
        (next_project / ".codeindex" / "config.yaml").write_text("output:\n  enabled: false\n")
        assert _run("index", "--dir", str(next_project)) == 0
        assert not (next_project / "project-metadata.json").exists()
