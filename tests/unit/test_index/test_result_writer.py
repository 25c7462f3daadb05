"""Tests for ResultWriter JSON output."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from codeindex.core.config import create_default_config
from codeindex.index.result_writer import OUTPUT_VERSION, ResultWriter
from codeindex.index.schema import AnalysisResult, AnalysisStats, CodeIndexItem


@pytest.fixture()
def result() -> AnalysisResult:
    item = CodeIndexItem(
        id="abc",
        type="component",
        name="CheckModal",
        path="src/components/CheckModal.tsx",
        keywords=("check", "modal", "모달"),
        search_text="CheckModal src/components/CheckModal.tsx check modal 모달",
        calls=("src/lib/x.ts",),
        called_by=(),
        metadata={"exports": []},
    )
    return AnalysisResult(
        items=(item,),
        stats=AnalysisStats(total_files=2, by_type={"component": 1}, parse_errors=1),
        timestamp="2024-01-01T00:00:00+00:00",
    )


class TestResultWriter:
    def test_document_shape(self, result: AnalysisResult) -> None:
        writer = ResultWriter(create_default_config({"project_id": "demo"}))
        doc = writer.build_document(result)
        assert doc["version"] == OUTPUT_VERSION
        assert doc["projectId"] == "demo"
        assert doc["generatedAt"] == result.timestamp
        assert doc["stats"] == {"totalFiles": 2, "byType": {"component": 1}, "parseErrors": 1}
        (item,) = doc["items"]
        assert item["searchText"].startswith("CheckModal")
        assert item["calledBy"] == []
        assert item["calls"] == ["src/lib/x.ts"]

    def test_production_is_compact(self, result: AnalysisResult) -> None:
        text = ResultWriter(create_default_config({"mode": "production"})).render(result)
        assert "\n" not in text
        assert ", " not in text.split('"items"')[0]

    def test_development_is_indented(self, result: AnalysisResult) -> None:
        text = ResultWriter(create_default_config({"mode": "development"})).render(result)
        assert text.startswith("{\n  ")

    def test_korean_written_unescaped(self, result: AnalysisResult) -> None:
        text = ResultWriter(create_default_config()).render(result)
        assert "모달" in text

    def test_write_creates_parent_dirs(self, tmp_path: Path, result: AnalysisResult) -> None:
        out = tmp_path / "deep" / "dir" / "index.json"
        written = ResultWriter(create_default_config()).write(result, out)
        assert written == out
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["items"][0]["name"] == "CheckModal"
