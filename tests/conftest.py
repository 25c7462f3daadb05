"""Shared test fixtures for codeindex."""

from pathlib import Path

import pytest

from codeindex.index.syntax import TreeSitterEngine


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path → content) under *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


SAMPLE_PROJECT = {
    "app/dashboard/page.tsx": (
        'import { AttendanceCheckModal } from "@/components/AttendanceCheckModal";\n'
        'import { useAttendance } from "@/hooks/useAttendance";\n'
        "\n"
        "export default function DashboardPage() {\n"
        "  const { items } = useAttendance();\n"
        "  return <AttendanceCheckModal open={items.length > 0} />;\n"
        "}\n"
    ),
    "app/api/attendance/route.ts": (
        'import { fetchAttendance } from "@/services/attendanceService";\n'
        "\n"
        "export async function GET() {\n"
        "  return Response.json(await fetchAttendance());\n"
        "}\n"
    ),
    "src/components/AttendanceCheckModal.tsx": (
        'import type { Attendance } from "@/services/attendanceService";\n'
        "\n"
        "interface AttendanceCheckModalProps {\n"
        "  open: boolean;\n"
        "  title?: string;\n"
        "}\n"
        "\n"
        "export function AttendanceCheckModal({ open, title = \"Check\" }: AttendanceCheckModalProps) {\n"
        "  return open ? <div>{title}</div> : null;\n"
        "}\n"
    ),
    "src/hooks/useAttendance.ts": (
        'import { fetchAttendance } from "../services/attendanceService";\n'
        "\n"
        "export function useAttendance() {\n"
        "  return { items: [], reload: fetchAttendance };\n"
        "}\n"
    ),
    "src/services/attendanceService.ts": (
        "export interface Attendance {\n"
        "  id: string;\n"
        "}\n"
        "\n"
        "export async function fetchAttendance(): Promise<Attendance[]> {\n"
        "  return [];\n"
        "}\n"
    ),
    "supabase/migrations/001_create_attendance_table.sql": (
        "CREATE TABLE IF NOT EXISTS attendance (\n"
        "  id uuid PRIMARY KEY,\n"
        "  user_id uuid NOT NULL REFERENCES users(id),\n"
        "  checked_at timestamptz\n"
        ");\n"
    ),
    "node_modules/react/index.ts": "export const React = {};\n",
    "src/components/Button.test.tsx": "export const skipped = true;\n",
}


@pytest.fixture(scope="session")
def engine() -> TreeSitterEngine:
    """Real tree-sitter engine, shared because grammars are cached."""
    return TreeSitterEngine()


@pytest.fixture()
def make_files(tmp_path: Path):
    """Factory: ``make_files({"src/a.ts": "..."})`` → project root."""
    root = tmp_path / "project"
    root.mkdir(exist_ok=True)

    def _make(files: dict[str, str]) -> Path:
        return write_files(root, files)

    return _make


@pytest.fixture()
def next_project(make_files) -> Path:
    """A small Next.js style project with an alias-importing page."""
    return make_files(SAMPLE_PROJECT)
