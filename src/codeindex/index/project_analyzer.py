"""ProjectAnalyzer — one full analysis run over a project directory.

Orchestrates the per-file extractors and the call graph builder:

  1. enumerate    — include/exclude globs → project-relative paths
  2. parse        — classify + extract, one task per file on a thread pool
  3. (barrier)    — every ParsedFile exists before any import is resolved
  4. graph        — forward edges on the pool, reverse edges in one pass
  5. assemble     — keywords, search text, stable ids → CodeIndexItem

A file that cannot be read or parsed is logged, counted in
``stats.parse_errors`` and left out of the items; it never stops the run.
"""

from __future__ import annotations

import hashlib
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Mapping

from codeindex.core.config import IndexerConfig, ensure_valid
from codeindex.index.call_graph import CallGraphBuilder
from codeindex.index.classifier import SourceClassifier
from codeindex.index.export_extractor import ANONYMOUS_NAME, DEFAULT_EXPORT_NAME, extract_exports
from codeindex.index.file_scanner import FileEnumerator, scan_files
from codeindex.index.import_extractor import extract_imports
from codeindex.index.keyword_extractor import PATH_STOPWORDS, KeywordExtractor
from codeindex.index.props_extractor import extract_props
from codeindex.index.schema import (
    AnalysisResult,
    AnalysisStats,
    CallGraphEntry,
    CodeIndexItem,
    ExportInfo,
    ParsedFile,
)
from codeindex.index.sql_parser import SqlParser
from codeindex.index.syntax import ParseFailure, SyntaxEngine, TreeSitterEngine, kind_hint_for

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]

ID_LENGTH = 24

# File stems that only say where a file sits in a router, not what it is
GENERIC_STEMS = frozenset({
    "page",
    "layout",
    "route",
    "index",
    "loading",
    "error",
    "not-found",
    "template",
    "default",
})

_PLACEHOLDER_NAMES = frozenset({DEFAULT_EXPORT_NAME, ANONYMOUS_NAME})


def generate_id(project_id: str, path: str) -> str:
    """Stable item id: SHA-256 of ``project_id:path``, truncated."""
    digest = hashlib.sha256(f"{project_id}:{path}".encode("utf-8")).hexdigest()
    return digest[:ID_LENGTH]


def derive_name(path: str, exports: tuple[ExportInfo, ...] = ()) -> str:
    """Declared name of a file.

    A named default export wins.  Otherwise the file stem, unless the stem is
    a router convention (``page``, ``route`` ...), in which case the nearest
    meaningful parent directory is used: ``app/(shop)/cart/page.tsx`` → ``cart``.
    """
    for export in exports:
        if export.is_default and export.name not in _PLACEHOLDER_NAMES:
            return export.name

    posix = PurePosixPath(path.replace("\\", "/"))
    stem = posix.name.split(".", 1)[0]
    if stem not in GENERIC_STEMS:
        return stem

    for part in reversed(posix.parent.parts):
        # (group) route segments are not part of the URL
        if part.startswith("(") and part.endswith(")"):
            continue
        candidate = part.strip("[].")
        if candidate and candidate not in PATH_STOPWORDS:
            return candidate
    return stem


def build_search_text(name: str, path: str, keywords: list[str] | tuple[str, ...]) -> str:
    return " ".join([name, path, *keywords])


def serialize_metadata(value: Any) -> Any:
    """Render metadata values (records, tuples) as plain JSON-ready data."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {k: serialize_metadata(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_metadata(v) for v in value]
    return value


class ProjectAnalyzer:
    """Analyze a project tree into ``CodeIndexItem`` records.

    Parameters
    ----------
    config:
        Validated on construction; ``ConfigError`` is raised before any file
        is touched.
    engine:
        Syntax engine for TS/TSX/JS sources.  Defaults to tree-sitter.
    enumerator:
        ``(root, include, exclude) → paths``.  Defaults to ``FileScanner``.
    """

    def __init__(
        self,
        config: IndexerConfig,
        engine: SyntaxEngine | None = None,
        enumerator: FileEnumerator | None = None,
    ) -> None:
        self._config = ensure_valid(config)
        self._engine = engine or TreeSitterEngine()
        self._enumerator = enumerator or scan_files
        self._classifier = SourceClassifier(config.file_type_mapping)
        self._sql_parser = SqlParser()
        self._graph_builder = CallGraphBuilder(config.aliases, config.extensions)
        self._keywords = KeywordExtractor(config.korean_keywords)

    @property
    def config(self) -> IndexerConfig:
        return self._config

    # ── Public ────────────────────────────────────────────────────────────────

    def analyze(
        self,
        root: Path,
        progress_callback: ProgressCallback | None = None,
    ) -> AnalysisResult:
        """Run the full pipeline over *root* and return the assembled result."""
        root = root.resolve()
        paths = sorted(set(self._enumerator(root, self._config.include, self._config.exclude)))
        logger.info("Analyzing %d files under %s", len(paths), root)

        parsed: list[ParsedFile] = []
        parse_errors = 0

        with ThreadPoolExecutor(max_workers=self._config.max_workers) as pool:
            futures = {pool.submit(self._parse_file, root, rel): rel for rel in paths}
            for done, future in enumerate(as_completed(futures), start=1):
                rel = futures[future]
                result = future.result()
                if result is None:
                    parse_errors += 1
                else:
                    parsed.append(result)
                self._report_progress(progress_callback, done, len(paths), rel)

            # Barrier: resolution needs the complete file set
            parsed.sort(key=lambda p: p.path)
            graph = self._graph_builder.build(parsed, root, executor=pool)

        items = tuple(self._build_item(p, graph.get(p.path, CallGraphEntry())) for p in parsed)

        stats = AnalysisStats(
            total_files=len(paths),
            by_type=dict(Counter(item.type for item in items)),
            parse_errors=parse_errors,
        )
        logger.info(
            "Analysis done: %d items, %d parse errors, by type %s",
            len(items), parse_errors, stats.by_type,
        )
        return AnalysisResult(
            items=items,
            stats=stats,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    # ── Parse phase ───────────────────────────────────────────────────────────

    def _parse_file(self, root: Path, rel: str) -> ParsedFile | None:
        """Parse one file; None means it failed and was logged."""
        try:
            content = (root / rel).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", rel, exc)
            return None

        file_type = self._classifier.classify(rel)

        if file_type == "table" or rel.lower().endswith(".sql"):
            return self._sql_parser.parse(content, rel)

        tree = self._engine.parse(content, kind_hint_for(rel))
        if isinstance(tree, ParseFailure):
            logger.warning("Failed to parse %s: %s", rel, tree)
            return None
        if tree.has_error:
            logger.debug("Syntax errors in %s; extracting what parsed", rel)

        try:
            imports = tuple(extract_imports(tree))
            exports = tuple(extract_exports(tree))
            props = tuple(extract_props(tree))
        except Exception as exc:
            logger.warning("Extraction failed for %s: %s", rel, exc)
            return None

        metadata: dict[str, Any] = {"imports": imports, "exports": exports}
        if props:
            metadata["props"] = props

        return ParsedFile(
            path=rel,
            type=file_type,
            name=derive_name(rel, exports),
            imports=imports,
            exports=exports,
            props=props,
            metadata=metadata,
        )

    # ── Assembly ──────────────────────────────────────────────────────────────

    def _build_item(self, parsed: ParsedFile, edges: CallGraphEntry) -> CodeIndexItem:
        keywords = self._keywords.extract(
            parsed.name,
            parsed.path,
            exports=[e.name for e in parsed.exports],
            props=[p.name for p in parsed.props],
        )
        return CodeIndexItem(
            id=generate_id(self._config.project_id, parsed.path),
            type=parsed.type,
            name=parsed.name,
            path=parsed.path,
            keywords=tuple(keywords),
            search_text=build_search_text(parsed.name, parsed.path, keywords),
            calls=edges.calls,
            called_by=edges.called_by,
            metadata=serialize_metadata(parsed.metadata),
        )

    @staticmethod
    def _report_progress(
        callback: ProgressCallback | None, done: int, total: int, path: str
    ) -> None:
        if callback is None:
            return
        try:
            callback(done, total, path)
        except Exception as exc:
            logger.debug("Progress callback error: %s", exc)
