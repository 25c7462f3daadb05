"""Write an ``AnalysisResult`` to disk as a JSON document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from codeindex.core.config import IndexerConfig
from codeindex.index.schema import AnalysisResult

logger = logging.getLogger(__name__)

OUTPUT_VERSION = "1.0.0"


class ResultWriter:
    """Serialize analysis results for downstream search indexing.

    ``production`` mode writes compact JSON; ``development`` mode indents it.
    """

    def __init__(self, config: IndexerConfig) -> None:
        self._config = config

    def build_document(self, result: AnalysisResult) -> dict[str, Any]:
        return {
            "version": OUTPUT_VERSION,
            "projectId": self._config.project_id,
            "generatedAt": result.timestamp,
            "stats": result.stats.to_dict(),
            "items": [item.to_dict() for item in result.items],
        }

    def render(self, result: AnalysisResult) -> str:
        document = self.build_document(result)
        if self._config.mode == "production":
            return json.dumps(document, ensure_ascii=False, separators=(",", ":"))
        return json.dumps(document, indent=2, ensure_ascii=False)

    def write(self, result: AnalysisResult, output_path: Path) -> Path:
        """Write *result* to *output_path*, creating parent directories."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(result), encoding="utf-8")
        logger.info("Wrote %d items to %s", len(result.items), output_path)
        return output_path
