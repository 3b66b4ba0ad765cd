"""Metadata sink that writes analysis documents to the log."""

import json
import logging
from collections import deque
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List, Union

from ...domain.models.analysis import AnalysisResult
from ...domain.models.detector import DetectorId

logger = logging.getLogger(__name__)

ANALYSIS_COLLECTION = "analysis_results"
MEDIA_COLLECTION = "media_uploads"


class LoggingMetadataSink:
    """Stands in for a document database: each record is logged as JSON.

    Only metadata is recorded, never the analysed files themselves.
    """

    def __init__(self, max_records: int = 500):
        self.records: Deque[Dict[str, Any]] = deque(maxlen=max_records)

    async def record_analysis(
        self,
        detector_id: DetectorId,
        result: AnalysisResult,
        content_preview: str,
        has_media: bool,
    ) -> None:
        self._write(ANALYSIS_COLLECTION, {
            "detector_id": detector_id.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "result": result.model_dump(),
            "content_preview": content_preview,
            "has_media": has_media,
        })

    async def record_media_metadata(
        self,
        items: List[Dict[str, Union[str, int]]],
        result: AnalysisResult,
    ) -> None:
        self._write(MEDIA_COLLECTION, {
            "files": items,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "ai_probability": result.confidence,
            "label": result.label,
        })

    def _write(self, collection: str, document: Dict[str, Any]) -> None:
        self.records.append({"collection": collection, "document": document})
        logger.info(f"🔥 [{collection}] {json.dumps(document, default=str)}")
