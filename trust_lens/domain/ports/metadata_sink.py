"""Protocol for the analysis metadata sink."""

from typing import Dict, List, Protocol, Union

from ..models.analysis import AnalysisResult
from ..models.detector import DetectorId


class MetadataSink(Protocol):
    """Records analysis events for later inspection. Nothing reads them back."""

    async def record_analysis(
        self,
        detector_id: DetectorId,
        result: AnalysisResult,
        content_preview: str,
        has_media: bool,
    ) -> None:
        """Record one completed analysis."""
        ...

    async def record_media_metadata(
        self,
        items: List[Dict[str, Union[str, int]]],
        result: AnalysisResult,
    ) -> None:
        """Record type and size of the media behind an AI-media verdict."""
        ...
