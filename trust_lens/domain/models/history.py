"""Domain model for history entries."""

import time
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from .analysis import AnalysisResult
from .detector import DetectorId

PREVIEW_LENGTH = 60
MEDIA_PREVIEW_PLACEHOLDER = "Media Analysis"


class ContentKind(str, Enum):
    """What kind of content an analysis was run on."""

    TEXT = "text"
    IMAGE = "image"


_last_id = 0


def new_entry_id() -> str:
    """Creation-time derived id (microseconds), strictly increasing within a process."""
    global _last_id
    _last_id = max(time.time_ns() // 1000, _last_id + 1)
    return str(_last_id)


def seed_entry_ids(existing: Iterable[str]) -> None:
    """Make new ids sort after every id in existing, even if the clock stepped back."""
    global _last_id
    numeric = [int(entry_id) for entry_id in existing if entry_id.isdigit()]
    if numeric:
        _last_id = max(_last_id, max(numeric))


def build_preview(text: str) -> str:
    """Short summary of the analysed text for history listings."""
    text = (text or "").strip()
    if not text:
        return MEDIA_PREVIEW_PLACEHOLDER
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH] + "..."
    return text


class HistoryEntry(BaseModel):
    """A durable record of one completed analysis."""

    id: str = Field(default_factory=new_entry_id, description="Creation-time derived id")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the analysis completed",
    )
    detector_id: DetectorId = Field(..., description="Detector that produced the result")
    result: AnalysisResult = Field(..., description="The verdict")
    preview: str = Field(..., description="Truncated summary of the submitted text")
    full_content: Optional[str] = Field(None, description="Original submitted text")
    content_kind: ContentKind = Field(ContentKind.TEXT, description="text or image")

    class Config:
        """Pydantic model configuration."""
        frozen = True

    @classmethod
    def for_analysis(
        cls,
        detector_id: DetectorId,
        result: AnalysisResult,
        text: str,
        has_media: bool,
    ) -> "HistoryEntry":
        """Create the entry recorded after a successful analysis."""
        return cls(
            detector_id=detector_id,
            result=result,
            preview=build_preview(text),
            full_content=text,
            content_kind=ContentKind.IMAGE if has_media else ContentKind.TEXT,
        )
