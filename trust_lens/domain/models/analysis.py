"""Domain models for analysis requests and results."""

from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, Field, field_validator

from ..errors import EmptySubmissionError
from .detector import DetectorId
from .media import MediaItem, MediaStatus
from .verdict import SeverityTier, Verdict, severity_for_label


class AnalysisResult(BaseModel):
    """Structured verdict produced by one classification."""

    domain: Optional[str] = Field(None, description="Detected source or site, if any")
    label: str = Field(..., description="Verdict token, e.g. 'Scam' or 'Safe'")
    confidence: float = Field(..., ge=0, le=100, description="Confidence between 0 and 100")
    reason: Tuple[str, ...] = Field(default_factory=tuple, description="Ordered findings")

    class Config:
        """Pydantic model configuration."""
        frozen = True
        json_schema_extra = {
            "example": {
                "domain": "bit.ly",
                "label": "Phishing",
                "confidence": 92,
                "reason": ["shortened link", "urgency"],
            }
        }

    @field_validator("label")
    @classmethod
    def _label_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("label must not be empty")
        return value

    @property
    def verdict(self) -> Optional[Verdict]:
        """Known verdict for the label, None when the label is not in the set."""
        return Verdict.parse(self.label)

    @property
    def severity(self) -> SeverityTier:
        """Severity tier derived from the label."""
        return severity_for_label(self.label)


class AnalysisRequest:
    """One submission, ready to be classified."""

    def __init__(self, detector_id: DetectorId, text: str, media: Sequence[MediaItem]):
        """Build the request, keeping only ready media.

        Raises:
            EmptySubmissionError: If text is blank and no media is ready
        """
        self.detector_id = detector_id
        self.text = text or ""
        self.media = [item for item in media if item.status == MediaStatus.READY]
        if not self.text.strip() and not self.media:
            raise EmptySubmissionError("Nothing to analyze: enter text or attach media")

    @property
    def has_media(self) -> bool:
        return bool(self.media)

    def __repr__(self) -> str:
        return (
            f"AnalysisRequest(detector_id={self.detector_id.value!r}, "
            f"text={len(self.text)} chars, media={len(self.media)})"
        )
