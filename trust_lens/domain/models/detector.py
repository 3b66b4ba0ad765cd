"""Domain model for detector definitions."""

from enum import Enum
from typing import FrozenSet

from pydantic import BaseModel, Field


class DetectorId(str, Enum):
    """Identity of every detector in the catalog."""

    NEWS = "news"
    JOB_SCAM = "job-scam"
    EDUCATION_FRAUD = "education-fraud"
    FINANCE_SCAM = "finance-scam"
    PHISHING = "phishing"
    EMERGENCY_MISINFO = "emergency-misinfo"
    HEALTH_MISINFO = "health-misinfo"
    REVIEW_SCAM = "review-scam"
    AI_MEDIA = "ai-media"
    SOS_TOOLS = "sos-tools"


class InputKind(str, Enum):
    """Kinds of input a detector accepts."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    URL = "url"


class DetectorDefinition(BaseModel):
    """A catalog entry describing one detector."""

    id: DetectorId = Field(..., description="Detector identity")
    title: str = Field(..., description="Display title")
    description: str = Field(..., description="One-line description for the dashboard")
    placeholder: str = Field(default="", description="Hint shown in the input box")
    allowed_inputs: FrozenSet[InputKind] = Field(
        default_factory=frozenset,
        description="Accepted input kinds; empty for tool-only detectors",
    )
    system_instruction: str = Field(
        default="",
        description="Instruction handed verbatim to the classifier",
    )

    class Config:
        """Pydantic model configuration."""
        frozen = True

    @property
    def is_tool_only(self) -> bool:
        """True for detectors that never call the classifier."""
        return not self.allowed_inputs

    def accepts(self, kind: InputKind) -> bool:
        """Check whether the detector takes the given input kind."""
        return kind in self.allowed_inputs
