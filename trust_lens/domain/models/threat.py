"""Domain model for live threat alerts."""

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ThreatSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ThreatCategory(str, Enum):
    SCAM = "Scam"
    MISINFORMATION = "Misinformation"
    CYBER_FRAUD = "Cyber Fraud"
    PUBLIC_SAFETY = "Public Safety"


class ThreatTrend(str, Enum):
    RISING = "rising"
    STABLE = "stable"
    DECLINING = "declining"


class LiveThreat(BaseModel):
    """A circulating scam or misinformation campaign."""

    id: str
    title: str
    description: str
    category: ThreatCategory
    severity: ThreatSeverity
    region: str
    reported_at: datetime
    source: str
    source_type: str = Field(..., description="verified, aggregated or public_trend")
    warning_signs: List[str] = Field(default_factory=list)
    safety_tips: List[str] = Field(default_factory=list)
    actions_to_avoid: List[str] = Field(default_factory=list)
    trend: ThreatTrend = ThreatTrend.STABLE
