"""Verdict labels and their severity tiers."""

from enum import Enum
from typing import Optional


class Verdict(str, Enum):
    """Known verdict tokens returned by the detectors."""

    SAFE = "Safe"
    SUSPICIOUS = "Suspicious"
    FAKE = "Fake"
    SCAM = "Scam"
    HIGH_RISK = "High Risk"
    PHISHING = "Phishing"
    MISLEADING = "Misleading"
    LEGIT = "Legit"
    GENUINE = "Genuine"
    VERIFIED = "Verified"
    RELIABLE = "Reliable"
    UNVERIFIED = "Unverified"
    BUY = "Buy"
    BE_CAREFUL = "Be Careful"
    AVOID = "Avoid"
    AI_GENERATED = "AI-Generated"
    HUMAN = "Human"
    HUMAN_WRITTEN = "Human-written"
    DEEPFAKE = "Deepfake"
    REAL = "Real"
    BIASED = "Biased"
    SATIRE = "Satire"
    MIXED = "Mixed"

    @classmethod
    def parse(cls, label: str) -> Optional["Verdict"]:
        """Return the matching verdict, or None for labels outside the set."""
        try:
            return cls(label.strip())
        except ValueError:
            return None


class SeverityTier(str, Enum):
    """How alarming a verdict is."""

    FAVORABLE = "favorable"
    CAUTION = "caution"
    DANGER = "danger"


FAVORABLE_LABELS = frozenset({
    "Safe", "Real", "Legit", "Genuine", "Verified",
    "Reliable", "Human-written", "Buy", "Human",
})

CAUTION_LABELS = frozenset({
    "Suspicious", "Unverified", "Mixed", "Misleading", "Be Careful", "Biased",
})


def severity_for_label(label: str) -> SeverityTier:
    """Map a verdict label to its severity tier.

    Anything outside the favorable and caution sets is treated as danger,
    including labels the catalog does not know about.
    """
    normalized = label.strip()
    if normalized in FAVORABLE_LABELS:
        return SeverityTier.FAVORABLE
    if normalized in CAUTION_LABELS:
        return SeverityTier.CAUTION
    return SeverityTier.DANGER
