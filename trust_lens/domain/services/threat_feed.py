"""Mock feed of currently circulating scams and misinformation."""

from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

from ..models.threat import LiveThreat, ThreatCategory, ThreatSeverity, ThreatTrend

ALL_REGIONS = "All"
GLOBAL_REGION = "Global"


def _seed_threats(now: datetime) -> List[LiveThreat]:
    return [
        LiveThreat(
            id="t1",
            title='Fake "Electricity Bill Unpaid" SMS',
            description="Texts warn that power will be cut tonight over an unpaid bill and push a phone number or an APK download.",
            category=ThreatCategory.SCAM,
            severity=ThreatSeverity.HIGH,
            region="India",
            reported_at=now - timedelta(minutes=30),
            source="Cyber Crime Portal",
            source_type="verified",
            warning_signs=[
                'Deadline pressure such as "tonight"',
                "Sent from a personal mobile number",
                "Asks you to install a remote access app",
            ],
            safety_tips=["Check the bill in the official utility app", "Do not call the number in the SMS"],
            actions_to_avoid=["Installing APKs from links", "Sharing OTPs"],
            trend=ThreatTrend.RISING,
        ),
        LiveThreat(
            id="t2",
            title="Deepfake Stock Trading Videos",
            description="Generated videos of well-known industrialists promote trading apps and Telegram groups.",
            category=ThreatCategory.CYBER_FRAUD,
            severity=ThreatSeverity.HIGH,
            region=GLOBAL_REGION,
            reported_at=now - timedelta(hours=4),
            source="Trend Analysis",
            source_type="aggregated",
            warning_signs=[
                "Lip sync is slightly off",
                "Guaranteed returns, e.g. money doubled in a day",
                "Links lead to WhatsApp or Telegram groups",
            ],
            safety_tips=["Trade only on registered platforms", "Report the video"],
            actions_to_avoid=["Joining investment groups from ads", "Paying into personal bank accounts"],
            trend=ThreatTrend.RISING,
        ),
        LiveThreat(
            id="t3",
            title="Fake Election Schedule Forwards",
            description="Forwarded messages list wrong voting dates for upcoming state elections.",
            category=ThreatCategory.MISINFORMATION,
            severity=ThreatSeverity.MEDIUM,
            region="India",
            reported_at=now - timedelta(days=1),
            source="Fact Check Unit",
            source_type="verified",
            warning_signs=[
                "No link to the election commission site",
                "Dates disagree with news reports",
                "Formatting problems in the document image",
            ],
            safety_tips=["Check the official election commission schedule", "Verify before forwarding"],
            actions_to_avoid=["Forwarding to family groups", "Planning travel around unverified dates"],
            trend=ThreatTrend.STABLE,
        ),
        LiveThreat(
            id="t4",
            title='Part-time "Review Task" Job Scam',
            description="Offers of pay for liking videos or rating hotels that end with a deposit to withdraw earnings.",
            category=ThreatCategory.SCAM,
            severity=ThreatSeverity.MEDIUM,
            region="India",
            reported_at=now - timedelta(days=2),
            source="User Reports",
            source_type="public_trend",
            warning_signs=[
                "Easy money for an hour of work a day",
                "Moved to a Telegram group after first contact",
                "Asked to pay to unlock earnings",
            ],
            safety_tips=["Real jobs never charge you to work", "Block and report the sender"],
            actions_to_avoid=["Paying a security deposit", "Sharing bank details"],
            trend=ThreatTrend.DECLINING,
        ),
    ]


class ThreatFeed:
    """Static, newest-first list of live threats."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._threats = _seed_threats(self._clock())

    def list(self, region: str = ALL_REGIONS) -> List[LiveThreat]:
        """Threats for a region (plus global ones), newest first."""
        threats = self._threats
        if region != ALL_REGIONS:
            threats = [t for t in threats if t.region in (region, GLOBAL_REGION)]
        return sorted(threats, key=lambda t: t.reported_at, reverse=True)

    def regions(self) -> List[str]:
        return [ALL_REGIONS] + sorted({t.region for t in self._threats})
