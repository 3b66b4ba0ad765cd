"""Live threat feed endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from ...domain.services.threat_feed import ALL_REGIONS, ThreatFeed
from ...infrastructure.dependencies import get_threat_feed

router = APIRouter(prefix="/threats", tags=["threats"])


@router.get("")
async def list_threats(
    region: str = Query(ALL_REGIONS, description="Region filter; global threats always match"),
    feed: ThreatFeed = Depends(get_threat_feed),
) -> Dict[str, Any]:
    """Currently circulating threats, newest first."""
    return {
        "region": region,
        "regions": feed.regions(),
        "threats": [threat.model_dump(mode="json") for threat in feed.list(region)],
    }
