"""Detector catalog endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ...domain.errors import UnknownDetectorError
from ...domain.models.detector import DetectorDefinition
from ...domain.services.detector_registry import DetectorRegistry
from ...infrastructure.dependencies import get_detector_registry

router = APIRouter(prefix="/detectors", tags=["detectors"])


def detector_to_dict(detector: DetectorDefinition) -> Dict[str, Any]:
    """Catalog entry in API form, inputs sorted for stable output."""
    return {
        "id": detector.id.value,
        "title": detector.title,
        "description": detector.description,
        "placeholder": detector.placeholder,
        "allowed_inputs": sorted(kind.value for kind in detector.allowed_inputs),
        "tool_only": detector.is_tool_only,
    }


@router.get("")
async def list_detectors(
    registry: DetectorRegistry = Depends(get_detector_registry),
) -> List[Dict[str, Any]]:
    """All detectors in dashboard order."""
    return [detector_to_dict(d) for d in registry.all()]


@router.get("/{detector_id}")
async def get_detector(
    detector_id: str,
    registry: DetectorRegistry = Depends(get_detector_registry),
) -> Dict[str, Any]:
    try:
        return detector_to_dict(registry.lookup(detector_id))
    except UnknownDetectorError:
        raise HTTPException(status_code=404, detail=f"Unknown detector: {detector_id}")
