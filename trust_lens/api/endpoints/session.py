"""Analysis session endpoints.

The service runs a single session: one active detector with its pending
text and media, like one open dashboard tab.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, Field

from ...domain.errors import UnknownDetectorError
from ...domain.models.media import RawFile
from ...domain.services.session_controller import TOOL_ONLY_MESSAGE, SessionController
from ...infrastructure.dependencies import get_session_controller

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["session"])


class DetectorSwitchRequest(BaseModel):
    """Request model for changing the active detector."""

    detector_id: str = Field(..., description="Detector to activate")


class TextRequest(BaseModel):
    """Request model for replacing the text input."""

    text: str = Field(default="", description="Text to analyze")


class UrlRequest(BaseModel):
    """Request model for a URL input."""

    url: str = Field(..., description="Absolute http(s) URL")


@router.get("")
async def get_session(
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    """Current detector, input, result and error."""
    return controller.state.to_dict()


@router.put("/detector")
async def switch_detector(
    request: DetectorSwitchRequest,
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    """Activate another detector; pending input and results are discarded."""
    try:
        return controller.switch_detector(request.detector_id).to_dict()
    except UnknownDetectorError:
        raise HTTPException(status_code=404, detail=f"Unknown detector: {request.detector_id}")


@router.put("/text")
async def set_text(
    request: TextRequest,
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    return controller.set_text(request.text).to_dict()


@router.post("/url")
async def append_url(
    request: UrlRequest,
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    """Append a link to the text input."""
    state = controller.append_url(request.url)
    if state.error:
        raise HTTPException(status_code=400, detail=state.error)
    return state.to_dict()


@router.post("/media")
async def upload_media(
    files: List[UploadFile] = File(...),
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    """Attach uploaded images or videos.

    Each file is validated on its own; rejected files show up as failed
    items with their reason instead of failing the request.
    """
    if controller.detector.is_tool_only:
        raise HTTPException(status_code=400, detail=TOOL_ONLY_MESSAGE)

    raw_files = [
        RawFile(
            name=upload.filename or "upload",
            content_type=upload.content_type or "",
            data=await upload.read(),
        )
        for upload in files
    ]
    controller.attach_files(raw_files)
    await controller.wait_for_media()
    return controller.state.to_dict()


@router.post("/media/url")
async def attach_media_url(
    request: UrlRequest,
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    """Attach an image or video from a remote URL."""
    item = controller.attach_remote_url(request.url)
    if item is None:
        raise HTTPException(status_code=400, detail=controller.state.error)
    await controller.wait_for_media()
    return controller.state.to_dict()


@router.delete("/media/{item_id}")
async def remove_media(
    item_id: str,
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    if not controller.remove_media(item_id):
        raise HTTPException(status_code=404, detail=f"Media item not found: {item_id}")
    return controller.state.to_dict()


@router.delete("/media")
async def clear_media(
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    return controller.clear_media().to_dict()


@router.post("/submit")
async def submit(
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    """Classify the current input.

    A blank submission leaves the session unchanged. A failed analysis is
    reported through the session's ``error`` field.
    """
    await controller.wait_for_media()
    await controller.submit()
    return controller.state.to_dict()


@router.post("/reset")
async def reset(
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    return controller.reset().to_dict()
