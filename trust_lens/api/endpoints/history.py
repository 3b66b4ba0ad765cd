"""Analysis history endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ...domain.services.history_store import HistoryStore
from ...domain.services.session_controller import SessionController
from ...infrastructure.dependencies import get_history_store, get_session_controller

router = APIRouter(prefix="/history", tags=["history"])


@router.get("")
async def list_history(
    history: HistoryStore = Depends(get_history_store),
) -> List[Dict[str, Any]]:
    """Past analyses, newest first."""
    return [entry.model_dump(mode="json") for entry in history.all()]


@router.delete("/{entry_id}")
async def delete_entry(
    entry_id: str,
    history: HistoryStore = Depends(get_history_store),
) -> Dict[str, str]:
    if not history.remove(entry_id):
        raise HTTPException(status_code=404, detail=f"History entry not found: {entry_id}")
    return {"deleted": entry_id}


@router.delete("")
async def clear_history(
    history: HistoryStore = Depends(get_history_store),
) -> Dict[str, int]:
    removed = len(history)
    history.clear()
    return {"deleted": removed}


@router.post("/{entry_id}/restore")
async def restore_entry(
    entry_id: str,
    history: HistoryStore = Depends(get_history_store),
    controller: SessionController = Depends(get_session_controller),
) -> Dict[str, Any]:
    """Reopen a past analysis in the session with its text and verdict."""
    entry = history.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"History entry not found: {entry_id}")
    return controller.restore_from_history(entry).to_dict()
