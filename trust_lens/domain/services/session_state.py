"""Session state and the reducer that transitions it.

Every change to a session goes through ``reduce(state, action)``. The
reducer is pure: it never mutates ``state`` and never performs I/O. Side
effects (classification, history, metadata sink) live in the controller.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..models.analysis import AnalysisResult
from ..models.detector import DetectorId
from ..models.history import HistoryEntry
from ..models.media import MediaItem, MediaStatus


class SessionStatus(Enum):
    """Where a session is in its submit cycle."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    """Everything one detector tab holds."""

    detector_id: DetectorId
    text: str = ""
    media: Mapping[str, MediaItem] = field(default_factory=dict)
    status: SessionStatus = SessionStatus.IDLE
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None
    submission_id: Optional[str] = None

    @property
    def media_items(self) -> List[MediaItem]:
        """Media in insertion order."""
        return list(self.media.values())

    @property
    def ready_media(self) -> List[MediaItem]:
        return [item for item in self.media.values() if item.status == MediaStatus.READY]

    @property
    def has_pending_media(self) -> bool:
        return any(item.status == MediaStatus.PENDING for item in self.media.values())

    @property
    def has_input(self) -> bool:
        """True when there is non-blank text or at least one ready media item."""
        return bool(self.text.strip()) or bool(self.ready_media)

    @property
    def can_submit(self) -> bool:
        return not self.is_submitting and not self.has_pending_media and self.has_input

    @property
    def is_submitting(self) -> bool:
        return self.status == SessionStatus.SUBMITTING

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to a dictionary for API responses."""
        return {
            'detector_id': self.detector_id.value,
            'text': self.text,
            'media': [item.to_dict() for item in self.media.values()],
            'status': self.status.value,
            'result': self.result.model_dump(mode="json") if self.result else None,
            'severity': self.result.severity.value if self.result else None,
            'error': self.error,
            'can_submit': self.can_submit,
        }


@dataclass(frozen=True)
class DetectorSwitched:
    detector_id: DetectorId


@dataclass(frozen=True)
class TextChanged:
    text: str


@dataclass(frozen=True)
class UrlAppended:
    url: str


@dataclass(frozen=True)
class MediaAdded:
    items: Tuple[MediaItem, ...]


@dataclass(frozen=True)
class MediaResolved:
    item: MediaItem


@dataclass(frozen=True)
class MediaRemoved:
    item_id: str


@dataclass(frozen=True)
class MediaCleared:
    pass


@dataclass(frozen=True)
class SubmitStarted:
    submission_id: str


@dataclass(frozen=True)
class SubmitSucceeded:
    submission_id: str
    result: AnalysisResult


@dataclass(frozen=True)
class SubmitFailed:
    submission_id: str
    message: str


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class HistoryRestored:
    entry: HistoryEntry


@dataclass(frozen=True)
class InputRejected:
    message: str


SessionAction = Union[
    DetectorSwitched, TextChanged, UrlAppended, MediaAdded, MediaResolved,
    MediaRemoved, MediaCleared, SubmitStarted, SubmitSucceeded, SubmitFailed,
    Reset, HistoryRestored, InputRejected,
]


def initial_state(detector_id: DetectorId) -> SessionState:
    """Empty session for a detector."""
    return SessionState(detector_id=detector_id)


def _is_current(state: SessionState, submission_id: str) -> bool:
    return state.status == SessionStatus.SUBMITTING and state.submission_id == submission_id


def reduce(state: SessionState, action: SessionAction) -> SessionState:
    """Return the state that follows ``action``."""
    if isinstance(action, DetectorSwitched):
        if action.detector_id == state.detector_id:
            return state
        return initial_state(action.detector_id)

    if isinstance(action, Reset):
        return initial_state(state.detector_id)

    if isinstance(action, TextChanged):
        return replace(state, text=action.text)

    if isinstance(action, UrlAppended):
        current = state.text.strip()
        text = f"{current}\n{action.url}" if current else action.url
        return replace(state, text=text, error=None)

    if isinstance(action, MediaAdded):
        media = dict(state.media)
        for item in action.items:
            media[item.id] = item
        return replace(state, media=media, error=None)

    if isinstance(action, MediaResolved):
        # The item may have been removed while it was being validated.
        if action.item.id not in state.media:
            return state
        media = dict(state.media)
        media[action.item.id] = action.item
        return replace(state, media=media)

    if isinstance(action, MediaRemoved):
        if action.item_id not in state.media:
            return state
        media = {k: v for k, v in state.media.items() if k != action.item_id}
        return replace(state, media=media)

    if isinstance(action, MediaCleared):
        return replace(state, media={})

    if isinstance(action, SubmitStarted):
        return replace(
            state,
            status=SessionStatus.SUBMITTING,
            submission_id=action.submission_id,
            result=None,
            error=None,
        )

    if isinstance(action, SubmitSucceeded):
        if not _is_current(state, action.submission_id):
            return state
        return replace(
            state,
            status=SessionStatus.SUCCEEDED,
            submission_id=None,
            result=action.result,
            error=None,
        )

    if isinstance(action, SubmitFailed):
        if not _is_current(state, action.submission_id):
            return state
        return replace(
            state,
            status=SessionStatus.FAILED,
            submission_id=None,
            result=None,
            error=action.message,
        )

    if isinstance(action, HistoryRestored):
        entry = action.entry
        return SessionState(
            detector_id=entry.detector_id,
            text=entry.full_content or "",
            status=SessionStatus.SUCCEEDED,
            result=entry.result,
        )

    if isinstance(action, InputRejected):
        return replace(state, error=action.message)

    raise TypeError(f"Unknown session action: {action!r}")
