"""Domain model for normalized media items."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional


class MediaKind(Enum):
    """Kind of binary content."""
    IMAGE = "image"
    VIDEO = "video"


class MediaOrigin(Enum):
    """Where a media item came from."""
    UPLOAD = "upload"
    REMOTE_URL = "remote-url"


class MediaStatus(Enum):
    """Validation status of a media item."""
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


MAX_MEDIA_BYTES = 10 * 1024 * 1024

# Advisory content types sent to the classifier when the real one is unknown.
DEFAULT_CONTENT_TYPES = {
    MediaKind.IMAGE: "image/jpeg",
    MediaKind.VIDEO: "video/mp4",
}


def kind_for_content_type(content_type: Optional[str]) -> Optional[MediaKind]:
    """Return the media kind for a MIME type, or None if it is not image/video."""
    content_type = (content_type or "").lower()
    if content_type.startswith("image/"):
        return MediaKind.IMAGE
    if content_type.startswith("video/"):
        return MediaKind.VIDEO
    return None


@dataclass(frozen=True)
class RawFile:
    """A file as received from the user, before validation."""

    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class FetchedMedia:
    """Body and content type returned by a remote media fetch."""

    content_type: str
    data: bytes


@dataclass(frozen=True)
class MediaItem:
    """One normalized unit of uploaded or fetched binary content."""

    id: str
    kind: MediaKind
    origin: MediaOrigin
    status: MediaStatus = MediaStatus.PENDING
    name: str = ""
    size_bytes: int = 0
    content_type: str = ""
    encoded_payload: str = ""
    preview_handle: str = ""
    error_message: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == MediaStatus.PENDING

    @property
    def is_ready(self) -> bool:
        return self.status == MediaStatus.READY

    @property
    def advisory_content_type(self) -> str:
        """Content type to tag the payload with when sending it out."""
        if kind_for_content_type(self.content_type) == self.kind:
            return self.content_type
        return DEFAULT_CONTENT_TYPES[self.kind]

    def as_ready(
        self,
        kind: MediaKind,
        encoded_payload: str,
        size_bytes: int,
        content_type: str,
    ) -> "MediaItem":
        """Copy of this item in the ready state."""
        if not encoded_payload:
            raise ValueError("A ready media item needs a payload")
        preview = f"data:{content_type};base64,{encoded_payload}" if kind == MediaKind.IMAGE else ""
        return replace(
            self,
            kind=kind,
            status=MediaStatus.READY,
            encoded_payload=encoded_payload,
            size_bytes=size_bytes,
            content_type=content_type,
            preview_handle=preview,
            error_message=None,
        )

    def as_failed(self, reason: str) -> "MediaItem":
        """Copy of this item in the failed state."""
        return replace(
            self,
            status=MediaStatus.FAILED,
            encoded_payload="",
            preview_handle="",
            error_message=reason,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the item to a dictionary for API responses, without the payload."""
        return {
            'id': self.id,
            'name': self.name,
            'kind': self.kind.value,
            'origin': self.origin.value,
            'status': self.status.value,
            'size_bytes': self.size_bytes,
            'content_type': self.content_type,
            'has_preview': bool(self.preview_handle),
            'error_message': self.error_message,
        }
