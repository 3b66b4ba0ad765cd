"""Turns raw user input into validated media items."""

import asyncio
import base64
import logging
from typing import AbstractSet, Callable, List, Sequence, Set
from uuid import uuid4

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from ..errors import InvalidUrlError
from ..models.detector import InputKind
from ..models.media import (
    MAX_MEDIA_BYTES,
    MediaItem,
    MediaKind,
    MediaOrigin,
    RawFile,
    kind_for_content_type,
)
from ..ports.media_fetcher import MediaFetcher
from .session_state import MediaAdded, MediaResolved, SessionAction

logger = logging.getLogger(__name__)

INVALID_TYPE_MESSAGE = "Invalid file type. Please upload an image or video."
READ_FAILED_MESSAGE = "Failed to read file."
INVALID_URL_MESSAGE = "Please enter a valid URL."
REMOTE_FETCH_FAILED_MESSAGE = (
    "Failed to load URL. It may be blocked by cross-origin policy "
    "or is not a valid image or video."
)

_KIND_TO_INPUT = {
    MediaKind.IMAGE: InputKind.IMAGE,
    MediaKind.VIDEO: InputKind.VIDEO,
}

_url_adapter = TypeAdapter(AnyHttpUrl)


def too_large_message(name: str) -> str:
    return f"File {name} is too large. Maximum size is 10MB."


def validate_url(url: str) -> str:
    """Check that url is an absolute http(s) URL.

    Raises:
        InvalidUrlError: If it is not
    """
    url = (url or "").strip()
    try:
        _url_adapter.validate_python(url)
    except ValidationError as e:
        raise InvalidUrlError(INVALID_URL_MESSAGE) from e
    return url


def encode_payload(data: bytes) -> str:
    """Base64 text form used to ship binary content to the classifier."""
    return base64.b64encode(data).decode("ascii")


def _new_item_id() -> str:
    return uuid4().hex[:12]


class InputNormalizer:
    """Creates pending media items and resolves them in the background.

    Items are announced to the session with ``MediaAdded`` as soon as they
    are created, so they keep submission order. Each item is then validated
    by its own task, which reports back with ``MediaResolved``. One bad file
    never holds up the others.

    Must be used from inside a running event loop.
    """

    def __init__(
        self,
        dispatch: Callable[[SessionAction], object],
        fetcher: MediaFetcher,
        max_bytes: int = MAX_MEDIA_BYTES,
    ):
        """Initialize the normalizer.

        Args:
            dispatch: Callback applying an action to the owning session
            fetcher: Downloads media for remote URLs
            max_bytes: Size ceiling per item
        """
        self._dispatch = dispatch
        self._fetcher = fetcher
        self._max_bytes = max_bytes
        self._tasks: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        """Number of validations still running."""
        return len(self._tasks)

    def ingest_files(
        self,
        files: Sequence[RawFile],
        allowed_kinds: AbstractSet[InputKind],
    ) -> List[MediaItem]:
        """Add uploaded files as pending items and start validating them."""
        items = [
            MediaItem(
                id=_new_item_id(),
                kind=kind_for_content_type(raw.content_type) or MediaKind.IMAGE,
                origin=MediaOrigin.UPLOAD,
                name=raw.name,
                size_bytes=raw.size,
                content_type=raw.content_type,
            )
            for raw in files
        ]
        if not items:
            return []

        self._dispatch(MediaAdded(tuple(items)))
        logger.info(f"📥 Ingesting {len(items)} file(s)")

        for item, raw in zip(items, files):
            self._spawn(self._process_file(item, raw, allowed_kinds))
        return items

    def ingest_remote_url(
        self,
        url: str,
        allowed_kinds: AbstractSet[InputKind],
    ) -> MediaItem:
        """Add a remote media URL as a pending item and start fetching it.

        Raises:
            InvalidUrlError: If url is malformed; no item is created
        """
        url = validate_url(url)
        item = MediaItem(
            id=_new_item_id(),
            kind=MediaKind.IMAGE,
            origin=MediaOrigin.REMOTE_URL,
            name=url,
        )
        self._dispatch(MediaAdded((item,)))
        logger.info(f"🌐 Fetching remote media: {url}")
        self._spawn(self._process_remote(item, url, allowed_kinds))
        return item

    async def wait_idle(self) -> None:
        """Wait until every validation started so far has resolved."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def cancel_all(self) -> None:
        """Cancel validations still running."""
        for task in list(self._tasks):
            task.cancel()
        await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _spawn(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _check(self, item: MediaItem, kind, size: int, allowed_kinds) -> str:
        """Return a failure reason, or an empty string when the item is acceptable."""
        if kind is None:
            return INVALID_TYPE_MESSAGE
        if _KIND_TO_INPUT[kind] not in allowed_kinds:
            return f"{kind.value.capitalize()} input is not supported by this detector."
        if size > self._max_bytes:
            return too_large_message(item.name)
        return ""

    async def _process_file(self, item: MediaItem, raw: RawFile, allowed_kinds) -> None:
        kind = kind_for_content_type(raw.content_type)
        reason = self._check(item, kind, raw.size, allowed_kinds)
        if reason:
            logger.info(f"🚫 Rejected {raw.name!r}: {reason}")
            self._dispatch(MediaResolved(item.as_failed(reason)))
            return

        try:
            payload = encode_payload(raw.data)
            resolved = item.as_ready(kind, payload, raw.size, raw.content_type)
        except ValueError as e:
            logger.warning(f"⚠️ Could not encode {raw.name!r}: {e}")
            resolved = item.as_failed(READ_FAILED_MESSAGE)
        self._dispatch(MediaResolved(resolved))

    async def _process_remote(self, item: MediaItem, url: str, allowed_kinds) -> None:
        try:
            fetched = await self._fetcher.fetch(url, max_bytes=self._max_bytes)
            content_type = fetched.content_type.split(";")[0].strip().lower()
            kind = kind_for_content_type(content_type)
            reason = self._check(item, kind, len(fetched.data), allowed_kinds)
            if reason:
                raise ValueError(reason)
            resolved = item.as_ready(kind, encode_payload(fetched.data), len(fetched.data), content_type)
        except Exception as e:
            logger.warning(f"⚠️ Remote media {url} failed: {type(e).__name__}: {e}")
            resolved = item.as_failed(REMOTE_FETCH_FAILED_MESSAGE)
        self._dispatch(MediaResolved(resolved))
