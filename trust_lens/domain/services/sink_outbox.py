"""Fire-and-forget delivery of analysis events to the metadata sink."""

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from ..models.analysis import AnalysisResult
from ..models.detector import DetectorId
from ..ports.metadata_sink import MetadataSink

logger = logging.getLogger(__name__)

PREVIEW_LIMIT = 100


@dataclass(frozen=True)
class AnalysisRecorded:
    detector_id: DetectorId
    result: AnalysisResult
    content_preview: str
    has_media: bool


@dataclass(frozen=True)
class MediaMetadataRecorded:
    items: List[Dict[str, Union[str, int]]]
    result: AnalysisResult


Notification = Union[AnalysisRecorded, MediaMetadataRecorded]


class SinkOutbox:
    """Queue of pending sink notifications.

    Enqueuing never blocks and never fails. Delivery happens later, either
    from a background worker (``start``) or on demand (``drain``). Sink
    errors are logged and dropped.
    """

    def __init__(self, sink: MetadataSink):
        self._sink = sink
        self._queue: "asyncio.Queue[Notification]" = asyncio.Queue()
        self._worker: Optional[asyncio.Task] = None

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def record_analysis(
        self,
        detector_id: DetectorId,
        result: AnalysisResult,
        content: str,
        has_media: bool,
    ) -> None:
        self._queue.put_nowait(
            AnalysisRecorded(detector_id, result, (content or "")[:PREVIEW_LIMIT], has_media)
        )

    def record_media_metadata(self, items: List[Dict[str, Union[str, int]]], result: AnalysisResult) -> None:
        self._queue.put_nowait(MediaMetadataRecorded(list(items), result))

    def start(self) -> None:
        """Start delivering in the background."""
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the worker and deliver whatever is left."""
        if self._worker is not None:
            self._worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker
            self._worker = None
        await self.drain()

    async def drain(self) -> int:
        """Deliver every queued notification now. Returns how many were taken."""
        delivered = 0
        while not self._queue.empty():
            notification = self._queue.get_nowait()
            await self._deliver(notification)
            self._queue.task_done()
            delivered += 1
        return delivered

    async def _run(self) -> None:
        while True:
            notification = await self._queue.get()
            try:
                await self._deliver(notification)
            finally:
                self._queue.task_done()

    async def _deliver(self, notification: Notification) -> None:
        try:
            if isinstance(notification, AnalysisRecorded):
                await self._sink.record_analysis(
                    detector_id=notification.detector_id,
                    result=notification.result,
                    content_preview=notification.content_preview,
                    has_media=notification.has_media,
                )
            else:
                await self._sink.record_media_metadata(
                    items=notification.items,
                    result=notification.result,
                )
        except Exception as e:
            logger.warning(f"⚠️ Metadata sink failed for {type(notification).__name__}: {e}")
