"""Orchestrates one analysis session end to end."""

import logging
from typing import List, Optional, Sequence, Union
from uuid import uuid4

from ..errors import ClassificationError, EmptySubmissionError, InputValidationError
from ..models.analysis import AnalysisRequest, AnalysisResult
from ..models.detector import DetectorDefinition, DetectorId
from ..models.history import HistoryEntry
from ..models.media import MediaItem, RawFile
from ..ports.media_fetcher import MediaFetcher
from .classification_client import ClassificationClient
from .detector_registry import DetectorRegistry, default_registry
from .history_store import HistoryStore
from .input_normalizer import InputNormalizer, validate_url
from .session_state import (
    DetectorSwitched,
    HistoryRestored,
    InputRejected,
    MediaCleared,
    MediaRemoved,
    Reset,
    SessionAction,
    SessionState,
    SessionStatus,
    SubmitFailed,
    SubmitStarted,
    SubmitSucceeded,
    TextChanged,
    UrlAppended,
    initial_state,
    reduce,
)
from .sink_outbox import SinkOutbox

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze content. Please try again later. Ensure uploaded files are valid."
)
TOOL_ONLY_MESSAGE = "This tool does not analyze content."


class SessionController:
    """Holds the active detector and its pending input, and runs submissions.

    State only changes through ``dispatch``, which applies the pure reducer.
    A successful submission fans out to the history store and, through the
    outbox, to the metadata sink.
    """

    def __init__(
        self,
        classifier: ClassificationClient,
        history: HistoryStore,
        outbox: SinkOutbox,
        fetcher: MediaFetcher,
        registry: DetectorRegistry = default_registry,
        detector_id: DetectorId = DetectorId.NEWS,
    ):
        """Initialize the controller.

        Args:
            classifier: Client used to classify submissions
            history: Store receiving one entry per successful analysis
            outbox: Queue for metadata sink notifications
            fetcher: Downloads remote media URLs
            registry: Detector catalog
            detector_id: Detector active at start
        """
        self._classifier = classifier
        self._history = history
        self._outbox = outbox
        self._registry = registry
        self._state = initial_state(registry.lookup(detector_id).id)
        self._normalizer = InputNormalizer(self.dispatch, fetcher)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def detector(self) -> DetectorDefinition:
        return self._registry.lookup(self._state.detector_id)

    def dispatch(self, action: SessionAction) -> SessionState:
        """Apply an action and return the new state."""
        self._state = reduce(self._state, action)
        return self._state

    def switch_detector(self, detector_id: Union[DetectorId, str]) -> SessionState:
        """Make another detector active; all input and results are dropped.

        Raises:
            UnknownDetectorError: If the detector does not exist
        """
        detector = self._registry.lookup(detector_id)
        logger.info(f"🔀 Active detector: {detector.id.value}")
        return self.dispatch(DetectorSwitched(detector.id))

    def set_text(self, text: str) -> SessionState:
        return self.dispatch(TextChanged(text or ""))

    def append_url(self, url: str) -> SessionState:
        """Append a link to the text input on its own line."""
        try:
            url = validate_url(url)
        except InputValidationError as e:
            return self.dispatch(InputRejected(str(e)))
        return self.dispatch(UrlAppended(url))

    def attach_files(self, files: Sequence[RawFile]) -> List[MediaItem]:
        """Add uploaded files; they start pending and resolve in the background."""
        detector = self.detector
        if detector.is_tool_only:
            self.dispatch(InputRejected(TOOL_ONLY_MESSAGE))
            return []
        return self._normalizer.ingest_files(files, detector.allowed_inputs)

    def attach_remote_url(self, url: str) -> Optional[MediaItem]:
        """Add a remote image or video by URL.

        A malformed URL sets the session error and creates no item.
        """
        detector = self.detector
        if detector.is_tool_only:
            self.dispatch(InputRejected(TOOL_ONLY_MESSAGE))
            return None
        try:
            return self._normalizer.ingest_remote_url(url, detector.allowed_inputs)
        except InputValidationError as e:
            self.dispatch(InputRejected(str(e)))
            return None

    def remove_media(self, item_id: str) -> bool:
        found = item_id in self._state.media
        self.dispatch(MediaRemoved(item_id))
        return found

    def clear_media(self) -> SessionState:
        return self.dispatch(MediaCleared())

    async def wait_for_media(self) -> None:
        """Wait for every media validation started so far."""
        await self._normalizer.wait_idle()

    async def submit(self) -> Optional[AnalysisResult]:
        """Classify the current input.

        Does nothing and returns None when the detector is a tool, a
        submission is already running, media is still pending, or there is
        nothing to analyze.
        """
        state = self._state
        detector = self._registry.find(state.detector_id)
        if detector is None or detector.is_tool_only:
            logger.debug(f"Submit ignored: {state.detector_id.value} is not a classifier")
            return None
        if state.is_submitting:
            logger.debug("Submit ignored: a submission is already running")
            return None
        if state.has_pending_media:
            logger.info("⏳ Submit ignored: media still being validated")
            return None

        try:
            request = AnalysisRequest(state.detector_id, state.text, state.media_items)
        except EmptySubmissionError:
            logger.debug("Submit ignored: nothing to analyze")
            return None

        submission_id = uuid4().hex
        self.dispatch(SubmitStarted(submission_id))
        logger.info(f"🚀 Submitting {request!r}")

        try:
            result = await self._classifier.classify(request.detector_id, request.text, request.media)
        except ClassificationError as e:
            logger.error(f"❌ Classification failed ({type(e).__name__}): {e}")
            self.dispatch(SubmitFailed(submission_id, ANALYSIS_FAILED_MESSAGE))
            return None
        except Exception as e:
            logger.error(f"❌ Unexpected classification error: {type(e).__name__}: {e}", exc_info=True)
            self.dispatch(SubmitFailed(submission_id, ANALYSIS_FAILED_MESSAGE))
            return None

        current = self._state
        if current.status != SessionStatus.SUBMITTING or current.submission_id != submission_id:
            logger.info("🗑️ Dropping result for an abandoned submission")
            return None

        self.dispatch(SubmitSucceeded(submission_id, result))
        self._record(request, result)
        return result

    def reset(self) -> SessionState:
        """Clear text, media, result and error."""
        return self.dispatch(Reset())

    def restore_from_history(self, entry: HistoryEntry) -> SessionState:
        """Show a past analysis again. Its media is not kept, so none is restored."""
        logger.info(f"♻️ Restoring history entry {entry.id}")
        return self.dispatch(HistoryRestored(entry))

    async def shutdown(self) -> None:
        await self._normalizer.cancel_all()

    def _record(self, request: AnalysisRequest, result: AnalysisResult) -> None:
        self._history.append(
            HistoryEntry.for_analysis(
                detector_id=request.detector_id,
                result=result,
                text=request.text,
                has_media=request.has_media,
            )
        )
        self._outbox.record_analysis(
            detector_id=request.detector_id,
            result=result,
            content=request.text,
            has_media=request.has_media,
        )
        if request.detector_id == DetectorId.AI_MEDIA and request.has_media:
            self._outbox.record_media_metadata(
                [{"type": item.kind.value, "size": item.size_bytes} for item in request.media],
                result,
            )
