"""Test configuration and common fixtures."""

import asyncio
import json
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from trust_lens.domain.models.media import FetchedMedia
from trust_lens.domain.ports.classifier_provider import ClassificationRequest, ClassifierProvider
from trust_lens.domain.services.classification_client import ClassificationClient
from trust_lens.domain.services.history_store import HistoryStore
from trust_lens.domain.services.session_controller import SessionController
from trust_lens.domain.services.sink_outbox import SinkOutbox

PHISHING_ANSWER = json.dumps({
    "domain": "bit.ly",
    "label": "Phishing",
    "confidence": 92,
    "reason": ["shortened link", "urgency"],
})

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class MemoryStore:
    """In-memory key-value store."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        """Initialize the store; exception values are raised on read."""
        self.data = dict(data or {})
        self.writes = 0

    def read(self, key: str) -> Any:
        value = self.data.get(key)
        if isinstance(value, Exception):
            raise value
        return value

    def write(self, key: str, value: Any) -> None:
        self.data[key] = value
        self.writes += 1


class FakeProvider(ClassifierProvider):
    """Classifier backend answering with a canned payload."""

    def __init__(self, answer: str = PHISHING_ANSWER, error: Optional[Exception] = None):
        """Initialize fake provider."""
        self.answer = answer
        self.error = error
        self.requests: List[ClassificationRequest] = []
        self.gate: Optional[asyncio.Event] = None
        self._initialized = False

    async def initialize(self) -> None:
        self._initialized = True

    async def classify(self, request: ClassificationRequest) -> str:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.answer

    async def shutdown(self) -> None:
        self._initialized = False

    @property
    def provider_name(self) -> str:
        return "Fake"

    @property
    def is_available(self) -> bool:
        return self._initialized


class FakeFetcher:
    """Media fetcher returning a fixed body or raising."""

    def __init__(self, media: Optional[FetchedMedia] = None, error: Optional[Exception] = None):
        self.media = media or FetchedMedia(content_type="image/png", data=PNG_BYTES)
        self.error = error
        self.urls: List[str] = []
        self.limits: List[Optional[int]] = []

    async def fetch(self, url: str, max_bytes: Optional[int] = None) -> FetchedMedia:
        self.urls.append(url)
        self.limits.append(max_bytes)
        if self.error is not None:
            raise self.error
        return self.media


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def recording_sink() -> AsyncMock:
    """Metadata sink that records calls."""
    return AsyncMock()


@pytest.fixture
def history(memory_store: MemoryStore) -> HistoryStore:
    return HistoryStore(memory_store)


@pytest_asyncio.fixture
async def outbox(recording_sink: AsyncMock) -> SinkOutbox:
    return SinkOutbox(recording_sink)


@pytest_asyncio.fixture
async def controller(
    fake_provider: FakeProvider,
    history: HistoryStore,
    outbox: SinkOutbox,
    fake_fetcher: FakeFetcher,
) -> SessionController:
    """Session controller wired to fakes, started on the news detector."""
    controller = SessionController(
        classifier=ClassificationClient(fake_provider),
        history=history,
        outbox=outbox,
        fetcher=fake_fetcher,
    )
    yield controller
    await controller.shutdown()
