"""Tests for the classification client."""

import json

import pytest

from conftest import FakeProvider
from trust_lens.domain.errors import (
    MissingCredentialsError,
    SafetySuppressionError,
    SchemaError,
    TransportError,
)
from trust_lens.domain.models.detector import DetectorId
from trust_lens.domain.models.media import MediaItem, MediaKind, MediaOrigin
from trust_lens.domain.models.verdict import SeverityTier
from trust_lens.domain.ports.classifier_provider import BLOCK_NONE, HARM_CATEGORIES, BinaryPart, TextPart
from trust_lens.domain.services.classification_client import (
    ClassificationClient,
    parse_classifier_payload,
)
from trust_lens.domain.services.detector_registry import default_registry


def _ready_image(item_id: str = "m1") -> MediaItem:
    item = MediaItem(id=item_id, kind=MediaKind.IMAGE, origin=MediaOrigin.UPLOAD, name="shot.png")
    return item.as_ready(MediaKind.IMAGE, "QUJD", 3, "image/png")


@pytest.mark.asyncio
async def test_phishing_text_only_submission():
    """Text-only phishing check sends one text part and no media."""
    provider = FakeProvider()
    client = ClassificationClient(provider)
    text = "Your account is locked, verify at http://bit.ly/x"

    result = await client.classify(DetectorId.PHISHING, text, [])

    (request,) = provider.requests
    assert request.binary_parts == []
    assert [p.text for p in request.text_parts] == [text]
    assert request.system_instruction == default_registry.lookup(DetectorId.PHISHING).system_instruction
    assert result.label == "Phishing"
    assert result.domain == "bit.ly"
    assert result.confidence == 92
    assert result.reason == ("shortened link", "urgency")
    assert result.severity == SeverityTier.DANGER


def test_media_parts_come_before_text():
    client = ClassificationClient(FakeProvider())

    request = client.build_request(DetectorId.AI_MEDIA, "is this real?", [_ready_image("a"), _ready_image("b")])

    assert [type(p) for p in request.parts] == [BinaryPart, BinaryPart, TextPart]
    assert request.parts[0].content_type == "image/png"
    assert request.parts[0].payload == "QUJD"


def test_blank_text_is_not_sent():
    client = ClassificationClient(FakeProvider())

    request = client.build_request(DetectorId.AI_MEDIA, "   ", [_ready_image()])

    assert request.text_parts == []


def test_pending_and_failed_media_are_not_sent():
    client = ClassificationClient(FakeProvider())
    pending = MediaItem(id="p", kind=MediaKind.IMAGE, origin=MediaOrigin.UPLOAD)
    failed = pending.as_failed("broken")

    request = client.build_request(DetectorId.NEWS, "text", [pending, failed])

    assert request.binary_parts == []


def test_safety_thresholds_are_relaxed():
    request = ClassificationClient(FakeProvider()).build_request(DetectorId.NEWS, "text", [])

    assert {s.category for s in request.safety} == set(HARM_CATEGORIES)
    assert all(s.threshold == BLOCK_NONE for s in request.safety)
    assert request.response_schema["required"] == ["domain", "label", "confidence", "reason"]


@pytest.mark.asyncio
async def test_unknown_detector_uses_fallback_instruction():
    provider = FakeProvider()

    await ClassificationClient(provider).classify("horoscope", "text")

    assert provider.requests[0].system_instruction == "Analyze the content for fraud or misinformation."


@pytest.mark.asyncio
async def test_missing_provider():
    with pytest.raises(MissingCredentialsError):
        await ClassificationClient(None).classify(DetectorId.NEWS, "text")


@pytest.mark.asyncio
async def test_empty_answer_is_safety_suppression():
    with pytest.raises(SafetySuppressionError):
        await ClassificationClient(FakeProvider(answer="")).classify(DetectorId.NEWS, "text")


@pytest.mark.asyncio
async def test_unexpected_provider_error_becomes_transport_error():
    client = ClassificationClient(FakeProvider(error=RuntimeError("socket closed")))

    with pytest.raises(TransportError):
        await client.classify(DetectorId.NEWS, "text")


@pytest.mark.asyncio
async def test_classification_errors_pass_through():
    client = ClassificationClient(FakeProvider(error=MissingCredentialsError("no key")))

    with pytest.raises(MissingCredentialsError):
        await client.classify(DetectorId.NEWS, "text")


@pytest.mark.parametrize("raw", [
    "not json",
    json.dumps({"label": "Safe", "confidence": 50, "reason": []}),
    json.dumps({"domain": "", "label": "Safe", "confidence": "high", "reason": []}),
    json.dumps({"domain": "", "label": "Safe", "confidence": 150, "reason": []}),
    json.dumps({"domain": "", "label": "Safe", "confidence": 50, "reason": "one"}),
    json.dumps({"domain": "", "label": "Safe", "confidence": 50, "reason": [], "extra": 1}),
    json.dumps({"domain": "", "label": "  ", "confidence": 50, "reason": []}),
    json.dumps(["Safe"]),
])
def test_schema_violations(raw):
    with pytest.raises(SchemaError):
        parse_classifier_payload(raw)


def test_empty_domain_becomes_none():
    result = parse_classifier_payload(
        json.dumps({"domain": "", "label": "Real", "confidence": 70.5, "reason": ["natural lighting"]})
    )

    assert result.domain is None
    assert result.confidence == 70.5
