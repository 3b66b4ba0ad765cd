"""Tests for the detector registry."""

import pytest

from trust_lens.domain.errors import UnknownDetectorError
from trust_lens.domain.models.detector import DetectorId, InputKind
from trust_lens.domain.services.detector_registry import (
    FALLBACK_INSTRUCTION,
    DetectorRegistry,
    default_registry,
)


def test_catalog_has_every_detector():
    ids = [d.id for d in default_registry.all()]

    assert ids == list(DetectorId)


def test_every_classifier_has_an_instruction():
    for detector in default_registry.classifiers():
        assert detector.system_instruction.strip(), detector.id


def test_sos_tools_is_tool_only():
    sos = default_registry.lookup("sos-tools")

    assert sos.is_tool_only
    assert sos not in default_registry.classifiers()


def test_only_news_takes_urls():
    takes_urls = [d.id for d in default_registry.all() if d.accepts(InputKind.URL)]

    assert takes_urls == [DetectorId.NEWS]


def test_lookup_unknown_raises():
    with pytest.raises(UnknownDetectorError):
        default_registry.lookup("horoscope")


def test_find_unknown_returns_none():
    assert default_registry.find("horoscope") is None


def test_instruction_fallback_for_unknown_detector():
    assert default_registry.instruction_for("horoscope") == FALLBACK_INSTRUCTION


def test_instruction_fallback_for_detector_without_one():
    registry = DetectorRegistry([default_registry.lookup(DetectorId.SOS_TOOLS)])

    assert registry.instruction_for(DetectorId.SOS_TOOLS) == FALLBACK_INSTRUCTION
