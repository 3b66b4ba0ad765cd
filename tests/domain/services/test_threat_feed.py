"""Tests for the live threat feed."""

from datetime import datetime, timezone

from trust_lens.domain.services.threat_feed import ThreatFeed

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_all_threats_newest_first():
    threats = ThreatFeed(clock=lambda: NOW).list()

    assert [t.id for t in threats] == ["t1", "t2", "t3", "t4"]
    assert all(t.reported_at <= NOW for t in threats)


def test_region_filter_includes_global():
    threats = ThreatFeed(clock=lambda: NOW).list("India")

    assert {t.region for t in threats} == {"India", "Global"}


def test_unknown_region_only_global():
    threats = ThreatFeed(clock=lambda: NOW).list("Atlantis")

    assert [t.id for t in threats] == ["t2"]


def test_regions():
    assert ThreatFeed().regions() == ["All", "Global", "India"]
