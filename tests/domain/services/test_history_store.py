"""Tests for the history store."""

import time

from conftest import MemoryStore
from trust_lens.domain.models.analysis import AnalysisResult
from trust_lens.domain.models.detector import DetectorId
from trust_lens.domain.models.history import HistoryEntry
from trust_lens.domain.services.history_store import HistoryStore


def _entry(text: str) -> HistoryEntry:
    result = AnalysisResult(label="Suspicious", confidence=60, reason=["unverified"])
    return HistoryEntry.for_analysis(DetectorId.NEWS, result, text, has_media=False)


def test_newest_first():
    store = HistoryStore(MemoryStore())
    first, second = _entry("first"), _entry("second")

    store.append(first)
    store.append(second)

    assert [e.full_content for e in store.all()] == ["second", "first"]


def test_survives_reload():
    backing = MemoryStore()
    store = HistoryStore(backing)
    entry = _entry("persisted")
    store.append(entry)

    reloaded = HistoryStore(backing)

    assert reloaded.all() == [entry]
    assert backing.data["history"][0]["result"]["label"] == "Suspicious"


def test_remove_and_clear():
    backing = MemoryStore()
    store = HistoryStore(backing)
    a, b = _entry("a"), _entry("b")
    store.append(a)
    store.append(b)

    assert store.remove(a.id) is True
    assert store.remove(a.id) is False
    assert store.get(b.id) == b

    store.clear()

    assert len(store) == 0
    assert backing.data["history"] == []


def test_corrupt_json_starts_empty():
    store = HistoryStore(MemoryStore({"history": ValueError("Corrupt JSON")}))

    assert store.all() == []


def test_malformed_entries_start_empty():
    store = HistoryStore(MemoryStore({"history": [{"id": "1", "preview": "x"}]}))

    assert store.all() == []


def test_non_list_starts_empty():
    store = HistoryStore(MemoryStore({"history": {"not": "a list"}}))

    assert len(store) == 0


def test_write_failure_keeps_memory_copy():
    class FailingStore(MemoryStore):
        def write(self, key, value):
            raise OSError("disk full")

    store = HistoryStore(FailingStore())
    entry = _entry("kept")
    store.append(entry)

    assert store.all() == [entry]


def test_new_ids_sort_after_loaded_ids():
    backing = MemoryStore()
    future_id = str(time.time_ns() // 1000 + 3_600_000_000)
    HistoryStore(backing).append(_entry("written before the clock stepped back").model_copy(update={"id": future_id}))

    HistoryStore(backing)
    fresh = _entry("new")

    assert int(fresh.id) > int(future_id)


def test_reloaded_reasons_are_immutable():
    backing = MemoryStore()
    HistoryStore(backing).append(_entry("persisted"))

    (entry,) = HistoryStore(backing).all()

    assert entry.result.reason == ("unverified",)
