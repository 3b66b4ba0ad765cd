"""Durable, newest-first log of completed analyses."""

import logging
from typing import List, Optional

from ..models.history import HistoryEntry, seed_entry_ids
from ..ports.key_value_store import KeyValueStore
from .persistence import load_model_list, save_model_list

logger = logging.getLogger(__name__)

HISTORY_KEY = "history"


class HistoryStore:
    """Append-only history of analyses.

    Every mutation rewrites the whole list. Corrupt stored data is dropped
    at load time; history is never allowed to break analysis.
    """

    def __init__(self, store: KeyValueStore, key: str = HISTORY_KEY):
        self._store = store
        self._key = key
        self._entries: List[HistoryEntry] = load_model_list(store, key, HistoryEntry)
        seed_entry_ids(e.id for e in self._entries)
        logger.info(f"📜 Loaded {len(self._entries)} history entries")

    def append(self, entry: HistoryEntry) -> None:
        """Add an entry at the front."""
        self._entries.insert(0, entry)
        self._persist()

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def remove(self, entry_id: str) -> bool:
        """Delete one entry. Returns False if it did not exist."""
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        self._persist()
        return True

    def clear(self) -> None:
        self._entries = []
        self._persist()

    def all(self) -> List[HistoryEntry]:
        """Entries, newest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _persist(self) -> None:
        save_model_list(self._store, self._key, self._entries)
