"""Learned dictionary stores — words the user accepted, per locale."""
import json
import logging
import threading
from dataclasses import asdict, replace
from pathlib import Path
from typing import Dict, List

from keysuggest.errors import LearnedStoreUnavailable
from keysuggest.models import LearnedEntry

logger = logging.getLogger(__name__)


class InMemoryLearnedStore:
    """Learned store kept in process memory (tests, private sessions)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[int, LearnedEntry] = {}
        self._next_id = 1

    def query_all(self, locale: str) -> List[LearnedEntry]:
        with self._lock:
            return [replace(e) for e in self._entries.values() if e.locale == locale]

    def query_exact(self, word: str, locale: str) -> List[LearnedEntry]:
        with self._lock:
            return [replace(e) for e in self._entries.values()
                    if e.locale == locale and e.word == word]

    def insert(self, entry: LearnedEntry) -> int:
        """Store entry; an id of 0 means auto-generate. Returns the id."""
        with self._lock:
            previous = dict(self._entries)
            entry_id = entry.id or self._next_id
            self._entries[entry_id] = replace(entry, id=entry_id)
            self._commit(previous)
            self._next_id = max(self._next_id, entry_id) + 1
            return entry_id

    def update(self, entry: LearnedEntry):
        with self._lock:
            if entry.id not in self._entries:
                raise LearnedStoreUnavailable(f"No learned entry with id {entry.id}")
            previous = dict(self._entries)
            self._entries[entry.id] = replace(entry)
            self._commit(previous)

    def clear(self):
        with self._lock:
            previous = dict(self._entries)
            self._entries.clear()
            self._commit(previous)

    def _commit(self, previous: Dict[int, LearnedEntry]):
        try:
            self._changed()
        except LearnedStoreUnavailable:
            self._entries = previous
            raise

    def _changed(self):
        """Hook for subclasses; called with the lock held."""


class JsonLearnedStore(InMemoryLearnedStore):
    """Learned store persisted to a JSON file.

    The whole file is rewritten on every change; entries are few and
    writes happen off the typing path.
    """

    def __init__(self, path):
        super().__init__()
        self.path = Path(path).expanduser()
        self.load()

    def load(self):
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            entries = [LearnedEntry(**row) for row in data.get("entries", [])]
        except (json.JSONDecodeError, IOError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable learned store %s: %s", self.path, e)
            return

        with self._lock:
            self._entries = {e.id: e for e in entries}
            self._next_id = max(self._entries, default=0) + 1
        logger.debug("Loaded %d learned words from %s", len(entries), self.path)

    def save(self):
        with self._lock:
            self._changed()

    def _changed(self):
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({
                    "entries": [asdict(e) for e in self._entries.values()],
                }, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise LearnedStoreUnavailable(f"Cannot write {self.path}: {e}") from e
