"""Local JSON-file store for period entries and symptom tags.

The store is the only owner of persisted data.  Everything else works on
snapshots handed out by ``TrackerStore.snapshot()``: deep copies taken under
the store lock, so a reader never sees a half-applied mutation.

On disk the data is a single document::

    {"entries": [{"date": "2024-01-01", "cycle_length": 28, ...}],
     "symptoms": [{"id": "...", "date": "2024-01-02", "tag": "cramps"}]}

Writes go to a temp file in the same directory followed by ``os.replace``.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from datetime import date
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from flowcast.models.tracking import DataSnapshot, Entry, ImportDocument, Symptom

logger = logging.getLogger("flowcast.store")

StoreListener = Callable[[DataSnapshot], None]


class TrackerStore:
    """Thread-safe entry/symptom store backed by one JSON file.

    Usage::

        store = TrackerStore(Path("~/.flowcast/flowcast-data.json").expanduser())
        store.upsert_entry(Entry(date=date(2024, 1, 1), cycle_length=28))
        snapshot = store.snapshot()

    Pass ``path=None`` for a purely in-memory store.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._entries: dict[date, Entry] = {}
        self._symptoms: list[Symptom] = []
        self._listeners: list[StoreListener] = []
        self._load()

    @property
    def path(self) -> Path | None:
        return self._path

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> None:
        if self._path is None or not self._path.exists():
            return
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            snapshot = DataSnapshot.model_validate(raw)
        except (OSError, ValueError, ValidationError) as exc:
            # Left untouched on disk until the next successful write
            logger.error("Could not read %s, starting empty: %s", self._path, exc)
            return
        self._entries = {e.date: e for e in snapshot.entries}
        self._symptoms = list(snapshot.symptoms)
        logger.info(
            "Loaded %d entries and %d symptoms from %s",
            len(self._entries),
            len(self._symptoms),
            self._path,
        )

    def _persist(self) -> None:
        """Write current state to disk.  Caller holds the lock."""
        if self._path is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        document = self._snapshot_unlocked().model_dump(mode="json")
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=".flowcast-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, indent=2)
            os.replace(tmp_name, self._path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _snapshot_unlocked(self) -> DataSnapshot:
        return DataSnapshot(
            entries=[e.model_copy(deep=True) for e in self._entries.values()],
            symptoms=[s.model_copy(deep=True) for s in self._symptoms],
        )

    def _commit(self, entries: dict[date, Entry], symptoms: list[Symptom]) -> DataSnapshot:
        """Swap in new collections, persist them, and build the snapshot.

        If the write fails the previous collections are put back, so memory
        never holds a change the file does not.  Caller holds the lock.
        """
        previous = (self._entries, self._symptoms)
        self._entries, self._symptoms = entries, symptoms
        try:
            self._persist()
        except OSError as exc:
            self._entries, self._symptoms = previous
            logger.error("Could not write %s, change discarded: %s", self._path, exc)
            raise
        return self._snapshot_unlocked()

    def _notify(self, snapshot: DataSnapshot) -> None:
        for listener in list(self._listeners):
            listener(snapshot)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def snapshot(self) -> DataSnapshot:
        """Return an isolated copy of both collections."""
        with self._lock:
            return self._snapshot_unlocked()

    def entries_newest_first(self) -> list[Entry]:
        return sorted(self.snapshot().entries, key=lambda e: e.date, reverse=True)

    def symptoms_newest_first(self) -> list[Symptom]:
        # sorted() is stable: same-day symptoms keep their logging order
        return sorted(self.snapshot().symptoms, key=lambda s: s.date, reverse=True)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a callback invoked with a fresh snapshot after every mutation.

        Returns:
            A function that removes the listener.
        """
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def upsert_entry(self, entry: Entry) -> Entry:
        """Insert an entry, replacing any existing entry with the same date."""
        with self._lock:
            replaced = entry.date in self._entries
            entries = dict(self._entries)
            entries[entry.date] = entry.model_copy(deep=True)
            snapshot = self._commit(entries, self._symptoms)
        logger.info("%s entry for %s", "Replaced" if replaced else "Added", entry.date)
        self._notify(snapshot)
        return entry

    def delete_entry(self, entry_date: date) -> None:
        """Delete the entry for ``entry_date``.

        Raises:
            KeyError: If no entry exists for that date.
        """
        with self._lock:
            if entry_date not in self._entries:
                raise KeyError(entry_date)
            entries = {d: e for d, e in self._entries.items() if d != entry_date}
            snapshot = self._commit(entries, self._symptoms)
        logger.info("Deleted entry for %s", entry_date)
        self._notify(snapshot)

    def add_symptom(self, tag: str, symptom_date: date | None = None) -> Symptom:
        """Log a symptom tag, dated today unless a date is given."""
        symptom = Symptom(date=symptom_date or date.today(), tag=tag)
        with self._lock:
            snapshot = self._commit(self._entries, [*self._symptoms, symptom])
        logger.info("Logged symptom %s for %s", symptom.id, symptom.date)
        self._notify(snapshot)
        return symptom

    def delete_symptom(self, symptom_id: str) -> None:
        """Delete one symptom by id.

        Raises:
            KeyError: If no symptom has that id.
        """
        with self._lock:
            index = next(
                (i for i, s in enumerate(self._symptoms) if s.id == symptom_id), None
            )
            if index is None:
                raise KeyError(symptom_id)
            symptoms = self._symptoms[:index] + self._symptoms[index + 1 :]
            snapshot = self._commit(self._entries, symptoms)
        logger.info("Deleted symptom %s", symptom_id)
        self._notify(snapshot)

    def replace_all(self, document: ImportDocument) -> DataSnapshot:
        """Bulk-replace the collections present in an already validated import.

        Duplicate entry dates collapse, the last one wins.  A collection
        missing from the document is kept as-is.
        """
        with self._lock:
            entries, symptoms = self._entries, self._symptoms
            if document.entries is not None:
                entries = {e.date: e.model_copy(deep=True) for e in document.entries}
            if document.symptoms is not None:
                symptoms = [s.model_copy(deep=True) for s in document.symptoms]
            snapshot = self._commit(entries, symptoms)
        logger.info(
            "Imported snapshot: %d entries, %d symptoms",
            len(snapshot.entries),
            len(snapshot.symptoms),
        )
        self._notify(snapshot)
        return snapshot

    def clear(self) -> None:
        """Remove all local data."""
        with self._lock:
            snapshot = self._commit({}, [])
        logger.info("Cleared all local data")
        self._notify(snapshot)
