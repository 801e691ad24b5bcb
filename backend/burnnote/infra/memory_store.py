# burnnote/infra/memory_store.py

from datetime import datetime
from typing import Callable, Optional
import logging
import threading

from burnnote.core.note_logic import new_note_id, utcnow
from burnnote.core.store import NoteRecord, NoteStore

logger = logging.getLogger(__name__)


class MemoryNoteStore(NoteStore):
    """Process-local note store. Notes vanish with the process."""

    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self._clock = clock
        self._notes: dict[str, NoteRecord] = {}
        self._lock = threading.Lock()

    def create(self, ciphertext: str, expires_at: datetime) -> str:
        with self._lock:
            note_id = new_note_id()
            while note_id in self._notes:
                note_id = new_note_id()
            self._notes[note_id] = NoteRecord(
                id=note_id,
                ciphertext=ciphertext,
                read=False,
                created_at=self._clock(),
                expires_at=expires_at,
            )
        logger.info("Stored note %s (expires %s)", note_id, expires_at.isoformat())
        return note_id

    def fetch(self, note_id: str) -> Optional[NoteRecord]:
        with self._lock:
            return self._notes.get(note_id)

    def mark_read(self, note_id: str) -> None:
        with self._lock:
            self._set_read(note_id)

    def claim(self, note_id: str) -> bool:
        with self._lock:
            note = self._notes.get(note_id)
            if note is None or note.read:
                return False
            self._set_read(note_id)
            return True

    def delete(self, note_id: str) -> None:
        with self._lock:
            self._notes.pop(note_id, None)

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [nid for nid, note in self._notes.items() if note.expires_at < now]
            for note_id in expired:
                del self._notes[note_id]
        if expired:
            logger.info("Purged %d expired notes", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._notes)

    def __contains__(self, note_id: str) -> bool:
        with self._lock:
            return note_id in self._notes

    def _set_read(self, note_id: str) -> None:
        note = self._notes.get(note_id)
        if note is not None and not note.read:
            self._notes[note_id] = NoteRecord(
                id=note.id,
                ciphertext=note.ciphertext,
                read=True,
                created_at=note.created_at,
                expires_at=note.expires_at,
            )
