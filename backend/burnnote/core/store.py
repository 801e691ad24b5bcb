# burnnote/core/store.py

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class NoteRecord:
    """Detached snapshot of a stored note. Timestamps are aware UTC."""

    id: str
    ciphertext: str
    read: bool
    created_at: Optional[datetime]
    expires_at: datetime


class NoteStore(ABC):
    """CRUD over the note backend. Holds no business rules.

    Backend failures surface as StoreUnavailable; nothing here retries.
    """

    @abstractmethod
    def create(self, ciphertext: str, expires_at: datetime) -> str:
        """Insert an unread note and return its new id."""

    @abstractmethod
    def fetch(self, note_id: str) -> Optional[NoteRecord]:
        """Return the note, or None if no record exists."""

    @abstractmethod
    def mark_read(self, note_id: str) -> None:
        """Set read=True. Idempotent."""

    @abstractmethod
    def claim(self, note_id: str) -> bool:
        """Set read=True only if it is still False; True if this call flipped it."""

    @abstractmethod
    def delete(self, note_id: str) -> None:
        """Remove the note. Missing ids are ignored."""

    @abstractmethod
    def purge_expired(self, now: datetime) -> int:
        """Remove every note with expires_at before now; return how many."""
