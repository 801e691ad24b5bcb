# burnnote/infra/sql_store.py

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from burnnote.core.errors import StoreUnavailable
from burnnote.core.store import NoteRecord, NoteStore
from burnnote.models.note import Note

logger = logging.getLogger(__name__)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_record(note: Note) -> NoteRecord:
    return NoteRecord(
        id=note.id,
        ciphertext=note.ciphertext,
        read=bool(note.read),
        created_at=_as_utc(note.created_at),
        expires_at=_as_utc(note.expires_at),
    )


class SqlNoteStore(NoteStore):
    """NoteStore over any SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @contextmanager
    def _session(self):
        session: Session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.warning("Note store operation failed: %s", exc)
            raise StoreUnavailable(str(exc)) from exc
        finally:
            session.close()

    def create(self, ciphertext: str, expires_at: datetime) -> str:
        with self._session() as db:
            note = Note(ciphertext=ciphertext, read=False, expires_at=expires_at)
            db.add(note)
            db.flush()
            note_id = note.id
        logger.info("Stored note %s (expires %s)", note_id, expires_at.isoformat())
        return note_id

    def fetch(self, note_id: str) -> Optional[NoteRecord]:
        with self._session() as db:
            note = db.get(Note, note_id)
            return to_record(note) if note is not None else None

    def mark_read(self, note_id: str) -> None:
        with self._session() as db:
            db.execute(update(Note).where(Note.id == note_id).values(read=True))

    def claim(self, note_id: str) -> bool:
        # Single conditional UPDATE: the row count tells us who won
        with self._session() as db:
            result = db.execute(
                update(Note)
                .where(Note.id == note_id, Note.read.is_(False))
                .values(read=True)
            )
            return result.rowcount == 1

    def delete(self, note_id: str) -> None:
        with self._session() as db:
            db.execute(delete(Note).where(Note.id == note_id))

    def purge_expired(self, now: datetime) -> int:
        with self._session() as db:
            result = db.execute(delete(Note).where(Note.expires_at < now))
            removed = result.rowcount or 0
        if removed:
            logger.info("Purged %d expired notes", removed)
        return removed
