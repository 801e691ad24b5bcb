"""Note lifecycle: create, load, unlock once, expire, purge.

The create path validates, encrypts, stores and returns a link. The view
path is the state machine in ``burnnote.core.states``; a successful unlock
claims the note atomically, so only one reader ever gets the plaintext.
"""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, Optional
import logging

from burnnote.config import MIN_PASSWORD_LENGTH, PUBLIC_BASE_URL
from burnnote.core.crypto import NoteCipher
from burnnote.core.errors import NoteValidationError, StoreUnavailable
from burnnote.core.note_logic import RETENTION, build_link, compute_expiry, is_expired, utcnow
from burnnote.core.states import (
    PASSWORD_REQUIRED,
    WRONG_PASSWORD,
    AlreadyRead,
    Expired,
    Loading,
    Locked,
    NotFound,
    Success,
    Unavailable,
    ViewState,
)
from burnnote.core.store import NoteStore
from burnnote.services.purge import PurgeScheduler

logger = logging.getLogger(__name__)


def _utf8_encodable(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def validate_submission(text: str, password: str,
                        min_password_length: int = MIN_PASSWORD_LENGTH) -> None:
    """Raise NoteValidationError listing every bad field."""
    errors = {}
    if not text or not text.strip():
        errors["text"] = "Message text is required."
    elif not _utf8_encodable(text):
        errors["text"] = "Message text contains invalid characters."
    if not password or not password.strip():
        errors["password"] = PASSWORD_REQUIRED
    elif len(password) < min_password_length:
        errors["password"] = f"Password must be at least {min_password_length} characters."
    elif not _utf8_encodable(password):
        errors["password"] = "Password contains invalid characters."
    if errors:
        raise NoteValidationError(errors)


class NoteService:
    def __init__(
        self,
        store: NoteStore,
        cipher: Optional[NoteCipher] = None,
        purger: Optional[PurgeScheduler] = None,
        base_url: str = PUBLIC_BASE_URL,
        clock: Callable[[], datetime] = utcnow,
        retention: timedelta = RETENTION,
    ):
        self.store = store
        self.cipher = cipher or NoteCipher()
        self.purger = purger or PurgeScheduler(store)
        self.base_url = base_url
        self.clock = clock
        self.retention = retention

    # ---------- CREATE ----------

    def submit_note(self, text: str, password: str) -> str:
        """Encrypt and store a note; return its shareable link.

        Raises NoteValidationError before any work is done, and
        StoreUnavailable if the note could not be written.
        """
        validate_submission(text, password)

        ciphertext = self.cipher.encrypt(text, password)
        expires_at = compute_expiry(self.clock(), self.retention)
        note_id = self.store.create(ciphertext, expires_at)

        logger.info("Note %s created", note_id)
        return build_link(self.base_url, note_id)

    # ---------- VIEW ----------

    def load_note(self, note_id: Optional[str]) -> ViewState:
        if not note_id:
            return NotFound(note_id)

        try:
            note = self.store.fetch(note_id)
        except StoreUnavailable as e:
            logger.warning("Could not load note %s: %s", note_id, e)
            return Unavailable(note_id)

        if note is None:
            return NotFound(note_id)

        if is_expired(note.expires_at, self.clock()):
            return self._expire(note_id)

        if note.read:
            return AlreadyRead(note_id)

        return Locked(note_id=note_id, ciphertext=note.ciphertext, expires_at=note.expires_at)

    def unlock(self, state: ViewState, password: str) -> ViewState:
        """Try a password against a Locked note. Other states pass through."""
        if not isinstance(state, Locked):
            return state

        if not password:
            return replace(state, error=PASSWORD_REQUIRED)

        if is_expired(state.expires_at, self.clock()):
            return self._expire(state.note_id)

        plaintext = self.cipher.decrypt(state.ciphertext, password)
        if plaintext is None:
            logger.info("Wrong password for note %s", state.note_id)
            return replace(state, error=WRONG_PASSWORD)

        try:
            claimed = self.store.claim(state.note_id)
        except StoreUnavailable as e:
            # Without a recorded read we cannot promise a single delivery
            logger.warning("Could not mark note %s as read: %s", state.note_id, e)
            return Unavailable(state.note_id)

        if not claimed:
            logger.info("Note %s was already read by another session", state.note_id)
            return AlreadyRead(state.note_id)

        self.purger.schedule(state.note_id)
        logger.info("Note %s read", state.note_id)
        return Success(note_id=state.note_id, text=plaintext)

    def read_note(self, note_id: Optional[str], password: str) -> ViewState:
        """Load and unlock in one call, for stateless callers."""
        return self.unlock(self.load_note(note_id), password)

    # ---------- HOUSEKEEPING ----------

    def sweep_expired(self) -> int:
        return self.store.purge_expired(self.clock())

    def _expire(self, note_id: str) -> Expired:
        try:
            self.store.delete(note_id)
            logger.info("Note %s expired and was deleted", note_id)
        except StoreUnavailable as e:
            logger.warning("Could not delete expired note %s: %s", note_id, e)
        return Expired(note_id)


class NoteView:
    """One page instance viewing one note link.

    Reopening the link means constructing a new NoteView.
    """

    def __init__(self, service: NoteService, note_id: Optional[str]):
        self.service = service
        self.note_id = note_id
        self.state: ViewState = Loading(note_id)

    def load(self) -> ViewState:
        if isinstance(self.state, (Loading, Unavailable)):
            self.state = self.service.load_note(self.note_id)
        return self.state

    def unlock(self, password: str) -> ViewState:
        self.state = self.service.unlock(self.state, password)
        return self.state
