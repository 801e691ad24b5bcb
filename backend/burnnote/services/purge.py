# burnnote/services/purge.py

import logging
import threading

from burnnote.config import PURGE_DELAY_SECONDS
from burnnote.core.errors import StoreUnavailable
from burnnote.core.store import NoteStore

logger = logging.getLogger(__name__)


class PurgeScheduler:
    """One-shot deferred deletes, one timer per note id.

    Timers are daemon threads: if the process exits first the delete is
    lost, and the note stays behind already marked read.
    """

    def __init__(self, store: NoteStore, delay: float = PURGE_DELAY_SECONDS,
                 timer_factory=threading.Timer):
        self._store = store
        self.delay = delay
        self._timer_factory = timer_factory
        self._timers: dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    @property
    def pending(self) -> set[str]:
        with self._lock:
            return set(self._timers)

    def schedule(self, note_id: str) -> None:
        timer = self._timer_factory(self.delay, self._fire, args=(note_id,))
        timer.daemon = True
        with self._lock:
            previous = self._timers.pop(note_id, None)
            self._timers[note_id] = timer
        if previous is not None:
            previous.cancel()
        timer.start()
        logger.info("Note %s scheduled for deletion in %.0fs", note_id, self.delay)

    def cancel(self, note_id: str) -> bool:
        with self._lock:
            timer = self._timers.pop(note_id, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    def shutdown(self) -> None:
        with self._lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()
        if timers:
            logger.info("Dropped %d pending note deletions", len(timers))

    def _fire(self, note_id: str) -> None:
        with self._lock:
            self._timers.pop(note_id, None)
        try:
            self._store.delete(note_id)
            logger.info("Deleted read note %s", note_id)
        except StoreUnavailable as e:
            # Note is already marked read; this is only space reclamation
            logger.warning("Deferred delete of note %s failed: %s", note_id, e)
