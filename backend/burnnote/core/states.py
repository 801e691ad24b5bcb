"""View states for a single note page.

Loading -> {NotFound, Expired, AlreadyRead, Unavailable, Locked}
Locked  -> {Success, Locked(error), AlreadyRead, Expired, Unavailable}

Everything except Loading, Locked and Unavailable is terminal for a page
instance; reopening the link starts a new page at Loading.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import ClassVar, Optional, Union


class ViewStatus(str, Enum):
    LOADING = "loading"
    NOT_FOUND = "notfound"
    EXPIRED = "expired"
    ALREADY_READ = "read"
    LOCKED = "locked"
    SUCCESS = "success"
    UNAVAILABLE = "unavailable"


WRONG_PASSWORD = "Wrong password."
PASSWORD_REQUIRED = "Password is required."


@dataclass(frozen=True)
class Loading:
    note_id: Optional[str]
    status: ClassVar[ViewStatus] = ViewStatus.LOADING


@dataclass(frozen=True)
class NotFound:
    note_id: Optional[str]
    status: ClassVar[ViewStatus] = ViewStatus.NOT_FOUND


@dataclass(frozen=True)
class Expired:
    note_id: str
    status: ClassVar[ViewStatus] = ViewStatus.EXPIRED


@dataclass(frozen=True)
class AlreadyRead:
    note_id: str
    status: ClassVar[ViewStatus] = ViewStatus.ALREADY_READ


@dataclass(frozen=True)
class Locked:
    note_id: str
    ciphertext: str
    expires_at: datetime
    error: Optional[str] = None
    status: ClassVar[ViewStatus] = ViewStatus.LOCKED

    def __repr__(self) -> str:
        # keep ciphertext out of logs and tracebacks
        return f"Locked(note_id={self.note_id!r}, error={self.error!r})"


@dataclass(frozen=True)
class Success:
    note_id: str
    text: str
    status: ClassVar[ViewStatus] = ViewStatus.SUCCESS

    def __repr__(self) -> str:
        return f"Success(note_id={self.note_id!r})"


@dataclass(frozen=True)
class Unavailable:
    note_id: Optional[str]
    detail: str = "Note storage is unavailable, try again later."
    status: ClassVar[ViewStatus] = ViewStatus.UNAVAILABLE


ViewState = Union[Loading, NotFound, Expired, AlreadyRead, Locked, Success, Unavailable]
