from datetime import datetime, timedelta, timezone
import secrets

from burnnote.config import RETENTION_DAYS

RETENTION = timedelta(days=RETENTION_DAYS)
LINK_ROUTE = "#/note/"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_note_id() -> str:
    """Unguessable URL-safe id (22 chars); doubles as the link token."""
    return secrets.token_urlsafe(16)


def compute_expiry(now: datetime, retention: timedelta = RETENTION) -> datetime:
    return now + retention


def is_expired(expires_at: datetime, now: datetime) -> bool:
    return expires_at < now


def build_link(base_url: str, note_id: str) -> str:
    """<origin>/<base-path>#/note/<id>"""
    if not note_id:
        raise ValueError("note_id must not be empty")
    return f"{base_url.rstrip('/')}/{LINK_ROUTE}{note_id}"


def parse_note_id(link: str) -> str | None:
    """Pull the note id back out of a shared link. Bare ids pass through."""
    if not link:
        return None
    if LINK_ROUTE in link:
        note_id = link.rsplit(LINK_ROUTE, 1)[1]
    elif "://" in link or "/" in link:
        return None
    else:
        note_id = link
    note_id = note_id.strip().split("?", 1)[0].strip("/")
    return note_id or None
