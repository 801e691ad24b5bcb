# burnnote/clients/note_client.py

import logging

import requests

from burnnote.core.note_logic import parse_note_id

logger = logging.getLogger(__name__)

# =========================
# CONFIGURATION
# =========================

SERVER_URL = "http://127.0.0.1:8000"
REQUEST_TIMEOUT = 10  # seconds


class NoteClientError(Exception):
    """The server refused a request that should not fail."""

    def __init__(self, status_code: int, detail):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


# =========================
# NOTE CLIENT
# =========================

class NoteClient:
    """Drives the Burn Note HTTP API.

    view_note/unlock_note return the server's state body, e.g.
    {"status": "locked", "id": ...} or {"status": "success", "text": ...}.
    """

    def __init__(self, server_url: str = SERVER_URL, session: requests.Session | None = None,
                 timeout: float = REQUEST_TIMEOUT):
        self.server_url = server_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def create_note(self, text: str, password: str) -> str:
        """Store a note and return the shareable link."""
        resp = self.session.post(f"{self.server_url}/notes",
                                 json={"text": text, "password": password},
                                 timeout=self.timeout)
        if resp.status_code != 201:
            raise NoteClientError(resp.status_code, _detail(resp))
        body = resp.json()
        logger.info("Created note %s", body["id"])
        return body["link"]

    def view_note(self, note_id: str) -> dict:
        resp = self.session.get(f"{self.server_url}/notes/{note_id}", timeout=self.timeout)
        return self._state(resp)

    def unlock_note(self, note_id: str, password: str) -> dict:
        resp = self.session.post(f"{self.server_url}/notes/{note_id}/unlock",
                                 json={"password": password},
                                 timeout=self.timeout)
        return self._state(resp)

    def open_link(self, link: str, password: str) -> dict:
        """Unlock a note straight from a shared link."""
        note_id = parse_note_id(link)
        if note_id is None:
            return {"status": "notfound", "id": None}
        return self.unlock_note(note_id, password)

    @staticmethod
    def _state(resp: requests.Response) -> dict:
        try:
            body = resp.json()
        except ValueError:
            raise NoteClientError(resp.status_code, resp.text)
        if "status" not in body:
            raise NoteClientError(resp.status_code, body.get("detail", body))
        return body


def _detail(resp: requests.Response):
    try:
        return resp.json().get("detail", resp.text)
    except ValueError:
        return resp.text


# =========================
# DEMO USAGE
# =========================

if __name__ == "__main__":
    client = NoteClient()
    link = client.create_note("meet at noon", "secret")
    print(f"🔗 {link}")
    print(client.open_link(link, "wrong"))
    print(client.open_link(link, "secret"))
    print(client.open_link(link, "secret"))
