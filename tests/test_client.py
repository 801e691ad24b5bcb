"""Unit tests for burnnote.clients.note_client with a mocked requests session."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from burnnote.clients.note_client import NoteClient, NoteClientError


def _response(status_code: int, body=None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if body is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = body
    return resp


def _client(resp: MagicMock) -> tuple[NoteClient, MagicMock]:
    session = MagicMock()
    session.post.return_value = resp
    session.get.return_value = resp
    return NoteClient("http://notes.local/", session=session, timeout=3), session


class TestCreateNote:
    def test_returns_link(self):
        client, session = _client(
            _response(201, {"id": "abc", "link": "http://app/#/note/abc", "expires_in_days": 7})
        )

        assert client.create_note("meet at noon", "secret") == "http://app/#/note/abc"
        session.post.assert_called_once_with(
            "http://notes.local/notes",
            json={"text": "meet at noon", "password": "secret"},
            timeout=3,
        )

    def test_validation_error_raises(self):
        client, _ = _client(_response(400, {"detail": {"password": "too short"}}))

        with pytest.raises(NoteClientError) as exc:
            client.create_note("hi", "ab")
        assert exc.value.status_code == 400
        assert exc.value.detail == {"password": "too short"}

    def test_non_json_error(self):
        client, _ = _client(_response(502, text="Bad Gateway"))
        with pytest.raises(NoteClientError) as exc:
            client.create_note("hi", "abcd")
        assert exc.value.detail == "Bad Gateway"


class TestViewAndUnlock:
    def test_view_returns_state(self):
        client, session = _client(_response(200, {"status": "locked", "id": "abc"}))

        assert client.view_note("abc") == {"status": "locked", "id": "abc"}
        session.get.assert_called_once_with("http://notes.local/notes/abc", timeout=3)

    def test_error_states_are_data(self):
        client, _ = _client(_response(410, {"status": "read", "id": "abc"}))
        assert client.view_note("abc")["status"] == "read"

    def test_unlock_posts_password(self):
        client, session = _client(
            _response(200, {"status": "success", "id": "abc", "text": "meet at noon"})
        )

        assert client.unlock_note("abc", "secret")["text"] == "meet at noon"
        session.post.assert_called_once_with(
            "http://notes.local/notes/abc/unlock", json={"password": "secret"}, timeout=3
        )

    def test_rate_limit_raises(self):
        client, _ = _client(_response(429, {"error": "Rate limit exceeded: 10 per 1 minute"}))
        with pytest.raises(NoteClientError) as exc:
            client.unlock_note("abc", "guess")
        assert exc.value.status_code == 429


class TestOpenLink:
    def test_parses_link(self):
        client, session = _client(_response(200, {"status": "success", "id": "abc", "text": "t"}))

        client.open_link("https://app.example/#/note/abc", "secret")

        assert session.post.call_args.args[0] == "http://notes.local/notes/abc/unlock"

    def test_bad_link_is_not_found(self):
        client, session = _client(_response(200, {}))

        assert client.open_link("https://app.example/elsewhere", "secret") == {
            "status": "notfound",
            "id": None,
        }
        session.post.assert_not_called()
