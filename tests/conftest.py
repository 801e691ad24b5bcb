"""Shared fixtures: simulated clock, fast cipher, both note stores."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from burnnote.core.crypto import NoteCipher
from burnnote.core.note import NoteService
from burnnote.infra.memory_store import MemoryNoteStore
from burnnote.infra.sql_store import SqlNoteStore
from burnnote.models.base import Base
from burnnote.models import note as note_model  # noqa: F401  (registers the table)
from burnnote.services.purge import PurgeScheduler

BASE_URL = "https://notes.example.com/app"

# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeTimer:
    """Stands in for threading.Timer; fire() runs the callback inline."""

    def __init__(self, interval, function, args=()) -> None:
        self.interval = interval
        self.function = function
        self.args = args
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.function(*self.args)


class TimerRecorder:
    """timer_factory that keeps every FakeTimer it builds."""

    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval, function, args=()) -> FakeTimer:
        timer = FakeTimer(interval, function, args)
        self.timers.append(timer)
        return timer


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cipher() -> NoteCipher:
    """Low iteration count keeps key derivation fast in tests."""
    return NoteCipher(iterations=1_000)


@pytest.fixture()
def memory_store(clock) -> MemoryNoteStore:
    return MemoryNoteStore(clock=clock)


@pytest.fixture()
def sql_store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield SqlNoteStore(factory)
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request, clock):
    """Every NoteStore implementation."""
    if request.param == "memory":
        return request.getfixturevalue("memory_store")
    return request.getfixturevalue("sql_store")


@pytest.fixture()
def timers() -> TimerRecorder:
    return TimerRecorder()


@pytest.fixture()
def service(store, cipher, clock, timers) -> NoteService:
    purger = PurgeScheduler(store, delay=60, timer_factory=timers)
    return NoteService(store, cipher=cipher, purger=purger, base_url=BASE_URL, clock=clock)
