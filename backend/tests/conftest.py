"""
Point the app at a throwaway in-memory database before anything imports
ironlog.settings, and give tests a clock they can move by hand.
"""
import os
from datetime import datetime, timedelta, timezone

os.environ["DATABASE_URL"] = "sqlite://"

import pytest

from ironlog.db import Base, SessionLocal, engine, init_db
from ironlog.repositories.gateway import SqlGateway
from ironlog.services.session import WorkoutSession


class FakeClock:
    def __init__(self, start: float = 1000.0, wall: datetime | None = None):
        self._start = start
        self.t = start
        self._wall = wall or datetime(2026, 10, 14, 18, 0, tzinfo=timezone.utc)

    def now(self) -> float:
        return self.t

    def wall(self) -> datetime:
        return self._wall + timedelta(seconds=self.t - self._start)

    def advance(self, seconds: float) -> None:
        self.t += seconds


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return WorkoutSession(clock)


@pytest.fixture
def gateway():
    return SqlGateway(SessionLocal)
