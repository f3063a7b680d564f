"""Shared test fixtures."""

import os
import time
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio

from goaltrio.db.migrations import run_migrations
from goaltrio.db.reminder_state import ReminderStateStore, Settings
from goaltrio.db.repository import Repository
from goaltrio.engine.notifier import Notifier
from goaltrio.utils.time_utils import to_millis

TZ = ZoneInfo("America/New_York")


def at(year, month, day, hour=12, minute=0, tz=TZ) -> int:
    """Epoch ms for a wall-clock time in the test zone."""
    return to_millis(datetime(year, month, day, hour, minute, tzinfo=tz))


class FakeClock:
    """Settable clock returning epoch ms."""

    def __init__(self, now: int):
        self.now = now

    def __call__(self) -> int:
        return self.now


class RecordingSurface:
    """Surface that remembers what it was asked to show."""

    def __init__(self):
        self.events = []
        self.presented = 0

    async def on_period_change(self, event):
        self.events.append(event)

    async def present(self):
        self.presented += 1


@pytest_asyncio.fixture
async def repo(tmp_path):
    db_path = tmp_path / "goaltrio.db"
    await run_migrations(db_path)
    repository = Repository(db_path)
    await repository.connect()
    yield repository
    await repository.close()


@pytest.fixture
def settings(repo):
    return Settings(repo)


@pytest.fixture
def state(repo):
    return ReminderStateStore(repo)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def notifier(surface):
    notifier = Notifier()
    notifier.subscribe(surface)
    return notifier


@pytest.fixture
def system_zone(monkeypatch):
    """Switch the process local zone used when no explicit zone is passed."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")

    def use(name):
        if not os.path.exists(os.path.join("/usr/share/zoneinfo", name)):
            pytest.skip(f"system zone data for {name} is not installed")
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield use
    monkeypatch.undo()
    time.tzset()
