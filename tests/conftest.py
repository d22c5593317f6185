from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fakes import FakeTicker, MutableClock

from eyerest.core.engine import ReminderEngine
from eyerest.data.storage import Storage


@pytest.fixture
def storage(tmp_path) -> Storage:
    storage = Storage(tmp_path / "eyerest.db")
    storage.init_db()
    return storage


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock(datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc))


@pytest.fixture
def make_engine(storage: Storage, clock: MutableClock):
    def factory(**kwargs) -> ReminderEngine:
        kwargs.setdefault("now", clock)
        kwargs.setdefault("ticker", FakeTicker())
        engine = ReminderEngine(storage=storage, **kwargs)
        engine.activate(start_ticker=False)
        return engine

    return factory


@pytest.fixture
def engine(make_engine) -> ReminderEngine:
    return make_engine()
