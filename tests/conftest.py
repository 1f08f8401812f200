"""Shared fixtures for lobby store and API tests."""

from __future__ import annotations

from collections.abc import Iterator
import itertools

import pytest
from fastapi.testclient import TestClient

from lansync.core.config import Settings
from lansync.lobbies.registry import LobbyStore
from lansync.main import create_app


class FakeClock:
    """Manually advanced clock in seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sequential_ids():
    """Deterministic id factory: lobby-1, player-1, player-2, ..."""
    counters: dict[str, itertools.count] = {}

    def _factory(prefix: str) -> str:
        counter = counters.setdefault(prefix, itertools.count(1))
        return f"{prefix}-{next(counter)}"

    return _factory


@pytest.fixture
def store(clock: FakeClock, sequential_ids) -> LobbyStore:
    return LobbyStore(stale_after_seconds=45.0, clock=clock, id_factory=sequential_ids)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(lansync_sweep_interval_seconds=0, lansync_max_body_bytes=4096)


@pytest.fixture
def client(test_settings: Settings, store: LobbyStore) -> Iterator[TestClient]:
    app = create_app(settings=test_settings, store=store)
    with TestClient(app) as test_client:
        yield test_client
