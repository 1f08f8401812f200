"""Periodic sweep task tests."""

from __future__ import annotations

import asyncio

from lansync.lobbies.registry import LobbyStore
from lansync.lobbies.sweeper import start_sweeper
from lansync.lobbies.sweeper import stop_sweeper


def test_start_sweeper_disabled_with_zero_interval(store: LobbyStore) -> None:
    async def _run() -> None:
        assert start_sweeper(store, interval_seconds=0) is None
        await stop_sweeper(None)

    asyncio.run(_run())


def test_sweeper_evicts_stale_lobbies_until_stopped(store: LobbyStore, clock) -> None:
    stale, _ = store.create(room="stale")
    clock.advance(60)
    fresh, _ = store.create(room="fresh")

    async def _run() -> None:
        task = start_sweeper(store, interval_seconds=0.01)
        assert task is not None
        for _ in range(200):
            if stale.lobby_id not in store:
                break
            await asyncio.sleep(0.01)
        await stop_sweeper(task)
        assert task.cancelled()

    asyncio.run(_run())
    assert stale.lobby_id not in store
    assert fresh.lobby_id in store


def test_sweeper_survives_sweep_failures(store: LobbyStore, monkeypatch) -> None:
    calls = []

    def _boom() -> int:
        calls.append(1)
        raise RuntimeError("sweep exploded")

    monkeypatch.setattr(store, "sweep", _boom)

    async def _run() -> None:
        task = start_sweeper(store, interval_seconds=0.01)
        for _ in range(200):
            if len(calls) >= 2:
                break
            await asyncio.sleep(0.01)
        await stop_sweeper(task)

    asyncio.run(_run())
    assert len(calls) >= 2
