"""Background task that evicts stale lobbies nobody is polling."""

from __future__ import annotations

import asyncio
import logging

from lansync.lobbies.registry import LobbyStore

logger = logging.getLogger(__name__)


async def sweep_loop(store: LobbyStore, *, interval_seconds: float) -> None:
    """Run `LobbyStore.sweep` every interval_seconds until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await asyncio.to_thread(store.sweep)
        except Exception:
            logger.exception("lobby sweep failed")


def start_sweeper(store: LobbyStore, *, interval_seconds: float) -> asyncio.Task[None] | None:
    """Schedule the sweep loop on the running event loop; 0 disables it."""
    if interval_seconds <= 0:
        logger.info("periodic lobby sweep disabled")
        return None
    logger.info("periodic lobby sweep every %.1fs", interval_seconds)
    return asyncio.create_task(sweep_loop(store, interval_seconds=interval_seconds))


async def stop_sweeper(task: asyncio.Task[None] | None) -> None:
    if task is None:
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
