"""In-memory lobby registry with per-lobby locking and liveness eviction."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
import logging
import threading
import time
from typing import Any

from lansync.core.ids import new_id
from lansync.core.normalize import normalize_country_id
from lansync.core.normalize import normalize_max_players
from lansync.core.normalize import normalize_settings
from lansync.core.normalize import sanitize_name
from lansync.core.normalize import sanitize_room
from lansync.lobbies.errors import LobbyInactiveError
from lansync.lobbies.errors import LobbyNotFoundError
from lansync.lobbies.slots import add_player
from lansync.lobbies.slots import apply_settings
from lansync.lobbies.slots import assign_country
from lansync.lobbies.slots import normalize_owner_slots
from lansync.lobbies.slots import remove_player
from lansync.lobbies.state import LOBBY_OPEN
from lansync.lobbies.state import LOBBY_STARTED
from lansync.lobbies.state import OWNER_SLOTS
from lansync.lobbies.state import Lobby
from lansync.lobbies.state import Player
from lansync.lobbies.turns import begin_match
from lansync.lobbies.turns import hand_off

logger = logging.getLogger(__name__)

STALE_PLAYER_SECONDS = 45.0


def refresh_liveness(lobby: Lobby, *, now: float, stale_after: float) -> bool:
    """Evict silent players; return False when the lobby can no longer exist."""
    lobby.players = [player for player in lobby.players if now - player.last_seen <= stale_after]
    if not lobby.players:
        return False
    if not lobby.has_player(lobby.host_player_id):
        return False
    if len(lobby.players) > lobby.max_players:
        lobby.players = lobby.players[: lobby.max_players]
    normalize_owner_slots(lobby)
    if lobby.status == LOBBY_STARTED and not lobby.has_player(lobby.active_player_id):
        lobby.active_player_id = lobby.players[0].player_id
    return True


def _identity(lobby: Lobby) -> Lobby:
    return lobby


class LobbyStore:
    """Registry of live lobbies.

    Every lobby has its own re-entrant lock, so callers can hold
    ``lock_lobby`` around a mutation plus the response rendering that follows.
    ``_guard`` only protects insertion and removal in the registry dicts and is
    never held while waiting on a lobby lock.
    """

    def __init__(
        self,
        *,
        stale_after_seconds: float = STALE_PLAYER_SECONDS,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[str], str] = new_id,
    ) -> None:
        if stale_after_seconds <= 0:
            raise ValueError("stale_after_seconds must be > 0")

        self._lobbies: dict[str, Lobby] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()
        self._stale_after = stale_after_seconds
        self._clock = clock
        self._id_factory = id_factory

    def __len__(self) -> int:
        with self._guard:
            return len(self._lobbies)

    def __contains__(self, lobby_id: object) -> bool:
        with self._guard:
            return lobby_id in self._lobbies

    @property
    def stale_after_seconds(self) -> float:
        return self._stale_after

    @contextmanager
    def lock_lobby(self, lobby_id: str) -> Iterator[Lobby]:
        """Acquire one lobby write lock and yield the lobby."""
        with self._guard:
            lock = self._locks.get(lobby_id)
        if lock is None:
            raise LobbyNotFoundError(lobby_id=lobby_id)
        with lock:
            with self._guard:
                lobby = self._lobbies.get(lobby_id)
            if lobby is None:
                raise LobbyNotFoundError(lobby_id=lobby_id)
            yield lobby

    def create(
        self,
        *,
        room: object = None,
        player_name: object = None,
        country_id: object = None,
        max_players: object = None,
        ai_enabled: bool = True,
        settings: object = None,
    ) -> tuple[Lobby, Player]:
        """Create an open lobby whose only member is the host."""
        now = self._clock()
        host = Player(
            player_id=self._id_factory("player"),
            name=sanitize_name(player_name),
            country_id=normalize_country_id(country_id),
            owner_slot=OWNER_SLOTS[0],
            joined_at=now,
            last_seen=now,
        )

        with self._guard:
            lobby_id = self._id_factory("lobby")
            while lobby_id in self._lobbies:
                lobby_id = self._id_factory("lobby")
            lobby = Lobby(
                lobby_id=lobby_id,
                room=sanitize_room(room),
                host_player_id=host.player_id,
                max_players=normalize_max_players(max_players),
                ai_enabled=bool(ai_enabled),
                settings=normalize_settings(settings),
                players=[host],
                active_player_id=host.player_id,
                created_at=now,
                updated_at=now,
            )
            self._lobbies[lobby_id] = lobby
            self._locks[lobby_id] = threading.RLock()

        logger.info("lobby created lobby_id=%s room=%s host=%s", lobby_id, lobby.room, host.player_id)
        return lobby, host

    def get(self, lobby_id: str) -> Lobby:
        """Return a lobby that survived its liveness refresh."""
        with self.lock_lobby(lobby_id) as lobby:
            return self._ensure_active(lobby, now=self._clock())

    def poll(self, lobby_id: str, player_id: str = "") -> Lobby:
        """Like `get`, and mark player_id as seen when it is a member."""
        with self.lock_lobby(lobby_id) as lobby:
            now = self._clock()
            self._ensure_active(lobby, now=now)
            self._mark_seen(lobby, player_id, now=now)
            return lobby

    def list_open(self, render: Callable[[Lobby], Any] = _identity) -> list[Any]:
        """Return open lobbies in creation order, rendered under each lobby's lock."""
        with self._guard:
            lobby_ids = list(self._lobbies)

        open_lobbies: list[Any] = []
        for lobby_id in lobby_ids:
            try:
                with self.lock_lobby(lobby_id) as lobby:
                    self._ensure_active(lobby, now=self._clock(), touch=False)
                    if lobby.status == LOBBY_OPEN:
                        open_lobbies.append(render(lobby))
            except LobbyNotFoundError:
                continue
        return open_lobbies

    def destroy(self, lobby_id: str) -> bool:
        """Remove a lobby unconditionally; return whether it existed."""
        with self._guard:
            lobby = self._lobbies.pop(lobby_id, None)
            self._locks.pop(lobby_id, None)
        if lobby is None:
            return False
        logger.info("lobby destroyed lobby_id=%s", lobby_id)
        return True

    def sweep(self) -> int:
        """Run a liveness refresh on every lobby; return how many were destroyed."""
        with self._guard:
            lobby_ids = list(self._lobbies)

        removed = 0
        for lobby_id in lobby_ids:
            try:
                with self.lock_lobby(lobby_id) as lobby:
                    if not refresh_liveness(lobby, now=self._clock(), stale_after=self._stale_after):
                        self.destroy(lobby_id)
                        removed += 1
            except LobbyNotFoundError:
                continue
        if removed:
            logger.info("sweep removed %d stale lobbies", removed)
        return removed

    def join(self, lobby_id: str, *, player_name: object = None, country_id: object = None) -> tuple[Lobby, Player]:
        """Add a new player to an open lobby."""
        with self.lock_lobby(lobby_id) as lobby:
            now = self._clock()
            self._ensure_active(lobby, now=now)
            player_id = self._id_factory("player")
            while lobby.has_player(player_id):
                player_id = self._id_factory("player")
            player = add_player(
                lobby,
                player_id=player_id,
                name=sanitize_name(player_name),
                country_id=country_id,
                now=now,
            )
            lobby.updated_at = now
            logger.debug("player joined lobby_id=%s player_id=%s", lobby_id, player_id)
            return lobby, player

    def leave(self, lobby_id: str, player_id: str) -> Lobby | None:
        """Remove a player; return None when the lobby was destroyed as a result."""
        with self.lock_lobby(lobby_id) as lobby:
            now = self._clock()
            self._ensure_active(lobby, now=now)
            logger.debug("player left lobby_id=%s player_id=%s", lobby_id, player_id)
            if remove_player(lobby, player_id):
                self.destroy(lobby_id)
                return None
            lobby.updated_at = now
            return lobby

    def update_settings(
        self,
        lobby_id: str,
        player_id: str,
        *,
        max_players: object = None,
        ai_enabled: bool = True,
        settings: object = None,
    ) -> Lobby:
        with self.lock_lobby(lobby_id) as lobby:
            now = self._clock()
            self._ensure_active(lobby, now=now)
            apply_settings(
                lobby,
                player_id,
                max_players=normalize_max_players(max_players),
                ai_enabled=bool(ai_enabled),
                settings=normalize_settings(settings),
            )
            self._mark_seen(lobby, player_id, now=now)
            return lobby

    def select_country(self, lobby_id: str, player_id: str, country_id: object) -> Lobby:
        with self.lock_lobby(lobby_id) as lobby:
            now = self._clock()
            self._ensure_active(lobby, now=now)
            assign_country(lobby, player_id, country_id, now=now)
            lobby.updated_at = now
            return lobby

    def start(self, lobby_id: str, player_id: str, payload: Any) -> Lobby:
        """Launch the match with the host's initial payload."""
        with self.lock_lobby(lobby_id) as lobby:
            now = self._clock()
            self._ensure_active(lobby, now=now)
            begin_match(lobby, player_id, payload)
            self._mark_seen(lobby, player_id, now=now)
            logger.info(
                "match started lobby_id=%s players=%d version=%d",
                lobby_id,
                len(lobby.players),
                lobby.payload_version,
            )
            return lobby

    def handoff(self, lobby_id: str, player_id: str, payload: Any) -> Lobby:
        """Replace the payload and pass the turn on."""
        with self.lock_lobby(lobby_id) as lobby:
            now = self._clock()
            self._ensure_active(lobby, now=now)
            hand_off(lobby, player_id, payload)
            self._mark_seen(lobby, player_id, now=now)
            logger.debug(
                "turn handed off lobby_id=%s from=%s to=%s version=%d",
                lobby_id,
                player_id,
                lobby.active_player_id,
                lobby.payload_version,
            )
            return lobby

    def _ensure_active(self, lobby: Lobby, *, now: float, touch: bool = True) -> Lobby:
        if not refresh_liveness(lobby, now=now, stale_after=self._stale_after):
            self.destroy(lobby.lobby_id)
            raise LobbyInactiveError(lobby_id=lobby.lobby_id)
        if touch:
            lobby.updated_at = now
        return lobby

    @staticmethod
    def _mark_seen(lobby: Lobby, player_id: str, *, now: float) -> None:
        player = lobby.find_player(player_id) if player_id else None
        if player is None:
            return
        player.last_seen = now
        lobby.updated_at = now


__all__ = [
    "LOBBY_OPEN",
    "LOBBY_STARTED",
    "Lobby",
    "LobbyStore",
    "Player",
    "STALE_PLAYER_SECONDS",
    "refresh_liveness",
]
