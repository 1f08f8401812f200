"""In-memory lobby and player state."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any

from lansync.core.normalize import DEFAULT_MAX_PLAYERS
from lansync.core.normalize import LobbySettings

LOBBY_OPEN = "open"
LOBBY_STARTED = "started"

# Commander seats in allocation priority order.
OWNER_SLOTS: tuple[str, ...] = ("player", "ai1", "ai2", "ai3")


@dataclass(slots=True)
class Player:
    """Lobby member tracked in memory."""

    player_id: str
    name: str
    country_id: str = ""
    owner_slot: str = ""
    joined_at: float = 0.0
    last_seen: float = 0.0


@dataclass(slots=True)
class Lobby:
    """Lobby aggregate state; roster order is turn order."""

    lobby_id: str
    room: str
    host_player_id: str
    status: str = LOBBY_OPEN
    max_players: int = DEFAULT_MAX_PLAYERS
    ai_enabled: bool = True
    settings: LobbySettings = field(default_factory=LobbySettings)
    players: list[Player] = field(default_factory=list)
    active_player_id: str = ""
    payload: Any = None
    payload_version: int = 0
    created_at: float = 0.0
    updated_at: float = 0.0

    def find_player(self, player_id: str) -> Player | None:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def has_player(self, player_id: str) -> bool:
        return self.find_player(player_id) is not None
