"""Turn rotation and versioned game-state handoff.

Only the player holding the turn may write the payload. Each write replaces it
wholesale and bumps ``payload_version`` so pollers can tell fresh state apart.
"""

from __future__ import annotations

from typing import Any

from lansync.lobbies.errors import InvalidPayloadError
from lansync.lobbies.errors import LobbyNotStartedError
from lansync.lobbies.errors import LobbyStartedError
from lansync.lobbies.errors import NotEnoughPlayersError
from lansync.lobbies.errors import NotHostError
from lansync.lobbies.errors import NotYourTurnError
from lansync.lobbies.errors import PlayersMissingCountryError
from lansync.lobbies.state import LOBBY_OPEN
from lansync.lobbies.state import LOBBY_STARTED
from lansync.lobbies.state import Lobby

MIN_PLAYERS_TO_START = 2


def is_structured_payload(payload: Any) -> bool:
    return isinstance(payload, (dict, list))


def next_player_id(lobby: Lobby, current_player_id: str) -> str:
    """Return the roster entry after current_player_id, wrapping around."""
    if not lobby.players:
        return ""
    for idx, player in enumerate(lobby.players):
        if player.player_id == current_player_id:
            return lobby.players[(idx + 1) % len(lobby.players)].player_id
    return lobby.players[0].player_id


def begin_match(lobby: Lobby, player_id: str, payload: Any) -> None:
    """Move an open lobby to started with the host's initial payload."""
    if player_id != lobby.host_player_id:
        raise NotHostError("Only host can launch the match.", lobby_id=lobby.lobby_id)
    if lobby.status != LOBBY_OPEN:
        raise LobbyStartedError(lobby_id=lobby.lobby_id)
    if len(lobby.players) < MIN_PLAYERS_TO_START:
        raise NotEnoughPlayersError(lobby_id=lobby.lobby_id)
    if any(not player.country_id for player in lobby.players):
        raise PlayersMissingCountryError(lobby_id=lobby.lobby_id)
    if not is_structured_payload(payload):
        raise InvalidPayloadError("Missing initial game payload.", lobby_id=lobby.lobby_id)

    lobby.status = LOBBY_STARTED
    lobby.payload = payload
    lobby.payload_version = max(1, lobby.payload_version + 1)
    lobby.active_player_id = lobby.host_player_id


def hand_off(lobby: Lobby, player_id: str, payload: Any) -> None:
    """Store the active player's payload and pass the turn to the next member."""
    if lobby.status != LOBBY_STARTED:
        raise LobbyNotStartedError(lobby_id=lobby.lobby_id)
    if player_id != lobby.active_player_id:
        raise NotYourTurnError(lobby_id=lobby.lobby_id)
    if not is_structured_payload(payload):
        raise InvalidPayloadError("Missing handoff payload.", lobby_id=lobby.lobby_id)

    lobby.payload = payload
    lobby.payload_version += 1
    lobby.active_player_id = next_player_id(lobby, player_id)
