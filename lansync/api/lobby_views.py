"""Lobby view builders used by REST responses."""

from __future__ import annotations

from lansync.core.normalize import LobbySettings
from lansync.core.normalize import parse_int_prefix
from lansync.lobbies.slots import is_valid_owner_slot
from lansync.lobbies.state import Lobby
from lansync.lobbies.state import Player


def epoch_millis(timestamp: float) -> int:
    return int(timestamp * 1000)


def parse_since(value: object) -> int:
    """Read the `since` polling watermark; anything unusable means 0."""
    return max(0, parse_int_prefix(value) or 0)


def settings_view(settings: LobbySettings) -> dict[str, object]:
    return {
        "playMode": settings.play_mode,
        "mapPreset": settings.map_preset,
        "rulesPreset": settings.rules_preset,
        "difficulty": settings.difficulty,
        "campaignMode": settings.campaign_mode,
        "passPlayers": settings.pass_players,
    }


def player_view(lobby: Lobby, player: Player) -> dict[str, object]:
    return {
        "id": player.player_id,
        "name": player.name,
        "countryId": player.country_id,
        "ownerSlot": player.owner_slot if is_valid_owner_slot(player.owner_slot) else "",
        "isHost": player.player_id == lobby.host_player_id,
    }


def lobby_view(lobby: Lobby, *, include_payload: bool = False, since: int = 0) -> dict[str, object]:
    """Render a lobby; the payload is only sent when newer than `since`."""
    send_payload = include_payload and lobby.payload is not None and lobby.payload_version > since
    return {
        "id": lobby.lobby_id,
        "room": lobby.room,
        "status": lobby.status,
        "hostPlayerId": lobby.host_player_id,
        "maxPlayers": lobby.max_players,
        "aiEnabled": lobby.ai_enabled,
        "settings": settings_view(lobby.settings),
        "playerCount": len(lobby.players),
        "players": [player_view(lobby, player) for player in lobby.players],
        "activePlayerId": lobby.active_player_id,
        "payloadVersion": lobby.payload_version,
        "payload": lobby.payload if send_payload else None,
        "createdAt": epoch_millis(lobby.created_at),
        "updatedAt": epoch_millis(lobby.updated_at),
    }


def lobby_summary(lobby: Lobby) -> dict[str, object]:
    return lobby_view(lobby)
