"""Lobby REST routes."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query

from lansync.api.deps import get_store
from lansync.api.deps import read_json_body
from lansync.api.errors import lobby_errors_as_http
from lansync.api.lobby_views import lobby_summary
from lansync.api.lobby_views import lobby_view
from lansync.api.lobby_views import parse_since
from lansync.lobbies.models import CreateLobbyRequest
from lansync.lobbies.models import JoinLobbyRequest
from lansync.lobbies.models import PayloadRequest
from lansync.lobbies.models import PlayerRequest
from lansync.lobbies.models import SelectCountryRequest
from lansync.lobbies.models import UpdateSettingsRequest
from lansync.lobbies.registry import LobbyStore

router = APIRouter(prefix="/api")


@router.get("/health")
def health(store: LobbyStore = Depends(get_store)) -> dict[str, object]:
    return {"ok": True, "lobbies": len(store)}


@router.get("/lobbies")
def list_lobbies(store: LobbyStore = Depends(get_store)) -> dict[str, object]:
    """Return summaries of every open lobby."""
    return {"ok": True, "lobbies": store.list_open(render=lobby_summary)}


@router.post("/lobbies")
def create_lobby(
    body: dict[str, Any] = Depends(read_json_body),
    store: LobbyStore = Depends(get_store),
) -> dict[str, object]:
    """Create a lobby hosted by the caller."""
    payload = CreateLobbyRequest.model_validate(body)
    lobby, host = store.create(
        room=payload.room,
        player_name=payload.player_name,
        country_id=payload.country_id,
        max_players=payload.max_players,
        ai_enabled=payload.ai_enabled,
        settings=payload.settings,
    )
    with lobby_errors_as_http(), store.lock_lobby(lobby.lobby_id):
        view = lobby_view(lobby)
    return {"ok": True, "playerId": host.player_id, "lobby": view}


@router.get("/lobbies/{lobby_id}")
def poll_lobby(
    lobby_id: str,
    player_id: str = Query(default="", alias="playerId"),
    since: str = Query(default="0"),
    store: LobbyStore = Depends(get_store),
) -> dict[str, object]:
    """Return lobby detail, with the payload only when newer than `since`."""
    with lobby_errors_as_http(), store.lock_lobby(lobby_id):
        lobby = store.poll(lobby_id, player_id)
        view = lobby_view(lobby, include_payload=True, since=parse_since(since))
    return {"ok": True, "lobby": view}


@router.post("/lobbies/{lobby_id}/join")
def join_lobby(
    lobby_id: str,
    body: dict[str, Any] = Depends(read_json_body),
    store: LobbyStore = Depends(get_store),
) -> dict[str, object]:
    """Join an open lobby as a new player."""
    payload = JoinLobbyRequest.model_validate(body)
    with lobby_errors_as_http(), store.lock_lobby(lobby_id):
        lobby, player = store.join(lobby_id, player_name=payload.player_name, country_id=payload.country_id)
        view = lobby_view(lobby)
    return {"ok": True, "playerId": player.player_id, "lobby": view}


@router.post("/lobbies/{lobby_id}/leave")
def leave_lobby(
    lobby_id: str,
    body: dict[str, Any] = Depends(read_json_body),
    store: LobbyStore = Depends(get_store),
) -> dict[str, object]:
    """Leave a lobby; the lobby is removed when the host leaves."""
    payload = PlayerRequest.model_validate(body)
    with lobby_errors_as_http(), store.lock_lobby(lobby_id):
        lobby = store.leave(lobby_id, payload.player_id)
        if lobby is None:
            return {"ok": True, "removed": True}
        view = lobby_view(lobby)
    return {"ok": True, "lobby": view}


@router.post("/lobbies/{lobby_id}/settings")
def update_lobby_settings(
    lobby_id: str,
    body: dict[str, Any] = Depends(read_json_body),
    store: LobbyStore = Depends(get_store),
) -> dict[str, object]:
    """Update capacity, AI flag and match settings (host only)."""
    payload = UpdateSettingsRequest.model_validate(body)
    with lobby_errors_as_http(), store.lock_lobby(lobby_id):
        lobby = store.update_settings(
            lobby_id,
            payload.player_id,
            max_players=payload.max_players,
            ai_enabled=payload.ai_enabled,
            settings=payload.settings,
        )
        view = lobby_view(lobby)
    return {"ok": True, "lobby": view}


@router.post("/lobbies/{lobby_id}/select-country")
def select_country(
    lobby_id: str,
    body: dict[str, Any] = Depends(read_json_body),
    store: LobbyStore = Depends(get_store),
) -> dict[str, object]:
    payload = SelectCountryRequest.model_validate(body)
    with lobby_errors_as_http(), store.lock_lobby(lobby_id):
        lobby = store.select_country(lobby_id, payload.player_id, payload.country_id)
        view = lobby_view(lobby)
    return {"ok": True, "lobby": view}


@router.post("/lobbies/{lobby_id}/start")
def start_match(
    lobby_id: str,
    body: dict[str, Any] = Depends(read_json_body),
    store: LobbyStore = Depends(get_store),
) -> dict[str, object]:
    """Launch the match with the host's initial game state."""
    payload = PayloadRequest.model_validate(body)
    with lobby_errors_as_http(), store.lock_lobby(lobby_id):
        lobby = store.start(lobby_id, payload.player_id, payload.payload)
        view = lobby_view(lobby)
    return {"ok": True, "lobby": view}


@router.post("/lobbies/{lobby_id}/handoff")
def handoff_turn(
    lobby_id: str,
    body: dict[str, Any] = Depends(read_json_body),
    store: LobbyStore = Depends(get_store),
) -> dict[str, object]:
    """Publish the active player's game state and pass the turn."""
    payload = PayloadRequest.model_validate(body)
    with lobby_errors_as_http(), store.lock_lobby(lobby_id):
        lobby = store.handoff(lobby_id, payload.player_id, payload.payload)
        view = lobby_view(lobby)
    return {"ok": True, "lobby": view}
