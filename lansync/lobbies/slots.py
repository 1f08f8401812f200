"""Roster membership, commander-slot allocation and country ownership."""

from __future__ import annotations

from lansync.core.normalize import LobbySettings
from lansync.core.normalize import normalize_country_id
from lansync.lobbies.errors import CapacityBelowRosterError
from lansync.lobbies.errors import CountryTakenError
from lansync.lobbies.errors import InvalidCountryError
from lansync.lobbies.errors import LobbyFullError
from lansync.lobbies.errors import LobbyNotMemberError
from lansync.lobbies.errors import LobbyStartedError
from lansync.lobbies.errors import NoFreeSlotError
from lansync.lobbies.errors import NotHostError
from lansync.lobbies.state import LOBBY_OPEN
from lansync.lobbies.state import OWNER_SLOTS
from lansync.lobbies.state import Lobby
from lansync.lobbies.state import Player


def is_valid_owner_slot(owner_slot: str) -> bool:
    return owner_slot in OWNER_SLOTS


def allocate_owner_slot(lobby: Lobby) -> str:
    """Return the highest-priority slot nobody holds, or "" when all are taken."""
    taken = {player.owner_slot for player in lobby.players if is_valid_owner_slot(player.owner_slot)}
    for slot in OWNER_SLOTS:
        if slot not in taken:
            return slot
    return ""


def normalize_owner_slots(lobby: Lobby) -> None:
    """Give every player a unique valid slot; the first holder of a slot keeps it."""
    taken: set[str] = set()
    for player in lobby.players:
        if is_valid_owner_slot(player.owner_slot) and player.owner_slot not in taken:
            taken.add(player.owner_slot)
            continue
        player.owner_slot = next((slot for slot in OWNER_SLOTS if slot not in taken), "")
        if player.owner_slot:
            taken.add(player.owner_slot)


def has_country_conflict(lobby: Lobby, country_id: str, except_player_id: str = "") -> bool:
    return any(
        player.player_id != except_player_id and player.country_id == country_id
        for player in lobby.players
    )


def add_player(lobby: Lobby, *, player_id: str, name: str, country_id: object, now: float) -> Player:
    """Append a new member at the end of the turn order."""
    if lobby.status != LOBBY_OPEN:
        raise LobbyStartedError(lobby_id=lobby.lobby_id)
    if len(lobby.players) >= lobby.max_players:
        raise LobbyFullError(lobby_id=lobby.lobby_id)

    owner_slot = allocate_owner_slot(lobby)
    if not owner_slot:
        raise NoFreeSlotError(lobby_id=lobby.lobby_id)

    desired_country = normalize_country_id(country_id)
    if desired_country and has_country_conflict(lobby, desired_country):
        desired_country = ""

    player = Player(
        player_id=player_id,
        name=name,
        country_id=desired_country,
        owner_slot=owner_slot,
        joined_at=now,
        last_seen=now,
    )
    lobby.players.append(player)
    normalize_owner_slots(lobby)
    return player


def remove_player(lobby: Lobby, player_id: str) -> bool:
    """Drop player_id from the roster; return True when the lobby must be destroyed."""
    lobby.players = [player for player in lobby.players if player.player_id != player_id]
    if player_id == lobby.host_player_id or not lobby.players:
        return True

    # The departed turn holder is replaced by the head of the roster, not its successor.
    if not lobby.has_player(lobby.active_player_id):
        lobby.active_player_id = lobby.players[0].player_id
    normalize_owner_slots(lobby)
    return False


def assign_country(lobby: Lobby, player_id: str, country_id: object, *, now: float) -> Player:
    country = normalize_country_id(country_id)
    if not country:
        raise InvalidCountryError(lobby_id=lobby.lobby_id)

    player = lobby.find_player(player_id)
    if player is None:
        raise LobbyNotMemberError(lobby_id=lobby.lobby_id)
    if has_country_conflict(lobby, country, except_player_id=player_id):
        raise CountryTakenError(lobby_id=lobby.lobby_id)

    player.country_id = country
    player.last_seen = now
    return player


def apply_settings(
    lobby: Lobby,
    player_id: str,
    *,
    max_players: int,
    ai_enabled: bool,
    settings: LobbySettings,
) -> None:
    """Replace the host-controlled configuration of an open lobby."""
    if player_id != lobby.host_player_id:
        raise NotHostError("Only host can update settings.", lobby_id=lobby.lobby_id)
    if lobby.status != LOBBY_OPEN:
        raise LobbyStartedError("Cannot change settings after launch.", lobby_id=lobby.lobby_id)
    if max_players < len(lobby.players):
        raise CapacityBelowRosterError(lobby_id=lobby.lobby_id)

    lobby.max_players = max_players
    lobby.ai_enabled = ai_enabled
    lobby.settings = settings
