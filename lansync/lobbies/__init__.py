"""Lobby domain package."""

from lansync.lobbies.errors import LobbyBadRequestError
from lansync.lobbies.errors import LobbyConflictError
from lansync.lobbies.errors import LobbyError
from lansync.lobbies.errors import LobbyForbiddenError
from lansync.lobbies.errors import LobbyInactiveError
from lansync.lobbies.errors import LobbyNotFoundError
from lansync.lobbies.registry import LobbyStore
from lansync.lobbies.registry import STALE_PLAYER_SECONDS
from lansync.lobbies.state import LOBBY_OPEN
from lansync.lobbies.state import LOBBY_STARTED
from lansync.lobbies.state import OWNER_SLOTS
from lansync.lobbies.state import Lobby
from lansync.lobbies.state import Player

__all__ = [
    "LOBBY_OPEN",
    "LOBBY_STARTED",
    "Lobby",
    "LobbyBadRequestError",
    "LobbyConflictError",
    "LobbyError",
    "LobbyForbiddenError",
    "LobbyInactiveError",
    "LobbyNotFoundError",
    "LobbyStore",
    "OWNER_SLOTS",
    "Player",
    "STALE_PLAYER_SECONDS",
]
