"""Lobby-domain errors.

Each error carries the HTTP status and stable code the API reports, and its
``str()`` is the human-readable message shown to players.
"""

from __future__ import annotations


class LobbyError(Exception):
    """Base class for lobby-domain errors."""

    status_code = 500
    code = "LOBBY_ERROR"
    default_message = "Lobby operation failed."

    def __init__(self, message: str | None = None, *, lobby_id: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.lobby_id = lobby_id


class LobbyNotFoundError(LobbyError):
    """Raised when lobby_id is not in the registry."""

    status_code = 404
    code = "LOBBY_NOT_FOUND"
    default_message = "Lobby not found."


class LobbyInactiveError(LobbyNotFoundError):
    """Raised when a liveness refresh destroyed the lobby."""

    code = "LOBBY_INACTIVE"
    default_message = "Lobby is no longer active."


class LobbyForbiddenError(LobbyError):
    status_code = 403
    code = "LOBBY_FORBIDDEN"
    default_message = "Operation not allowed for this player."


class NotHostError(LobbyForbiddenError):
    """Raised when a host-only operation is attempted by another player."""

    code = "NOT_HOST"
    default_message = "Only host can perform this action."


class LobbyNotMemberError(LobbyForbiddenError):
    """Raised when an operation requires existing lobby membership."""

    code = "LOBBY_NOT_MEMBER"
    default_message = "Player is not in this lobby."


class LobbyConflictError(LobbyError):
    status_code = 409
    code = "LOBBY_CONFLICT"
    default_message = "Lobby state does not allow this action."


class LobbyStartedError(LobbyConflictError):
    code = "LOBBY_STARTED"
    default_message = "Match already started."


class LobbyNotStartedError(LobbyConflictError):
    code = "LOBBY_NOT_STARTED"
    default_message = "Match has not started."


class LobbyFullError(LobbyConflictError):
    code = "LOBBY_FULL"
    default_message = "Lobby is full."


class NoFreeSlotError(LobbyConflictError):
    code = "NO_FREE_SLOT"
    default_message = "Lobby has no available commander slots."


class CountryTakenError(LobbyConflictError):
    code = "COUNTRY_TAKEN"
    default_message = "Country already selected by another player."


class CapacityBelowRosterError(LobbyConflictError):
    code = "CAPACITY_BELOW_ROSTER"
    default_message = "Max players cannot be below joined players."


class NotEnoughPlayersError(LobbyConflictError):
    code = "NOT_ENOUGH_PLAYERS"
    default_message = "Need at least 2 players to start."


class PlayersMissingCountryError(LobbyConflictError):
    code = "COUNTRY_MISSING"
    default_message = "All players must pick a country first."


class NotYourTurnError(LobbyConflictError):
    """Raised when someone other than the baton holder hands off."""

    code = "NOT_YOUR_TURN"
    default_message = "It is not this player's turn."


class LobbyBadRequestError(LobbyError):
    status_code = 400
    code = "BAD_REQUEST"
    default_message = "Invalid request."


class InvalidCountryError(LobbyBadRequestError):
    code = "INVALID_COUNTRY"
    default_message = "Invalid country selection."


class InvalidPayloadError(LobbyBadRequestError):
    code = "INVALID_PAYLOAD"
    default_message = "Missing game payload."


__all__ = [
    "CapacityBelowRosterError",
    "CountryTakenError",
    "InvalidCountryError",
    "InvalidPayloadError",
    "LobbyBadRequestError",
    "LobbyConflictError",
    "LobbyError",
    "LobbyForbiddenError",
    "LobbyFullError",
    "LobbyInactiveError",
    "LobbyNotFoundError",
    "LobbyNotMemberError",
    "LobbyNotStartedError",
    "LobbyStartedError",
    "NoFreeSlotError",
    "NotEnoughPlayersError",
    "NotHostError",
    "NotYourTurnError",
    "PlayersMissingCountryError",
]
