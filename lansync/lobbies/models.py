"""Pydantic models for lobby API request bodies.

Fields stay loosely typed: the store normalizes every value, so a sloppy
client still gets a bounded lobby instead of a validation error.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator


class LobbyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CreateLobbyRequest(LobbyRequest):
    """POST /api/lobbies request body."""

    room: Any = None
    player_name: Any = Field(default=None, alias="playerName")
    country_id: Any = Field(default=None, alias="countryId")
    max_players: Any = Field(default=None, alias="maxPlayers")
    ai_enabled: bool = Field(default=True, alias="aiEnabled")
    settings: Any = None

    @field_validator("ai_enabled", mode="before")
    @classmethod
    def enabled_unless_false(cls, value: Any) -> bool:
        return value is not False


class JoinLobbyRequest(LobbyRequest):
    """POST /api/lobbies/{lobby_id}/join request body."""

    player_name: Any = Field(default=None, alias="playerName")
    country_id: Any = Field(default=None, alias="countryId")


class PlayerRequest(LobbyRequest):
    """Body carrying the caller's player id (leave)."""

    player_id: str = Field(default="", alias="playerId")

    @field_validator("player_id", mode="before")
    @classmethod
    def player_id_as_text(cls, value: Any) -> str:
        return str(value) if value else ""


class UpdateSettingsRequest(PlayerRequest):
    """POST /api/lobbies/{lobby_id}/settings request body."""

    max_players: Any = Field(default=None, alias="maxPlayers")
    ai_enabled: bool = Field(default=True, alias="aiEnabled")
    settings: Any = None

    @field_validator("ai_enabled", mode="before")
    @classmethod
    def enabled_unless_false(cls, value: Any) -> bool:
        return value is not False


class SelectCountryRequest(PlayerRequest):
    """POST /api/lobbies/{lobby_id}/select-country request body."""

    country_id: str = Field(default="", alias="countryId")

    @field_validator("country_id", mode="before")
    @classmethod
    def country_id_as_text(cls, value: Any) -> str:
        return str(value) if value else ""


class PayloadRequest(PlayerRequest):
    """POST /api/lobbies/{lobby_id}/start and /handoff request body."""

    payload: Any = None
