"""Normalization helpers for client-supplied lobby fields.

Every helper here is total: malformed, missing or hostile input collapses to a
bounded canonical value instead of raising.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import math
import unicodedata

import regex

DEFAULT_ROOM = "empires-room"
MAX_ROOM_LENGTH = 32

DEFAULT_PLAYER_NAME = "Commander"
MAX_NAME_GRAPHEMES = 24

MIN_MAX_PLAYERS = 2
MAX_MAX_PLAYERS = 4
DEFAULT_MAX_PLAYERS = 4

MIN_PASS_PLAYERS = 2
MAX_PASS_PLAYERS = 6
MAX_SETTING_LENGTH = 64

PLAY_MODE_NETWORK = "network"

COUNTRY_IDS = frozenset(
    {
        "united-states",
        "united-kingdom",
        "japan",
        "south-africa",
        "russia",
        "india",
        "brazil",
    }
)

_ROOM_INVALID_RUN = regex.compile(r"[^a-z0-9-]+")
_WHITESPACE_RUN = regex.compile(r"\s+")
_GRAPHEME_PATTERN = regex.compile(r"\X")
_LEADING_INT = regex.compile(r"[ \t\n\v\f\r]*([+-]?)([0-9]+)")
MAX_INT_DIGITS = 18


@dataclass(frozen=True, slots=True)
class LobbySettings:
    """Fixed-shape match configuration chosen by the host."""

    map_preset: str = "world-1850"
    rules_preset: str = "classic"
    difficulty: str = "very-easy"
    campaign_mode: str = "deathmatch"
    pass_players: int = 2
    play_mode: str = PLAY_MODE_NETWORK


DEFAULT_SETTINGS = LobbySettings()


def parse_int_prefix(value: object) -> int | None:
    """Parse an integer the lenient way browsers do (`"3 players"` -> 3).

    Only ASCII digits count. Digit runs longer than 18 saturate instead of
    being converted, so oversized strings stay cheap.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return None
        sign, digits = match.group(1), match.group(2).lstrip("0") or "0"
        if len(digits) > MAX_INT_DIGITS:
            digits = "9" * MAX_INT_DIGITS
        return int(sign + digits)
    return None


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


def sanitize_room(value: object) -> str:
    """Lowercase slug of at most 32 chars made of `[a-z0-9-]`."""
    raw = value.strip().lower() if isinstance(value, str) else ""
    cleaned = _ROOM_INVALID_RUN.sub("-", raw).strip("-")[:MAX_ROOM_LENGTH]
    return cleaned or DEFAULT_ROOM


def sanitize_name(value: object) -> str:
    """Trim, collapse whitespace and cap the display name at 24 graphemes.

    The cap counts user-visible characters: a flag emoji or a letter with
    combining marks is one character, however many code points it spans.
    """
    raw = unicodedata.normalize("NFC", value).strip() if isinstance(value, str) else ""
    collapsed = _WHITESPACE_RUN.sub(" ", raw)
    graphemes = _GRAPHEME_PATTERN.findall(collapsed)
    name = "".join(graphemes[:MAX_NAME_GRAPHEMES]).rstrip()
    return name or DEFAULT_PLAYER_NAME


def normalize_max_players(value: object) -> int:
    parsed = parse_int_prefix(value)
    if not parsed:
        return DEFAULT_MAX_PLAYERS
    return clamp(parsed, MIN_MAX_PLAYERS, MAX_MAX_PLAYERS)


def normalize_country_id(value: object) -> str:
    """Return the country id when it is a known faction, else the empty string."""
    if isinstance(value, str) and value in COUNTRY_IDS:
        return value
    return ""


def _setting_text(value: object, default: str) -> str:
    if not value:
        return default
    if isinstance(value, bool):
        text = "true"
    else:
        text = str(value).strip()
    return text[:MAX_SETTING_LENGTH] or default


def normalize_settings(value: object) -> LobbySettings:
    """Coerce a client settings object into a `LobbySettings` record."""
    source: Mapping[str, object] = value if isinstance(value, Mapping) else {}
    pass_players = parse_int_prefix(source.get("passPlayers")) or DEFAULT_SETTINGS.pass_players
    return LobbySettings(
        map_preset=_setting_text(source.get("mapPreset"), DEFAULT_SETTINGS.map_preset),
        rules_preset=_setting_text(source.get("rulesPreset"), DEFAULT_SETTINGS.rules_preset),
        difficulty=_setting_text(source.get("difficulty"), DEFAULT_SETTINGS.difficulty),
        campaign_mode=_setting_text(source.get("campaignMode"), DEFAULT_SETTINGS.campaign_mode),
        pass_players=clamp(pass_players, MIN_PASS_PLAYERS, MAX_PASS_PLAYERS),
    )
