"""Input normalizer tests: every helper returns a bounded value for any input."""

from __future__ import annotations

import pytest

from lansync.core.normalize import COUNTRY_IDS
from lansync.core.normalize import DEFAULT_SETTINGS
from lansync.core.normalize import normalize_country_id
from lansync.core.normalize import normalize_max_players
from lansync.core.normalize import normalize_settings
from lansync.core.normalize import parse_int_prefix
from lansync.core.normalize import sanitize_name
from lansync.core.normalize import sanitize_room


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  Friday Night!! ", "friday-night"),
        ("--Alpha__Beta--", "alpha-beta"),
        ("ÉCOLE 42", "cole-42"),
        ("", "empires-room"),
        ("!!!", "empires-room"),
        (None, "empires-room"),
        (1234, "empires-room"),
    ],
)
def test_sanitize_room(raw: object, expected: str) -> None:
    """Input: arbitrary room label -> Output: lowercase hyphen slug or default."""
    assert sanitize_room(raw) == expected


def test_sanitize_room_truncates_to_32_chars() -> None:
    room = sanitize_room("a" * 50)
    assert room == "a" * 32


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  Ada   Lovelace ", "Ada Lovelace"),
        ("tab\tand\nnewline", "tab and newline"),
        ("   ", "Commander"),
        (None, "Commander"),
        (["list"], "Commander"),
    ],
)
def test_sanitize_name(raw: object, expected: str) -> None:
    """Input: display name -> Output: trimmed, whitespace collapsed, default fallback."""
    assert sanitize_name(raw) == expected


def test_sanitize_name_caps_graphemes_not_code_points() -> None:
    """Input: 30 flag emoji (2 code points each) -> Output: 24 whole flags."""
    flag = "\U0001F1EF\U0001F1F5"
    name = sanitize_name(flag * 30)
    assert name == flag * 24


def test_sanitize_name_counts_combining_marks_as_one_character() -> None:
    """Input: 30 x `x` + combining acute (no precomposed form) -> Output: 24 visible characters."""
    accented = "x\u0301"
    name = sanitize_name(accented * 30)
    assert name == accented * 24
    assert len(name) == 48


def test_sanitize_name_drops_trailing_space_left_by_truncation() -> None:
    name = sanitize_name("a" * 23 + " bcdef")
    assert name == "a" * 23


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (3, 3),
        ("2", 2),
        ("3 players", 3),
        (1, 2),
        (9, 4),
        (0, 4),
        ("", 4),
        (None, 4),
        ("many", 4),
        (True, 4),
        (2.9, 2),
        ("\u0663", 4),
        ("9" * 5000, 4),
    ],
)
def test_normalize_max_players(raw: object, expected: int) -> None:
    assert normalize_max_players(raw) == expected


def test_normalize_country_id() -> None:
    assert normalize_country_id("japan") == "japan"
    assert normalize_country_id("atlantis") == ""
    assert normalize_country_id(None) == ""
    assert normalize_country_id(7) == ""
    assert "brazil" in COUNTRY_IDS


def test_normalize_settings_defaults_for_missing_or_malformed_input() -> None:
    assert normalize_settings(None) == DEFAULT_SETTINGS
    assert normalize_settings("classic") == DEFAULT_SETTINGS
    assert normalize_settings({}) == DEFAULT_SETTINGS


def test_normalize_settings_coerces_and_clamps_fields() -> None:
    settings = normalize_settings(
        {
            "playMode": "hotseat",
            "mapPreset": "europe-1914",
            "rulesPreset": "",
            "difficulty": 3,
            "campaignMode": "x" * 100,
            "passPlayers": "9",
        }
    )
    assert settings.play_mode == "network"
    assert settings.map_preset == "europe-1914"
    assert settings.rules_preset == "classic"
    assert settings.difficulty == "3"
    assert settings.campaign_mode == "x" * 64
    assert settings.pass_players == 6


@pytest.mark.parametrize(("raw", "expected"), [(1, 2), ("4", 4), ("abc", 2), (-3, 2)])
def test_normalize_settings_pass_players_range(raw: object, expected: int) -> None:
    assert normalize_settings({"passPlayers": raw}).pass_players == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("12", 12),
        ("  -7x", -7),
        ("\t+5", 5),
        ("x7", None),
        ("\u0663", None),
        ("\uff17", None),
        ("0042", 42),
        ("1" * 5000, 999_999_999_999_999_999),
        ("-" + "1" * 40, -999_999_999_999_999_999),
        (False, None),
        (float("nan"), None),
        ({}, None),
    ],
)
def test_parse_int_prefix(raw: object, expected: int | None) -> None:
    assert parse_int_prefix(raw) == expected
