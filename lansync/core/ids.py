"""Opaque identifiers for lobbies and players."""

from __future__ import annotations

import secrets

ID_RANDOM_BYTES = 8


def new_id(prefix: str) -> str:
    """Return `<prefix>-<hex>` built from a cryptographically strong random source."""
    return f"{prefix}-{secrets.token_hex(ID_RANDOM_BYTES)}"
