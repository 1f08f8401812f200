"""Dependency helpers shared by API routers."""

from __future__ import annotations

import json
from typing import Any
from typing import NoReturn

from fastapi import Request

from lansync.api.errors import raise_api_error
from lansync.core.config import Settings
from lansync.lobbies.registry import LobbyStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> LobbyStore:
    """Return the lobby store owned by the running application."""
    return request.app.state.lobby_store


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"{name} is not valid JSON")


def _body_too_large() -> NoReturn:
    raise_api_error(status_code=413, code="PAYLOAD_TOO_LARGE", message="Body too large.", detail={})


def _invalid_body() -> NoReturn:
    raise_api_error(status_code=400, code="INVALID_BODY", message="Invalid JSON body.", detail={})


async def read_json_body(request: Request) -> dict[str, Any]:
    """Read the request body as a strict JSON object, enforcing the size ceiling.

    The body is streamed and reading stops as soon as it exceeds the ceiling,
    with or without a Content-Length header. An empty body reads as `{}`.
    """
    max_bytes = get_settings(request).lansync_max_body_bytes
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and (len(declared) > 18 or int(declared) > max_bytes):
        _body_too_large()

    raw = bytearray()
    async for chunk in request.stream():
        raw += chunk
        if len(raw) > max_bytes:
            _body_too_large()
    if not raw.strip():
        return {}

    try:
        body = json.loads(bytes(raw), parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        _invalid_body()
    if not isinstance(body, dict):
        _invalid_body()
    return body
