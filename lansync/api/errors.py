"""HTTP error mapping helpers for API routes."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from typing import NoReturn

from fastapi import HTTPException

from lansync.api.http import api_error
from lansync.lobbies.errors import LobbyError


def raise_api_error(
    *,
    status_code: int,
    code: str,
    message: str,
    detail: dict[str, Any],
) -> NoReturn:
    raise HTTPException(
        status_code=status_code,
        detail=api_error(code=code, message=message, detail=detail),
    )


@contextmanager
def lobby_errors_as_http() -> Iterator[None]:
    """Translate lobby-domain errors raised in the block into API errors."""
    try:
        yield
    except LobbyError as exc:
        detail = {"lobby_id": exc.lobby_id} if exc.lobby_id is not None else {}
        raise_api_error(
            status_code=exc.status_code,
            code=exc.code,
            message=str(exc),
            detail=detail,
        )
