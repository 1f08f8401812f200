"""HTTP helpers for the unified `{ok: false, ...}` error envelope."""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.responses import Response
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

_ERROR_KEYS = {"code", "message", "detail"}


def api_error(*, code: str, message: str, detail: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build a unified API error payload."""
    return {"ok": False, "code": code, "message": message, "detail": detail or {}}


async def handle_http_exception(_: Request, exc: HTTPException) -> JSONResponse:
    """Unify HTTP errors to {ok,code,message,detail} payload."""
    if isinstance(exc.detail, dict) and _ERROR_KEYS <= set(exc.detail):
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.detail,
            headers=exc.headers,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=api_error(code="HTTP_ERROR", message=str(exc.detail)),
        headers=exc.headers,
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Report unhandled failures generically; the process keeps serving."""
    logger.exception("unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=api_error(code="INTERNAL_ERROR", message="Unexpected server error."),
    )


async def guard_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Answer bare OPTIONS with 204 and turn crashes into the error envelope.

    Registered inside CORSMiddleware so both responses still get CORS headers.
    """
    if request.method == "OPTIONS":
        return Response(status_code=204)
    try:
        return await call_next(request)
    except Exception as exc:
        return await handle_unexpected_exception(request, exc)
