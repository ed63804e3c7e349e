"""
Auth dependencies for protected FastAPI routes.

Every protected route depends on `get_current_claims`, which runs before any
route-specific logic:

    no header        -> 401 missing_token
    malformed header -> 401 invalid_token
    bad signature    -> 401 invalid_token
    expired          -> 401 expired_token
    valid            -> Claims
"""

from __future__ import annotations

from fastapi import Depends, Header, Request

from core.config import Settings
from core.errors import ApiError, ErrorKind

from . import security


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise ApiError(ErrorKind.MISSING_TOKEN)

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise ApiError(ErrorKind.INVALID_TOKEN, "Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise ApiError(ErrorKind.INVALID_TOKEN, "Authorization must be: Bearer <token>.")
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_claims(
    access_token: str = Depends(get_bearer_token),
    settings: Settings = Depends(get_settings),
) -> security.Claims:
    try:
        return security.decode_access_token(access_token, settings=settings)
    except security.TokenExpiredError as exc:
        raise ApiError(ErrorKind.EXPIRED_TOKEN, str(exc)) from exc
    except security.AuthSecurityError as exc:
        raise ApiError(ErrorKind.INVALID_TOKEN, str(exc)) from exc
