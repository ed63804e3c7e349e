"""
Auth business logic: registration and login.
"""

from __future__ import annotations

import logging

from starlette.concurrency import run_in_threadpool

from core.config import Settings
from core.errors import ApiError, ErrorKind

from . import repository, schemas, security

logger = logging.getLogger(__name__)


def _to_auth_response(user_row: dict, *, settings: Settings) -> schemas.AuthResponse:
    user_id = int(user_row["id"])
    return schemas.AuthResponse(
        id=user_id,
        name=str(user_row["name"]),
        token=security.build_access_token(user_id=user_id, settings=settings),
    )


def require_name(raw_name: str) -> str:
    name = repository.normalize_name(raw_name)
    if not name:
        raise ApiError(ErrorKind.BAD_REQUEST, "Name is required.")
    return name


async def hash_password(plain_password: str, *, settings: Settings) -> str:
    # bcrypt is deliberately slow; keep it off the event loop.
    try:
        return await run_in_threadpool(
            security.hash_password,
            plain_password,
            rounds=settings.bcrypt_rounds,
        )
    except security.AuthSecurityError as exc:
        raise ApiError(ErrorKind.BAD_REQUEST, str(exc)) from exc


async def register(payload: schemas.RegisterRequest, *, settings: Settings) -> schemas.AuthResponse:
    name = require_name(payload.name)

    existing = await repository.get_user_by_name(name)
    if existing is not None:
        raise ApiError(ErrorKind.CONFLICT, "Name is already taken.")

    password_hash = await hash_password(payload.password, settings=settings)
    user_row = await repository.create_user(name=name, password_hash=password_hash)

    logger.info("user_registered user_id=%s", user_row["id"])
    return _to_auth_response(user_row, settings=settings)


async def login(payload: schemas.LoginRequest, *, settings: Settings) -> schemas.AuthResponse:
    user_row = await repository.get_user_by_name(payload.name)
    stored_hash = str(user_row["password_hash"]) if user_row is not None else None

    is_valid = await run_in_threadpool(
        security.verify_password_or_dummy,
        payload.password,
        stored_hash,
        rounds=settings.bcrypt_rounds,
    )
    # Unknown name and wrong password must be indistinguishable.
    if user_row is None or not is_valid:
        logger.info("login_failed")
        raise ApiError(ErrorKind.INVALID_CREDENTIALS)

    logger.info("login_succeeded user_id=%s", user_row["id"])
    return _to_auth_response(user_row, settings=settings)
