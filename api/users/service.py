"""
User profile business logic.

A user may only read, change or delete their own account.
"""

from __future__ import annotations

import logging

from auth import repository as auth_repository
from auth import service as auth_service
from cascade import service as cascade_service
from core.config import Settings
from core.errors import ApiError, ErrorKind

from . import schemas

logger = logging.getLogger(__name__)


def _require_self(user_id: int, *, claims_user_id: int) -> None:
    if user_id != claims_user_id:
        logger.info("user_access_denied user_id=%s claims_user_id=%s", user_id, claims_user_id)
        raise ApiError(ErrorKind.UNAUTHORIZED, "You can only manage your own account.")


async def me(*, user_id: int) -> schemas.UserResponse:
    row = await auth_repository.get_user_by_id(user_id)
    if row is None:
        raise ApiError(ErrorKind.NOT_FOUND, "User not found.")
    return schemas.UserResponse(id=int(row["id"]), name=str(row["name"]))


async def update_user(
    user_id: int,
    payload: schemas.UpdateUserRequest,
    *,
    claims_user_id: int,
    settings: Settings,
) -> schemas.UserResponse:
    _require_self(user_id, claims_user_id=claims_user_id)

    name = auth_service.require_name(payload.name)
    existing = await auth_repository.get_user_by_name(name)
    if existing is not None and int(existing["id"]) != user_id:
        raise ApiError(ErrorKind.CONFLICT, "Name is already taken.")

    password_hash = await auth_service.hash_password(payload.password, settings=settings)
    row = await auth_repository.update_user(user_id, name=name, password_hash=password_hash)
    if row is None:
        raise ApiError(ErrorKind.NOT_FOUND, "User not found.")

    logger.info("user_updated user_id=%s", user_id)
    return schemas.UserResponse(id=int(row["id"]), name=str(row["name"]))


async def delete_user(user_id: int, *, claims_user_id: int) -> schemas.UserDeletedResponse:
    _require_self(user_id, claims_user_id=claims_user_id)

    stats = await cascade_service.delete_user(user_id)
    if stats.users == 0:
        raise ApiError(ErrorKind.NOT_FOUND, "User not found.")
    return schemas.UserDeletedResponse(user_id=user_id, deleted=stats.as_dict())
