"""
User profile endpoints. Registration lives in `auth/router.py`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from auth.security import Claims
from core.config import Settings

from . import schemas, service

router = APIRouter()


@router.get("/users/me", response_model=schemas.UserResponse)
async def me(
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.UserResponse:
    return await service.me(user_id=claims.user_id)


@router.put("/users/{user_id}", response_model=schemas.UserResponse)
async def update_user(
    user_id: int,
    payload: schemas.UpdateUserRequest,
    claims: Claims = Depends(auth_dependencies.get_current_claims),
    settings: Settings = Depends(auth_dependencies.get_settings),
) -> schemas.UserResponse:
    return await service.update_user(
        user_id,
        payload,
        claims_user_id=claims.user_id,
        settings=settings,
    )


@router.delete("/users/{user_id}", response_model=schemas.UserDeletedResponse)
async def delete_user(
    user_id: int,
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.UserDeletedResponse:
    return await service.delete_user(user_id, claims_user_id=claims.user_id)
