"""
Registration and login endpoints. These are the only routes that do not
require a bearer token: they are where tokens are minted.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.config import Settings

from . import schemas, service
from .dependencies import get_settings

router = APIRouter()


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=schemas.AuthResponse)
async def register(
    payload: schemas.RegisterRequest,
    settings: Settings = Depends(get_settings),
) -> schemas.AuthResponse:
    return await service.register(payload, settings=settings)


@router.post("/login", response_model=schemas.AuthResponse)
async def login(
    payload: schemas.LoginRequest,
    settings: Settings = Depends(get_settings),
) -> schemas.AuthResponse:
    return await service.login(payload, settings=settings)
