"""
User profile schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class UpdateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=8, max_length=72)


class UserResponse(BaseModel):
    id: int
    name: str


class UserDeletedResponse(BaseModel):
    ok: bool = True
    user_id: int
    deleted: dict[str, int]
