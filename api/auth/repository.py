"""
Credential store: user rows (name + bcrypt hash).
"""

from __future__ import annotations

import asyncpg

from core import db
from core.errors import ApiError, ErrorKind


def normalize_name(name: str) -> str:
    return (name or "").strip()


async def create_user(*, name: str, password_hash: str) -> dict:
    try:
        row = await db.fetch_one(
            """
            INSERT INTO users (name, password_hash)
            VALUES ($1, $2)
            RETURNING id, name
            """,
            normalize_name(name),
            password_hash,
        )
    except asyncpg.UniqueViolationError as exc:
        raise ApiError(ErrorKind.CONFLICT, "Name is already taken.") from exc
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


async def get_user_by_name(name: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name, password_hash
        FROM users
        WHERE name = $1
        """,
        normalize_name(name),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, name
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def update_user(user_id: int, *, name: str, password_hash: str) -> dict | None:
    try:
        return await db.fetch_one(
            """
            UPDATE users
            SET name = $2,
                password_hash = $3
            WHERE id = $1
            RETURNING id, name
            """,
            user_id,
            normalize_name(name),
            password_hash,
        )
    except asyncpg.UniqueViolationError as exc:
        raise ApiError(ErrorKind.CONFLICT, "Name is already taken.") from exc
