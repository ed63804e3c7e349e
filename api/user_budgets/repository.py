"""
Association persistence (user <-> budget ownership rows).
"""

from __future__ import annotations

from typing import Any

import asyncpg

from core import db
from core.errors import ApiError, ErrorKind


async def add_association(*, user_id: int, budget_id: int) -> dict[str, Any]:
    try:
        row = await db.fetch_one(
            """
            INSERT INTO user_budgets (userid, budgetid)
            VALUES ($1, $2)
            RETURNING userid, budgetid
            """,
            user_id,
            budget_id,
        )
    except asyncpg.UniqueViolationError as exc:
        raise ApiError(ErrorKind.CONFLICT, "User already has access to this budget.") from exc
    except asyncpg.ForeignKeyViolationError as exc:
        raise ApiError(ErrorKind.NOT_FOUND, "User or budget not found.") from exc
    if row is None:
        raise RuntimeError("Failed to insert association.")
    return row


async def remove_association(*, user_id: int, budget_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM user_budgets
        WHERE userid = $1
          AND budgetid = $2
        RETURNING userid
        """,
        user_id,
        budget_id,
    )
    return row is not None


async def list_budget_members(budget_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT ub.userid, u.name
        FROM user_budgets ub
        JOIN users u ON u.id = ub.userid
        WHERE ub.budgetid = $1
        ORDER BY ub.userid
        """,
        budget_id,
    )
