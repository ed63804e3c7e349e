"""
Ownership oracle: `user_budgets` is the only source of truth for who may
touch a budget and everything under it.
"""

from __future__ import annotations

from core import db


async def user_owns_budget(user_id: int, budget_id: int) -> bool:
    row = await db.fetch_one(
        """
        SELECT 1 AS ok
        FROM user_budgets
        WHERE userid = $1
          AND budgetid = $2
        LIMIT 1
        """,
        user_id,
        budget_id,
    )
    return row is not None
