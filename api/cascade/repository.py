"""
Cascade delete statements.

Every function here runs on a caller-supplied connection that is already
inside a transaction; none of them commit on their own.
"""

from __future__ import annotations

import asyncpg

from core import db


async def lock_user_row(conn: asyncpg.Connection, user_id: int) -> bool:
    # Blocks concurrent user_budgets inserts for this user (their FK check
    # takes a KEY SHARE lock on the row) until the cascade commits.
    row = await conn.fetchrow("SELECT id FROM users WHERE id = $1 FOR UPDATE", user_id)
    return row is not None


async def lock_user_budget_ids(conn: asyncpg.Connection, user_id: int) -> list[int]:
    rows = await conn.fetch(
        """
        SELECT budgetid
        FROM user_budgets
        WHERE userid = $1
        ORDER BY budgetid
        FOR UPDATE
        """,
        user_id,
    )
    return [int(r["budgetid"]) for r in rows]


async def delete_budget_expenses(conn: asyncpg.Connection, budget_id: int) -> int:
    status = await conn.execute("DELETE FROM expenses WHERE budgetid = $1", budget_id)
    return db.rowcount(status)


async def delete_budget_associations(conn: asyncpg.Connection, budget_id: int) -> int:
    status = await conn.execute("DELETE FROM user_budgets WHERE budgetid = $1", budget_id)
    return db.rowcount(status)


async def delete_budget_row(conn: asyncpg.Connection, budget_id: int) -> int:
    status = await conn.execute("DELETE FROM budgets WHERE id = $1", budget_id)
    return db.rowcount(status)


async def delete_user_associations(conn: asyncpg.Connection, user_id: int) -> int:
    status = await conn.execute("DELETE FROM user_budgets WHERE userid = $1", user_id)
    return db.rowcount(status)


async def delete_user_row(conn: asyncpg.Connection, user_id: int) -> int:
    status = await conn.execute("DELETE FROM users WHERE id = $1", user_id)
    return db.rowcount(status)
