"""
Budget persistence.
"""

from __future__ import annotations

import json
from typing import Any

from core import db


def _json_arg(value: Any) -> str:
    """
    asyncpg does not automatically encode Python values for json/jsonb
    parameters. We pass JSON as a string and cast to jsonb in SQL.
    """
    return json.dumps({} if value is None else value, ensure_ascii=True)


def _json_value(raw: Any) -> Any:
    # jsonb columns come back as text unless a codec is registered.
    if isinstance(raw, str):
        return json.loads(raw)
    return raw


def _to_budget(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "name": str(row["name"]),
        "settings": _json_value(row["settings"]),
    }


async def list_budgets_for_user(user_id: int) -> list[dict[str, Any]]:
    rows = await db.fetch_all(
        """
        SELECT b.id, b.name, b.settings
        FROM budgets b
        JOIN user_budgets ub ON ub.budgetid = b.id
        WHERE ub.userid = $1
        ORDER BY b.id
        """,
        user_id,
    )
    return [_to_budget(r) for r in rows]


async def get_budget(budget_id: int) -> dict[str, Any] | None:
    row = await db.fetch_one(
        """
        SELECT id, name, settings
        FROM budgets
        WHERE id = $1
        """,
        budget_id,
    )
    return _to_budget(row) if row is not None else None


async def create_budget_for_user(*, user_id: int, name: str, settings: Any) -> dict[str, Any]:
    """
    Insert a budget and link it to its creator in a single transaction, so a
    budget never exists without an owner.
    """
    async with db.transaction() as conn:
        row = await conn.fetchrow(
            """
            INSERT INTO budgets (name, settings)
            VALUES ($1, $2::jsonb)
            RETURNING id, name, settings
            """,
            name,
            _json_arg(settings),
        )
        if row is None:
            raise RuntimeError("Failed to insert budget.")

        await conn.execute(
            "INSERT INTO user_budgets (userid, budgetid) VALUES ($1, $2)",
            user_id,
            int(row["id"]),
        )
        return _to_budget(dict(row))


async def update_budget(budget_id: int, *, name: str, settings: Any) -> dict[str, Any] | None:
    row = await db.fetch_one(
        """
        UPDATE budgets
        SET name = $2,
            settings = $3::jsonb
        WHERE id = $1
        RETURNING id, name, settings
        """,
        budget_id,
        name,
        _json_arg(settings),
    )
    return _to_budget(row) if row is not None else None
