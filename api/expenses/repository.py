"""
Expense persistence.

`amount` is numeric in Postgres and decimal.Decimal in Python; it is never
converted to float on the way in or out.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from core import db

EXPENSE_COLUMNS = "id, budgetid, date, description, amount"


async def list_expenses(
    budget_id: int,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[dict[str, Any]]:
    """
    Expenses of a budget with `date` in [start_date, end_date], newest first.
    A missing bound means no limit on that side.
    """
    return await db.fetch_all(
        f"""
        SELECT {EXPENSE_COLUMNS}
        FROM expenses
        WHERE budgetid = $1
          AND ($2::date IS NULL OR date >= $2::date)
          AND ($3::date IS NULL OR date <= $3::date)
        ORDER BY date DESC, id DESC
        """,
        budget_id,
        start_date,
        end_date,
    )


async def total_for_budget(budget_id: int) -> Decimal:
    row = await db.fetch_one(
        """
        SELECT COALESCE(SUM(amount), 0) AS total
        FROM expenses
        WHERE budgetid = $1
        """,
        budget_id,
    )
    total = (row or {}).get("total")
    return Decimal(total) if total is not None else Decimal(0)


async def get_expense(expense_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {EXPENSE_COLUMNS}
        FROM expenses
        WHERE id = $1
        """,
        expense_id,
    )


async def get_expense_budget_id(expense_id: int) -> int | None:
    row = await db.fetch_one(
        "SELECT budgetid FROM expenses WHERE id = $1",
        expense_id,
    )
    return int(row["budgetid"]) if row is not None else None


async def create_expense(
    *,
    budget_id: int,
    expense_date: date,
    description: str,
    amount: Decimal,
) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO expenses (budgetid, date, description, amount)
        VALUES ($1, $2, $3, $4)
        RETURNING {EXPENSE_COLUMNS}
        """,
        budget_id,
        expense_date,
        description,
        amount,
    )
    if row is None:
        raise RuntimeError("Failed to insert expense.")
    return row


async def update_expense(
    expense_id: int,
    *,
    budget_id: int,
    expense_date: date,
    description: str,
    amount: Decimal,
) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        UPDATE expenses
        SET budgetid = $2,
            date = $3,
            description = $4,
            amount = $5
        WHERE id = $1
        RETURNING {EXPENSE_COLUMNS}
        """,
        expense_id,
        budget_id,
        expense_date,
        description,
        amount,
    )


async def delete_expense(expense_id: int) -> bool:
    row = await db.fetch_one(
        """
        DELETE FROM expenses
        WHERE id = $1
        RETURNING id
        """,
        expense_id,
    )
    return row is not None
