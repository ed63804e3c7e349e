"""
Expense business logic.

Every operation is authorized through the budget that owns the expense:
by-id operations resolve the expense's budget first; list/total/create take
the budget id from the request.
"""

from __future__ import annotations

import datetime as dt
import logging

from core.errors import ApiError, ErrorKind
from ownership.guard import BUDGET_GUARD, BudgetGuard

from . import repository, schemas

logger = logging.getLogger(__name__)


async def _expense_budget_id(expense_id: int) -> int | None:
    return await repository.get_expense_budget_id(expense_id)


EXPENSE_GUARD = BudgetGuard(resource="Expense", resolve_budget_id=_expense_budget_id)


async def list_expenses(
    budget_id: int,
    *,
    user_id: int,
    start_date: dt.date | None = None,
    end_date: dt.date | None = None,
) -> schemas.ExpenseListResponse:
    if start_date is not None and end_date is not None and start_date > end_date:
        raise ApiError(ErrorKind.BAD_REQUEST, "start_date must not be after end_date.")

    await BUDGET_GUARD.authorize(user_id, budget_id)
    rows = await repository.list_expenses(budget_id, start_date=start_date, end_date=end_date)
    expenses = [schemas.ExpenseResponse(**row) for row in rows]
    return schemas.ExpenseListResponse(
        budgetid=budget_id,
        start_date=start_date,
        end_date=end_date,
        expenses=expenses,
        count=len(expenses),
    )


async def total_expenses(budget_id: int, *, user_id: int) -> schemas.ExpenseTotalResponse:
    await BUDGET_GUARD.authorize(user_id, budget_id)
    total = await repository.total_for_budget(budget_id)
    return schemas.ExpenseTotalResponse(budgetid=budget_id, total=total)


async def get_expense(expense_id: int, *, user_id: int) -> schemas.ExpenseResponse:
    await EXPENSE_GUARD.authorize(user_id, expense_id)
    row = await repository.get_expense(expense_id)
    if row is None:
        raise ApiError(ErrorKind.NOT_FOUND, "Expense not found.")
    return schemas.ExpenseResponse(**row)


async def create_expense(payload: schemas.ExpenseRequest, *, user_id: int) -> schemas.ExpenseResponse:
    await BUDGET_GUARD.authorize(user_id, payload.budgetid)
    row = await repository.create_expense(
        budget_id=payload.budgetid,
        expense_date=payload.date,
        description=payload.description,
        amount=payload.amount,
    )
    logger.info("expense_created expense_id=%s budget_id=%s user_id=%s", row["id"], payload.budgetid, user_id)
    return schemas.ExpenseResponse(**row)


async def update_expense(
    expense_id: int,
    payload: schemas.ExpenseRequest,
    *,
    user_id: int,
) -> schemas.ExpenseResponse:
    current_budget_id = await EXPENSE_GUARD.authorize(user_id, expense_id)
    # Moving an expense needs ownership on both sides.
    if payload.budgetid != current_budget_id:
        await BUDGET_GUARD.authorize(user_id, payload.budgetid)

    row = await repository.update_expense(
        expense_id,
        budget_id=payload.budgetid,
        expense_date=payload.date,
        description=payload.description,
        amount=payload.amount,
    )
    if row is None:
        raise ApiError(ErrorKind.NOT_FOUND, "Expense not found.")
    return schemas.ExpenseResponse(**row)


async def delete_expense(expense_id: int, *, user_id: int) -> schemas.ExpenseDeletedResponse:
    await EXPENSE_GUARD.authorize(user_id, expense_id)
    if not await repository.delete_expense(expense_id):
        raise ApiError(ErrorKind.NOT_FOUND, "Expense not found.")
    logger.info("expense_deleted expense_id=%s user_id=%s", expense_id, user_id)
    return schemas.ExpenseDeletedResponse(expense_id=expense_id)
