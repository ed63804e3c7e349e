"""
Budget business logic.
"""

from __future__ import annotations

import logging

from cascade import service as cascade_service
from core.errors import ApiError, ErrorKind
from ownership.guard import BUDGET_GUARD

from . import repository, schemas

logger = logging.getLogger(__name__)


async def list_budgets(*, user_id: int) -> schemas.BudgetListResponse:
    rows = await repository.list_budgets_for_user(user_id)
    budgets = [schemas.BudgetResponse(**row) for row in rows]
    return schemas.BudgetListResponse(budgets=budgets, count=len(budgets))


async def get_budget(budget_id: int, *, user_id: int) -> schemas.BudgetResponse:
    await BUDGET_GUARD.authorize(user_id, budget_id)
    row = await repository.get_budget(budget_id)
    if row is None:
        raise ApiError(ErrorKind.NOT_FOUND, "Budget not found.")
    return schemas.BudgetResponse(**row)


async def create_budget(
    payload: schemas.BudgetRequest,
    *,
    user_id: int,
    bind_user_id: int | None = None,
) -> schemas.BudgetResponse:
    # Older clients pass ?userid=; it may only name the caller.
    if bind_user_id is not None and bind_user_id != user_id:
        logger.info("budget_create_denied user_id=%s bind_user_id=%s", user_id, bind_user_id)
        raise ApiError(ErrorKind.UNAUTHORIZED, "Budgets can only be created for yourself.")

    row = await repository.create_budget_for_user(
        user_id=user_id,
        name=payload.name,
        settings=payload.settings,
    )
    logger.info("budget_created budget_id=%s user_id=%s", row["id"], user_id)
    return schemas.BudgetResponse(**row)


async def update_budget(
    budget_id: int,
    payload: schemas.BudgetRequest,
    *,
    user_id: int,
) -> schemas.BudgetResponse:
    await BUDGET_GUARD.authorize(user_id, budget_id)
    row = await repository.update_budget(
        budget_id,
        name=payload.name,
        settings=payload.settings,
    )
    if row is None:
        raise ApiError(ErrorKind.NOT_FOUND, "Budget not found.")
    return schemas.BudgetResponse(**row)


async def delete_budget(budget_id: int, *, user_id: int) -> schemas.BudgetDeletedResponse:
    await BUDGET_GUARD.authorize(user_id, budget_id)
    stats = await cascade_service.delete_budget(budget_id)
    if stats.budgets == 0:
        raise ApiError(ErrorKind.NOT_FOUND, "Budget not found.")
    return schemas.BudgetDeletedResponse(budget_id=budget_id, deleted=stats.as_dict())
