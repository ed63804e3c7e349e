"""
Granting and revoking budget access.

Only a current owner of a budget may change who else owns it. Revoking the
last owner leaves the budget orphaned; it is not deleted.
"""

from __future__ import annotations

import logging

from auth import repository as auth_repository
from core.errors import ApiError, ErrorKind
from ownership.guard import BUDGET_GUARD

from . import repository, schemas

logger = logging.getLogger(__name__)


async def grant(payload: schemas.AssociationRequest, *, user_id: int) -> schemas.AssociationResponse:
    await BUDGET_GUARD.authorize(user_id, payload.budgetid)

    if await auth_repository.get_user_by_id(payload.userid) is None:
        raise ApiError(ErrorKind.NOT_FOUND, "User not found.")

    row = await repository.add_association(user_id=payload.userid, budget_id=payload.budgetid)
    logger.info(
        "budget_access_granted budget_id=%s target_user_id=%s by_user_id=%s",
        payload.budgetid,
        payload.userid,
        user_id,
    )
    return schemas.AssociationResponse(**row)


async def revoke(payload: schemas.AssociationRequest, *, user_id: int) -> schemas.AssociationRemovedResponse:
    await BUDGET_GUARD.authorize(user_id, payload.budgetid)

    removed = await repository.remove_association(user_id=payload.userid, budget_id=payload.budgetid)
    if not removed:
        raise ApiError(ErrorKind.NOT_FOUND, "Association not found.")

    logger.info(
        "budget_access_revoked budget_id=%s target_user_id=%s by_user_id=%s",
        payload.budgetid,
        payload.userid,
        user_id,
    )
    return schemas.AssociationRemovedResponse(userid=payload.userid, budgetid=payload.budgetid)


async def members(budget_id: int, *, user_id: int) -> schemas.BudgetMembersResponse:
    await BUDGET_GUARD.authorize(user_id, budget_id)
    rows = await repository.list_budget_members(budget_id)
    return schemas.BudgetMembersResponse(
        budgetid=budget_id,
        members=[schemas.BudgetMember(**row) for row in rows],
        count=len(rows),
    )
