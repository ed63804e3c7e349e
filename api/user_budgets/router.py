"""
User-budget association endpoints (sharing a budget with other users).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies
from auth.security import Claims

from . import schemas, service

router = APIRouter()


@router.get("/user_budgets", response_model=schemas.BudgetMembersResponse)
async def list_members(
    budgetid: int = Query(...),
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.BudgetMembersResponse:
    return await service.members(budgetid, user_id=claims.user_id)


@router.post("/user_budgets", status_code=status.HTTP_201_CREATED, response_model=schemas.AssociationResponse)
async def add_association(
    payload: schemas.AssociationRequest,
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.AssociationResponse:
    return await service.grant(payload, user_id=claims.user_id)


@router.delete("/user_budgets", response_model=schemas.AssociationRemovedResponse)
async def remove_association(
    userid: int = Query(...),
    budgetid: int = Query(...),
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.AssociationRemovedResponse:
    """
    Revoke access. `userid` and `budgetid` come from the query string.
    """
    payload = schemas.AssociationRequest(userid=userid, budgetid=budgetid)
    return await service.revoke(payload, user_id=claims.user_id)
