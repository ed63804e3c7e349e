"""
Budget API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies
from auth.security import Claims

from . import schemas, service

router = APIRouter()


@router.get("/budgets", response_model=schemas.BudgetListResponse)
async def list_budgets(
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.BudgetListResponse:
    return await service.list_budgets(user_id=claims.user_id)


@router.get("/budgets/{budget_id}", response_model=schemas.BudgetResponse)
async def get_budget(
    budget_id: int,
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.BudgetResponse:
    return await service.get_budget(budget_id, user_id=claims.user_id)


@router.post("/budgets", status_code=status.HTTP_201_CREATED, response_model=schemas.BudgetResponse)
async def create_budget(
    payload: schemas.BudgetRequest,
    userid: int | None = Query(default=None),
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.BudgetResponse:
    return await service.create_budget(payload, user_id=claims.user_id, bind_user_id=userid)


@router.put("/budgets/{budget_id}", response_model=schemas.BudgetResponse)
async def update_budget(
    budget_id: int,
    payload: schemas.BudgetRequest,
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.BudgetResponse:
    return await service.update_budget(budget_id, payload, user_id=claims.user_id)


@router.delete("/budgets/{budget_id}", response_model=schemas.BudgetDeletedResponse)
async def delete_budget(
    budget_id: int,
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.BudgetDeletedResponse:
    return await service.delete_budget(budget_id, user_id=claims.user_id)
