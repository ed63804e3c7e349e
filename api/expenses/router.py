"""
Expense API endpoints.
"""

from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query, status

from auth import dependencies as auth_dependencies
from auth.security import Claims

from . import schemas, service

router = APIRouter()


@router.get("/expenses", response_model=schemas.ExpenseListResponse)
async def list_expenses(
    budgetid: int = Query(...),
    start_date: dt.date | None = Query(default=None),
    end_date: dt.date | None = Query(default=None),
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.ExpenseListResponse:
    """
    Expenses of one budget, newest first. Both date bounds are inclusive.
    """
    return await service.list_expenses(
        budgetid,
        user_id=claims.user_id,
        start_date=start_date,
        end_date=end_date,
    )


# Declared before /expenses/{expense_id} so "total" is not parsed as an id.
@router.get("/expenses/total", response_model=schemas.ExpenseTotalResponse)
async def total_expenses(
    budgetid: int = Query(...),
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.ExpenseTotalResponse:
    return await service.total_expenses(budgetid, user_id=claims.user_id)


@router.get("/expenses/{expense_id}", response_model=schemas.ExpenseResponse)
async def get_expense(
    expense_id: int,
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.ExpenseResponse:
    return await service.get_expense(expense_id, user_id=claims.user_id)


@router.post("/expenses", status_code=status.HTTP_201_CREATED, response_model=schemas.ExpenseResponse)
async def create_expense(
    payload: schemas.ExpenseRequest,
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.ExpenseResponse:
    return await service.create_expense(payload, user_id=claims.user_id)


@router.put("/expenses/{expense_id}", response_model=schemas.ExpenseResponse)
async def update_expense(
    expense_id: int,
    payload: schemas.ExpenseRequest,
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.ExpenseResponse:
    return await service.update_expense(expense_id, payload, user_id=claims.user_id)


@router.delete("/expenses/{expense_id}", response_model=schemas.ExpenseDeletedResponse)
async def delete_expense(
    expense_id: int,
    claims: Claims = Depends(auth_dependencies.get_current_claims),
) -> schemas.ExpenseDeletedResponse:
    return await service.delete_expense(expense_id, user_id=claims.user_id)
