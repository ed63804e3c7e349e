"""
Expense API schemas.

Amounts are Decimal end to end; pydantic serializes them as JSON strings
("12.30"), so clients never see a binary float.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ExpenseRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    budgetid: int
    date: dt.date
    description: str = Field(..., max_length=500)
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)


class ExpenseResponse(BaseModel):
    id: int
    budgetid: int
    date: dt.date
    description: str
    amount: Decimal


class ExpenseListResponse(BaseModel):
    budgetid: int
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    expenses: list[ExpenseResponse]
    count: int


class ExpenseTotalResponse(BaseModel):
    budgetid: int
    total: Decimal


class ExpenseDeletedResponse(BaseModel):
    ok: bool = True
    expense_id: int
