"""
Budget API schemas.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BudgetRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    # Opaque client-side configuration; stored as jsonb.
    settings: Any = Field(default_factory=dict)


class BudgetResponse(BaseModel):
    id: int
    name: str
    settings: Any = None


class BudgetListResponse(BaseModel):
    budgets: list[BudgetResponse]
    count: int


class BudgetDeletedResponse(BaseModel):
    ok: bool = True
    budget_id: int
    deleted: dict[str, int]
