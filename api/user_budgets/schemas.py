"""
User-budget association schemas.
"""

from __future__ import annotations

from pydantic import BaseModel


class AssociationRequest(BaseModel):
    userid: int
    budgetid: int


class AssociationResponse(BaseModel):
    userid: int
    budgetid: int


class BudgetMember(BaseModel):
    userid: int
    name: str


class BudgetMembersResponse(BaseModel):
    budgetid: int
    members: list[BudgetMember]
    count: int


class AssociationRemovedResponse(BaseModel):
    ok: bool = True
    userid: int
    budgetid: int
