"""
Budget-scoped authorization guard.

Every budget-scoped resource authorizes the same way: map the resource id to
its owning budget, then ask the ownership oracle. Resources differ only in
the first step, so a guard is parameterized by that resolver.

The ownership check and the following write are separate statements; a
revoke that lands in between lets at most that one operation through.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from core.errors import ApiError, ErrorKind

from . import repository

logger = logging.getLogger(__name__)

BudgetResolver = Callable[[int], Awaitable[int | None]]


async def require_budget_owner(user_id: int, budget_id: int) -> None:
    if not await repository.user_owns_budget(user_id, budget_id):
        logger.info("ownership_denied user_id=%s budget_id=%s", user_id, budget_id)
        raise ApiError(ErrorKind.UNAUTHORIZED)


async def _budget_id_of_budget(budget_id: int) -> int | None:
    return budget_id


@dataclass(frozen=True)
class BudgetGuard:
    resource: str
    resolve_budget_id: BudgetResolver

    async def authorize(self, user_id: int, resource_id: int) -> int:
        """
        Return the owning budget id of `resource_id` if `user_id` owns it.

        Raises not_found when the resource has no row, unauthorized when the
        user is not associated with its budget.
        """
        budget_id = await self.resolve_budget_id(resource_id)
        if budget_id is None:
            raise ApiError(ErrorKind.NOT_FOUND, f"{self.resource} not found.")
        await require_budget_owner(user_id, int(budget_id))
        return int(budget_id)


# A budget id is its own owning budget. Unknown ids fall through to the
# ownership check and are denied, which does not reveal whether they exist.
BUDGET_GUARD = BudgetGuard(resource="Budget", resolve_budget_id=_budget_id_of_budget)
