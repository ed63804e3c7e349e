"""
Cascade coordinator.

Budget deletion order:
    expenses -> user_budgets -> budgets

User deletion order:
    (budget deletion for every associated budget) -> remaining user_budgets -> users

Each entity's cascade runs inside one transaction. If any statement fails the
transaction rolls back and the error propagates; no partial state is ever
committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import asyncpg

from core import db

from . import repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CascadeStats:
    budgets: int = 0
    expenses: int = 0
    associations: int = 0
    users: int = 0

    def __add__(self, other: "CascadeStats") -> "CascadeStats":
        return CascadeStats(
            budgets=self.budgets + other.budgets,
            expenses=self.expenses + other.expenses,
            associations=self.associations + other.associations,
            users=self.users + other.users,
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "budgets": self.budgets,
            "expenses": self.expenses,
            "associations": self.associations,
            "users": self.users,
        }


async def _delete_budget_tree(conn: asyncpg.Connection, budget_id: int) -> CascadeStats:
    expenses = await repository.delete_budget_expenses(conn, budget_id)
    associations = await repository.delete_budget_associations(conn, budget_id)
    budgets = await repository.delete_budget_row(conn, budget_id)
    return CascadeStats(budgets=budgets, expenses=expenses, associations=associations)


async def delete_budget(budget_id: int) -> CascadeStats:
    try:
        async with db.transaction() as conn:
            stats = await _delete_budget_tree(conn, budget_id)
    except Exception:
        logger.error("budget_cascade_failed rolled_back=true budget_id=%s", budget_id)
        raise

    logger.info(
        "budget_cascade_done budget_id=%s expenses=%s associations=%s",
        budget_id,
        stats.expenses,
        stats.associations,
    )
    return stats


async def delete_user(user_id: int) -> CascadeStats:
    """
    Delete a user together with every budget they are associated with.

    Shared budgets go too: any owner may delete a budget outright, and
    deleting an account exercises that right for each of its budgets.

    The user row is locked first, so a budget created concurrently by the
    same user either commits before the association scan (and is deleted)
    or fails its foreign key once the user is gone.
    """
    try:
        async with db.transaction() as conn:
            await repository.lock_user_row(conn, user_id)
            stats = CascadeStats()
            for budget_id in await repository.lock_user_budget_ids(conn, user_id):
                stats = stats + await _delete_budget_tree(conn, budget_id)

            stats = stats + CascadeStats(
                associations=await repository.delete_user_associations(conn, user_id),
                users=await repository.delete_user_row(conn, user_id),
            )
    except Exception:
        logger.error("user_cascade_failed rolled_back=true user_id=%s", user_id)
        raise

    logger.info(
        "user_cascade_done user_id=%s budgets=%s expenses=%s associations=%s",
        user_id,
        stats.budgets,
        stats.expenses,
        stats.associations,
    )
    return stats
