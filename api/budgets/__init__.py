"""Budgets owned through user_budgets."""
