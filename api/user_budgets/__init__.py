"""Sharing budgets between users."""
