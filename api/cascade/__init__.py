"""Transaction-scoped deletes of budgets and users."""
