"""Who may touch which budget."""
