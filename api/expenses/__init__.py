"""Dated expense records under a budget."""
