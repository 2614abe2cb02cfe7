"""Expense Ledger - budget and expense tracking for events."""

__version__ = "1.0.0"
