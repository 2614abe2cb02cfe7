# expense_ledger/modules/expenses/__init__.py
"""
Expenses module - event expense ledger

Records what was spent for an event against its budget categories:
- Listing of an event's expenses
- Budget vs spend summary per category
- Single and bulk expense entry with coordinator notifications
- Partial updates and deletion

Architecture:
- router.py: HTTP endpoints
- service.py: business rules, error mapping, notifications
- repository.py: data access and summary aggregation
- schemas.py: request/response models
"""

from .router import router
from .service import ExpensesService
from .repository import ExpensesRepository

__all__ = [
    "router",
    "ExpensesService",
    "ExpensesRepository"
]
