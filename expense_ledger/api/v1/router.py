# expense_ledger/api/v1/router.py
from fastapi import APIRouter
from expense_ledger.modules.expenses.router import router as expenses_router

# Main router for API v1
api_router = APIRouter()

api_router.include_router(
    expenses_router,
    prefix="/expenses",
    tags=["Expenses"]
)
