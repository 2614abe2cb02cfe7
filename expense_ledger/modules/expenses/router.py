# expense_ledger/modules/expenses/router.py
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session
from typing import List

from expense_ledger.config.database import get_db
from expense_ledger.core.auth.dependencies import get_current_user, get_expense_manager
from expense_ledger.shared.schemas.common import MessageResponse
from .service import ExpensesService
from .schemas import (
    ExpenseCreateRequest, BulkExpenseCreateRequest, ExpenseUpdateRequest,
    ExpenseResponse, ExpenseSummaryItem
)

router = APIRouter()

@router.get("/health")
async def expenses_health():
    """Health check for the expenses module"""
    return {
        "service": "expenses",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "Event expense listing",
            "Budget vs expense summary",
            "Single and bulk expense entry",
            "Coordinator email notifications"
        ]
    }

@router.get("/event/{event_id}", response_model=List[ExpenseResponse])
async def list_event_expenses(
    event_id: str,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List every expense recorded for an event

    **Includes:**
    - Category of each expense
    - User who added it (id, name, email)
    - Linked product, if any

    Newest first, no pagination.
    """
    service = ExpensesService(db)
    return await service.list_event_expenses(event_id)

@router.get("/event/{event_id}/summary", response_model=List[ExpenseSummaryItem])
async def get_event_summary(
    event_id: str,
    current_user = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Budget vs spend for each category of an event

    **Per row:**
    - budget_amount: approved amount, or requested amount when not approved
    - total_expense / expense_count: spend recorded in the category
    - remaining: budget_amount - total_expense
    - budgeted: False for categories with spend but no budget
    """
    service = ExpensesService(db)
    return await service.get_event_summary(event_id)

@router.post("/", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreateRequest,
    background_tasks: BackgroundTasks,
    current_user = Depends(get_expense_manager),
    db: Session = Depends(get_db)
):
    """
    Record a single expense

    **Rules:**
    - The caller is always stored as the user who added the expense
    - amount is stored as sent, it is not recomputed
    - The event coordinator is emailed after the response is sent
    """
    service = ExpensesService(db)
    return await service.create_expense(
        expense_data=expense_data,
        current_user=current_user,
        background_tasks=background_tasks
    )

@router.post("/bulk", response_model=List[ExpenseResponse], status_code=status.HTTP_201_CREATED)
async def create_bulk_expenses(
    bulk_data: BulkExpenseCreateRequest,
    background_tasks: BackgroundTasks,
    current_user = Depends(get_expense_manager),
    db: Session = Depends(get_db)
):
    """
    Record several expenses in one all-or-nothing transaction

    **Body:**
    ```json
        {
            "expenses": [{"category_id": "...", "item_name": "Chairs", "quantity": 10, "unit_price": 5, "amount": 50}],
            "send_email": true
        }
    ```
    One notification (count and total) goes to the coordinator of the first item's event.
    """
    service = ExpensesService(db)
    return await service.create_bulk_expenses(
        bulk_data=bulk_data,
        current_user=current_user,
        background_tasks=background_tasks
    )

@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: str,
    update_data: ExpenseUpdateRequest,
    current_user = Depends(get_expense_manager),
    db: Session = Depends(get_db)
):
    """Partially update item name, quantity, unit price, amount or remarks"""
    service = ExpensesService(db)
    return await service.update_expense(expense_id, update_data)

@router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    expense_id: str,
    current_user = Depends(get_expense_manager),
    db: Session = Depends(get_db)
):
    service = ExpensesService(db)
    return await service.delete_expense(expense_id)
