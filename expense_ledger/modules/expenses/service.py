# expense_ledger/modules/expenses/service.py
import logging
from typing import List, Optional

from fastapi import BackgroundTasks, HTTPException, status
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from .repository import ExpensesRepository
from .schemas import (
    ExpenseCreateRequest, BulkExpenseCreateRequest, ExpenseUpdateRequest,
    ExpenseResponse, ExpenseSummaryItem
)
from expense_ledger.shared.database.models import Expense, User
from expense_ledger.shared.schemas.common import MessageResponse
from expense_ledger.shared.services import email_templates
from expense_ledger.shared.services.notifications import dispatch_notification

logger = logging.getLogger(__name__)


class ExpensesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ExpensesRepository(db)

    def _raise_for_store_error(self, e: Exception, action: str):
        """Translate a persistence failure into an HTTP error"""
        if isinstance(e, IntegrityError):
            logger.warning(f"Constraint violation while trying to {action}: {e.orig}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Failed to {action}: a referenced record does not exist or a constraint was violated"
            )
        if isinstance(e, OperationalError):
            logger.error(f"Data store unavailable while trying to {action}: {e}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Data store unavailable"
            )
        logger.exception(f"Unexpected error while trying to {action}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action}"
        )

    def _schedule(self, background_tasks: Optional[BackgroundTasks], to: str, content: dict):
        if background_tasks is None:
            return
        background_tasks.add_task(
            dispatch_notification,
            to=to,
            subject=content["subject"],
            html=content["html"]
        )

    async def list_event_expenses(self, event_id: str) -> List[ExpenseResponse]:
        """All expenses of an event, newest first"""
        try:
            expenses = self.repository.get_expenses_by_event(event_id)
            return [ExpenseResponse.model_validate(e) for e in expenses]
        except Exception as e:
            self._raise_for_store_error(e, "fetch expenses")

    async def get_event_summary(self, event_id: str) -> List[ExpenseSummaryItem]:
        """Budget vs spend per category"""
        try:
            rows = self.repository.get_budget_summary(event_id)
            return [ExpenseSummaryItem.model_validate(row) for row in rows]
        except Exception as e:
            self._raise_for_store_error(e, "fetch expense summary")

    async def create_expense(
        self,
        expense_data: ExpenseCreateRequest,
        current_user: User,
        background_tasks: Optional[BackgroundTasks] = None
    ) -> ExpenseResponse:
        """Record one expense and notify the event coordinator"""
        try:
            expense = self.repository.create_expense(expense_data.dict(), current_user.id)
            response = ExpenseResponse.model_validate(expense)
        except Exception as e:
            self._raise_for_store_error(e, "create expense")

        coordinator = self._coordinator_of(expense)
        if coordinator:
            content = email_templates.expense_added(
                expense.event.title,
                expense.item_name,
                expense.amount,
                expense.added_by.name
            )
            self._schedule(background_tasks, coordinator.email, content)

        return response

    async def create_bulk_expenses(
        self,
        bulk_data: BulkExpenseCreateRequest,
        current_user: User,
        background_tasks: Optional[BackgroundTasks] = None
    ) -> List[ExpenseResponse]:
        """Record a batch of expenses atomically, then send one summary notification"""
        try:
            created = self.repository.create_expenses_atomic(
                [item.dict() for item in bulk_data.expenses],
                current_user.id
            )
            response = [ExpenseResponse.model_validate(e) for e in created]
        except Exception as e:
            self._raise_for_store_error(e, "create bulk expenses")

        if bulk_data.send_email and created:
            # Addressed from the first item's event only
            first = created[0]
            coordinator = self._coordinator_of(first)
            if coordinator:
                content = email_templates.bulk_expense_added(
                    first.event.title,
                    len(created),
                    sum(e.amount for e in created),
                    first.added_by.name
                )
                self._schedule(background_tasks, coordinator.email, content)

        return response

    async def update_expense(self, expense_id: str, update_data: ExpenseUpdateRequest) -> ExpenseResponse:
        """Patch an expense"""
        changes = update_data.changes()
        try:
            expense = self.repository.update_expense(expense_id, changes)
            if expense is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Expense {expense_id} not found"
                )
            logger.info(f"Expense {expense_id} updated: {sorted(changes)}")
            return ExpenseResponse.model_validate(expense)
        except HTTPException:
            raise
        except Exception as e:
            self._raise_for_store_error(e, "update expense")

    async def delete_expense(self, expense_id: str) -> MessageResponse:
        try:
            deleted = self.repository.delete_expense(expense_id)
        except Exception as e:
            self._raise_for_store_error(e, "delete expense")

        if not deleted:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Expense {expense_id} not found"
            )

        logger.info(f"Expense {expense_id} deleted")
        return MessageResponse(message="Expense deleted successfully")

    @staticmethod
    def _coordinator_of(expense: Expense) -> Optional[User]:
        if expense.event is None:
            return None
        return expense.event.coordinator
