# expense_ledger/modules/expenses/repository.py
import logging
from collections import defaultdict
from datetime import datetime
from typing import List, Dict, Any, Optional, Iterable

from sqlalchemy.orm import Session, joinedload

from expense_ledger.shared.database.models import Expense, Budget, Event

logger = logging.getLogger(__name__)

# Columns a client may patch on an existing expense
UPDATABLE_FIELDS = ("item_name", "quantity", "unit_price", "amount", "remarks")


def _as_id(value) -> Optional[str]:
    return str(value) if value is not None else None


def build_budget_summary(budgets: Iterable[Budget], expenses: Iterable[Expense]) -> List[Dict[str, Any]]:
    """
    Compare each budget of an event with what was spent in its category.

    Expenses are grouped by category once. Budgeted categories come first,
    in budget order; categories that have spend but no budget row are
    appended with a zero budget and ``budgeted`` set to False.
    """
    by_category: Dict[str, List[Expense]] = defaultdict(list)
    categories = {}
    for expense in expenses:
        by_category[expense.category_id].append(expense)
        categories[expense.category_id] = expense.category

    summary = []
    budgeted_ids = set()
    for budget in budgets:
        budgeted_ids.add(budget.category_id)
        category_expenses = by_category.get(budget.category_id, [])
        total_expense = sum(e.amount for e in category_expenses)
        budget_amount = budget.effective_amount
        summary.append({
            "category": budget.category,
            "budget_amount": budget_amount,
            "total_expense": total_expense,
            "remaining": budget_amount - total_expense,
            "expense_count": len(category_expenses),
            "budgeted": True,
        })

    for category_id, category_expenses in by_category.items():
        if category_id in budgeted_ids:
            continue
        total_expense = sum(e.amount for e in category_expenses)
        summary.append({
            "category": categories[category_id],
            "budget_amount": 0.0,
            "total_expense": total_expense,
            "remaining": -total_expense,
            "expense_count": len(category_expenses),
            "budgeted": False,
        })

    return summary


class ExpensesRepository:
    def __init__(self, db: Session):
        self.db = db

    def _with_relations(self, query):
        return query.options(
            joinedload(Expense.category),
            joinedload(Expense.added_by),
            joinedload(Expense.product),
            joinedload(Expense.event).joinedload(Event.coordinator),
        )

    def _build_expense(self, expense_data: Dict[str, Any], added_by_id: str) -> Expense:
        """Map validated input onto a new row, field by field"""
        return Expense(
            event_id=_as_id(expense_data.get('event_id')),
            workshop_id=_as_id(expense_data.get('workshop_id')),
            category_id=_as_id(expense_data['category_id']),
            product_id=_as_id(expense_data.get('product_id')),
            added_by_id=added_by_id,
            item_name=expense_data['item_name'],
            quantity=expense_data['quantity'],
            unit_price=expense_data['unit_price'],
            amount=expense_data['amount'],
            remarks=expense_data.get('remarks'),
            created_at=datetime.now()
        )

    def create_expense(self, expense_data: Dict[str, Any], added_by_id: str) -> Expense:
        """Persist a single expense"""
        expense = self._build_expense(expense_data, added_by_id)

        try:
            self.db.add(expense)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(expense)
        logger.info(f"Expense {expense.id} created by {added_by_id}")
        return expense

    def create_expenses_atomic(self, items: List[Dict[str, Any]], added_by_id: str) -> List[Expense]:
        """
        Persist a batch of expenses in request order inside one transaction.

        Nothing is written unless every item is.
        """
        created = []
        try:
            for expense_data in items:
                expense = self._build_expense(expense_data, added_by_id)
                self.db.add(expense)
                # Flush per item so a bad row fails before the next one is queued
                self.db.flush()
                created.append(expense)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        for expense in created:
            self.db.refresh(expense)

        logger.info(f"{len(created)} expenses created by {added_by_id}")
        return created

    def get_expense_by_id(self, expense_id: str) -> Optional[Expense]:
        return self._with_relations(self.db.query(Expense)).filter(
            Expense.id == expense_id
        ).first()

    def get_expenses_by_event(self, event_id: str) -> List[Expense]:
        """Expenses of an event, newest first"""
        return self._with_relations(self.db.query(Expense)).filter(
            Expense.event_id == event_id
        ).order_by(Expense.created_at.desc()).all()

    def get_budgets_by_event(self, event_id: str) -> List[Budget]:
        return self.db.query(Budget).options(
            joinedload(Budget.category)
        ).filter(
            Budget.event_id == event_id
        ).order_by(Budget.created_at, Budget.id).all()

    def get_budget_summary(self, event_id: str) -> List[Dict[str, Any]]:
        """Budget vs spend per category for an event"""
        budgets = self.get_budgets_by_event(event_id)
        expenses = self.db.query(Expense).options(
            joinedload(Expense.category)
        ).filter(
            Expense.event_id == event_id
        ).all()
        return build_budget_summary(budgets, expenses)

    def update_expense(self, expense_id: str, changes: Dict[str, Any]) -> Optional[Expense]:
        """Patch the given fields, None when the expense does not exist"""
        expense = self.db.query(Expense).filter(Expense.id == expense_id).first()

        if not expense:
            return None

        for field, value in changes.items():
            if field in UPDATABLE_FIELDS:
                setattr(expense, field, value)

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(expense)
        return expense

    def delete_expense(self, expense_id: str) -> bool:
        """Delete by id, False when the expense does not exist"""
        expense = self.db.query(Expense).filter(Expense.id == expense_id).first()

        if not expense:
            return False

        try:
            self.db.delete(expense)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return True
