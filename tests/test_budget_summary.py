"""Tests for the budget vs spend aggregation."""

from __future__ import annotations

from expense_ledger.modules.expenses.repository import build_budget_summary
from expense_ledger.shared.database.models import Budget, Category, Expense


def _category(cid: str, name: str) -> Category:
    return Category(id=cid, name=name)


def _budget(category: Category, amount: float, approved=None) -> Budget:
    return Budget(category_id=category.id, category=category, amount=amount, approved_amount=approved)


def _expense(category: Category, amount: float) -> Expense:
    return Expense(category_id=category.id, category=category, amount=amount)


CATERING = _category("cat-1", "Catering")
VENUE = _category("cat-2", "Venue")
PRINTING = _category("cat-3", "Printing")


def test_catering_example():
    rows = build_budget_summary(
        [_budget(CATERING, 1200.0, approved=1000.0)],
        [_expense(CATERING, 300.0), _expense(CATERING, 150.0)],
    )

    assert len(rows) == 1
    row = rows[0]
    assert row["category"] is CATERING
    assert row["budget_amount"] == 1000.0
    assert row["total_expense"] == 450.0
    assert row["remaining"] == 550.0
    assert row["expense_count"] == 2


def test_requested_amount_used_when_not_approved():
    rows = build_budget_summary([_budget(VENUE, 500.0)], [_expense(VENUE, 120.0)])

    assert rows[0]["budget_amount"] == 500.0
    assert rows[0]["remaining"] == 380.0


def test_zero_approval_is_respected():
    rows = build_budget_summary([_budget(VENUE, 500.0, approved=0.0)], [])

    assert rows[0]["budget_amount"] == 0.0
    assert rows[0]["remaining"] == 0.0


def test_budget_without_expenses():
    rows = build_budget_summary([_budget(VENUE, 500.0)], [_expense(CATERING, 10.0)])

    venue = rows[0]
    assert venue["expense_count"] == 0
    assert venue["total_expense"] == 0
    assert venue["remaining"] == venue["budget_amount"]


def test_overspend_gives_negative_remaining():
    rows = build_budget_summary([_budget(CATERING, 100.0)], [_expense(CATERING, 130.0)])

    assert rows[0]["remaining"] == -30.0


def test_unbudgeted_categories_follow_budget_rows():
    rows = build_budget_summary(
        [_budget(VENUE, 500.0), _budget(CATERING, 200.0)],
        [_expense(PRINTING, 20.0), _expense(CATERING, 50.0), _expense(PRINTING, 5.0)],
    )

    assert [r["category"].name for r in rows] == ["Venue", "Catering", "Printing"]
    assert [r["budgeted"] for r in rows] == [True, True, False]
    printing = rows[-1]
    assert printing["budget_amount"] == 0.0
    assert printing["total_expense"] == 25.0
    assert printing["remaining"] == -25.0
    assert printing["expense_count"] == 2


def test_no_budgets_no_expenses():
    assert build_budget_summary([], []) == []
