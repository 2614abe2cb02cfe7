# expense_ledger/shared/services/email_templates.py
from html import escape
from typing import Dict


def format_amount(amount: float) -> str:
    return f"{amount:,.2f}"


def expense_added(event_title: str, item_name: str, amount: float, added_by_name: str) -> Dict[str, str]:
    """Notification for a single expense recorded against an event"""
    return {
        "subject": f"New expense added - {event_title}",
        "html": (
            "<h2>New expense added</h2>"
            f"<p>A new expense has been recorded for <strong>{escape(event_title)}</strong>.</p>"
            "<ul>"
            f"<li><strong>Item:</strong> {escape(item_name)}</li>"
            f"<li><strong>Amount:</strong> {format_amount(amount)}</li>"
            f"<li><strong>Added by:</strong> {escape(added_by_name)}</li>"
            "</ul>"
        ),
    }


def bulk_expense_added(event_title: str, count: int, total_amount: float, added_by_name: str) -> Dict[str, str]:
    """Single notification summarizing a batch of expenses"""
    noun = "expense" if count == 1 else "expenses"
    return {
        "subject": f"{count} new {noun} added - {event_title}",
        "html": (
            "<h2>New expenses added</h2>"
            f"<p>{count} {noun} have been recorded for <strong>{escape(event_title)}</strong>.</p>"
            "<ul>"
            f"<li><strong>Total amount:</strong> {format_amount(total_amount)}</li>"
            f"<li><strong>Added by:</strong> {escape(added_by_name)}</li>"
            "</ul>"
        ),
    }
