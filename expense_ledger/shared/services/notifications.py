# expense_ledger/shared/services/notifications.py
import logging
from typing import Optional

from expense_ledger.config.settings import settings
from expense_ledger.shared.services.email_service import EmailService, email_service

logger = logging.getLogger(__name__)


async def dispatch_notification(
    to: str,
    subject: str,
    html: str,
    sender: Optional[EmailService] = None
) -> bool:
    """
    Deliver a notification without ever raising.

    Runs as a background task after the request has committed its write,
    so any failure only ends up in the log.
    """
    if not settings.notifications_enabled:
        logger.info(f"Notifications disabled, dropping '{subject}' for {to}")
        return False

    sender = sender or email_service
    try:
        return await sender.send_email(to=to, subject=subject, html=html)
    except Exception as e:
        logger.error(f"Failed to send notification '{subject}' to {to}: {e}")
        return False
