# expense_ledger/shared/services/email_service.py
import asyncio
import email.mime.multipart
import email.mime.text
import logging
import smtplib

from expense_ledger.config.settings import settings

logger = logging.getLogger(__name__)


class EmailService:
    """SMTP sender for HTML notifications"""

    def __init__(self, config=None):
        self.config = config or settings

    @property
    def is_configured(self) -> bool:
        return self.config.smtp_configured

    def _build_message(self, to: str, subject: str, html: str) -> email.mime.multipart.MIMEMultipart:
        msg = email.mime.multipart.MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.config.mail_from
        msg["To"] = to
        msg.attach(email.mime.text.MIMEText(html, "html"))
        return msg

    def _send_sync(self, to: str, subject: str, html: str) -> bool:
        msg = self._build_message(to, subject, html)
        with smtplib.SMTP(self.config.smtp_server, self.config.smtp_port, timeout=self.config.smtp_timeout) as server:
            if self.config.smtp_use_tls:
                server.starttls()
            if self.config.smtp_username:
                server.login(self.config.smtp_username, self.config.smtp_password)
            server.sendmail(msg["From"], [to], msg.as_string())
        return True

    async def send_email(self, to: str, subject: str, html: str) -> bool:
        """
        Send an HTML email.

        Returns False without sending when SMTP is not configured.
        Delivery errors propagate to the caller.
        """
        if not self.is_configured:
            logger.warning(f"SMTP not configured, skipping email to {to}: {subject}")
            return False

        # smtplib blocks, keep it off the event loop
        await asyncio.to_thread(self._send_sync, to, subject, html)
        logger.info(f"Email sent to {to}: {subject}")
        return True


email_service = EmailService()
