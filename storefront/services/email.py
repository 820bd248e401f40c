import aiosmtplib
from datetime import datetime
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional, Sequence
import logging

from storefront.config import get_settings
from storefront.templates_config import templates

settings = get_settings()
logger = logging.getLogger(__name__)


class EmailService:
    @staticmethod
    def is_configured() -> bool:
        return bool(settings.smtp_user and settings.smtp_password)

    @staticmethod
    async def send_email(
        to_email: str,
        subject: str,
        html_content: Optional[str] = None,
        text_content: Optional[str] = None
    ) -> bool:
        """Send an email using SMTP."""
        if not EmailService.is_configured():
            logger.warning(f"SMTP not configured, skipping email to {to_email}: {subject}")
            return False

        message = MIMEMultipart("alternative")
        message["From"] = settings.mail_from or settings.smtp_user
        message["To"] = to_email
        message["Subject"] = subject

        if text_content:
            message.attach(MIMEText(text_content, "plain"))
        if html_content:
            message.attach(MIMEText(html_content, "html"))

        try:
            await aiosmtplib.send(
                message,
                hostname=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_user,
                password=settings.smtp_password,
                start_tls=True
            )
            return True
        except aiosmtplib.SMTPException as e:
            logger.error(f"Failed to send email: {e}")
            return False

    @staticmethod
    def render_ticket_email(
        customer_name: str,
        event_name: str,
        tickets: Sequence
    ) -> str:
        """Render the purchaser's ticket email, one block per ticket with its QR code."""
        return templates.get_template("email/tickets.html").render(
            customer_name=customer_name,
            event_name=event_name,
            tickets=tickets,
            year=datetime.utcnow().year
        )

    @staticmethod
    def render_ticket_purchase_summary(
        event_name: str,
        customer_name: str,
        customer_email: str,
        quantity: int,
        total_amount: int,
        ticket_numbers: Sequence[str]
    ) -> str:
        return templates.get_template("email/ticket_purchase_admin.txt").render(
            event_name=event_name,
            customer_name=customer_name,
            customer_email=customer_email,
            quantity=quantity,
            total_amount=total_amount,
            ticket_numbers=ticket_numbers
        )

    @staticmethod
    def render_order_message(**order) -> str:
        return templates.get_template("email/order_notification.txt").render(**order)
