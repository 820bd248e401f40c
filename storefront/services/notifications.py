"""Order and ticket notifications.

The dispatcher resolves contact channels from the settings store, formats
one message per channel and hands it to a Notifier. Channels are
independent: a missing contact or a failing transport skips that channel
only, and nothing here ever raises into the order flow.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence
from urllib.parse import quote
import logging

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.config import Settings, get_settings
from storefront.models.order import Order, OrderItem, OrderType
from storefront.services.email import EmailService
from storefront.services.settings_store import SettingsService, WHATSAPP_NUMBER, ADMIN_EMAIL

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    title: str
    content: str
    recipient: Optional[str] = None
    html_content: Optional[str] = None
    # One-line description used where the full content is too long
    summary: Optional[str] = None


@dataclass
class OrderSummary:
    order_number: str
    customer_name: str
    customer_email: str
    customer_phone: str
    order_type: str
    total_amount: int
    shipping_address: Optional[str] = None
    items: list[dict] = field(default_factory=list)

    @classmethod
    def from_order(cls, order: Order, items: Sequence[OrderItem] = ()) -> "OrderSummary":
        address_parts = [
            order.shipping_address, order.city, order.state, order.zip_code, order.country
        ]
        address = ", ".join(part for part in address_parts if part) or None
        return cls(
            order_number=order.order_number,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            order_type=OrderType(order.order_type).value,
            total_amount=order.total_amount,
            shipping_address=address,
            items=[
                {
                    "product_name": item.product_name,
                    "quantity": item.quantity,
                    "size": item.size,
                    "color": item.color,
                }
                for item in items
            ],
        )


@dataclass
class TicketPurchaseSummary:
    event_name: str
    customer_name: str
    customer_email: str
    quantity: int
    total_amount: int
    tickets: Sequence = ()

    @property
    def ticket_numbers(self) -> list[str]:
        return [t.ticket_number for t in self.tickets]


def build_order_message(order: OrderSummary) -> str:
    return EmailService.render_order_message(
        order_number=order.order_number,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        order_type=order.order_type,
        total_amount=order.total_amount,
        shipping_address=order.shipping_address,
        items=order.items,
    ).strip()


class Notifier(ABC):
    """A single outbound notification channel."""

    channel = "notifier"

    @abstractmethod
    async def send(self, notification: Notification) -> bool:
        """Deliver the notification. Returns False when the channel was skipped."""
        ...


class OwnerChannelNotifier(Notifier):
    """Posts notifications to the store owner's webhook."""

    channel = "owner"

    def __init__(
        self,
        url: str,
        token: str = "",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        self.url = url
        self.token = token
        self.timeout = timeout
        self.transport = transport

    async def send(self, notification: Notification) -> bool:
        if not self.url:
            logger.warning(f"Owner channel not configured, skipping: {notification.title}")
            return False

        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                self.url,
                json={"title": notification.title, "content": notification.content},
                headers=headers,
            )
            response.raise_for_status()
        return True


class WhatsAppLinkNotifier(Notifier):
    """
    Builds a wa.me click-to-chat link carrying the message and forwards it
    to the owner channel, so the owner can relay it with one tap.
    """

    channel = "whatsapp"

    def __init__(self, owner: Notifier) -> None:
        self.owner = owner

    @staticmethod
    def build_link(number: str, text: str) -> str:
        digits = "".join(ch for ch in number if ch.isdigit())
        return f"https://wa.me/{digits}?text={quote(text, safe='')}"

    async def send(self, notification: Notification) -> bool:
        if not notification.recipient:
            logger.warning("WhatsApp number not configured in settings")
            return False

        link = self.build_link(notification.recipient, notification.content)
        logger.info(f"WhatsApp notification for {notification.recipient}: {link}")
        return await self.owner.send(Notification(
            title=notification.title,
            content=f"{notification.summary or notification.title}. WhatsApp: {link}",
        ))


class EmailNotifier(Notifier):
    channel = "email"

    async def send(self, notification: Notification) -> bool:
        if not notification.recipient:
            logger.warning(f"No email recipient, skipping: {notification.title}")
            return False

        if not EmailService.is_configured():
            logger.info(
                f"Email to {notification.recipient}\n"
                f"Subject: {notification.title}\n\n{notification.content}"
            )

        return await EmailService.send_email(
            notification.recipient,
            notification.title,
            html_content=notification.html_content,
            text_content=notification.content,
        )


class NotificationDispatcher:
    def __init__(
        self,
        owner: Notifier,
        email: Notifier,
        whatsapp: Optional[Notifier] = None
    ) -> None:
        self.owner = owner
        self.email = email
        self.whatsapp = whatsapp or WhatsAppLinkNotifier(owner)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "NotificationDispatcher":
        settings = settings or get_settings()
        owner = OwnerChannelNotifier(settings.owner_notify_url, settings.owner_notify_token)
        return cls(owner=owner, email=EmailNotifier())

    async def _emit(self, notifier: Notifier, notification: Notification) -> bool:
        try:
            sent = await notifier.send(notification)
        except Exception as e:
            logger.error(f"{notifier.channel} notification failed ({notification.title}): {e}")
            return False
        if sent:
            logger.info(f"{notifier.channel} notification sent: {notification.title}")
        return sent

    def _resolve(self, db: Session, key: str) -> Optional[str]:
        try:
            return SettingsService.get_value(db, key)
        except SQLAlchemyError as e:
            logger.error(f"Could not read setting {key}: {e}")
            return None

    async def send_order_notification(self, db: Session, order: OrderSummary) -> None:
        """Tell the admin about a new order over WhatsApp and email."""
        try:
            message = build_order_message(order)
        except Exception as e:
            logger.error(f"Error building order notification for {order.order_number}: {e}")
            return

        whatsapp_number = self._resolve(db, WHATSAPP_NUMBER)
        if whatsapp_number:
            await self._emit(self.whatsapp, Notification(
                title="New Order Notification",
                content=message,
                recipient=whatsapp_number,
                summary=f"Order {order.order_number} from {order.customer_name}",
            ))
        else:
            logger.warning("WhatsApp number not configured in settings")

        admin_email = self._resolve(db, ADMIN_EMAIL)
        if admin_email:
            kind = "Order" if order.order_type == OrderType.CLOTHING.value else "Event Booking"
            await self._emit(self.email, Notification(
                title=f"New {kind} #{order.order_number}",
                content=message.replace("*", ""),
                recipient=admin_email,
            ))
        else:
            logger.info("Admin email not configured, skipping order email")

    async def send_ticket_notifications(self, db: Session, purchase: TicketPurchaseSummary) -> None:
        """Send the purchaser their tickets and tell the owner and admin about the sale."""
        try:
            ticket_html = EmailService.render_ticket_email(
                purchase.customer_name, purchase.event_name, purchase.tickets
            )
            admin_summary = EmailService.render_ticket_purchase_summary(
                purchase.event_name,
                purchase.customer_name,
                purchase.customer_email,
                purchase.quantity,
                purchase.total_amount,
                purchase.ticket_numbers,
            )
        except Exception as e:
            logger.error(f"Error building ticket email for {purchase.event_name}: {e}")
            return

        await self._emit(self.email, Notification(
            title=f"Your Tickets for {purchase.event_name}",
            content="\n".join(purchase.ticket_numbers),
            recipient=purchase.customer_email,
            html_content=ticket_html,
        ))

        await self._emit(self.owner, Notification(
            title="New Event Ticket Purchase",
            content=(
                f"{purchase.customer_name} purchased {purchase.quantity} ticket(s) for "
                f"{purchase.event_name}. Email: {purchase.customer_email}"
            ),
        ))

        admin_email = self._resolve(db, ADMIN_EMAIL)
        if admin_email:
            await self._emit(self.email, Notification(
                title=f"New Event Ticket Purchase - {purchase.event_name}",
                content=admin_summary,
                recipient=admin_email,
            ))


def get_dispatcher() -> NotificationDispatcher:
    return NotificationDispatcher.from_settings()
