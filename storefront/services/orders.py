import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from storefront.database import safe_read, commit
from storefront.errors import NotFoundError, ForbiddenError, UnavailableError
from storefront.models.event import Event
from storefront.models.order import Order, OrderItem, OrderStatus, OrderType
from storefront.models.user import User
from storefront.schemas.order import OrderCreate
from storefront.services.events import EventService
from storefront.services.notifications import (
    NotificationDispatcher, OrderSummary, TicketPurchaseSummary
)
from storefront.services.storage import BlobStore
from storefront.services.tickets import TicketService

logger = logging.getLogger(__name__)

ORDER_PREFIX = "LV"


@dataclass
class CreatedOrder:
    order_id: int
    order_number: str
    ticket_numbers: list[str]


def generate_order_number() -> str:
    return f"{ORDER_PREFIX}{uuid.uuid4().hex.upper()}"


class OrderService:
    @staticmethod
    def _new_order(data: OrderCreate, user: Optional[User]) -> Order:
        return Order(
            order_number=generate_order_number(),
            user_id=user.id if user else None,
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone,
            shipping_address=data.shipping_address,
            city=data.city,
            state=data.state,
            zip_code=data.zip_code,
            country=data.country,
            order_type=data.order_type,
            total_amount=data.total_amount,
            status=OrderStatus.PENDING
        )

    @staticmethod
    async def create_order(
        db: Session,
        data: OrderCreate,
        blob_store: BlobStore,
        dispatcher: NotificationDispatcher,
        user: Optional[User] = None
    ) -> CreatedOrder:
        """
        Create an order and everything that hangs off it.

        Clothing orders store a snapshot of each line item. Event orders
        reserve inventory and issue one ticket per unit. Order, items,
        tickets and the inventory decrement commit together or not at all.
        Notifications go out after commit and never fail the order.

        Raises:
            NotFoundError: If the event does not exist.
            CapacityError: If the event has fewer tickets left than requested.
            TicketIssuanceError: If a ticket code cannot be generated.
            UnavailableError: If the database rejects the write.
        """
        if data.order_type == OrderType.CLOTHING:
            return await OrderService._create_clothing_order(db, data, dispatcher, user)
        return await OrderService._create_event_order(db, data, blob_store, dispatcher, user)

    @staticmethod
    async def _create_clothing_order(
        db: Session,
        data: OrderCreate,
        dispatcher: NotificationDispatcher,
        user: Optional[User]
    ) -> CreatedOrder:
        # Product stock is not decremented here
        try:
            order = OrderService._new_order(data, user)
            db.add(order)
            db.flush()

            items = [OrderItem(order_id=order.id, **item.model_dump()) for item in data.items]
            db.add_all(items)
            commit(db)
        except Exception:
            db.rollback()
            raise

        logger.info(f"Created clothing order {order.order_number} with {len(items)} item(s)")

        await dispatcher.send_order_notification(db, OrderSummary.from_order(order, items))
        return CreatedOrder(order_id=order.id, order_number=order.order_number, ticket_numbers=[])

    @staticmethod
    async def _create_event_order(
        db: Session,
        data: OrderCreate,
        blob_store: BlobStore,
        dispatcher: NotificationDispatcher,
        user: Optional[User]
    ) -> CreatedOrder:
        try:
            event = db.query(Event).filter(Event.id == data.event_id).first()
        except OperationalError as e:
            raise UnavailableError() from e
        if not event:
            raise NotFoundError("Event")

        try:
            EventService.reserve_tickets(db, event.id, data.ticket_quantity)

            order = OrderService._new_order(data, user)
            db.add(order)
            db.flush()

            issued = await TicketService.issue_tickets(
                db,
                blob_store,
                order=order,
                event=event,
                quantity=data.ticket_quantity,
                total_price=data.total_amount
            )
            commit(db)
        except OperationalError as e:
            db.rollback()
            raise UnavailableError() from e
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"Created event order {order.order_number}: "
            f"{data.ticket_quantity} ticket(s) for event {event.id}"
        )

        await dispatcher.send_ticket_notifications(db, TicketPurchaseSummary(
            event_name=event.name,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            quantity=data.ticket_quantity,
            total_amount=order.total_amount,
            tickets=issued
        ))
        await dispatcher.send_order_notification(db, OrderSummary.from_order(order))

        return CreatedOrder(
            order_id=order.id,
            order_number=order.order_number,
            ticket_numbers=[t.ticket_number for t in issued]
        )

    @staticmethod
    @safe_read(list)
    def list_orders(db: Session) -> list[Order]:
        return db.query(Order).order_by(Order.created_at.desc(), Order.id.desc()).all()

    @staticmethod
    @safe_read(list)
    def orders_for_user(db: Session, user_id: int) -> list[Order]:
        return db.query(Order).filter(
            Order.user_id == user_id
        ).order_by(Order.created_at.desc(), Order.id.desc()).all()

    @staticmethod
    def get_order_for_user(db: Session, order_id: int, user: User) -> Order:
        """Users can only view their own orders; admins can view all."""
        order = db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("Order")
        if not user.is_admin and order.user_id != user.id:
            raise ForbiddenError()
        return order

    @staticmethod
    @safe_read(lambda: None)
    def get_order_by_number(db: Session, order_number: str) -> Optional[Order]:
        return db.query(Order).filter(Order.order_number == order_number).first()

    @staticmethod
    @safe_read(list)
    def order_items(db: Session, order_id: int) -> list[OrderItem]:
        return db.query(OrderItem).filter(OrderItem.order_id == order_id).order_by(OrderItem.id).all()

    @staticmethod
    def update_status(db: Session, order_id: int, status: OrderStatus) -> Order:
        order = db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("Order")

        order.status = status
        commit(db)
        db.refresh(order)
        logger.info(f"Order {order.order_number} status set to {status.value}")
        return order
