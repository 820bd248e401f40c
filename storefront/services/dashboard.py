from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.database import safe_read
from storefront.models.catalog import Product
from storefront.models.event import Event
from storefront.models.order import Order, OrderStatus
from storefront.models.ticket import Ticket
from storefront.schemas.user import DashboardStats
from storefront.services.events import EventService


def empty_stats() -> DashboardStats:
    return DashboardStats(
        total_products=0,
        total_events=0,
        total_orders=0,
        pending_orders=0,
        revenue=0,
        total_tickets=0,
        upcoming_events=0
    )


class DashboardService:
    @staticmethod
    @safe_read(empty_stats)
    def get_stats(db: Session) -> DashboardStats:
        """Store-wide counts for the admin overview. Cancelled orders earn no revenue."""
        revenue = db.query(func.sum(Order.total_amount)).filter(
            Order.status != OrderStatus.CANCELLED
        ).scalar() or 0

        return DashboardStats(
            total_products=db.query(Product).count(),
            total_events=db.query(Event).count(),
            total_orders=db.query(Order).count(),
            pending_orders=db.query(Order).filter(Order.status == OrderStatus.PENDING).count(),
            revenue=revenue,
            total_tickets=db.query(Ticket).count(),
            upcoming_events=EventService.count_upcoming(db)
        )
