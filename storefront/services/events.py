import logging
from datetime import datetime
from typing import Optional
from sqlalchemy import update
from sqlalchemy.orm import Session

from storefront.database import safe_read, commit
from storefront.errors import NotFoundError, CapacityError, InvalidStateError, ValidationError
from storefront.models.event import Event
from storefront.models.ticket import Ticket
from storefront.schemas.event import EventCreate, EventUpdate

logger = logging.getLogger(__name__)

FEATURED_EVENTS_LIMIT = 6
SLUG_TAKEN = "Slug already in use"


class EventService:
    @staticmethod
    @safe_read(list)
    def list_events(db: Session, active_only: bool = True) -> list[Event]:
        query = db.query(Event)
        if active_only:
            query = query.filter(Event.active.is_(True))
        return query.order_by(Event.event_date).all()

    @staticmethod
    @safe_read(list)
    def featured_events(db: Session) -> list[Event]:
        return db.query(Event).filter(
            Event.featured.is_(True),
            Event.active.is_(True)
        ).order_by(Event.event_date).limit(FEATURED_EVENTS_LIMIT).all()

    @staticmethod
    @safe_read(lambda: None)
    def get_event(db: Session, event_id: int) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    @safe_read(lambda: None)
    def get_event_by_slug(db: Session, slug: str) -> Optional[Event]:
        return db.query(Event).filter(Event.slug == slug).first()

    @staticmethod
    @safe_read(lambda: 0)
    def count_upcoming(db: Session, now: Optional[datetime] = None) -> int:
        now = now or datetime.utcnow()
        return db.query(Event).filter(Event.event_date >= now).count()

    @staticmethod
    def create_event(db: Session, data: EventCreate) -> Event:
        event = Event(**data.model_dump())
        db.add(event)
        commit(db, conflict=SLUG_TAKEN)
        db.refresh(event)
        return event

    @staticmethod
    def update_event(db: Session, event_id: int, data: EventUpdate) -> Event:
        event = db.query(Event).filter(Event.id == event_id).first()
        if not event:
            raise NotFoundError("Event")

        changes = data.model_dump(exclude_unset=True)
        total = changes.get("total_tickets", event.total_tickets)
        available = changes.get("available_tickets", event.available_tickets)
        if available > total:
            raise ValidationError("available_tickets cannot exceed total_tickets")

        for field, value in changes.items():
            setattr(event, field, value)
        commit(db, conflict=SLUG_TAKEN)
        db.refresh(event)
        return event

    @staticmethod
    def delete_event(db: Session, event_id: int) -> None:
        event = db.query(Event).filter(Event.id == event_id).first()
        if not event:
            raise NotFoundError("Event")
        # Issued tickets keep their event; deactivate the event instead
        if db.query(Ticket).filter(Ticket.event_id == event_id).count():
            raise InvalidStateError("Event has issued tickets")
        db.delete(event)
        commit(db)

    @staticmethod
    def reserve_tickets(db: Session, event_id: int, quantity: int) -> None:
        """
        Atomically take `quantity` tickets out of the event's inventory.

        The decrement only applies when enough tickets remain, so concurrent
        purchases can never push available_tickets below zero. Does not commit;
        the caller owns the transaction.
        """
        result = db.execute(
            update(Event)
            .where(Event.id == event_id, Event.available_tickets >= quantity)
            .values(available_tickets=Event.available_tickets - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            logger.info(f"Capacity exhausted for event {event_id} (requested {quantity})")
            raise CapacityError(event_id, quantity)

        event = db.get(Event, event_id)
        if event is not None:
            db.expire(event, ["available_tickets"])
