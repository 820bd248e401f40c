from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from storefront.database import Base


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(
            "available_tickets >= 0 AND available_tickets <= total_tickets",
            name="ck_events_available_tickets",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    venue = Column(String(255), nullable=False)
    address = Column(Text, nullable=True)
    event_date = Column(DateTime, nullable=False)
    event_end_date = Column(DateTime, nullable=True)
    image_url = Column(Text, nullable=True)
    ticket_price = Column(Integer, nullable=False)  # cents
    total_tickets = Column(Integer, nullable=False)
    available_tickets = Column(Integer, nullable=False)
    featured = Column(Boolean, default=False, nullable=False)
    active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    tickets = relationship("Ticket", back_populates="event")
