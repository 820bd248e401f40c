from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import Optional
from storefront.schemas.common import reject_explicit_nulls


class EventCreate(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None
    venue: str
    address: Optional[str] = None
    event_date: datetime
    event_end_date: Optional[datetime] = None
    image_url: Optional[str] = None
    ticket_price: int = Field(ge=0)
    total_tickets: int = Field(ge=0)
    available_tickets: Optional[int] = Field(default=None, ge=0)
    featured: bool = False
    active: bool = True

    @model_validator(mode="after")
    def check_inventory(self):
        if self.available_tickets is None:
            self.available_tickets = self.total_tickets
        if self.available_tickets > self.total_tickets:
            raise ValueError("available_tickets cannot exceed total_tickets")
        return self


class EventUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    event_date: Optional[datetime] = None
    event_end_date: Optional[datetime] = None
    image_url: Optional[str] = None
    ticket_price: Optional[int] = Field(default=None, ge=0)
    total_tickets: Optional[int] = Field(default=None, ge=0)
    available_tickets: Optional[int] = Field(default=None, ge=0)
    featured: Optional[bool] = None
    active: Optional[bool] = None

    @model_validator(mode="after")
    def check_required_columns(self):
        reject_explicit_nulls(self, (
            "name", "slug", "venue", "event_date", "ticket_price",
            "total_tickets", "available_tickets", "featured", "active",
        ))
        return self


class EventResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str]
    venue: str
    address: Optional[str]
    event_date: datetime
    event_end_date: Optional[datetime]
    image_url: Optional[str]
    ticket_price: int
    total_tickets: int
    available_tickets: int
    featured: bool
    active: bool
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
