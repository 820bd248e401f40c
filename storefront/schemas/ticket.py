from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from storefront.models.ticket import TicketStatus


class TicketResponse(BaseModel):
    id: int
    ticket_number: str
    order_id: int
    event_id: int
    event_name: str
    customer_name: str
    customer_email: str
    quantity: int
    price: int
    qr_code: Optional[str]
    status: TicketStatus
    used_at: Optional[datetime]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class TicketVerifyResponse(BaseModel):
    success: bool
    ticket: TicketResponse
