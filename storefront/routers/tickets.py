from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.errors import NotFoundError
from storefront.services.auth import get_current_user_required, get_current_admin
from storefront.services.orders import OrderService
from storefront.services.tickets import TicketService
from storefront.models.user import User
from storefront.schemas.ticket import TicketResponse, TicketVerifyResponse

router = APIRouter(prefix="/api/tickets", tags=["tickets"])


@router.get("", response_model=list[TicketResponse])
async def list_tickets(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return TicketService.list_tickets(db)


@router.get("/by-order/{order_id}", response_model=list[TicketResponse])
async def tickets_for_order(
    order_id: int,
    user: User = Depends(get_current_user_required),
    db: Session = Depends(get_db)
):
    OrderService.get_order_for_user(db, order_id, user)
    return TicketService.tickets_for_order(db, order_id)


@router.get("/{ticket_number}", response_model=TicketResponse)
async def get_ticket(ticket_number: str, db: Session = Depends(get_db)):
    ticket = TicketService.get_ticket_by_number(db, ticket_number)
    if not ticket:
        raise NotFoundError("Ticket")
    return ticket


@router.post("/{ticket_number}/verify", response_model=TicketVerifyResponse)
async def verify_ticket(
    ticket_number: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    ticket = TicketService.verify_ticket(db, ticket_number)
    return TicketVerifyResponse(success=True, ticket=TicketResponse.model_validate(ticket))


@router.post("/{ticket_number}/cancel", response_model=TicketResponse)
async def cancel_ticket(
    ticket_number: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return TicketService.cancel_ticket(db, ticket_number)
