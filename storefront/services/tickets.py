import io
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import qrcode
from qrcode.constants import ERROR_CORRECT_H
from sqlalchemy.orm import Session

from storefront.database import safe_read, commit
from storefront.errors import NotFoundError, InvalidStateError, TicketIssuanceError
from storefront.models.event import Event
from storefront.models.order import Order
from storefront.models.ticket import Ticket, TicketStatus
from storefront.services.storage import BlobStore

logger = logging.getLogger(__name__)

TICKET_PREFIX = "LVT"
QR_BOX_SIZE = 10
QR_BORDER = 2


@dataclass
class IssuedTicket:
    ticket_number: str
    qr_code: str


def generate_ticket_number() -> str:
    return f"{TICKET_PREFIX}{uuid.uuid4().hex.upper()}"


def render_qr_code(data: str) -> bytes:
    """Render `data` as a PNG QR code with high error correction."""
    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECT_H,
        box_size=QR_BOX_SIZE,
        border=QR_BORDER,
    )
    qr.add_data(data)
    qr.make(fit=True)
    image = qr.make_image()

    buffer = io.BytesIO()
    image.save(buffer)
    return buffer.getvalue()


def qr_code_key(ticket_number: str) -> str:
    return f"qrcodes/{ticket_number}.png"


class TicketService:
    @staticmethod
    async def generate_qr_code(blob_store: BlobStore, ticket_number: str) -> str:
        """Render the ticket's QR code, upload it and return its URL."""
        png = render_qr_code(ticket_number)
        return await blob_store.put(qr_code_key(ticket_number), png, "image/png")

    @staticmethod
    async def issue_tickets(
        db: Session,
        blob_store: BlobStore,
        order: Order,
        event: Event,
        quantity: int,
        total_price: int
    ) -> list[IssuedTicket]:
        """
        Mint one ticket row per unit purchased, each with its own QR code.

        Rows are added to the session but not committed; the caller commits
        them together with the order and the inventory reservation. Each
        ticket is priced at floor(total_price / quantity), so any remainder
        is not attributed to a ticket.

        Raises TicketIssuanceError if a code cannot be rendered or stored.
        Codes already uploaded for this order are removed.
        """
        unit_price = total_price // quantity
        issued: list[IssuedTicket] = []

        for _ in range(quantity):
            ticket_number = generate_ticket_number()
            try:
                qr_url = await TicketService.generate_qr_code(blob_store, ticket_number)
            except Exception as e:
                logger.error(f"Error generating QR code for order {order.order_number}: {e}")
                await TicketService._discard_codes(blob_store, issued)
                raise TicketIssuanceError() from e

            db.add(Ticket(
                ticket_number=ticket_number,
                order_id=order.id,
                event_id=event.id,
                event_name=event.name,
                customer_name=order.customer_name,
                customer_email=order.customer_email,
                quantity=1,
                price=unit_price,
                qr_code=qr_url,
                status=TicketStatus.VALID
            ))
            issued.append(IssuedTicket(ticket_number=ticket_number, qr_code=qr_url))

        db.flush()
        logger.info(f"Issued {quantity} ticket(s) for order {order.order_number}")
        return issued

    @staticmethod
    async def _discard_codes(blob_store: BlobStore, issued: list[IssuedTicket]) -> None:
        for ticket in issued:
            try:
                await blob_store.delete(qr_code_key(ticket.ticket_number))
            except Exception as e:
                logger.warning(f"Could not remove QR code for {ticket.ticket_number}: {e}")

    @staticmethod
    @safe_read(list)
    def list_tickets(db: Session) -> list[Ticket]:
        return db.query(Ticket).order_by(Ticket.created_at.desc(), Ticket.id.desc()).all()

    @staticmethod
    @safe_read(list)
    def tickets_for_order(db: Session, order_id: int) -> list[Ticket]:
        return db.query(Ticket).filter(Ticket.order_id == order_id).order_by(Ticket.id).all()

    @staticmethod
    @safe_read(lambda: None)
    def get_ticket_by_number(db: Session, ticket_number: str) -> Optional[Ticket]:
        return db.query(Ticket).filter(Ticket.ticket_number == ticket_number).first()

    @staticmethod
    def verify_ticket(db: Session, ticket_number: str) -> Ticket:
        """
        Admit a ticket holder: valid -> used.
        Used and cancelled tickets are terminal.
        """
        ticket = db.query(Ticket).filter(Ticket.ticket_number == ticket_number).first()
        if not ticket:
            raise NotFoundError("Ticket")

        if ticket.status == TicketStatus.USED:
            raise InvalidStateError("Ticket already used")
        if ticket.status == TicketStatus.CANCELLED:
            raise InvalidStateError("Ticket cancelled")

        ticket.status = TicketStatus.USED
        ticket.used_at = datetime.utcnow()
        commit(db)
        db.refresh(ticket)
        logger.info(f"Ticket {ticket_number} verified")
        return ticket

    @staticmethod
    def cancel_ticket(db: Session, ticket_number: str) -> Ticket:
        """Cancel a valid ticket. The seat is not returned to inventory."""
        ticket = db.query(Ticket).filter(Ticket.ticket_number == ticket_number).first()
        if not ticket:
            raise NotFoundError("Ticket")

        if ticket.status != TicketStatus.VALID:
            raise InvalidStateError(f"Ticket {ticket.status.value}")

        ticket.status = TicketStatus.CANCELLED
        commit(db)
        db.refresh(ticket)
        logger.info(f"Ticket {ticket_number} cancelled")
        return ticket
