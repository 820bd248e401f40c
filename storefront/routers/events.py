from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.errors import NotFoundError
from storefront.services.auth import get_current_admin
from storefront.services.events import EventService
from storefront.models.user import User
from storefront.schemas.event import EventCreate, EventUpdate, EventResponse
from storefront.schemas.user import SuccessResponse

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get("", response_model=list[EventResponse])
async def list_events(active_only: bool = True, db: Session = Depends(get_db)):
    return EventService.list_events(db, active_only=active_only)


@router.get("/featured", response_model=list[EventResponse])
async def featured_events(db: Session = Depends(get_db)):
    return EventService.featured_events(db)


@router.get("/by-slug/{slug}", response_model=EventResponse)
async def get_event_by_slug(slug: str, db: Session = Depends(get_db)):
    event = EventService.get_event_by_slug(db, slug)
    if not event:
        raise NotFoundError("Event")
    return event


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: int, db: Session = Depends(get_db)):
    event = EventService.get_event(db, event_id)
    if not event:
        raise NotFoundError("Event")
    return event


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    data: EventCreate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return EventService.create_event(db, data)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: int,
    data: EventUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return EventService.update_event(db, event_id, data)


@router.delete("/{event_id}", response_model=SuccessResponse)
async def delete_event(
    event_id: int,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    EventService.delete_event(db, event_id)
    return SuccessResponse()
