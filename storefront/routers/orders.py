from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from typing import Optional

from storefront.config import get_settings
from storefront.database import get_db
from storefront.errors import NotFoundError
from storefront.middleware.security import limiter
from storefront.services.auth import get_current_user, get_current_user_required, get_current_admin
from storefront.services.notifications import NotificationDispatcher, get_dispatcher
from storefront.services.orders import OrderService
from storefront.services.storage import BlobStore, get_blob_store
from storefront.models.user import User
from storefront.schemas.order import (
    OrderCreate, OrderCreated, OrderStatusUpdate, OrderResponse, OrderItemResponse
)

router = APIRouter(prefix="/api/orders", tags=["orders"])
settings = get_settings()


@router.post("", response_model=OrderCreated, status_code=201)
@limiter.limit(settings.order_rate_limit)
async def create_order(
    request: Request,
    data: OrderCreate,
    user: Optional[User] = Depends(get_current_user),
    blob_store: BlobStore = Depends(get_blob_store),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    db: Session = Depends(get_db)
):
    created = await OrderService.create_order(db, data, blob_store, dispatcher, user=user)
    return OrderCreated(order_id=created.order_id, order_number=created.order_number)


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return OrderService.list_orders(db)


@router.get("/mine", response_model=list[OrderResponse])
async def my_orders(
    user: User = Depends(get_current_user_required),
    db: Session = Depends(get_db)
):
    return OrderService.orders_for_user(db, user.id)


@router.get("/by-number/{order_number}", response_model=OrderResponse)
async def get_order_by_number(order_number: str, db: Session = Depends(get_db)):
    order = OrderService.get_order_by_number(db, order_number)
    if not order:
        raise NotFoundError("Order")
    return order


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    user: User = Depends(get_current_user_required),
    db: Session = Depends(get_db)
):
    return OrderService.get_order_for_user(db, order_id, user)


@router.get("/{order_id}/items", response_model=list[OrderItemResponse])
async def get_order_items(
    order_id: int,
    user: User = Depends(get_current_user_required),
    db: Session = Depends(get_db)
):
    OrderService.get_order_for_user(db, order_id, user)
    return OrderService.order_items(db, order_id)


@router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return OrderService.update_status(db, order_id, data.status)
