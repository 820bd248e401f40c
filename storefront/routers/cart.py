from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from storefront.database import get_db
from storefront.services.auth import get_current_user
from storefront.services.cart import CartService
from storefront.models.user import User
from storefront.schemas.cart import CartItemAdd, CartItemUpdate, CartItemResponse
from storefront.schemas.user import SuccessResponse

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _user_id(user: Optional[User]) -> Optional[int]:
    return user.id if user else None


@router.get("", response_model=list[CartItemResponse])
async def get_cart(
    session_id: Optional[str] = None,
    user: Optional[User] = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return CartService.get_cart(db, _user_id(user), session_id)


@router.post("", response_model=CartItemResponse, status_code=201)
async def add_to_cart(
    data: CartItemAdd,
    user: Optional[User] = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return CartService.add_item(db, data, _user_id(user))


@router.patch("/{item_id}", response_model=CartItemResponse)
async def update_cart_item(
    item_id: int,
    data: CartItemUpdate,
    session_id: Optional[str] = None,
    user: Optional[User] = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return CartService.update_item(db, item_id, data.quantity, _user_id(user), session_id)


@router.delete("/{item_id}", response_model=SuccessResponse)
async def remove_cart_item(
    item_id: int,
    session_id: Optional[str] = None,
    user: Optional[User] = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    CartService.remove_item(db, item_id, _user_id(user), session_id)
    return SuccessResponse()


@router.delete("", response_model=SuccessResponse)
async def clear_cart(
    session_id: Optional[str] = None,
    user: Optional[User] = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    CartService.clear_cart(db, _user_id(user), session_id)
    return SuccessResponse()
