from typing import Optional
from sqlalchemy.orm import Session

from storefront.database import safe_read, commit
from storefront.errors import NotFoundError, ValidationError
from storefront.models.cart import CartItem
from storefront.models.catalog import Product
from storefront.schemas.cart import CartItemAdd


class CartService:
    """
    Carts belong to a signed-in user or, for guests, to a client-generated
    session id. The user takes precedence when both are present.
    """

    @staticmethod
    def _owner_filter(query, user_id: Optional[int], session_id: Optional[str]):
        if user_id:
            return query.filter(CartItem.user_id == user_id)
        if session_id:
            return query.filter(CartItem.session_id == session_id)
        return None

    @staticmethod
    @safe_read(list)
    def get_cart(db: Session, user_id: Optional[int], session_id: Optional[str]) -> list[CartItem]:
        query = CartService._owner_filter(db.query(CartItem), user_id, session_id)
        if query is None:
            return []
        return query.order_by(CartItem.id).all()

    @staticmethod
    def add_item(db: Session, data: CartItemAdd, user_id: Optional[int]) -> CartItem:
        if not user_id and not data.session_id:
            raise ValidationError("A session id is required for guest carts")

        product = db.query(Product).filter(Product.id == data.product_id).first()
        if not product:
            raise NotFoundError("Product")

        item = CartItem(
            user_id=user_id,
            session_id=None if user_id else data.session_id,
            product_id=data.product_id,
            quantity=data.quantity,
            size=data.size,
            color=data.color
        )
        db.add(item)
        commit(db)
        db.refresh(item)
        return item

    @staticmethod
    def _get_owned_item(
        db: Session,
        item_id: int,
        user_id: Optional[int],
        session_id: Optional[str]
    ) -> CartItem:
        query = CartService._owner_filter(
            db.query(CartItem).filter(CartItem.id == item_id), user_id, session_id
        )
        item = query.first() if query is not None else None
        if not item:
            raise NotFoundError("Cart item")
        return item

    @staticmethod
    def update_item(
        db: Session,
        item_id: int,
        quantity: int,
        user_id: Optional[int],
        session_id: Optional[str]
    ) -> CartItem:
        item = CartService._get_owned_item(db, item_id, user_id, session_id)
        item.quantity = quantity
        commit(db)
        db.refresh(item)
        return item

    @staticmethod
    def remove_item(
        db: Session,
        item_id: int,
        user_id: Optional[int],
        session_id: Optional[str]
    ) -> None:
        item = CartService._get_owned_item(db, item_id, user_id, session_id)
        db.delete(item)
        commit(db)

    @staticmethod
    def clear_cart(db: Session, user_id: Optional[int], session_id: Optional[str]) -> None:
        query = CartService._owner_filter(db.query(CartItem), user_id, session_id)
        if query is None:
            return
        query.delete(synchronize_session=False)
        commit(db)
