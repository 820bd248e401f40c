from storefront.models.user import User
from storefront.models.catalog import Category, Product
from storefront.models.event import Event
from storefront.models.order import Order, OrderItem
from storefront.models.ticket import Ticket
from storefront.models.setting import Setting
from storefront.models.cart import CartItem

__all__ = [
    "User", "Category", "Product", "Event", "Order", "OrderItem",
    "Ticket", "Setting", "CartItem"
]
