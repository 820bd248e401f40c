from storefront.schemas.user import UserResponse, TokenData, SuccessResponse, DashboardStats
from storefront.schemas.catalog import (
    CategoryCreate, CategoryUpdate, CategoryReorder, CategoryResponse,
    ProductCreate, ProductUpdate, ProductResponse
)
from storefront.schemas.event import EventCreate, EventUpdate, EventResponse
from storefront.schemas.order import (
    OrderItemCreate, OrderCreate, OrderCreated, OrderStatusUpdate,
    OrderItemResponse, OrderResponse
)
from storefront.schemas.ticket import TicketResponse, TicketVerifyResponse
from storefront.schemas.setting import SettingUpsert, SettingResponse
from storefront.schemas.cart import CartItemAdd, CartItemUpdate, CartItemResponse

__all__ = [
    "UserResponse", "TokenData", "SuccessResponse", "DashboardStats",
    "CategoryCreate", "CategoryUpdate", "CategoryReorder", "CategoryResponse",
    "ProductCreate", "ProductUpdate", "ProductResponse",
    "EventCreate", "EventUpdate", "EventResponse",
    "OrderItemCreate", "OrderCreate", "OrderCreated", "OrderStatusUpdate",
    "OrderItemResponse", "OrderResponse",
    "TicketResponse", "TicketVerifyResponse",
    "SettingUpsert", "SettingResponse",
    "CartItemAdd", "CartItemUpdate", "CartItemResponse"
]
