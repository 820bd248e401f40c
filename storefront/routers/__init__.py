from storefront.routers.auth import router as auth_router
from storefront.routers.categories import router as categories_router
from storefront.routers.products import router as products_router
from storefront.routers.events import router as events_router
from storefront.routers.orders import router as orders_router
from storefront.routers.tickets import router as tickets_router
from storefront.routers.cart import router as cart_router
from storefront.routers.settings import router as settings_router
from storefront.routers.admin import router as admin_router

__all__ = [
    "auth_router",
    "categories_router",
    "products_router",
    "events_router",
    "orders_router",
    "tickets_router",
    "cart_router",
    "settings_router",
    "admin_router"
]
