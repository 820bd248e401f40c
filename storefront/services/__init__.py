from storefront.services.auth import AuthService
from storefront.services.catalog import CategoryService, ProductService
from storefront.services.events import EventService
from storefront.services.dashboard import DashboardService
from storefront.services.tickets import TicketService
from storefront.services.orders import OrderService
from storefront.services.cart import CartService
from storefront.services.settings_store import SettingsService
from storefront.services.email import EmailService
from storefront.services.notifications import NotificationDispatcher

__all__ = [
    "AuthService", "CategoryService", "ProductService", "EventService",
    "TicketService", "OrderService", "CartService", "SettingsService",
    "EmailService", "NotificationDispatcher", "DashboardService"
]
