from pydantic import BaseModel
from datetime import datetime
from typing import Optional
from storefront.models.user import UserRole


class UserResponse(BaseModel):
    id: int
    open_id: str
    name: Optional[str]
    email: Optional[str]
    role: UserRole
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class TokenData(BaseModel):
    open_id: Optional[str] = None


class SuccessResponse(BaseModel):
    success: bool = True


class DashboardStats(BaseModel):
    total_products: int
    total_events: int
    total_orders: int
    pending_orders: int
    revenue: int
    total_tickets: int
    upcoming_events: int
