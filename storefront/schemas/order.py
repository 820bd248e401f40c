from pydantic import BaseModel, EmailStr, Field, model_validator
from datetime import datetime
from typing import Optional, List
from storefront.models.order import OrderType, OrderStatus


class OrderItemCreate(BaseModel):
    product_id: Optional[int] = None
    product_name: str
    product_image: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    quantity: int = Field(ge=1)
    price: int = Field(ge=0)
    subtotal: int = Field(ge=0)

    @model_validator(mode="after")
    def check_subtotal(self):
        if self.subtotal != self.quantity * self.price:
            raise ValueError("subtotal must equal quantity * price")
        return self


class OrderCreate(BaseModel):
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    customer_phone: str = Field(min_length=1)
    shipping_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    order_type: OrderType
    total_amount: int = Field(ge=0)
    items: Optional[List[OrderItemCreate]] = None
    event_id: Optional[int] = None
    ticket_quantity: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def check_order_type_fields(self):
        if self.order_type == OrderType.CLOTHING and not self.items:
            raise ValueError("Clothing orders require at least one item")
        if self.order_type == OrderType.EVENT:
            if self.event_id is None or self.ticket_quantity is None:
                raise ValueError("Event orders require event_id and ticket_quantity")
        return self


class OrderCreated(BaseModel):
    order_id: int
    order_number: str


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemResponse(BaseModel):
    id: int
    order_id: int
    product_id: Optional[int]
    product_name: str
    product_image: Optional[str]
    size: Optional[str]
    color: Optional[str]
    quantity: int
    price: int
    subtotal: int

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    order_number: str
    user_id: Optional[int]
    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: Optional[str]
    city: Optional[str]
    state: Optional[str]
    zip_code: Optional[str]
    country: Optional[str]
    order_type: OrderType
    total_amount: int
    status: OrderStatus
    notes: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
