from pydantic import BaseModel, Field
from typing import Optional


class CartItemAdd(BaseModel):
    session_id: Optional[str] = None
    product_id: int
    quantity: int = Field(ge=1)
    size: Optional[str] = None
    color: Optional[str] = None


class CartItemUpdate(BaseModel):
    quantity: int = Field(ge=1)


class CartItemResponse(BaseModel):
    id: int
    user_id: Optional[int]
    session_id: Optional[str]
    product_id: int
    quantity: int
    size: Optional[str]
    color: Optional[str]

    class Config:
        from_attributes = True
