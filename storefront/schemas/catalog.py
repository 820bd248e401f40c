from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import Optional
from storefront.schemas.common import reject_explicit_nulls


class CategoryCreate(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None
    image_url: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def check_required_columns(self):
        reject_explicit_nulls(self, ("name", "slug"))
        return self


class CategoryReorder(BaseModel):
    new_order: int = Field(ge=0)


class CategoryResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str]
    image_url: Optional[str]
    display_order: int
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class ProductCreate(BaseModel):
    name: str
    slug: str
    description: Optional[str] = None
    price: int = Field(ge=0)
    compare_at_price: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[int] = None
    images: Optional[str] = None
    sizes: Optional[str] = None
    colors: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    featured: bool = False
    active: bool = True


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    price: Optional[int] = Field(default=None, ge=0)
    compare_at_price: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[int] = None
    images: Optional[str] = None
    sizes: Optional[str] = None
    colors: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    featured: Optional[bool] = None
    active: Optional[bool] = None

    @model_validator(mode="after")
    def check_required_columns(self):
        reject_explicit_nulls(self, ("name", "slug", "price", "stock", "featured", "active"))
        return self


class ProductResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str]
    price: int
    compare_at_price: Optional[int]
    category_id: Optional[int]
    images: Optional[str]
    sizes: Optional[str]
    colors: Optional[str]
    stock: int
    featured: bool
    active: bool
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
