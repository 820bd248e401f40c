from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.errors import NotFoundError
from storefront.services.auth import get_current_admin
from storefront.services.catalog import ProductService
from storefront.models.user import User
from storefront.schemas.catalog import ProductCreate, ProductUpdate, ProductResponse
from storefront.schemas.user import SuccessResponse

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(active_only: bool = True, db: Session = Depends(get_db)):
    return ProductService.list_products(db, active_only=active_only)


@router.get("/featured", response_model=list[ProductResponse])
async def featured_products(db: Session = Depends(get_db)):
    return ProductService.featured_products(db)


@router.get("/search", response_model=list[ProductResponse])
async def search_products(q: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return ProductService.search_products(db, q)


@router.get("/by-slug/{slug}", response_model=ProductResponse)
async def get_product_by_slug(slug: str, db: Session = Depends(get_db)):
    product = ProductService.get_product_by_slug(db, slug)
    if not product:
        raise NotFoundError("Product")
    return product


@router.get("/by-category/{category_id}", response_model=list[ProductResponse])
async def products_by_category(category_id: int, db: Session = Depends(get_db)):
    return ProductService.products_by_category(db, category_id)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: Session = Depends(get_db)):
    product = ProductService.get_product(db, product_id)
    if not product:
        raise NotFoundError("Product")
    return product


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    data: ProductCreate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return ProductService.create_product(db, data)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    data: ProductUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return ProductService.update_product(db, product_id, data)


@router.delete("/{product_id}", response_model=SuccessResponse)
async def delete_product(
    product_id: int,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    ProductService.delete_product(db, product_id)
    return SuccessResponse()
