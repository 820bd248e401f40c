from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.errors import NotFoundError
from storefront.services.auth import get_current_admin
from storefront.services.catalog import CategoryService
from storefront.models.user import User
from storefront.schemas.catalog import (
    CategoryCreate, CategoryUpdate, CategoryReorder, CategoryResponse
)
from storefront.schemas.user import SuccessResponse

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: Session = Depends(get_db)):
    return CategoryService.list_categories(db)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: int, db: Session = Depends(get_db)):
    category = CategoryService.get_category(db, category_id)
    if not category:
        raise NotFoundError("Category")
    return category


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    data: CategoryCreate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return CategoryService.create_category(db, data)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return CategoryService.update_category(db, category_id, data)


@router.delete("/{category_id}", response_model=SuccessResponse)
async def delete_category(
    category_id: int,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    CategoryService.delete_category(db, category_id)
    return SuccessResponse()


@router.post("/{category_id}/reorder", response_model=SuccessResponse)
async def reorder_category(
    category_id: int,
    data: CategoryReorder,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    CategoryService.reorder_category(db, category_id, data.new_order)
    return SuccessResponse()
