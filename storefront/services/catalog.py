import logging
from typing import Optional
from sqlalchemy.orm import Session

from storefront.database import safe_read, commit
from storefront.errors import NotFoundError
from storefront.models.catalog import Category, Product
from storefront.schemas.catalog import (
    CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate
)

logger = logging.getLogger(__name__)

FEATURED_PRODUCTS_LIMIT = 8
SLUG_TAKEN = "Slug already in use"


class CategoryService:
    @staticmethod
    @safe_read(list)
    def list_categories(db: Session) -> list[Category]:
        return db.query(Category).order_by(Category.display_order, Category.name).all()

    @staticmethod
    @safe_read(lambda: None)
    def get_category(db: Session, category_id: int) -> Optional[Category]:
        return db.query(Category).filter(Category.id == category_id).first()

    @staticmethod
    def create_category(db: Session, data: CategoryCreate) -> Category:
        # New categories go to the end of the list
        last = db.query(Category).order_by(Category.display_order.desc()).first()
        display_order = last.display_order + 1 if last else 0

        category = Category(**data.model_dump(), display_order=display_order)
        db.add(category)
        commit(db, conflict=SLUG_TAKEN)
        db.refresh(category)
        return category

    @staticmethod
    def update_category(db: Session, category_id: int, data: CategoryUpdate) -> Category:
        category = db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise NotFoundError("Category")

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(category, field, value)
        commit(db, conflict=SLUG_TAKEN)
        db.refresh(category)
        return category

    @staticmethod
    def delete_category(db: Session, category_id: int) -> None:
        category = db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise NotFoundError("Category")
        db.delete(category)
        commit(db)

    @staticmethod
    def reorder_category(db: Session, category_id: int, new_order: int) -> None:
        """
        Move a category to a new display position.
        Categories between the old and new position shift by one to close the gap.
        """
        category = db.query(Category).filter(Category.id == category_id).first()
        if not category:
            raise NotFoundError("Category")

        old_order = category.display_order or 0
        if old_order == new_order:
            return

        others = db.query(Category).filter(Category.id != category_id).all()
        for other in others:
            order = other.display_order or 0
            if old_order < new_order and old_order < order <= new_order:
                other.display_order = order - 1
            elif new_order < old_order and new_order <= order < old_order:
                other.display_order = order + 1

        category.display_order = new_order
        commit(db)


class ProductService:
    @staticmethod
    @safe_read(list)
    def list_products(db: Session, active_only: bool = True) -> list[Product]:
        query = db.query(Product)
        if active_only:
            query = query.filter(Product.active.is_(True))
        return query.order_by(Product.created_at.desc(), Product.id.desc()).all()

    @staticmethod
    @safe_read(list)
    def featured_products(db: Session) -> list[Product]:
        return db.query(Product).filter(
            Product.featured.is_(True),
            Product.active.is_(True)
        ).order_by(Product.created_at.desc(), Product.id.desc()).limit(FEATURED_PRODUCTS_LIMIT).all()

    @staticmethod
    @safe_read(lambda: None)
    def get_product(db: Session, product_id: int) -> Optional[Product]:
        return db.query(Product).filter(Product.id == product_id).first()

    @staticmethod
    @safe_read(lambda: None)
    def get_product_by_slug(db: Session, slug: str) -> Optional[Product]:
        return db.query(Product).filter(Product.slug == slug).first()

    @staticmethod
    @safe_read(list)
    def products_by_category(db: Session, category_id: int) -> list[Product]:
        return db.query(Product).filter(
            Product.category_id == category_id,
            Product.active.is_(True)
        ).order_by(Product.created_at.desc(), Product.id.desc()).all()

    @staticmethod
    @safe_read(list)
    def search_products(db: Session, term: str) -> list[Product]:
        return db.query(Product).filter(
            Product.name.ilike(f"%{term}%"),
            Product.active.is_(True)
        ).order_by(Product.created_at.desc(), Product.id.desc()).all()

    @staticmethod
    def create_product(db: Session, data: ProductCreate) -> Product:
        product = Product(**data.model_dump())
        db.add(product)
        commit(db, conflict=SLUG_TAKEN)
        db.refresh(product)
        return product

    @staticmethod
    def update_product(db: Session, product_id: int, data: ProductUpdate) -> Product:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Product")

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(product, field, value)
        commit(db, conflict=SLUG_TAKEN)
        db.refresh(product)
        return product

    @staticmethod
    def delete_product(db: Session, product_id: int) -> None:
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFoundError("Product")
        db.delete(product)
        commit(db)
