# storefront/repos/product_repo.py
from typing import Iterable

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.utils.retry import integrity_retry


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products(self, product_ids: Iterable[str]) -> dict[str, ProductModel]:
        ids = list(set(product_ids))
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(ids))
        ).scalars().all()
        return {p.id: p for p in rows}

    def list_products(self, featured_only: bool = False) -> list[ProductModel]:
        stmt = select(ProductModel)
        if featured_only:
            stmt = stmt.where(ProductModel.is_featured.is_(True))
        stmt = stmt.order_by(ProductModel.position, ProductModel.id)
        return list(self.db.execute(stmt).scalars().all())

    def next_position(self) -> int:
        current = self.db.execute(select(func.max(ProductModel.position))).scalar()
        return (current or 0) + 1

    @integrity_retry()
    def create_at_next_position(self, product: ProductModel) -> ProductModel:
        #dwa rownolegle inserty moga wyliczyc te sama pozycje, unique na position to lapie
        product.position = self.next_position()
        self.db.add(product)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(product)
        return product

    def save(self, product: ProductModel) -> ProductModel:
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()
