# storefront/repos/cart_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_items(self, principal: str) -> list[CartItemModel]:
        #kolejnosc dodania pierwszej pozycji
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.principal == principal)
                .order_by(CartItemModel.id)
            ).scalars().all()
        )

    def get_cart_item(self, principal: str, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.principal == principal,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> None:
        self.db.add(item)

    def delete_cart_item(self, principal: str, product_id: str) -> int:
        res = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.principal == principal,
                CartItemModel.product_id == product_id,
            )
        )
        return res.rowcount

    def clear_cart(self, principal: str) -> int:
        res = self.db.execute(
            delete(CartItemModel).where(CartItemModel.principal == principal)
        )
        return res.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
