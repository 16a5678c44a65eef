from sqlalchemy import Column, Integer, String, UniqueConstraint, CheckConstraint

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    principal = Column(String, nullable=False, index=True)
    #bez FK - usuniety produkt zostaje w koszyku i jest odfiltrowany przy odczycie
    product_id = Column(String(32), nullable=False)

    quantity = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("principal", "product_id", name="u_cart_principal_product"),
        CheckConstraint("quantity >= 1", name="ck_cart_quantity"),
    )
