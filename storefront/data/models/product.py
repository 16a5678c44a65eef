#storefront/data/models/product.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON, CheckConstraint

from storefront.data.database import Base


def _now():
    return datetime.now(timezone.utc)


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    #kolejnosc wstawienia, po niej sortujemy liste i featured; unikalna, kolizja => ponowne wyliczenie
    position = Column(Integer, nullable=False, unique=True, index=True)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Integer, nullable=False)  # w groszach/centach
    image_refs = Column(JSON, nullable=False, default=list)
    is_featured = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_now)

    __table_args__ = (CheckConstraint("price >= 0", name="ck_product_price"),)
