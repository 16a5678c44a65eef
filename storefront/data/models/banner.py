from sqlalchemy import Column, Integer, Text

from storefront.data.database import Base


class BannerModel(Base):
    __tablename__ = "banners"

    id = Column(Integer, primary_key=True)
    url = Column(Text, nullable=False, unique=True)
