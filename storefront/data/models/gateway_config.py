from sqlalchemy import Column, Integer, Text, JSON

from storefront.data.database import Base

#singleton - zawsze jeden wiersz o id 1
GATEWAY_CONFIG_ID = 1


class GatewayConfigModel(Base):
    __tablename__ = "gateway_config"

    id = Column(Integer, primary_key=True, default=GATEWAY_CONFIG_ID)
    secret_key = Column(Text, nullable=False)
    allowed_countries = Column(JSON, nullable=False, default=list)
