# storefront/repos/settings_repo.py
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.banner import BannerModel
from storefront.data.models.gateway_config import GatewayConfigModel, GATEWAY_CONFIG_ID


class BannerRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_banners(self) -> list[BannerModel]:
        return list(
            self.db.execute(select(BannerModel).order_by(BannerModel.id)).scalars().all()
        )

    def get_banner(self, url: str) -> BannerModel | None:
        return self.db.execute(
            select(BannerModel).where(BannerModel.url == url)
        ).scalar_one_or_none()

    def create_banner(self, banner: BannerModel) -> BannerModel | None:
        """Zwraca None gdy ten sam url zostal dodany rownolegle."""
        self.db.add(banner)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return None
        self.db.refresh(banner)
        return banner

    def delete_banner(self, banner: BannerModel) -> None:
        self.db.delete(banner)
        self.db.commit()


class GatewayConfigRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_config(self) -> GatewayConfigModel | None:
        return self.db.get(GatewayConfigModel, GATEWAY_CONFIG_ID)

    def replace_config(self, secret_key: str, allowed_countries: list[str]) -> GatewayConfigModel:
        config = self.get_config()
        if config:
            config.secret_key = secret_key
            config.allowed_countries = allowed_countries
        else:
            config = GatewayConfigModel(
                id=GATEWAY_CONFIG_ID,
                secret_key=secret_key,
                allowed_countries=allowed_countries,
            )
            self.db.add(config)
        self.db.commit()
        return config
