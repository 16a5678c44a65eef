# storefront/services/banner_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.banner import BannerModel
from storefront.domain.errors import InvalidInput, NotFound
from storefront.domain.roles import Role
from storefront.repos.settings_repo import BannerRepo
from storefront.services.role_service import RoleService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class BannerService:
    def __init__(self, db: Session, roles: RoleService):
        self.repo = BannerRepo(db)
        self.roles = roles

    def list_banners(self) -> List[str]:
        return [b.url for b in self.repo.list_banners()]

    def add_banner(self, caller: str | None, url: str) -> str:
        self.roles.require(caller, Role.admin)

        url = (url or "").strip()
        if not url:
            raise InvalidInput("Adres bannera nie moze byc pusty")

        #duplikaty odrzucane, istniejacy banner zostaje na swoim miejscu
        if self.repo.get_banner(url):
            return url

        if self.repo.create_banner(BannerModel(url=url)) is None:
            logger.info(f"Banner {url} dodany rownolegle, pomijam")
            return url

        logger.info(f"Dodano banner {url}")
        return url

    def delete_banner(self, caller: str | None, url: str) -> None:
        self.roles.require(caller, Role.admin)

        banner = self.repo.get_banner((url or "").strip())
        if not banner:
            raise NotFound("Banner nie istnieje")

        self.repo.delete_banner(banner)
        logger.info(f"Usunieto banner {url}")
