# storefront/services/config_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.gateway_config import GatewayConfigModel
from storefront.domain.errors import InvalidInput
from storefront.domain.roles import Role
from storefront.repos.settings_repo import GatewayConfigRepo
from storefront.services.role_service import RoleService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _normalize_countries(countries: List[str]) -> List[str]:
    normalized = []
    for code in countries:
        code = (code or "").strip()
        if len(code) != 2 or not code.isascii() or not code.isalpha():
            raise InvalidInput(f"Niepoprawny kod kraju: {code!r}")
        normalized.append(code.upper())
    return normalized


class ConfigService:
    """Singleton konfiguracji bramki platnosci (klucz + dozwolone kraje)."""

    def __init__(self, db: Session, roles: RoleService):
        self.repo = GatewayConfigRepo(db)
        self.roles = roles

    def is_configured(self) -> bool:
        config = self.repo.get_config()
        return bool(config and config.secret_key)

    def active_config(self) -> GatewayConfigModel | None:
        """Konfiguracja do uzytku wewnetrznego (checkout), bez autoryzacji."""
        config = self.repo.get_config()
        if not config or not config.secret_key:
            return None
        return config

    def get_configuration(self, caller: str | None) -> GatewayConfigModel | None:
        self.roles.require(caller, Role.admin)
        return self.repo.get_config()

    def set_configuration(self, caller: str | None, secret_key: str, allowed_countries: List[str]) -> None:
        self.roles.require(caller, Role.admin)

        if not secret_key or not secret_key.strip():
            raise InvalidInput("Klucz bramki nie moze byc pusty")
        countries = _normalize_countries(allowed_countries)

        self.repo.replace_config(secret_key.strip(), countries)
        #bez klucza w logach
        logger.info(f"Principal {caller} zapisal konfiguracje bramki, kraje: {countries}")
