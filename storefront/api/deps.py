# storefront/api/deps.py
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.services.banner_service import BannerService
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.services.checkout_service import CheckoutService
from storefront.services.config_service import ConfigService
from storefront.services.gateway_client import StripeGateway
from storefront.services.lock_service import LockService
from storefront.services.role_service import RoleService


def get_principal(x_principal: str | None = Header(default=None)) -> str | None:
    #tozsamosc weryfikuje identity provider przed nami, tu tylko ja odczytujemy
    if x_principal is None:
        return None
    return x_principal.strip() or None


def get_lock_service() -> LockService:
    return LockService()


def get_gateway() -> StripeGateway:
    return StripeGateway()


def get_role_service(db: Session = Depends(get_db)) -> RoleService:
    return RoleService(db)


def get_catalog_service(
    db: Session = Depends(get_db),
    roles: RoleService = Depends(get_role_service),
) -> CatalogService:
    return CatalogService(db, roles)


def get_cart_service(
    db: Session = Depends(get_db),
    roles: RoleService = Depends(get_role_service),
    lock_service: LockService = Depends(get_lock_service),
) -> CartService:
    return CartService(db=db, roles=roles, lock_service=lock_service)


def get_config_service(
    db: Session = Depends(get_db),
    roles: RoleService = Depends(get_role_service),
) -> ConfigService:
    return ConfigService(db, roles)


def get_banner_service(
    db: Session = Depends(get_db),
    roles: RoleService = Depends(get_role_service),
) -> BannerService:
    return BannerService(db, roles)


def get_checkout_service(
    db: Session = Depends(get_db),
    roles: RoleService = Depends(get_role_service),
    cart: CartService = Depends(get_cart_service),
    config: ConfigService = Depends(get_config_service),
    gateway: StripeGateway = Depends(get_gateway),
) -> CheckoutService:
    return CheckoutService(db=db, roles=roles, cart=cart, config=config, gateway=gateway)
