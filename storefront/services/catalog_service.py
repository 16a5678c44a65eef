# storefront/services/catalog_service.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.errors import NotFound, InvalidInput
from storefront.domain.roles import Role
from storefront.repos.product_repo import ProductRepo
from storefront.services.role_service import RoleService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _aware(ts: datetime) -> datetime:
    #sqlite zwraca naive datetime
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def _validate(name: str, price: int) -> str:
    if not name or not name.strip():
        raise InvalidInput("Nazwa produktu nie moze byc pusta")
    if price < 0:
        raise InvalidInput("Cena nie moze byc ujemna")
    return name.strip()


class CatalogService:
    """
    Katalog produktow.
    commands (create, update, delete, set_featured) tylko admin
    query (get, list, list_featured) bez autoryzacji
    """

    def __init__(self, db: Session, roles: RoleService):
        self.repo = ProductRepo(db)
        self.roles = roles

    #query
    def get_product(self, product_id: str) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Produkt nie istnieje")
        return product

    def list_products(self) -> List[ProductModel]:
        return self.repo.list_products()

    def list_featured(self) -> List[ProductModel]:
        return self.repo.list_products(featured_only=True)

    #commands
    def create_product(
        self,
        caller: str | None,
        name: str,
        price: int,
        description: str,
        image_refs: List[str],
    ) -> ProductModel:
        self.roles.require(caller, Role.admin)
        name = _validate(name, price)

        now = datetime.now(timezone.utc)
        product = self.repo.create_at_next_position(
            ProductModel(
                name=name,
                description=description or "",
                price=price,
                image_refs=list(image_refs),
                is_featured=False,
                created_at=now,
                updated_at=now,
            )
        )

        logger.info(f"Utworzono produkt {product.id} ({product.name}, cena {product.price})")
        return product

    def update_product(
        self,
        caller: str | None,
        product_id: str,
        name: str,
        price: int,
        description: str,
        image_refs: List[str],
    ) -> ProductModel:
        self.roles.require(caller, Role.admin)
        name = _validate(name, price)

        product = self.get_product(product_id)

        # id i created_at bez zmian, updated_at nigdy mniejszy od created_at
        created_at = _aware(product.created_at)
        product.name = name
        product.price = price
        product.description = description or ""
        product.image_refs = list(image_refs)
        product.updated_at = max(datetime.now(timezone.utc), created_at)

        product = self.repo.save(product)
        logger.info(f"Zaktualizowano produkt {product.id}, cena {product.price}")
        return product

    def delete_product(self, caller: str | None, product_id: str) -> None:
        self.roles.require(caller, Role.admin)

        product = self.get_product(product_id)
        #pozycje koszykow zostaja, summary je pominie
        self.repo.delete_product(product)

        logger.info(f"Usunieto produkt {product_id}")

    def set_featured(self, caller: str | None, product_id: str, is_featured: bool) -> None:
        self.roles.require(caller, Role.admin)

        product = self.get_product(product_id)
        if product.is_featured == is_featured:
            return

        product.is_featured = is_featured
        self.repo.save(product)

        logger.info(f"Produkt {product_id} featured={is_featured}")
