# storefront/services/cart_service.py
from typing import Dict, Any

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import NotFound, InvalidQuantity
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.lock_service import LockService
from storefront.services.role_service import RoleService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Prosta implementacja cqrs dla koszyka principala
    commands (add, remove, clear) pod lockiem koszyka w redisie
    query (summary) tylko odczyt, ceny zawsze aktualne z katalogu
    """

    def __init__(
        self,
        db: Session,
        roles: RoleService,
        lock_service: LockService,
    ):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.roles = roles
        self.lock_service = lock_service

    #query - odczyt
    def get_summary(self, principal: str | None) -> Dict[str, Any]:
        principal = self.roles.require(principal)
        return self._summary(principal)

    def _summary(self, principal: str) -> Dict[str, Any]:
        items = self.repo.get_cart_items(principal)
        products = self.products.get_products(i.product_id for i in items)

        lines = []
        for item in items:
            product = products.get(item.product_id)
            if product is None:
                #produkt usuniety z katalogu - pomijamy pozycje
                continue
            lines.append({"product": product, "quantity": item.quantity})

        #total liczony z biezacych cen, nie z chwili dodania
        total = sum(line["product"].price * line["quantity"] for line in lines)

        return {"items": lines, "total_amount": total}

    def snapshot(self, principal: str) -> Dict[str, Any]:
        """
        Spojny odczyt koszyka pod lockiem, dla checkoutu.
        Lock jest zwalniany zanim ktokolwiek zawola bramke.
        """
        with self.lock_service.cart_lock(principal):
            return self._summary(principal)

    #commands
    def add_product(self, principal: str | None, product_id: str, quantity: int) -> None:
        principal = self.roles.require(principal)

        # Walidacje
        if quantity < 1:
            raise InvalidQuantity("Ilosc musi byc wieksza niz 0")

        if not self.products.get_product(product_id):
            raise NotFound("Produkt nie istnieje")

        with self.lock_service.cart_lock(principal):
            try:
                existing_item = self.repo.get_cart_item(principal, product_id)

                if existing_item:
                    logger.info(
                        f"Produkt {product_id} juz jest w koszyku {principal}, zwiekszam ilosc "
                        f"z {existing_item.quantity} do {existing_item.quantity + quantity}"
                    )
                    existing_item.quantity += quantity
                else:
                    logger.info(f"Dodaje nowy produkt {product_id} do koszyka {principal}")
                    self.repo.add_cart_item(
                        CartItemModel(
                            principal=principal,
                            product_id=product_id,
                            quantity=quantity,
                        )
                    )

                self.repo.commit()
            except Exception as e:
                logger.error(f"Blad podczas dodawania produktu: {e}")
                self.repo.rollback()
                raise

    def remove_product(self, principal: str | None, product_id: str) -> None:
        principal = self.roles.require(principal)

        with self.lock_service.cart_lock(principal):
            #brak pozycji to nie blad
            removed = self.repo.delete_cart_item(principal, product_id)
            self.repo.commit()

        if removed:
            logger.info(f"Produkt {product_id} usuniety z koszyka {principal}")

    def clear(self, principal: str | None) -> None:
        principal = self.roles.require(principal)

        with self.lock_service.cart_lock(principal):
            removed = self.repo.clear_cart(principal)
            self.repo.commit()

        logger.info(f"Wyczyszczono koszyk {principal} ({removed} pozycji)")
