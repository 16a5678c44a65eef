# storefront/services/checkout_service.py
import json
from datetime import datetime, timezone, timedelta
from typing import Dict, Any, List
from urllib.parse import urlparse

from sqlalchemy.orm import Session

from storefront.data.models.checkout_session import CheckoutSessionModel
from storefront.data.models.gateway_config import GatewayConfigModel
from storefront.domain.errors import (
    EmptyCart,
    GatewayError,
    GatewayNotConfigured,
    InvalidInput,
    NotFound,
    SessionUnresolved,
)
from storefront.domain.schemas import CheckoutLineItem
from storefront.repos.checkout_repo import CheckoutRepo
from storefront.services.cart_service import CartService
from storefront.services.config_service import ConfigService
from storefront.services.gateway_client import StripeGateway
from storefront.services.role_service import RoleService
from storefront.services.sanitizer import RawResponse
from storefront.utils.settings import CHECKOUT_CURRENCY
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"

#stripe: status sesji + status platnosci
_PAID = {"paid", "no_payment_required"}


def _require_url(value: str, field: str) -> str:
    parsed = urlparse(value or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidInput(f"{field} musi byc absolutnym adresem http(s)")
    return value


def _with_session_placeholder(success_url: str) -> str:
    #strona sukcesu dostaje id sesji i moze odpytywac o status
    if SESSION_ID_PLACEHOLDER in success_url:
        return success_url
    sep = "&" if urlparse(success_url).query else "?"
    return f"{success_url}{sep}session_id={SESSION_ID_PLACEHOLDER}"


def _decode(response: RawResponse) -> Dict[str, Any]:
    try:
        payload = json.loads(response.body)
    except ValueError as e:
        raise GatewayError("Niepoprawna odpowiedz bramki") from e
    if not isinstance(payload, dict):
        raise GatewayError("Niepoprawna odpowiedz bramki")
    return payload


def completed_status(principal: str | None, response: str) -> Dict[str, Any]:
    return {"kind": "completed", "completed": {"user_principal": principal, "response": response}}


def failed_status(error: str) -> Dict[str, Any]:
    return {"kind": "failed", "failed": {"error": error}}


class CheckoutService:
    """
    Orkiestrator checkoutu.

    Sesja: [brak] -> pending -> completed | failed, tylko w jedna strone.
    Pozycje sa snapshotem koszyka z chwili tworzenia sesji - pozniejsze
    zmiany cen ani usuniecie produktu nie zmieniaja tego co juz jest w bramce.
    Koszyk nie jest tu czyszczony, robi to klient po statusie completed.
    """

    def __init__(
        self,
        db: Session,
        roles: RoleService,
        cart: CartService,
        config: ConfigService,
        gateway: StripeGateway,
    ):
        self.repo = CheckoutRepo(db)
        self.roles = roles
        self.cart = cart
        self.config = config
        self.gateway = gateway

    def create_checkout_session(self, principal: str | None, success_url: str, cancel_url: str) -> str:
        """
        Use Case: utworzenie sesji platnosci z koszyka (Command).

        1. snapshot koszyka (lock zwolniony przed wywolaniem bramki)
        2. pusty koszyk -> EmptyCart, brak konfiguracji -> GatewayNotConfigured
        3. wywolanie bramki, blad -> GatewayError i nic nie zapisujemy
        4. zapis sesji pending ze snapshotem
        Zwraca json {"id": ..., "url": ...}.
        """
        principal = self.roles.require(principal)
        _require_url(success_url, "success_url")
        _require_url(cancel_url, "cancel_url")

        summary = self.cart.snapshot(principal)
        if not summary["items"]:
            raise EmptyCart("Koszyk jest pusty")

        config = self.config.active_config()
        if config is None:
            raise GatewayNotConfigured("Bramka platnosci nie jest skonfigurowana")

        line_items = [
            CheckoutLineItem(
                product_name=line["product"].name,
                product_description=line["product"].description,
                quantity=line["quantity"],
                price_in_cents=line["product"].price,
                currency=CHECKOUT_CURRENCY,
            )
            for line in summary["items"]
        ]
        snapshot = [item.model_dump() for item in line_items]

        logger.info(f"Tworzenie sesji platnosci dla {principal}, pozycji: {len(snapshot)}")
        response = self.gateway.create_session(
            secret_key=config.secret_key,
            line_items=snapshot,
            success_url=_with_session_placeholder(success_url),
            cancel_url=cancel_url,
            allowed_countries=list(config.allowed_countries or []),
            client_reference_id=principal,
        )

        payload = _decode(response)
        session_id, url = payload.get("id"), payload.get("url")
        if not session_id or not url:
            raise GatewayError("Bramka nie zwrocila id i url sesji")

        self.repo.create_session(
            CheckoutSessionModel(
                id=session_id,
                principal=principal,
                url=url,
                status="pending",
                line_items=snapshot,
            )
        )

        logger.info(f"Sesja {session_id} utworzona dla {principal}")
        return json.dumps({"id": session_id, "url": url})

    def get_line_items(self, session_id: str) -> List[CheckoutLineItem]:
        session = self._get(session_id)
        return [CheckoutLineItem(**item) for item in session.line_items]

    def get_session_status(self, session_id: str) -> Dict[str, Any]:
        """
        Use Case: status sesji (Query, zapisuje tylko przejscie do stanu koncowego).
        Sesja jeszcze nie rozstrzygnieta przez bramke -> SessionUnresolved.
        """
        session = self._get(session_id)

        stored = self._stored_outcome(session)
        if stored is not None:
            return stored

        config = self.config.active_config()
        if config is None:
            raise GatewayNotConfigured("Bramka platnosci nie jest skonfigurowana")

        return self._refresh(session, config)

    def reconcile_pending(self, older_than: timedelta) -> int:
        """
        Dociaga status sesji pending starszych niz `older_than`.
        Zwraca liczbe sesji ktore przeszly w stan koncowy.
        """
        config = self.config.active_config()
        if config is None:
            logger.warning("Reconcile pominiety - bramka nie jest skonfigurowana")
            return 0

        cutoff = datetime.now(timezone.utc) - older_than
        sessions = self.repo.get_pending_sessions(cutoff)
        logger.info(f"Found {len(sessions)} pending sessions to reconcile")

        resolved = 0
        for session in sessions:
            try:
                self._refresh(session, config)
                resolved += 1
            except SessionUnresolved:
                continue
            except GatewayError as e:
                logger.warning(f"Nie udalo sie sprawdzic sesji {session.id}: {e}")
        return resolved

    def _get(self, session_id: str) -> CheckoutSessionModel:
        session = self.repo.get_session(session_id)
        if not session:
            raise NotFound("Sesja platnosci nie istnieje")
        return session

    @staticmethod
    def _stored_outcome(session: CheckoutSessionModel) -> Dict[str, Any] | None:
        if session.status == "completed":
            return completed_status(session.resolved_principal, session.raw_response or "")
        if session.status == "failed":
            return failed_status(session.error or "")
        return None

    def _refresh(self, session: CheckoutSessionModel, config: GatewayConfigModel) -> Dict[str, Any]:
        response = self.gateway.get_session(config.secret_key, session.id)
        payload = _decode(response)

        status = payload.get("status")
        payment_status = payload.get("payment_status")
        now = datetime.now(timezone.utc)

        if status == "complete" and payment_status in _PAID:
            body = response.body.decode("utf-8", errors="replace")
            new_data = {
                "status": "completed",
                "resolved_principal": payload.get("client_reference_id"),
                "raw_response": body,
                "resolved_at": now,
            }
        elif status == "expired":
            new_data = {
                "status": "failed",
                "error": "Sesja platnosci wygasla",
                "resolved_at": now,
            }
        else:
            raise SessionUnresolved(
                f"Sesja {session.id} nie jest rozstrzygnieta (status={status}, platnosc={payment_status})"
            )

        rowcount = self.repo.resolve_session(session.id, new_data)
        if rowcount == 0:
            #ktos inny juz zapisal stan koncowy, ten wygrywa
            logger.info(f"Sesja {session.id} rozstrzygnieta rownolegle")
        else:
            logger.info(f"Sesja {session.id} -> {new_data['status']}")

        return self._stored_outcome(self._get(session.id))
