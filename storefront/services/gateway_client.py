# storefront/services/gateway_client.py
import json
from urllib.parse import quote
from typing import List, Dict, Any

import requests
from requests import RequestException

from storefront.domain.errors import GatewayError
from storefront.services.sanitizer import RawResponse, sanitize
from storefront.utils.settings import STRIPE_API_BASE, GATEWAY_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _line_item_params(line_items: List[Dict[str, Any]]) -> list[tuple[str, str]]:
    #stripe przyjmuje zagniezdzone pola jako form-encoded line_items[0][price_data][...]
    params = []
    for idx, item in enumerate(line_items):
        prefix = f"line_items[{idx}]"
        params += [
            (f"{prefix}[price_data][currency]", item["currency"]),
            (f"{prefix}[price_data][product_data][name]", item["product_name"]),
            (f"{prefix}[price_data][unit_amount]", str(item["price_in_cents"])),
            (f"{prefix}[quantity]", str(item["quantity"])),
        ]
        if item.get("product_description"):
            params.append(
                (f"{prefix}[price_data][product_data][description]", item["product_description"])
            )
    return params


class StripeGateway:
    """
    Klient hostowanego checkoutu Stripe.
    Bez retry - ponowienie to decyzja wolajacego.
    Kazda odpowiedz przechodzi przez sanitize() zanim ktos ja obejrzy.
    """

    def __init__(self, base_url: str | None = None, timeout: float = GATEWAY_TIMEOUT_SECONDS):
        self.base_url = (base_url or STRIPE_API_BASE).rstrip("/")
        self.timeout = timeout

    def _send(self, method: str, path: str, secret_key: str, data=None) -> RawResponse:
        url = f"{self.base_url}{path}"
        logger.info(f"StripeGateway {method} {url}")

        try:
            resp = requests.request(
                method,
                url,
                data=data,
                headers={"Authorization": f"Bearer {secret_key}"},
                timeout=self.timeout,
            )
        except RequestException as e:
            logger.error(f"Blad polaczenia z bramka: {e}")
            raise GatewayError(f"Bramka platnosci niedostepna: {e}") from e

        response = sanitize(
            RawResponse(
                status=resp.status_code,
                body=resp.content,
                headers=tuple(resp.headers.items()),
            )
        )

        if response.status >= 400:
            message = _error_message(response)
            logger.error(f"Bramka odpowiedziala {response.status}: {message}")
            raise GatewayError(f"Bramka odpowiedziala {response.status}: {message}")

        return response

    def create_session(
        self,
        secret_key: str,
        line_items: List[Dict[str, Any]],
        success_url: str,
        cancel_url: str,
        allowed_countries: List[str],
        client_reference_id: str,
    ) -> RawResponse:
        data = [
            ("mode", "payment"),
            ("success_url", success_url),
            ("cancel_url", cancel_url),
            ("client_reference_id", client_reference_id),
        ]
        data += _line_item_params(line_items)
        data += [
            (f"shipping_address_collection[allowed_countries][{i}]", code)
            for i, code in enumerate(allowed_countries)
        ]
        return self._send("POST", "/v1/checkout/sessions", secret_key, data=data)

    def get_session(self, secret_key: str, session_id: str) -> RawResponse:
        return self._send("GET", f"/v1/checkout/sessions/{quote(session_id, safe='')}", secret_key)


def _error_message(response: RawResponse) -> str:
    try:
        payload = json.loads(response.body)
        return payload["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.body[:200].decode("utf-8", errors="replace")
