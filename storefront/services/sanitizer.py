# storefront/services/sanitizer.py
from dataclasses import dataclass
from typing import Tuple

#tylko te naglowki moga dotrzec do logiki checkoutu
ALLOWED_HEADERS = frozenset({"content-type"})


@dataclass(frozen=True)
class RawResponse:
    status: int
    body: bytes
    headers: Tuple[Tuple[str, str], ...] = ()


def sanitize(raw: RawResponse) -> RawResponse:
    """
    Deterministyczna projekcja odpowiedzi HTTP z bramki.
    Wyrzuca wszystkie naglowki spoza allow-listy (date, request-id itd.),
    status i body bez zmian.
    """
    headers = tuple(
        (name, value) for name, value in raw.headers if name.lower() in ALLOWED_HEADERS
    )
    return RawResponse(status=raw.status, body=raw.body, headers=headers)
