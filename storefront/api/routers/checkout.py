# storefront/api/routers/checkout.py
from typing import List

from fastapi import APIRouter, Depends, Response

from storefront.api.deps import get_principal, get_checkout_service
from storefront.domain.schemas import CheckoutSessionIn, CheckoutLineItem, SessionStatusOut
from storefront.services.checkout_service import CheckoutService

router = APIRouter(prefix="/checkout", tags=["checkout"])


@router.post("/sessions", status_code=201)
def create_checkout_session(
    payload: CheckoutSessionIn,
    principal: str | None = Depends(get_principal),
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Tworzy sesje platnosci z aktualnego koszyka.
    Body odpowiedzi to json {"id", "url"} - klient przekierowuje na url.
    """
    encoded = svc.create_checkout_session(principal, payload.success_url, payload.cancel_url)
    return Response(content=encoded, status_code=201, media_type="application/json")


@router.get("/sessions/{session_id}", response_model=SessionStatusOut)
def get_session_status(session_id: str, svc: CheckoutService = Depends(get_checkout_service)):
    return svc.get_session_status(session_id)


@router.get("/sessions/{session_id}/items", response_model=List[CheckoutLineItem])
def get_session_items(session_id: str, svc: CheckoutService = Depends(get_checkout_service)):
    return svc.get_line_items(session_id)
