#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Response

from storefront.api.deps import get_principal, get_cart_service
from storefront.domain.schemas import ItemIn, CartSummaryOut
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=CartSummaryOut)
def get_cart_summary(
    principal: str | None = Depends(get_principal),
    svc: CartService = Depends(get_cart_service),
):
    return svc.get_summary(principal)


@router.post("/items", status_code=204)
def add_to_cart(
    payload: ItemIn,
    principal: str | None = Depends(get_principal),
    svc: CartService = Depends(get_cart_service),
):
    svc.add_product(principal, payload.product_id, payload.quantity)
    return Response(status_code=204)


@router.delete("/items/{product_id}", status_code=204)
def remove_from_cart(
    product_id: str,
    principal: str | None = Depends(get_principal),
    svc: CartService = Depends(get_cart_service),
):
    svc.remove_product(principal, product_id)
    return Response(status_code=204)


@router.delete("", status_code=204)
def clear_cart(
    principal: str | None = Depends(get_principal),
    svc: CartService = Depends(get_cart_service),
):
    svc.clear(principal)
    return Response(status_code=204)
