#storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, Response

from storefront.api.deps import get_principal, get_catalog_service
from storefront.domain.schemas import ProductIn, ProductOut, FeaturedIn
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(svc: CatalogService = Depends(get_catalog_service)):
    return svc.list_products()


@router.get("/featured", response_model=List[ProductOut])
def list_featured_products(svc: CatalogService = Depends(get_catalog_service)):
    return svc.list_featured()


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, svc: CatalogService = Depends(get_catalog_service)):
    return svc.get_product(product_id)


@router.post("", response_model=ProductOut, status_code=201)
def add_product(
    payload: ProductIn,
    principal: str | None = Depends(get_principal),
    svc: CatalogService = Depends(get_catalog_service),
):
    return svc.create_product(
        principal,
        name=payload.name,
        price=payload.price,
        description=payload.description,
        image_refs=payload.image_refs,
    )


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: ProductIn,
    principal: str | None = Depends(get_principal),
    svc: CatalogService = Depends(get_catalog_service),
):
    return svc.update_product(
        principal,
        product_id,
        name=payload.name,
        price=payload.price,
        description=payload.description,
        image_refs=payload.image_refs,
    )


@router.delete("/{product_id}", status_code=204)
def delete_product(
    product_id: str,
    principal: str | None = Depends(get_principal),
    svc: CatalogService = Depends(get_catalog_service),
):
    svc.delete_product(principal, product_id)
    return Response(status_code=204)


@router.put("/{product_id}/featured", status_code=204)
def set_featured(
    product_id: str,
    payload: FeaturedIn,
    principal: str | None = Depends(get_principal),
    svc: CatalogService = Depends(get_catalog_service),
):
    svc.set_featured(principal, product_id, payload.is_featured)
    return Response(status_code=204)
