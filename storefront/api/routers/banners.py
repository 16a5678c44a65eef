from typing import List

from fastapi import APIRouter, Depends, Query, Response

from storefront.api.deps import get_principal, get_banner_service
from storefront.domain.schemas import BannerIn, BannerOut
from storefront.services.banner_service import BannerService

router = APIRouter(prefix="/banners", tags=["banners"])


@router.get("", response_model=List[str])
def list_banners(svc: BannerService = Depends(get_banner_service)):
    return svc.list_banners()


@router.post("", response_model=BannerOut, status_code=201)
def add_banner(
    payload: BannerIn,
    principal: str | None = Depends(get_principal),
    svc: BannerService = Depends(get_banner_service),
):
    return {"url": svc.add_banner(principal, payload.url)}


@router.delete("", status_code=204)
def delete_banner(
    url: str = Query(...),
    principal: str | None = Depends(get_principal),
    svc: BannerService = Depends(get_banner_service),
):
    svc.delete_banner(principal, url)
    return Response(status_code=204)
