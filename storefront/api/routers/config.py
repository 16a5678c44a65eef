from fastapi import APIRouter, Depends, HTTPException, Response

from storefront.api.deps import get_principal, get_config_service
from storefront.domain.schemas import GatewayConfigIn, GatewayConfigOut, GatewayStatusOut
from storefront.services.config_service import ConfigService

router = APIRouter(prefix="/config/gateway", tags=["config"])


@router.get("/status", response_model=GatewayStatusOut)
def is_gateway_configured(svc: ConfigService = Depends(get_config_service)):
    return {"configured": svc.is_configured()}


@router.get("", response_model=GatewayConfigOut)
def get_gateway_configuration(
    principal: str | None = Depends(get_principal),
    svc: ConfigService = Depends(get_config_service),
):
    config = svc.get_configuration(principal)
    if not config:
        raise HTTPException(status_code=404, detail="Bramka nie jest skonfigurowana")
    return config


@router.put("", status_code=204)
def set_gateway_configuration(
    payload: GatewayConfigIn,
    principal: str | None = Depends(get_principal),
    svc: ConfigService = Depends(get_config_service),
):
    svc.set_configuration(principal, payload.secret_key, payload.allowed_countries)
    return Response(status_code=204)
