from fastapi import APIRouter, Depends, Response

from storefront.api.deps import get_principal, get_role_service
from storefront.domain.schemas import RoleIn, RoleOut, IsAdminOut
from storefront.services.role_service import RoleService

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("/me", response_model=RoleOut)
def get_caller_role(
    principal: str | None = Depends(get_principal),
    svc: RoleService = Depends(get_role_service),
):
    return {"principal": principal, "role": svc.get_role(principal)}


@router.get("/me/is-admin", response_model=IsAdminOut)
def is_caller_admin(
    principal: str | None = Depends(get_principal),
    svc: RoleService = Depends(get_role_service),
):
    return {"is_admin": svc.is_admin(principal)}


@router.put("/{target}", status_code=204)
def assign_role(
    target: str,
    payload: RoleIn,
    principal: str | None = Depends(get_principal),
    svc: RoleService = Depends(get_role_service),
):
    svc.assign_role(principal, target, payload.role)
    return Response(status_code=204)
