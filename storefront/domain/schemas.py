# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal, Optional
from datetime import datetime

from storefront.domain.roles import Role


class ProductIn(BaseModel):
    """Schema dla tworzenia i edycji produktu."""

    name: str = Field(..., description="Nazwa produktu")
    price: int = Field(..., description="Cena w najmniejszej jednostce waluty (>= 0)")
    description: str = Field("", description="Opis produktu")
    image_refs: List[str] = Field(default_factory=list, description="Adresy obrazkow w kolejnosci")


class ProductOut(BaseModel):
    """Schema dla produktu (response)."""

    id: str
    name: str
    description: str
    price: int
    image_refs: List[str]
    is_featured: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FeaturedIn(BaseModel):
    is_featured: bool


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1, description="ID produktu")
    quantity: int = Field(..., description="Ilosc produktu (musi byc >= 1)")


class CartLineOut(BaseModel):
    product: ProductOut
    quantity: int


class CartSummaryOut(BaseModel):
    """Schema dla koszyka (response), total z aktualnych cen."""

    items: List[CartLineOut]
    total_amount: int


class CheckoutLineItem(BaseModel):
    """Niezmienny snapshot pozycji z chwili tworzenia sesji."""

    product_name: str
    product_description: str
    quantity: int
    price_in_cents: int
    currency: str

    model_config = ConfigDict(frozen=True)


class CheckoutSessionIn(BaseModel):
    success_url: str
    cancel_url: str


class CompletedOut(BaseModel):
    user_principal: Optional[str] = None
    response: str


class FailedOut(BaseModel):
    error: str


class SessionStatusOut(BaseModel):
    """Tylko dwa stany koncowe, pending jest bledem dla wolajacego."""

    kind: Literal["completed", "failed"]
    completed: Optional[CompletedOut] = None
    failed: Optional[FailedOut] = None


class RoleOut(BaseModel):
    principal: Optional[str] = None
    role: Role


class IsAdminOut(BaseModel):
    is_admin: bool


class RoleIn(BaseModel):
    role: Role


class GatewayConfigIn(BaseModel):
    """Schema dla konfiguracji bramki, nadpisuje calosc."""

    secret_key: str
    allowed_countries: List[str] = Field(default_factory=list)


class GatewayConfigOut(BaseModel):
    secret_key: str
    allowed_countries: List[str]

    model_config = ConfigDict(from_attributes=True)


class GatewayStatusOut(BaseModel):
    configured: bool


class BannerIn(BaseModel):
    url: str


class BannerOut(BaseModel):
    url: str
