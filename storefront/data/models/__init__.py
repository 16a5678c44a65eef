#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.role import RoleAssignmentModel
from storefront.data.models.product import ProductModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.checkout_session import CheckoutSessionModel
from storefront.data.models.banner import BannerModel
from storefront.data.models.gateway_config import GatewayConfigModel

__all__ = [
    "RoleAssignmentModel",
    "ProductModel",
    "CartItemModel",
    "CheckoutSessionModel",
    "BannerModel",
    "GatewayConfigModel",
]
