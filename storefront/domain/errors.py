# storefront/domain/errors.py


class StorefrontError(Exception):
    """Bazowy blad domeny, zawsze dotyczy pojedynczego wywolania."""


class Unauthorized(StorefrontError):
    pass


class NotFound(StorefrontError):
    pass


class InvalidInput(StorefrontError):
    pass


class InvalidQuantity(InvalidInput):
    pass


class EmptyCart(StorefrontError):
    pass


class CartBusy(StorefrontError):
    """Inna operacja trzyma lock koszyka tego principala."""


class GatewayNotConfigured(StorefrontError):
    pass


class GatewayError(StorefrontError):
    """Siec, timeout, 4xx/5xx albo niepoprawna odpowiedz bramki platnosci."""


class SessionUnresolved(StorefrontError):
    """Bramka nie zna jeszcze koncowego statusu sesji."""
