# storefront/api/__init__.py
from fastapi import FastAPI

from storefront.api.errors import add_exception_handlers
from storefront.api.routers import health, roles, products, carts, checkout, config, banners


def create_api(**kwargs) -> FastAPI:
    app = FastAPI(title="Storefront Service", version="1.0.0", **kwargs)

    app.include_router(health.router)
    app.include_router(roles.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    app.include_router(config.router)
    app.include_router(banners.router)

    add_exception_handlers(app)
    return app
