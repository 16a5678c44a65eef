import os

# baza testowa w pamieci, ustawione przed importem storefront
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront.data.models  # noqa: F401
from storefront.api import create_api
from storefront.api.deps import get_gateway, get_lock_service
from storefront.data.database import Base, get_db
from storefront.data.seed import seed_admins
from storefront.services.banner_service import BannerService
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.services.checkout_service import CheckoutService
from storefront.services.config_service import ConfigService
from storefront.services.role_service import RoleService
from tests.fakes import ADMIN, FakeGateway, InMemoryLockService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    db = session_factory()
    seed_admins(db, [ADMIN])
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def lock_service():
    return InMemoryLockService()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def roles(db_session):
    return RoleService(db_session)


@pytest.fixture
def catalog(db_session, roles):
    return CatalogService(db_session, roles)


@pytest.fixture
def cart(db_session, roles, lock_service):
    return CartService(db=db_session, roles=roles, lock_service=lock_service)


@pytest.fixture
def config(db_session, roles):
    return ConfigService(db_session, roles)


@pytest.fixture
def banners(db_session, roles):
    return BannerService(db_session, roles)


@pytest.fixture
def checkout(db_session, roles, cart, config, gateway):
    return CheckoutService(db=db_session, roles=roles, cart=cart, config=config, gateway=gateway)


@pytest.fixture
def configured(config):
    config.set_configuration(ADMIN, "sk_test_123", ["us", "PL"])
    return config


@pytest.fixture
def client(engine, db_session, lock_service, gateway):
    app = create_api()
    session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_gateway] = lambda: gateway
    return TestClient(app)