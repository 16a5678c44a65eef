# storefront/tasks/reconcile.py
from datetime import timedelta

from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.config_service import ConfigService
from storefront.services.gateway_client import StripeGateway
from storefront.services.lock_service import LockService
from storefront.services.role_service import RoleService
from storefront.utils.settings import RECONCILE_AFTER_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def build_checkout_service(db) -> CheckoutService:
    roles = RoleService(db)
    return CheckoutService(
        db=db,
        roles=roles,
        cart=CartService(db=db, roles=roles, lock_service=LockService()),
        config=ConfigService(db, roles),
        gateway=StripeGateway(),
    )


@celery_app.task(name="storefront.tasks.reconcile.reconcile_pending_sessions_task")
def reconcile_pending_sessions_task():
    logger.info("Reconcile checkout sessions task started")

    db = SessionLocal()
    try:
        svc = build_checkout_service(db)
        resolved = svc.reconcile_pending(timedelta(seconds=RECONCILE_AFTER_SECONDS))
        logger.info(f"Resolved {resolved} checkout sessions")
        return {"resolved": resolved}
    finally:
        db.close()
