# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "storefront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAZNE: explicite importuj taski, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "storefront.tasks.reconcile",
)

celery_app.conf.beat_schedule = {
    "reconcile-checkout-sessions": {
        "task": "storefront.tasks.reconcile.reconcile_pending_sessions_task",
        "schedule": 300.0,  # co 5 minut
    },
}

celery_app.conf.timezone = "UTC"
