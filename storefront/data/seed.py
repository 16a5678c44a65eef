# storefront/data/seed.py
from storefront.data.database import SessionLocal
from storefront.domain.roles import Role, is_resolved
from storefront.repos.role_repo import RoleRepo
from storefront.utils.settings import ADMIN_PRINCIPALS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def seed_admins(db, principals=None) -> int:
    """Nadaje role admin principalom z konfiguracji, pierwszego admina nie ma kto nadac."""
    repo = RoleRepo(db)
    granted = 0
    for principal in principals if principals is not None else ADMIN_PRINCIPALS:
        if not is_resolved(principal):
            continue
        assignment = repo.get_assignment(principal)
        if assignment and assignment.role == Role.admin.value:
            continue
        repo.upsert(principal, Role.admin.value)
        granted += 1
        logger.info(f"Nadano role admin dla {principal}")
    return granted


def seed():
    db = SessionLocal()
    try:
        seed_admins(db)
    finally:
        db.close()
