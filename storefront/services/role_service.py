# storefront/services/role_service.py
from sqlalchemy.orm import Session

from storefront.domain.errors import Unauthorized, InvalidInput
from storefront.domain.roles import Role, satisfies, is_resolved
from storefront.repos.role_repo import RoleRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class RoleService:
    """
    Role authority: principal -> jedna z admin/user/guest.
    Kazda operacja uprzywilejowana wola require() na wejsciu.
    """

    def __init__(self, db: Session):
        self.repo = RoleRepo(db)

    def get_role(self, principal: str | None) -> Role:
        if not is_resolved(principal):
            return Role.guest

        assignment = self.repo.get_assignment(principal)
        if not assignment:
            return Role.guest
        return Role(assignment.role)

    def is_admin(self, principal: str | None) -> bool:
        return self.get_role(principal) == Role.admin

    def require(self, principal: str | None, minimum: Role = Role.guest) -> str:
        """
        Zwraca principala jesli ma co najmniej `minimum`, inaczej Unauthorized.
        Dla guest wymagany jest tylko rozpoznany principal.
        """
        if not is_resolved(principal):
            raise Unauthorized("Wymagany zalogowany uzytkownik")

        role = self.get_role(principal)
        if not satisfies(role, minimum):
            logger.warning(f"Principal {principal} z rola {role.value} bez uprawnien {minimum.value}")
            raise Unauthorized(f"Wymagana rola {minimum.value}")
        return principal

    def assign_role(self, caller: str | None, target: str, role: Role) -> None:
        self.require(caller, Role.admin)

        if not is_resolved(target):
            raise InvalidInput("Nie mozna nadac roli anonimowemu principalowi")

        current = self.get_role(target)
        if current == role:
            return

        self.repo.upsert(target, role.value)
        logger.info(f"Principal {caller} nadal role {role.value} dla {target} (bylo {current.value})")
