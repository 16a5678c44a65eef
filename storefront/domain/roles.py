# storefront/domain/roles.py
import enum

#anonimowy principal z identity providera, traktowany jak brak tozsamosci
ANONYMOUS_PRINCIPAL = "2vxsx-fae"


class Role(str, enum.Enum):
    admin = "admin"
    user = "user"
    guest = "guest"


_RANK = {
    Role.guest: 0,
    Role.user: 1,
    Role.admin: 2,
}


def satisfies(role: Role, minimum: Role) -> bool:
    return _RANK[role] >= _RANK[minimum]


def is_resolved(principal: str | None) -> bool:
    return bool(principal) and principal != ANONYMOUS_PRINCIPAL
