"""Resolved identity of the authenticated caller."""

from dataclasses import dataclass, field

from signoff.models.enums import UserRole

_APPROVE_ANYTHING = {UserRole.OWNER, UserRole.ADMIN}


@dataclass(frozen=True)
class Caller:
    user_id: str
    org_id: str
    role: str = UserRole.MEMBER
    full_name: str = ""
    token_roles: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_admin(self) -> bool:
        """Owners and admins may act on every level of every request."""
        return self.role in _APPROVE_ANYTHING or bool(_APPROVE_ANYTHING.intersection(self.token_roles))
