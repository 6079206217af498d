from __future__ import annotations

from dataclasses import dataclass, field

from dm_service.domain.value_objects.enums import AccountRole


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller identity extracted from JWT."""

    subject_id: int
    role: AccountRole = AccountRole.USER
    roles: list[str] = field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN or "admin" in self.roles
