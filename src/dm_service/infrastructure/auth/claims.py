from __future__ import annotations

from typing import Any

from dm_service.application.dto.principal import Principal
from dm_service.domain.value_objects.enums import AccountRole


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    role_raw = payload.get("role", AccountRole.USER)
    role = AccountRole(role_raw) if role_raw in AccountRole.__members__.values() else AccountRole.USER
    return Principal(
        subject_id=int(payload["sub"]),
        role=role,
        roles=payload.get("roles", []),
    )
