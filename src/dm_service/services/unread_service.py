from __future__ import annotations

from dm_service.application.dto.principal import Principal
from dm_service.application.uow import UnitOfWork


async def count_unread(
    principal: Principal,
    partner_id: int | None,
    uow: UnitOfWork,
) -> int:
    """Unread messages addressed to the caller, optionally from one partner."""
    return await uow.messages.count_unread(principal.subject_id, partner_id)


async def unread_by_partner(user_id: int, uow: UnitOfWork) -> dict[int, int]:
    return await uow.messages.count_unread_by_partner(user_id)
