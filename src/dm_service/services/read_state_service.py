from __future__ import annotations

import logging

from dm_service.application.dto.principal import Principal
from dm_service.application.exceptions import NotFoundError
from dm_service.application.policies.permissions import assert_message_receiver
from dm_service.application.uow import UnitOfWork
from dm_service.domain.entities.message import Message

logger = logging.getLogger(__name__)


async def mark_conversation_read(
    user_id: int,
    partner_id: int,
    uow: UnitOfWork,
) -> int:
    """Mark every unread message from partner to user as read.

    Safe to repeat: a second call flips nothing and returns 0.
    """
    changed = await uow.messages_w.mark_conversation_read(user_id, partner_id)
    await uow.commit()
    if changed:
        logger.debug("Marked %d messages from %d to %d as read", changed, partner_id, user_id)
    return changed


async def try_mark_conversation_read(
    user_id: int,
    partner_id: int,
    uow: UnitOfWork,
) -> bool:
    """Best-effort variant used when a thread is opened.

    A failed read mark must not hide the thread; it is logged and the
    next poll tries again.
    """
    try:
        await mark_conversation_read(user_id, partner_id, uow)
    except Exception:
        logger.exception("Read mark failed for %d <- %d, will retry on next poll", user_id, partner_id)
        await uow.rollback()
        return False
    return True


async def mark_message_read(
    message_id: int,
    principal: Principal,
    uow: UnitOfWork,
) -> Message:
    message = await uow.messages.get_by_id(message_id)
    assert_message_receiver(principal, message)
    updated = await uow.messages_w.mark_message_read(message_id)
    if updated is None:
        await uow.rollback()
        raise NotFoundError("Message not found")
    await uow.commit()
    return updated
