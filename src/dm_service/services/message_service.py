from __future__ import annotations

import logging

from dm_service.application.dto.principal import Principal
from dm_service.application.exceptions import InvalidArgumentError, NotFoundError
from dm_service.application.policies.permissions import assert_admin
from dm_service.application.ports.clock import Clock, system_clock
from dm_service.application.uow import UnitOfWork
from dm_service.config import settings
from dm_service.domain.entities.message import Message
from dm_service.services import read_state_service

logger = logging.getLogger(__name__)


async def send_message(
    principal: Principal,
    receiver_id: int,
    content: str,
    uow: UnitOfWork,
    clock: Clock = system_clock,
) -> Message:
    """Persist a new unread message from the caller to ``receiver_id``."""
    if not content or not content.strip():
        raise InvalidArgumentError("Message content must not be empty")
    if len(content) > settings.MESSAGE_MAX_LENGTH:
        raise InvalidArgumentError(
            f"Message content exceeds {settings.MESSAGE_MAX_LENGTH} characters"
        )
    if receiver_id == principal.subject_id:
        raise InvalidArgumentError("Cannot send a message to yourself")

    receiver = await uow.accounts.get_account(receiver_id)
    if receiver is None:
        raise NotFoundError("Receiver not found")

    msg = await uow.messages_w.create_message(
        principal.subject_id,
        receiver_id,
        content,
        clock.now(),
    )
    await uow.commit()
    logger.info("Message %d sent %d -> %d", msg.id, msg.sender_id, msg.receiver_id)
    return msg


async def open_thread(
    principal: Principal,
    partner_id: int,
    uow: UnitOfWork,
) -> list[Message]:
    """Return the thread with ``partner_id`` after marking it read."""
    if partner_id == principal.subject_id:
        raise InvalidArgumentError("Cannot open a conversation with yourself")
    partner = await uow.accounts.get_account(partner_id)
    if partner is None:
        raise NotFoundError("User not found")

    await read_state_service.try_mark_conversation_read(principal.subject_id, partner_id, uow)
    return await uow.messages.get_conversation_between(principal.subject_id, partner_id)


async def delete_message(
    message_id: int,
    principal: Principal,
    uow: UnitOfWork,
) -> None:
    assert_admin(principal)
    deleted = await uow.messages_w.delete_message(message_id)
    if not deleted:
        raise NotFoundError("Message not found")
    await uow.commit()
    logger.info("Message %d deleted by admin %d", message_id, principal.subject_id)
