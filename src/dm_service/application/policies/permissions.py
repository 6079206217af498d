from __future__ import annotations

from dm_service.application.dto.principal import Principal
from dm_service.application.exceptions import ForbiddenError, NotFoundError
from dm_service.domain.entities.message import Message


def assert_message_receiver(principal: Principal, message: Message | None) -> Message:
    """Raise if the message doesn't exist or wasn't addressed to the principal."""
    if message is None:
        raise NotFoundError("Message not found")
    if message.receiver_id != principal.subject_id:
        raise ForbiddenError("Only the receiver can mark a message as read")
    return message


def assert_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise ForbiddenError("Admin access required")
