from __future__ import annotations

from datetime import datetime
from typing import Protocol

from dm_service.domain.entities.message import Message


class MessageReader(Protocol):
    async def get_by_id(self, message_id: int) -> Message | None: ...

    async def get_conversation_between(self, user_id: int, partner_id: int) -> list[Message]:
        """Messages exchanged by the pair, oldest first."""
        ...

    async def get_messages_involving(self, user_id: int) -> list[Message]:
        """Messages sent or received by the user, newest first."""
        ...

    async def count_unread(self, user_id: int, partner_id: int | None = None) -> int: ...

    async def count_unread_by_partner(self, user_id: int) -> dict[int, int]:
        """Unread counts keyed by sender, same predicate as ``count_unread``."""
        ...


class MessageWriter(Protocol):
    async def create_message(
        self,
        sender_id: int,
        receiver_id: int,
        content: str,
        created_at: datetime,
    ) -> Message: ...

    async def mark_message_read(self, message_id: int) -> Message | None: ...

    async def mark_conversation_read(self, user_id: int, partner_id: int) -> int:
        """Flip unread messages from partner to user. Returns rows changed."""
        ...

    async def delete_message(self, message_id: int) -> bool: ...
