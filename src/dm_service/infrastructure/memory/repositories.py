from __future__ import annotations

import dataclasses
from collections import Counter
from datetime import datetime, timezone

from dm_service.domain.entities.account import Account, DesignerProfile
from dm_service.domain.entities.message import Message
from dm_service.infrastructure.memory.store import MemoryStore


def _newest_first(message: Message) -> tuple[datetime, int]:
    return message.created_at, message.id


def _is_unread_for(message: Message, user_id: int, partner_id: int | None = None) -> bool:
    if message.receiver_id != user_id or message.read:
        return False
    return partner_id is None or message.sender_id == partner_id


class MemoryAccountReader:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def get_account(self, account_id: int) -> Account | None:
        return self._store.accounts.get(account_id)

    async def get_designer_profile(self, profile_id: int) -> DesignerProfile | None:
        return self._store.designer_profiles.get(profile_id)

    async def get_designer_profile_for_account(
        self, account_id: int
    ) -> DesignerProfile | None:
        matches = [
            p for p in self._store.designer_profiles.values() if p.account_id == account_id
        ]
        return min(matches, key=lambda p: p.id) if matches else None


class MemoryMessageReader:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def get_by_id(self, message_id: int) -> Message | None:
        return self._store.messages.get(message_id)

    async def get_conversation_between(self, user_id: int, partner_id: int) -> list[Message]:
        pair = {user_id, partner_id}
        found = [
            m for m in self._store.messages.values()
            if {m.sender_id, m.receiver_id} == pair and m.sender_id != m.receiver_id
        ]
        return sorted(found, key=_newest_first)

    async def get_messages_involving(self, user_id: int) -> list[Message]:
        found = [
            m for m in self._store.messages.values()
            if user_id in (m.sender_id, m.receiver_id)
        ]
        return sorted(found, key=_newest_first, reverse=True)

    async def count_unread(self, user_id: int, partner_id: int | None = None) -> int:
        return sum(
            1 for m in self._store.messages.values() if _is_unread_for(m, user_id, partner_id)
        )

    async def count_unread_by_partner(self, user_id: int) -> dict[int, int]:
        return dict(Counter(
            m.sender_id for m in self._store.messages.values() if _is_unread_for(m, user_id)
        ))


class MemoryMessageWriter:
    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    async def create_message(
        self,
        sender_id: int,
        receiver_id: int,
        content: str,
        created_at: datetime,
    ) -> Message:
        return self._store.insert_message(sender_id, receiver_id, content, created_at)

    async def mark_message_read(self, message_id: int) -> Message | None:
        message = self._store.messages.get(message_id)
        if message is None:
            return None
        if not message.read:
            message = dataclasses.replace(
                message, read=True, updated_at=datetime.now(timezone.utc),
            )
            self._store.messages[message_id] = message
        return message

    async def mark_conversation_read(self, user_id: int, partner_id: int) -> int:
        now = datetime.now(timezone.utc)
        targets = [
            m for m in self._store.messages.values() if _is_unread_for(m, user_id, partner_id)
        ]
        for m in targets:
            self._store.messages[m.id] = dataclasses.replace(m, read=True, updated_at=now)
        return len(targets)

    async def delete_message(self, message_id: int) -> bool:
        return self._store.messages.pop(message_id, None) is not None
