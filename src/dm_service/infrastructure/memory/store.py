"""Process-local message store and account directory.

Every write completes without yielding to the event loop, so a single
``create_message`` call is atomic with respect to concurrent readers.
"""
from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import datetime

from dm_service.domain.entities.account import Account, DesignerProfile
from dm_service.domain.entities.message import Message


@dataclass
class MemoryStore:
    accounts: dict[int, Account] = field(default_factory=dict)
    designer_profiles: dict[int, DesignerProfile] = field(default_factory=dict)
    messages: dict[int, Message] = field(default_factory=dict)
    _ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def add_account(self, account: Account) -> Account:
        self.accounts[account.id] = account
        return account

    def add_designer_profile(self, profile: DesignerProfile) -> DesignerProfile:
        self.designer_profiles[profile.id] = profile
        return profile

    def insert_message(
        self,
        sender_id: int,
        receiver_id: int,
        content: str,
        created_at: datetime,
        *,
        read: bool = False,
    ) -> Message:
        message = Message(
            id=next(self._ids),
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            read=read,
            created_at=created_at,
            updated_at=created_at,
        )
        self.messages[message.id] = message
        return message

    def clear(self) -> None:
        self.accounts.clear()
        self.designer_profiles.clear()
        self.messages.clear()
        self._ids = itertools.count(1)
