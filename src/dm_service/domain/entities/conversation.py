from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from dm_service.domain.value_objects.ids import STUB_MESSAGE_ID


@dataclass(frozen=True, slots=True)
class Partner:
    id: int
    display_name: str
    avatar_ref: str | None
    role: str


@dataclass(frozen=True, slots=True)
class LastMessage:
    id: int
    content: str
    created_at: datetime
    is_from_user: bool


@dataclass(frozen=True, slots=True)
class Conversation:
    """Derived per-partner view; never persisted."""

    partner: Partner
    last_message: LastMessage
    unread_count: int

    @property
    def is_stub(self) -> bool:
        return self.last_message.id == STUB_MESSAGE_ID
