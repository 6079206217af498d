"""Local view state held by the polling client."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Generic, TypeVar

from dm_service.api.v1.schemas.conversation import ConversationResponse
from dm_service.api.v1.schemas.message import MessageResponse
from dm_service.application.exceptions import AppError

T = TypeVar("T")


class SessionState(StrEnum):
    IDLE = "idle"
    LISTING = "listing"
    ACTIVE = "active"


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Result of a client operation: either ``value`` or ``error``."""

    value: T | None = None
    error: AppError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: AppError) -> Outcome[T]:
        return cls(error=error)


@dataclass(slots=True)
class PendingMessage:
    """Optimistic, client-authored entry shown before the next thread fetch."""

    local_id: int
    partner_id: int
    content: str
    created_at: datetime
    confirmed: bool = False
    message: MessageResponse | None = None


@dataclass
class ClientState:
    status: SessionState = SessionState.IDLE
    active_partner_id: int | None = None
    conversations: dict[int, ConversationResponse] = field(default_factory=dict)
    messages: list[MessageResponse] = field(default_factory=list)
    pending: list[PendingMessage] = field(default_factory=list)
    unread_total: int = 0
    last_error: AppError | None = None
    fatal_error: AppError | None = None
    closed: bool = False

    def conversation_list(self) -> list[ConversationResponse]:
        return list(self.conversations.values())

    def recompute_unread(self) -> None:
        self.unread_total = sum(c.unread_count for c in self.conversations.values())
