"""Shared test fixtures."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from dm_service.application.dto.principal import Principal
from dm_service.config import settings
from dm_service.domain.entities.account import Account, DesignerProfile
from dm_service.domain.entities.message import Message
from dm_service.domain.value_objects.enums import AccountRole
from dm_service.infrastructure.memory.store import MemoryStore
from dm_service.infrastructure.memory.uow import InMemoryUoW

ALICE = 1
BOB = 2
CAROL = 3
DANA = 4          # designer, profile id DANA_PROFILE
EVE = 5           # designer, profile id 3 collides with CAROL's account id
ADMIN = 9
DANA_PROFILE = 10
EVE_PROFILE = CAROL

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


@dataclass
class FixedClock:
    current: datetime = T0

    def now(self) -> datetime:
        return self.current


def make_message(
    *,
    message_id: int = 1,
    sender_id: int = ALICE,
    receiver_id: int = BOB,
    content: str = "hello",
    read: bool = False,
    created_at: datetime = T0,
) -> Message:
    return Message(
        id=message_id,
        sender_id=sender_id,
        receiver_id=receiver_id,
        content=content,
        read=read,
        created_at=created_at,
        updated_at=created_at,
    )


def make_principal(subject_id: int, role: AccountRole = AccountRole.USER) -> Principal:
    return Principal(subject_id=subject_id, role=role)


def make_token(sub: int = ALICE, role: str = "user") -> str:
    return jwt.encode(
        {"sub": str(sub), "role": role},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def seed_directory(store: MemoryStore) -> MemoryStore:
    store.add_account(Account(ALICE, "Alice", "alice.png", AccountRole.USER))
    store.add_account(Account(BOB, "Bob", None, AccountRole.USER))
    store.add_account(Account(CAROL, "Carol", None, AccountRole.USER))
    store.add_account(Account(DANA, "dana_k", None, AccountRole.DESIGNER))
    store.add_account(Account(EVE, "eve", None, AccountRole.DESIGNER))
    store.add_account(Account(ADMIN, "Admin", None, AccountRole.ADMIN))
    store.add_designer_profile(DesignerProfile(DANA_PROFILE, DANA, "Dana Studio", "dana.png"))
    store.add_designer_profile(DesignerProfile(EVE_PROFILE, EVE, "Eve Atelier", None))
    return store


@pytest.fixture
def user_principal() -> Principal:
    return make_principal(ALICE)


@pytest.fixture
def admin_principal() -> Principal:
    return make_principal(ADMIN, AccountRole.ADMIN)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> MemoryStore:
    return seed_directory(MemoryStore())


@pytest.fixture
def uow(store: MemoryStore) -> InMemoryUoW:
    return InMemoryUoW(store)


@dataclass
class FailingReadMarkWriter:
    """Message writer whose bulk read mark always fails."""

    _inner: object
    calls: list[tuple[int, int]] = field(default_factory=list)

    async def mark_conversation_read(self, user_id: int, partner_id: int) -> int:
        self.calls.append((user_id, partner_id))
        raise RuntimeError("store write failed")

    def __getattr__(self, name: str):
        return getattr(self._inner, name)
