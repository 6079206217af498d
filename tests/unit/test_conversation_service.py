from __future__ import annotations

import pytest

from dm_service.config import settings
from dm_service.domain.value_objects.ids import STUB_MESSAGE_ID
from dm_service.services import conversation_service, message_service, read_state_service
from tests.conftest import (
    ALICE,
    BOB,
    CAROL,
    DANA,
    DANA_PROFILE,
    EVE_PROFILE,
    at,
    make_principal,
)


@pytest.mark.asyncio
async def test_no_history_no_stub_returns_empty(user_principal, uow, clock):
    convs = await conversation_service.get_conversations(user_principal, None, uow, clock)

    assert convs == []


@pytest.mark.asyncio
async def test_one_row_per_partner_keyed_by_most_recent(user_principal, uow, store, clock):
    store.insert_message(ALICE, BOB, "hi bob", at(0))
    store.insert_message(ALICE, CAROL, "hi carol", at(3))
    latest = store.insert_message(BOB, ALICE, "hey alice", at(5))

    convs = await conversation_service.get_conversations(user_principal, None, uow, clock)

    assert [c.partner.id for c in convs] == [BOB, CAROL]
    bob = convs[0]
    assert bob.last_message.id == latest.id
    assert bob.last_message.content == "hey alice"
    assert bob.last_message.is_from_user is False
    assert convs[1].last_message.is_from_user is True


@pytest.mark.asyncio
async def test_same_timestamp_prefers_higher_id(user_principal, uow, store, clock):
    store.insert_message(ALICE, BOB, "first", at(1))
    second = store.insert_message(BOB, ALICE, "second", at(1))

    convs = await conversation_service.get_conversations(user_principal, None, uow, clock)

    assert len(convs) == 1
    assert convs[0].last_message.id == second.id


@pytest.mark.asyncio
async def test_unread_counts_per_partner(user_principal, uow, store, clock):
    store.insert_message(BOB, ALICE, "one", at(0))
    store.insert_message(BOB, ALICE, "two", at(1))
    store.insert_message(BOB, ALICE, "old", at(2), read=True)
    store.insert_message(ALICE, CAROL, "sent by me", at(3))

    convs = await conversation_service.get_conversations(user_principal, None, uow, clock)
    by_partner = {c.partner.id: c.unread_count for c in convs}

    assert by_partner == {BOB: 2, CAROL: 0}


@pytest.mark.asyncio
async def test_self_addressed_rows_never_become_conversations(user_principal, uow, store, clock):
    store.insert_message(ALICE, ALICE, "note to self", at(0))

    convs = await conversation_service.get_conversations(user_principal, ALICE, uow, clock)

    assert convs == []


@pytest.mark.asyncio
async def test_partner_with_missing_account_is_skipped(user_principal, uow, store, clock):
    store.insert_message(77, ALICE, "from a deleted account", at(0))
    store.insert_message(BOB, ALICE, "hi", at(1))

    convs = await conversation_service.get_conversations(user_principal, None, uow, clock)

    assert [c.partner.id for c in convs] == [BOB]


@pytest.mark.asyncio
async def test_stub_for_partner_without_history(user_principal, uow, clock):
    convs = await conversation_service.get_conversations(user_principal, BOB, uow, clock)

    assert len(convs) == 1
    stub = convs[0]
    assert stub.is_stub
    assert stub.partner.id == BOB
    assert stub.last_message.id == STUB_MESSAGE_ID
    assert stub.last_message.content == settings.STUB_MESSAGE_TEXT
    assert stub.last_message.created_at == clock.now()
    assert stub.last_message.is_from_user is False
    assert stub.unread_count == 0


@pytest.mark.asyncio
async def test_stub_is_appended_after_real_rows(user_principal, uow, store, clock):
    store.insert_message(CAROL, ALICE, "hello", at(0))

    convs = await conversation_service.get_conversations(user_principal, BOB, uow, clock)

    assert [c.partner.id for c in convs] == [CAROL, BOB]
    assert not convs[0].is_stub
    assert convs[1].is_stub


@pytest.mark.asyncio
async def test_stub_suppressed_when_history_exists(user_principal, uow, store, clock):
    store.insert_message(ALICE, BOB, "already talking", at(0))

    convs = await conversation_service.get_conversations(user_principal, BOB, uow, clock)

    assert len(convs) == 1
    assert not convs[0].is_stub
    assert convs[0].last_message.content == "already talking"


@pytest.mark.asyncio
async def test_stub_for_self_is_ignored(user_principal, uow, clock):
    convs = await conversation_service.get_conversations(user_principal, ALICE, uow, clock)

    assert convs == []


@pytest.mark.asyncio
async def test_unknown_stub_id_is_ignored(user_principal, uow, clock):
    convs = await conversation_service.get_conversations(user_principal, 999, uow, clock)

    assert convs == []


@pytest.mark.asyncio
async def test_stub_resolves_designer_profile_id(user_principal, uow, clock):
    convs = await conversation_service.get_conversations(user_principal, DANA_PROFILE, uow, clock)

    assert len(convs) == 1
    partner = convs[0].partner
    assert partner.id == DANA
    assert partner.display_name == "Dana Studio"
    assert partner.avatar_ref == "dana.png"
    assert partner.role == "designer"


@pytest.mark.asyncio
async def test_profile_stub_suppressed_when_account_has_history(user_principal, uow, store, clock):
    store.insert_message(DANA, ALICE, "thanks for the order", at(0))

    convs = await conversation_service.get_conversations(user_principal, DANA_PROFILE, uow, clock)

    assert len(convs) == 1
    assert convs[0].partner.id == DANA
    assert not convs[0].is_stub


@pytest.mark.asyncio
async def test_account_id_takes_precedence_over_profile_id(user_principal, uow, clock):
    convs = await conversation_service.get_conversations(user_principal, EVE_PROFILE, uow, clock)

    assert [c.partner.id for c in convs] == [CAROL]


@pytest.mark.asyncio
async def test_designer_profile_overrides_real_row_identity(user_principal, uow, store, clock):
    store.insert_message(ALICE, DANA, "is this in stock?", at(0))

    convs = await conversation_service.get_conversations(user_principal, None, uow, clock)

    assert convs[0].partner.display_name == "Dana Studio"


@pytest.mark.asyncio
async def test_stub_becomes_real_conversation_after_first_message(uow, clock):
    alice = make_principal(ALICE)
    bob = make_principal(BOB)

    before = await conversation_service.get_conversations(alice, BOB, uow, clock)
    assert len(before) == 1 and before[0].is_stub

    clock.current = at(10)
    sent = await message_service.send_message(alice, BOB, "hi, first message", uow, clock)

    after = await conversation_service.get_conversations(alice, BOB, uow, clock)
    assert len(after) == 1
    assert not after[0].is_stub
    assert after[0].last_message.id == sent.id
    assert after[0].last_message.is_from_user is True

    bob_view = await conversation_service.get_conversations(bob, None, uow, clock)
    assert [(c.partner.id, c.unread_count) for c in bob_view] == [(ALICE, 1)]

    await read_state_service.mark_conversation_read(BOB, ALICE, uow)
    bob_view = await conversation_service.get_conversations(bob, None, uow, clock)
    assert bob_view[0].unread_count == 0
