from __future__ import annotations

import pytest

from dm_service.application.exceptions import ForbiddenError, NotFoundError
from dm_service.services import message_service, read_state_service, unread_service
from tests.conftest import ALICE, BOB, CAROL, FailingReadMarkWriter, at, make_principal


@pytest.mark.asyncio
async def test_mark_conversation_read_is_idempotent(user_principal, uow, store):
    store.insert_message(BOB, ALICE, "one", at(0))
    store.insert_message(BOB, ALICE, "two", at(1))

    first = await read_state_service.mark_conversation_read(ALICE, BOB, uow)
    second = await read_state_service.mark_conversation_read(ALICE, BOB, uow)

    assert first == 2
    assert second == 0
    assert await unread_service.count_unread(user_principal, BOB, uow) == 0
    assert uow.commits == 2


@pytest.mark.asyncio
async def test_mark_conversation_read_touches_only_that_direction(uow, store):
    incoming = store.insert_message(BOB, ALICE, "to alice", at(0))
    outgoing = store.insert_message(ALICE, BOB, "to bob", at(1))
    other = store.insert_message(CAROL, ALICE, "from carol", at(2))

    await read_state_service.mark_conversation_read(ALICE, BOB, uow)

    assert store.messages[incoming.id].read is True
    assert store.messages[incoming.id].updated_at > incoming.updated_at
    assert store.messages[outgoing.id].read is False
    assert store.messages[other.id].read is False


@pytest.mark.asyncio
async def test_failed_read_mark_still_returns_thread(user_principal, uow, store):
    store.insert_message(BOB, ALICE, "can you see this?", at(0))
    failing = FailingReadMarkWriter(uow.messages_w)
    uow.messages_w = failing

    thread = await message_service.open_thread(user_principal, BOB, uow)

    assert [m.content for m in thread] == ["can you see this?"]
    assert thread[0].read is False
    assert failing.calls == [(ALICE, BOB)]
    assert uow.rollbacks == 1
    assert await unread_service.count_unread(user_principal, BOB, uow) == 1


@pytest.mark.asyncio
async def test_try_mark_reports_failure(uow):
    uow.messages_w = FailingReadMarkWriter(uow.messages_w)

    assert await read_state_service.try_mark_conversation_read(ALICE, BOB, uow) is False


@pytest.mark.asyncio
async def test_mark_message_read_by_receiver(user_principal, uow, store):
    msg = store.insert_message(BOB, ALICE, "ping", at(0))

    updated = await read_state_service.mark_message_read(msg.id, user_principal, uow)
    again = await read_state_service.mark_message_read(msg.id, user_principal, uow)

    assert updated.read is True
    assert again.read is True
    assert again.updated_at == updated.updated_at


@pytest.mark.asyncio
async def test_mark_message_read_forbidden_for_sender(uow, store):
    msg = store.insert_message(BOB, ALICE, "ping", at(0))

    with pytest.raises(ForbiddenError):
        await read_state_service.mark_message_read(msg.id, make_principal(BOB), uow)
    assert store.messages[msg.id].read is False


@pytest.mark.asyncio
async def test_mark_message_read_unknown_id(user_principal, uow):
    with pytest.raises(NotFoundError):
        await read_state_service.mark_message_read(12345, user_principal, uow)


@pytest.mark.asyncio
async def test_mark_message_read_deleted_mid_request(user_principal, uow, store):
    msg = store.insert_message(BOB, ALICE, "about to vanish", at(0))

    async def _deleted_meanwhile(message_id: int):
        store.messages.pop(message_id, None)
        return None

    uow.messages_w.mark_message_read = _deleted_meanwhile

    with pytest.raises(NotFoundError):
        await read_state_service.mark_message_read(msg.id, user_principal, uow)
    assert uow.commits == 0
    assert uow.rollbacks == 1
