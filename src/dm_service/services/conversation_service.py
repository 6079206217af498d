"""Conversation list aggregation.

The list is derived on every call from the caller's message history:
one row per partner, keyed by the most recent message, plus an optional
stub row for a partner the caller has not messaged yet.
"""
from __future__ import annotations

import logging

from dm_service.application.dto.principal import Principal
from dm_service.application.ports.clock import Clock, system_clock
from dm_service.application.uow import UnitOfWork
from dm_service.config import settings
from dm_service.domain.entities.account import Account
from dm_service.domain.entities.conversation import Conversation, LastMessage, Partner
from dm_service.domain.value_objects.enums import AccountRole
from dm_service.domain.value_objects.ids import STUB_MESSAGE_ID
from dm_service.services import unread_service

logger = logging.getLogger(__name__)


async def get_conversations(
    principal: Principal,
    stub_partner_id: int | None,
    uow: UnitOfWork,
    clock: Clock = system_clock,
) -> list[Conversation]:
    user_id = principal.subject_id
    history = await uow.messages.get_messages_involving(user_id)
    unread = await unread_service.unread_by_partner(user_id, uow)

    conversations: dict[int, Conversation] = {}
    skipped: set[int] = set()
    for message in history:
        partner_id = message.partner_of(user_id)
        if partner_id == user_id or partner_id in conversations or partner_id in skipped:
            continue

        account = await uow.accounts.get_account(partner_id)
        if account is None:
            logger.warning("Skipping conversation with unknown account %d", partner_id)
            skipped.add(partner_id)
            continue

        conversations[partner_id] = Conversation(
            partner=await _partner_from_account(account, uow),
            last_message=LastMessage(
                id=message.id,
                content=message.content,
                created_at=message.created_at,
                is_from_user=message.sender_id == user_id,
            ),
            unread_count=unread.get(partner_id, 0),
        )

    if stub_partner_id is not None and stub_partner_id not in conversations:
        stub = await _build_stub(user_id, stub_partner_id, conversations, uow, clock)
        if stub is not None:
            conversations[stub.partner.id] = stub

    return list(conversations.values())


async def resolve_partner_account(partner_ref: int, uow: UnitOfWork) -> Account | None:
    """Resolve an id that is either an account id or a designer-profile id.

    Account ids win when both exist.
    """
    account = await uow.accounts.get_account(partner_ref)
    if account is not None:
        return account

    profile = await uow.accounts.get_designer_profile(partner_ref)
    if profile is None:
        return None
    return await uow.accounts.get_account(profile.account_id)


async def _build_stub(
    user_id: int,
    stub_partner_id: int,
    recorded: dict[int, Conversation],
    uow: UnitOfWork,
    clock: Clock,
) -> Conversation | None:
    if stub_partner_id == user_id:
        return None

    account = await resolve_partner_account(stub_partner_id, uow)
    if account is None:
        logger.debug("Stub partner %d did not resolve", stub_partner_id)
        return None

    # A profile id can resolve onto an account that already has history.
    if account.id == user_id or account.id in recorded:
        return None

    return Conversation(
        partner=await _partner_from_account(account, uow),
        last_message=LastMessage(
            id=STUB_MESSAGE_ID,
            content=settings.STUB_MESSAGE_TEXT,
            created_at=clock.now(),
            is_from_user=False,
        ),
        unread_count=0,
    )


async def _partner_from_account(account: Account, uow: UnitOfWork) -> Partner:
    display_name = account.display_name
    avatar_ref = account.avatar_ref
    if account.role == AccountRole.DESIGNER:
        profile = await uow.accounts.get_designer_profile_for_account(account.id)
        if profile is not None:
            display_name = profile.display_name or display_name
            avatar_ref = profile.avatar_ref or avatar_ref
    return Partner(
        id=account.id,
        display_name=display_name,
        avatar_ref=avatar_ref,
        role=account.role,
    )
