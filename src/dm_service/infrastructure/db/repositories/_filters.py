"""Shared WHERE-clause builders for message queries."""
from __future__ import annotations

from sqlalchemy import ColumnElement, and_, or_

from dm_service.infrastructure.db.models.message import MessageModel


def between(user_id: int, partner_id: int) -> ColumnElement[bool]:
    return or_(
        and_(MessageModel.sender_id == user_id, MessageModel.receiver_id == partner_id),
        and_(MessageModel.sender_id == partner_id, MessageModel.receiver_id == user_id),
    )


def involving(user_id: int) -> ColumnElement[bool]:
    return or_(MessageModel.sender_id == user_id, MessageModel.receiver_id == user_id)


def unread_for(user_id: int, partner_id: int | None = None) -> ColumnElement[bool]:
    """Unread messages addressed to ``user_id``, optionally from one sender.

    Every unread count and the read-state update are built from this clause.
    """
    clause = and_(MessageModel.receiver_id == user_id, MessageModel.read.is_(False))
    if partner_id is not None:
        clause = and_(clause, MessageModel.sender_id == partner_id)
    return clause
