from __future__ import annotations

from datetime import datetime, timezone

from dm_service.domain.entities.message import Message
from dm_service.infrastructure.db.models.message import MessageModel


def _aware(ts: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns.
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        sender_id=model.sender_id,
        receiver_id=model.receiver_id,
        content=model.content,
        read=bool(model.read),
        created_at=_aware(model.created_at),
        updated_at=_aware(model.updated_at),
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        sender_id=entity.sender_id,
        receiver_id=entity.receiver_id,
        content=entity.content,
        read=entity.read,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )
