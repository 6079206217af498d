from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from dm_service.domain.entities.message import Message
from dm_service.infrastructure.db.mappers import message as mapper
from dm_service.infrastructure.db.models.message import MessageModel
from dm_service.infrastructure.db.repositories._filters import between, involving, unread_for


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, message_id: int) -> Message | None:
        result = await self._session.get(MessageModel, message_id, populate_existing=True)
        return mapper.model_to_entity(result) if result else None

    async def get_conversation_between(self, user_id: int, partner_id: int) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(between(user_id, partner_id))
            .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def get_messages_involving(self, user_id: int) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(involving(user_id))
            .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def count_unread(self, user_id: int, partner_id: int | None = None) -> int:
        stmt = select(func.count(MessageModel.id)).where(unread_for(user_id, partner_id))
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def count_unread_by_partner(self, user_id: int) -> dict[int, int]:
        stmt = (
            select(MessageModel.sender_id, func.count(MessageModel.id))
            .where(unread_for(user_id))
            .group_by(MessageModel.sender_id)
        )
        result = await self._session.execute(stmt)
        return {sender_id: int(count) for sender_id, count in result.all()}


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_message(
        self,
        sender_id: int,
        receiver_id: int,
        content: str,
        created_at: datetime,
    ) -> Message:
        model = MessageModel(
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            read=False,
            created_at=created_at,
            updated_at=created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def mark_message_read(self, message_id: int) -> Message | None:
        stmt = (
            update(MessageModel)
            .where(MessageModel.id == message_id, MessageModel.read.is_(False))
            .values(read=True, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)
        model = await self._session.get(MessageModel, message_id, populate_existing=True)
        return mapper.model_to_entity(model) if model else None

    async def mark_conversation_read(self, user_id: int, partner_id: int) -> int:
        stmt = (
            update(MessageModel)
            .where(unread_for(user_id, partner_id))
            .values(read=True, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def delete_message(self, message_id: int) -> bool:
        stmt = delete(MessageModel).where(MessageModel.id == message_id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)
