from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dm_service.domain.entities.account import Account, DesignerProfile
from dm_service.infrastructure.db.mappers import account as mapper
from dm_service.infrastructure.db.models.account import AccountModel, DesignerProfileModel


class AccountReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_account(self, account_id: int) -> Account | None:
        result = await self._session.get(AccountModel, account_id)
        return mapper.model_to_account(result) if result else None

    async def get_designer_profile(self, profile_id: int) -> DesignerProfile | None:
        result = await self._session.get(DesignerProfileModel, profile_id)
        return mapper.model_to_designer_profile(result) if result else None

    async def get_designer_profile_for_account(
        self, account_id: int
    ) -> DesignerProfile | None:
        stmt = (
            select(DesignerProfileModel)
            .where(DesignerProfileModel.user_id == account_id)
            .order_by(DesignerProfileModel.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_designer_profile(model) if model else None
