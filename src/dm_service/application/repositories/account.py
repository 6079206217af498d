from __future__ import annotations

from typing import Protocol

from dm_service.domain.entities.account import Account, DesignerProfile


class AccountReader(Protocol):
    async def get_account(self, account_id: int) -> Account | None: ...

    async def get_designer_profile(self, profile_id: int) -> DesignerProfile | None: ...

    async def get_designer_profile_for_account(
        self, account_id: int
    ) -> DesignerProfile | None: ...
