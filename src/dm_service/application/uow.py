from __future__ import annotations

from typing import Protocol

from dm_service.application.repositories.account import AccountReader
from dm_service.application.repositories.message import MessageReader, MessageWriter


class UnitOfWork(Protocol):
    accounts: AccountReader
    messages: MessageReader
    messages_w: MessageWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
    async def ping(self) -> None: ...
