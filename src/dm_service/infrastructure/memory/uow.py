from __future__ import annotations

from types import TracebackType
from typing import Self

from dm_service.infrastructure.memory.repositories import (
    MemoryAccountReader,
    MemoryMessageReader,
    MemoryMessageWriter,
)
from dm_service.infrastructure.memory.store import MemoryStore


class InMemoryUoW:
    """Unit-of-Work over a shared MemoryStore.

    Writes land in the store immediately; commit and rollback only record
    that they were called.
    """

    def __init__(self, store: MemoryStore) -> None:
        self.store = store
        self.accounts = MemoryAccountReader(store)
        self.messages = MemoryMessageReader(store)
        self.messages_w = MemoryMessageWriter(store)
        self.commits = 0
        self.rollbacks = 0

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1

    async def ping(self) -> None:
        pass

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()
