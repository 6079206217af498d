"""Polling client: keeps a local conversation list and open thread in sync.

States are ``IDLE -> LISTING -> ACTIVE(partner)``. A coarse timer refreshes
the conversation list while the client is open; a tighter timer refreshes
the open thread while a partner is selected. Every operation returns an
``Outcome`` instead of raising.
"""
from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Awaitable, Callable

from dm_service.api.v1.schemas.conversation import ConversationResponse
from dm_service.api.v1.schemas.message import MessageResponse
from dm_service.application.exceptions import (
    AppError,
    DependencyUnavailableError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)
from dm_service.application.ports.clock import Clock, system_clock
from dm_service.client.api import MessagingApi
from dm_service.client.state import ClientState, Outcome, PendingMessage, SessionState
from dm_service.config import settings

logger = logging.getLogger(__name__)

Tick = Callable[[], Awaitable[object]]


class PollingClient:
    def __init__(
        self,
        api: MessagingApi,
        *,
        list_interval: float = settings.CLIENT_LIST_POLL_SECONDS,
        thread_interval: float = settings.CLIENT_THREAD_POLL_SECONDS,
        stub_partner_id: int | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._api = api
        self._list_interval = list_interval
        self._thread_interval = thread_interval
        self._stub_partner_id = stub_partner_id
        self._clock = clock
        self.state = ClientState()

        self._list_task: asyncio.Task[None] | None = None
        self._thread_task: asyncio.Task[None] | None = None
        self._list_generation = 0
        self._thread_epoch = 0
        self._local_ids = itertools.count(1)

    # -- lifecycle ---------------------------------------------------------

    async def start(self) -> Outcome[list[ConversationResponse]]:
        if self.state.closed:
            return Outcome.failure(self._closed_error())
        self.state.status = SessionState.LISTING
        outcome = await self.refresh_conversations()
        if not self.state.closed and self._list_task is None:
            self._list_task = asyncio.create_task(
                self._run_every(self._list_interval, self.refresh_conversations),
                name="dm-client-list-poll",
            )
            logger.info("Polling client started (list every %.1fs)", self._list_interval)
        return outcome

    async def stop(self) -> None:
        self.state.closed = True
        self.state.status = SessionState.IDLE
        self.state.active_partner_id = None
        self._thread_epoch += 1
        for task in (self._thread_task, self._list_task):
            await _cancel(task)
        self._thread_task = None
        self._list_task = None
        logger.info("Polling client stopped")

    # -- navigation --------------------------------------------------------

    async def select(self, partner_id: int) -> Outcome[list[MessageResponse]]:
        if self.state.closed:
            return Outcome.failure(self._closed_error())

        await _cancel(self._thread_task)
        self._thread_task = None
        self._thread_epoch += 1
        epoch = self._thread_epoch
        self.state.status = SessionState.ACTIVE
        self.state.active_partner_id = partner_id
        self.state.messages = []
        self.state.pending = []

        outcome = await self.refresh_messages()
        if not self._is_current_thread(epoch, partner_id):
            return outcome
        if isinstance(outcome.error, (NotFoundError, InvalidArgumentError)):
            await self.leave()
            return outcome

        self._thread_task = asyncio.create_task(
            self._run_every(self._thread_interval, self.refresh_messages),
            name=f"dm-client-thread-poll-{partner_id}",
        )
        return outcome

    async def start_conversation(self, partner_ref: int) -> Outcome[list[MessageResponse]]:
        """Open the thread with ``partner_ref``, asking the server for a stub row if needed.

        ``partner_ref`` may be an account id or a designer-profile id; the
        server resolves the latter, so the row it returns decides which
        partner is selected.
        """
        if self.state.closed:
            return Outcome.failure(self._closed_error())
        if partner_ref in self.state.conversations:
            return await self.select(partner_ref)

        self._stub_partner_id = partner_ref
        listed = await self.refresh_conversations()
        if listed.error is not None:
            return Outcome.failure(listed.error)

        rows = listed.value or []
        target = next((r.partner.id for r in rows if r.partner.id == partner_ref), None)
        if target is None:
            target = next((r.partner.id for r in rows if r.is_stub), None)
        if target is None:
            return Outcome.failure(NotFoundError(f"No conversation available for {partner_ref}"))
        return await self.select(target)

    async def leave(self) -> None:
        await _cancel(self._thread_task)
        self._thread_task = None
        self._thread_epoch += 1
        self.state.active_partner_id = None
        self.state.messages = []
        self.state.pending = []
        if not self.state.closed:
            self.state.status = SessionState.LISTING

    # -- polling -----------------------------------------------------------

    async def refresh_conversations(self) -> Outcome[list[ConversationResponse]]:
        if self.state.closed:
            return Outcome.failure(self._closed_error())

        self._list_generation += 1
        generation = self._list_generation
        try:
            rows = await self._api.get_conversations(self._stub_partner_id)
        except AppError as exc:
            return self._fail(exc)

        if self.state.closed or generation != self._list_generation:
            logger.debug("Discarding stale conversation list (generation %d)", generation)
            return Outcome.success(rows)

        self.state.conversations = {row.partner.id: row for row in rows}
        self.state.recompute_unread()
        self.state.last_error = None
        return Outcome.success(rows)

    async def refresh_messages(self) -> Outcome[list[MessageResponse]]:
        partner_id = self.state.active_partner_id
        if self.state.closed:
            return Outcome.failure(self._closed_error())
        if partner_id is None:
            return Outcome.failure(InvalidArgumentError("No conversation is open"))

        epoch = self._thread_epoch
        try:
            messages = await self._api.get_messages(partner_id)
        except AppError as exc:
            if isinstance(exc, UnauthorizedError) or self._is_current_thread(epoch, partner_id):
                return self._fail(exc)
            logger.debug("Ignoring stale thread failure for partner %d: %s", partner_id, exc.detail)
            return Outcome.failure(exc)

        if not self._is_current_thread(epoch, partner_id):
            logger.debug("Discarding stale thread for partner %d", partner_id)
            return Outcome.success(messages)

        self._apply_thread(partner_id, messages)
        self.state.last_error = None
        return Outcome.success(messages)

    # -- sending -----------------------------------------------------------

    async def send(self, content: str) -> Outcome[MessageResponse]:
        partner_id = self.state.active_partner_id
        if self.state.closed:
            return Outcome.failure(self._closed_error())
        if self.state.status != SessionState.ACTIVE or partner_id is None:
            return Outcome.failure(InvalidArgumentError("No conversation is open"))

        entry = PendingMessage(
            local_id=next(self._local_ids),
            partner_id=partner_id,
            content=content,
            created_at=self._clock.now(),
        )
        self.state.pending.append(entry)

        try:
            message = await self._api.send_message(partner_id, content)
        except AppError as exc:
            if entry in self.state.pending:
                self.state.pending.remove(entry)
            return self._fail(exc)

        entry.confirmed = True
        entry.message = message
        return Outcome.success(message)

    # -- internals ---------------------------------------------------------

    def _apply_thread(self, partner_id: int, messages: list[MessageResponse]) -> None:
        # List responses requested before this read mark carry old badges.
        self._list_generation += 1
        fetched_ids = {m.id for m in messages}
        self.state.messages = messages
        self.state.pending = [
            p for p in self.state.pending
            if p.partner_id == partner_id
            and (p.message is None or p.message.id not in fetched_ids)
        ]

        row = self.state.conversations.get(partner_id)
        if row is not None and row.unread_count:
            self.state.conversations[partner_id] = row.model_copy(update={"unread_count": 0})
            self.state.recompute_unread()

    def _fail(self, exc: AppError) -> Outcome:
        if isinstance(exc, UnauthorizedError):
            logger.warning("Polling client unauthorized, closing: %s", exc.detail)
            self.state.fatal_error = exc
            self._close_now()
        elif isinstance(exc, DependencyUnavailableError):
            logger.warning("Messaging API unavailable: %s", exc.detail)
            self.state.last_error = exc
        return Outcome.failure(exc)

    def _close_now(self) -> None:
        # May run inside one of the timer tasks, so cancel without awaiting.
        self.state.closed = True
        self.state.status = SessionState.IDLE
        self.state.active_partner_id = None
        self._thread_epoch += 1
        for task in (self._thread_task, self._list_task):
            if task is not None:
                task.cancel()

    def _is_current_thread(self, epoch: int, partner_id: int) -> bool:
        return (
            not self.state.closed
            and epoch == self._thread_epoch
            and self.state.active_partner_id == partner_id
        )

    def _closed_error(self) -> AppError:
        return self.state.fatal_error or InvalidArgumentError("Client is closed")

    async def _run_every(self, interval: float, tick: Tick) -> None:
        while not self.state.closed:
            await asyncio.sleep(interval)
            try:
                await tick()
            except Exception:
                logger.exception("Polling tick failed")


async def _cancel(task: asyncio.Task[None] | None) -> None:
    if task is None or task.done():
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
