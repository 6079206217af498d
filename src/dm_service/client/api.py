"""HTTP client for the messaging API used by the polling loop."""
from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Protocol, Self

import httpx
from pydantic import TypeAdapter

from dm_service.api.v1.schemas.conversation import ConversationResponse
from dm_service.api.v1.schemas.message import MessageResponse, UnreadCountResponse
from dm_service.application.exceptions import (
    AppError,
    DependencyUnavailableError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

_conversations_adapter = TypeAdapter(list[ConversationResponse])
_messages_adapter = TypeAdapter(list[MessageResponse])

_STATUS_ERRORS: dict[int, type[AppError]] = {
    400: InvalidArgumentError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    422: InvalidArgumentError,
}


def _error_for(response: httpx.Response) -> AppError:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail", "") if isinstance(body, dict) else response.text
    if not isinstance(detail, str):
        detail = str(detail)

    error_cls = _STATUS_ERRORS.get(response.status_code)
    if error_cls is None:
        if response.status_code >= 500:
            error_cls = DependencyUnavailableError
        else:
            error_cls = InvalidArgumentError
    return error_cls(detail or f"HTTP {response.status_code}")


class MessagingApi(Protocol):
    async def get_conversations(
        self, stub_partner_id: int | None = None
    ) -> list[ConversationResponse]: ...

    async def get_messages(self, partner_id: int) -> list[MessageResponse]: ...

    async def send_message(self, partner_id: int, content: str) -> MessageResponse: ...


class MessagingApiClient:
    """Bearer-authenticated wrapper over ``/api/v1``.

    Non-2xx responses and transport failures are raised as the same
    ``AppError`` subclasses the service raises.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise DependencyUnavailableError(str(exc) or type(exc).__name__) from exc
        if response.is_success:
            return response
        raise _error_for(response)

    async def get_conversations(
        self, stub_partner_id: int | None = None
    ) -> list[ConversationResponse]:
        params = {} if stub_partner_id is None else {"stub_partner_id": stub_partner_id}
        response = await self._request("GET", "/api/v1/conversations", params=params)
        return _conversations_adapter.validate_python(response.json())

    async def get_messages(self, partner_id: int) -> list[MessageResponse]:
        response = await self._request("GET", f"/api/v1/conversations/{partner_id}/messages")
        return _messages_adapter.validate_python(response.json())

    async def send_message(self, partner_id: int, content: str) -> MessageResponse:
        response = await self._request(
            "POST",
            f"/api/v1/conversations/{partner_id}/messages",
            json={"content": content},
        )
        return MessageResponse.model_validate(response.json())

    async def get_unread_count(self, partner_id: int | None = None) -> int:
        params = {} if partner_id is None else {"partner_id": partner_id}
        response = await self._request("GET", "/api/v1/unread/count", params=params)
        return UnreadCountResponse.model_validate(response.json()).count

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
