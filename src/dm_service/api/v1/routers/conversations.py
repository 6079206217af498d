from __future__ import annotations

from fastapi import APIRouter, Query

from dm_service.api.deps import CurrentPrincipal, UoWDep
from dm_service.api.v1.schemas.conversation import ConversationResponse
from dm_service.api.v1.schemas.message import MessageResponse, SendMessageRequest
from dm_service.services import conversation_service, message_service

router = APIRouter(prefix="/api/v1/conversations", tags=["conversations"])


@router.get("", response_model=list[ConversationResponse])
async def list_conversations(
    principal: CurrentPrincipal,
    uow: UoWDep,
    stub_partner_id: int | None = Query(None),
) -> list[ConversationResponse]:
    convs = await conversation_service.get_conversations(principal, stub_partner_id, uow)
    return [ConversationResponse.model_validate(c, from_attributes=True) for c in convs]


@router.get("/{partner_id}/messages", response_model=list[MessageResponse])
async def open_thread(
    partner_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[MessageResponse]:
    messages = await message_service.open_thread(principal, partner_id, uow)
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.post("/{partner_id}/messages", response_model=MessageResponse, status_code=201)
async def send_message(
    partner_id: int,
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageResponse:
    msg = await message_service.send_message(principal, partner_id, body.content, uow)
    return MessageResponse.model_validate(msg, from_attributes=True)
