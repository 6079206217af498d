from __future__ import annotations

from fastapi import APIRouter, Response, status

from dm_service.api.deps import CurrentAdmin, CurrentPrincipal, UoWDep
from dm_service.api.v1.schemas.message import MessageResponse
from dm_service.services import message_service, read_state_service

router = APIRouter(prefix="/api/v1", tags=["messages"])


@router.put("/messages/{message_id}/read", response_model=MessageResponse)
async def mark_message_read(
    message_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MessageResponse:
    msg = await read_state_service.mark_message_read(message_id, principal, uow)
    return MessageResponse.model_validate(msg, from_attributes=True)


@router.delete(
    "/admin/messages/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["admin"],
)
async def delete_message(
    message_id: int,
    admin: CurrentAdmin,
    uow: UoWDep,
) -> Response:
    await message_service.delete_message(message_id, admin, uow)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
