from __future__ import annotations

from fastapi import APIRouter, Query

from dm_service.api.deps import CurrentPrincipal, UoWDep
from dm_service.api.v1.schemas.message import UnreadCountResponse
from dm_service.services import unread_service

router = APIRouter(prefix="/api/v1/unread", tags=["unread"])


@router.get("/count", response_model=UnreadCountResponse)
async def unread_count(
    principal: CurrentPrincipal,
    uow: UoWDep,
    partner_id: int | None = Query(None),
) -> UnreadCountResponse:
    count = await unread_service.count_unread(principal, partner_id, uow)
    return UnreadCountResponse(count=count)
