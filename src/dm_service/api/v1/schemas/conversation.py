from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class PartnerResponse(BaseModel):
    id: int
    display_name: str
    avatar_ref: str | None
    role: str

    model_config = {"from_attributes": True}


class LastMessageResponse(BaseModel):
    id: int
    content: str
    created_at: datetime
    is_from_user: bool

    model_config = {"from_attributes": True}


class ConversationResponse(BaseModel):
    partner: PartnerResponse
    last_message: LastMessageResponse
    unread_count: int
    is_stub: bool = False

    model_config = {"from_attributes": True}
