from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Message:
    id: int
    sender_id: int
    receiver_id: int
    content: str
    read: bool
    created_at: datetime
    updated_at: datetime

    def partner_of(self, user_id: int) -> int:
        """Return the other party of this message as seen by ``user_id``."""
        return self.receiver_id if self.sender_id == user_id else self.sender_id
