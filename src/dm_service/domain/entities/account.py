from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Account:
    id: int
    display_name: str
    avatar_ref: str | None
    role: str


@dataclass(frozen=True, slots=True)
class DesignerProfile:
    """Designer-facing profile; ``id`` lives in its own id space."""

    id: int
    account_id: int
    display_name: str | None
    avatar_ref: str | None
