from __future__ import annotations

from enum import StrEnum


class AccountRole(StrEnum):
    USER = "user"
    DESIGNER = "designer"
    ADMIN = "admin"
