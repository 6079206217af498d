"""Import all models so Base.metadata sees every table."""
from dm_service.infrastructure.db.models.account import AccountModel, DesignerProfileModel
from dm_service.infrastructure.db.models.message import MessageModel

__all__ = [
    "AccountModel",
    "DesignerProfileModel",
    "MessageModel",
]
