from __future__ import annotations

from dm_service.domain.entities.account import Account, DesignerProfile
from dm_service.infrastructure.db.models.account import AccountModel, DesignerProfileModel


def model_to_account(model: AccountModel) -> Account:
    return Account(
        id=model.id,
        display_name=model.display_name,
        avatar_ref=model.avatar_ref,
        role=model.role,
    )


def account_to_model(entity: Account) -> AccountModel:
    return AccountModel(
        id=entity.id,
        display_name=entity.display_name,
        avatar_ref=entity.avatar_ref,
        role=entity.role,
    )


def model_to_designer_profile(model: DesignerProfileModel) -> DesignerProfile:
    return DesignerProfile(
        id=model.id,
        account_id=model.user_id,
        display_name=model.display_name,
        avatar_ref=model.avatar_ref,
    )


def designer_profile_to_model(entity: DesignerProfile) -> DesignerProfileModel:
    return DesignerProfileModel(
        id=entity.id,
        user_id=entity.account_id,
        display_name=entity.display_name,
        avatar_ref=entity.avatar_ref,
    )
