"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from dm_service.application.dto.principal import Principal
from dm_service.application.exceptions import ForbiddenError, UnauthorizedError
from dm_service.application.ports.auth import TokenVerifier
from dm_service.application.uow import UnitOfWork
from dm_service.config import settings
from dm_service.infrastructure.auth.hs256_verifier import HS256Verifier
from dm_service.infrastructure.auth.jwks_verifier import JWKSVerifier
from dm_service.infrastructure.db.session import get_sessionmaker
from dm_service.infrastructure.db.uow import SqlAlchemyUoW
from dm_service.infrastructure.memory.store import MemoryStore
from dm_service.infrastructure.memory.uow import InMemoryUoW

_bearer_scheme = HTTPBearer(auto_error=False)

_memory_store: MemoryStore | None = None


def get_memory_store() -> MemoryStore:
    global _memory_store  # noqa: PLW0603
    if _memory_store is None:
        _memory_store = MemoryStore()
    return _memory_store


async def get_uow() -> AsyncIterator[UnitOfWork]:
    if settings.STORE_BACKEND == "memory":
        yield InMemoryUoW(get_memory_store())
        return

    async with get_sessionmaker()() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[UnitOfWork, Depends(get_uow)]


def _get_verifier() -> TokenVerifier:
    if settings.JWT_VERIFY_MODE == "jwks":
        assert settings.JWKS_URL, "JWKS_URL must be set when JWT_VERIFY_MODE=jwks"
        return JWKSVerifier(settings.JWKS_URL)
    return HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM)


_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = _get_verifier()
    return _verifier


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
) -> Principal:
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    verifier = get_verifier()
    try:
        return await verifier.verify(credentials.credentials)
    except Exception as exc:
        raise UnauthorizedError(str(exc)) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


async def get_current_admin(principal: CurrentPrincipal) -> Principal:
    if not principal.is_admin:
        raise ForbiddenError("Admin access required")
    return principal


CurrentAdmin = Annotated[Principal, Depends(get_current_admin)]
