from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from dm_service.api.deps import UoWDep
from dm_service.config import settings

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(uow: UoWDep) -> JSONResponse:
    try:
        await uow.ping()
    except Exception as exc:  # noqa: BLE001
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "errors": [f"{settings.STORE_BACKEND}: {exc}"]},
        )
    return JSONResponse(content={"status": "ready", "backend": settings.STORE_BACKEND})
