"""
travel_stay.api.routers.health

Health and readiness endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.api.deps import db_session

router = APIRouter()


@router.get("/")
async def root() -> dict[str, str]:
    return {"status": "Travel Stay is running."}


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    # Readiness: the store must answer a trivial query.
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}
