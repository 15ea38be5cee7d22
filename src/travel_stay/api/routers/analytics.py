"""
travel_stay.api.routers.analytics

Public marketing analytics. No authentication required.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.api.deps import db_session, settings_dep
from travel_stay.services.analytics import CityAggregator
from travel_stay.settings import Settings

router = APIRouter(prefix="/v1", tags=["analytics"])


@router.get("/top-cities")
async def top_cities(
    limit: int | None = Query(default=None, ge=1, le=100),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> list[dict[str, object]]:
    summaries = await CityAggregator(session=session).top_cities(limit or settings.top_cities_limit)
    return [s.to_dict() for s in summaries]
