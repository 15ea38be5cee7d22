"""
travel_stay.services.analytics

Read-only listing analytics (CityAggregator).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.db.repositories.listings import ListingRepo


@dataclass(frozen=True, slots=True)
class CitySummary:
    city: str | None
    total: int
    approved: int

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


class CityAggregator:
    def __init__(self, *, session: AsyncSession) -> None:
        self._listings = ListingRepo(session)

    async def top_cities(self, limit: int = 3) -> list[CitySummary]:
        """
        Cities ranked by listing count (descending), each with its approved count.
        """

        if limit < 1:
            return []
        rows = await self._listings.count_by_city(limit=limit)
        return [CitySummary(city=r.city, total=r.total, approved=r.approved) for r in rows]
