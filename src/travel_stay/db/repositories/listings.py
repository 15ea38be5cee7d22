"""
travel_stay.db.repositories.listings

Repository for `Listing` documents.

Responsibilities:
- Insert, fetch, patch and delete listings.
- Upsert status labels for moderation.
- Compute the per-city grouping used by the analytics aggregate.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import case, delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.db.models import Listing, ListingStatus
from travel_stay.db.repositories import UpdateResult


@dataclass(frozen=True, slots=True)
class CityCount:
    city: str | None
    total: int
    approved: int


class ListingRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        owner_email: str,
        city: str,
        status: ListingStatus = ListingStatus.pending,
        fields: dict[str, Any] | None = None,
    ) -> Listing:
        listing = Listing(
            owner_email=owner_email,
            city=city,
            status=status.value,
            fields=fields or {},
        )
        self._session.add(listing)
        await self._session.flush()
        return listing

    async def get(self, listing_id: uuid.UUID) -> Listing | None:
        return await self._session.get(Listing, listing_id)

    async def list_all(self) -> list[Listing]:
        stmt = select(Listing).order_by(Listing.created_at)
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_by_owner(self, owner_email: str) -> list[Listing]:
        stmt = (
            select(Listing)
            .where(Listing.owner_email == owner_email)
            .order_by(Listing.created_at)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def patch_fields(
        self,
        listing_id: uuid.UUID,
        *,
        city: str | None = None,
        fields: dict[str, Any] | None = None,
    ) -> UpdateResult:
        listing = await self.get(listing_id)
        if listing is None:
            return UpdateResult(matched_count=0, modified_count=0)

        before = (listing.city, dict(listing.fields or {}))
        if city is not None:
            listing.city = city
        if fields:
            # Reassign so the JSON column is flagged dirty.
            listing.fields = {**(listing.fields or {}), **fields}
        modified = int((listing.city, listing.fields) != before)
        if modified:
            listing.updated_at = datetime.utcnow()
        await self._session.flush()
        return UpdateResult(matched_count=1, modified_count=modified)

    async def upsert_status(self, listing_id: uuid.UUID, status: ListingStatus) -> UpdateResult:
        listing = await self.get(listing_id)
        if listing is None:
            created = Listing(id=listing_id, status=status.value, fields={})
            self._session.add(created)
            await self._session.flush()
            return UpdateResult(matched_count=0, modified_count=0, upserted_id=listing_id)

        modified = int(listing.status != status.value)
        listing.status = status.value
        listing.updated_at = datetime.utcnow()
        await self._session.flush()
        return UpdateResult(matched_count=1, modified_count=modified)

    async def delete(self, listing_id: uuid.UUID) -> int:
        result = await self._session.execute(delete(Listing).where(Listing.id == listing_id))
        return int(result.rowcount or 0)

    async def count_by_city(self, *, limit: int) -> list[CityCount]:
        total = func.count(Listing.id).label("total")
        approved = func.sum(
            case((Listing.status == ListingStatus.approved.value, 1), else_=0)
        ).label("approved")
        # Ties fall back to the city whose first listing was inserted earliest.
        stmt = (
            select(Listing.city, total, approved)
            .group_by(Listing.city)
            .order_by(desc(total), func.min(Listing.created_at))
            .limit(limit)
        )
        rows = (await self._session.execute(stmt)).all()
        return [
            CityCount(city=row.city, total=int(row.total), approved=int(row.approved or 0))
            for row in rows
        ]


# --- Module Notes -----------------------------------------------------------
# `(city, status)` is indexed so the grouping stays an index scan as the table grows.
