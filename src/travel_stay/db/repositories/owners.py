from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.db.models import OwnerRecord


class OwnerRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_email(self, email: str) -> OwnerRecord | None:
        stmt = select(OwnerRecord).where(OwnerRecord.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def put(self, *, email: str, profile: dict[str, Any]) -> OwnerRecord:
        # One record per email; a repeated owner promotion replaces the profile.
        existing = await self.get_by_email(email)
        if existing is not None:
            existing.profile = profile
            await self._session.flush()
            return existing

        record = OwnerRecord(email=email, profile=profile)
        self._session.add(record)
        await self._session.flush()
        return record

    async def delete_by_email(self, email: str) -> int:
        result = await self._session.execute(delete(OwnerRecord).where(OwnerRecord.email == email))
        return int(result.rowcount or 0)
