from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.db.models import Role, User
from travel_stay.db.repositories import UpdateResult


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_role(self, email: str) -> str | None:
        # Column read bypasses the identity map so a long-lived session sees promotions.
        stmt = select(User.role).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_all(self) -> list[User]:
        stmt = select(User).order_by(User.created_at)
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(
        self, *, email: str, role: Role | None = None, profile: dict[str, Any] | None = None
    ) -> User:
        user = User(
            email=email,
            role=role.value if role is not None and role is not Role.none else None,
            profile=profile or {},
        )
        self._session.add(user)
        await self._session.flush()
        return user

    async def set_role(self, email: str, role: Role, *, upsert: bool = False) -> UpdateResult:
        # Role is overwritten, never accumulated.
        user = await self.get_by_email(email)
        if user is None:
            if not upsert:
                return UpdateResult(matched_count=0, modified_count=0)
            created = await self.create(email=email, role=role)
            return UpdateResult(matched_count=0, modified_count=0, upserted_id=created.id)

        modified = int(user.role != role.value)
        user.role = role.value
        await self._session.flush()
        return UpdateResult(matched_count=1, modified_count=modified)
