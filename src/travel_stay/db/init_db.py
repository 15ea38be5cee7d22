"""
travel_stay.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
- Seed the bootstrap administrator configured in settings.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from travel_stay.db import models  # noqa: F401  # registers tables on Base.metadata
from travel_stay.db.base import Base
from travel_stay.db.models import Role
from travel_stay.db.repositories.users import UserRepo


async def init_db(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_admin(session_factory: async_sessionmaker[AsyncSession], email: str) -> None:
    async with session_factory() as session:
        await UserRepo(session).set_role(email, Role.admin, upsert=True)
        await session.commit()
