"""
tests.conftest

Shared fixtures: an isolated SQLite store per test, the FastAPI app wired to it,
and helpers for seeding principals and minting tokens.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from travel_stay.api.app import create_app
from travel_stay.auth.jwt import JwtConfig, TokenService
from travel_stay.db.init_db import init_db
from travel_stay.db.models import Role
from travel_stay.db.repositories.users import UserRepo
from travel_stay.db.session import create_engine, create_sessionmaker
from travel_stay.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'travel_stay_test.db'}",
        jwt_secret="test-secret-at-least-32-bytes-long!!",
        bootstrap_admin_email="admin@example.com",
    )


@pytest.fixture
def tokens(settings: Settings) -> TokenService:
    return TokenService(JwtConfig.from_settings(settings))


@pytest_asyncio.fixture
async def session_factory(settings: Settings) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_engine(settings)
    await init_db(engine)
    try:
        yield create_sessionmaker(engine)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest.fixture
def headers_for(tokens: TokenService):
    def _headers(email: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {tokens.issue({'email': email})}"}

    return _headers


@pytest_asyncio.fixture
async def seed_user(session_factory: async_sessionmaker[AsyncSession]):
    async def _seed(email: str, role: Role | None = None) -> None:
        async with session_factory() as s:
            repo = UserRepo(s)
            if role is None:
                await repo.create(email=email)
            else:
                await repo.set_role(email, role, upsert=True)
            await s.commit()

    return _seed
