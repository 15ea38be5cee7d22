from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.auth.roles import RoleResolver
from travel_stay.db.models import Role, User
from travel_stay.db.repositories.users import UserRepo
from travel_stay.observability.logging import get_logger

log = get_logger(__name__)


class UserService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._users = UserRepo(session)
        self._roles = RoleResolver(session)

    async def register(self, *, email: str, profile: dict[str, Any]) -> User | None:
        """Insert a principal with no role. Returns None when the email is taken."""

        if await self._users.get_by_email(email) is not None:
            return None
        # Registration never grants a role, whatever the payload claims.
        try:
            user = await self._users.create(
                email=email,
                profile={k: v for k, v in profile.items() if k not in ("email", "role")},
            )
            await self._session.commit()
        except IntegrityError:
            # A concurrent registration won the unique email.
            await self._session.rollback()
            return None
        log.info("user_registered", email=email)
        return user

    async def list_all(self) -> list[User]:
        return await self._users.list_all()

    async def has_role(self, email: str, role: Role) -> bool:
        return await self._roles.resolve_role(email) is role
