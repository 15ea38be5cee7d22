"""
travel_stay.auth.roles

Role resolution (RoleResolver).

Responsibilities:
- Read the current role of a principal from the user store on every call.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.db.models import Role
from travel_stay.db.repositories.users import UserRepo


class RoleResolver:
    def __init__(self, session: AsyncSession) -> None:
        self._users = UserRepo(session)

    async def resolve_role(self, identity: str) -> Role:
        # No cache: a promotion must be visible to the very next request.
        raw = await self._users.get_role(identity)
        if not raw:
            return Role.none
        try:
            return Role(raw)
        except ValueError:
            # Unknown labels grant nothing.
            return Role.none
