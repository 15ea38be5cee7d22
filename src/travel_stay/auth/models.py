"""
travel_stay.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated caller (`Principal`) bound to a request.
- Define the per-route access declaration (`RouteAccess`) consumed by the gate.
"""

from __future__ import annotations

from dataclasses import dataclass
from travel_stay.db.models import Role


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.

    `role` is resolved from the store at gate time, never taken from the token.
    """

    identity: str
    role: Role = Role.none

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin

    @property
    def is_owner(self) -> bool:
        return self.role is Role.owner


@dataclass(frozen=True, slots=True)
class RouteAccess:
    required_role: Role | None = None
    ownership_scoped: bool = False


AUTHENTICATED = RouteAccess()
ADMIN_ONLY = RouteAccess(required_role=Role.admin)
OWNER_ONLY = RouteAccess(required_role=Role.owner)
OWNER_SCOPED = RouteAccess(required_role=Role.owner, ownership_scoped=True)
