"""
travel_stay.auth.gate

Authorization gate: authentication -> role check -> ownership check.

Responsibilities:
- Turn a bearer token into a `Principal` bound to the verified identity claim.
- Enforce a route's declared `RouteAccess` uniformly, failing closed at the
  first step that cannot prove permission.
- Reject self-lookups whose path identity differs from the caller.
"""

from __future__ import annotations

import uuid
from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.auth.jwt import IDENTITY_CLAIM, TokenService
from travel_stay.auth.models import Principal, RouteAccess
from travel_stay.auth.roles import RoleResolver
from travel_stay.db.repositories.listings import ListingRepo
from travel_stay.errors import Forbidden, NotFound, Unauthenticated
from travel_stay.observability.logging import get_logger

log = get_logger(__name__)


class AuthorizationGate:
    def __init__(self, *, tokens: TokenService, session: AsyncSession) -> None:
        self._tokens = tokens
        self._roles = RoleResolver(session)
        self._listings = ListingRepo(session)

    def authenticate(self, bearer_token: str | None) -> Principal:
        claims = self._tokens.verify(bearer_token)
        identity = claims.get(IDENTITY_CLAIM)
        if not isinstance(identity, str) or not identity:
            raise Unauthenticated("unauthorized access")
        return Principal(identity=identity)

    async def authorize(
        self,
        principal: Principal,
        access: RouteAccess,
        *,
        resource_id: uuid.UUID | str | None = None,
    ) -> Principal:
        role = await self._roles.resolve_role(principal.identity)
        principal = replace(principal, role=role)

        if access.required_role is not None and role is not access.required_role:
            log.info(
                "authz_denied",
                reason="role",
                identity=principal.identity,
                role=role.value,
                required=access.required_role.value,
            )
            raise Forbidden()

        if access.ownership_scoped:
            if resource_id is None:
                # An ownership-scoped route without a target cannot prove ownership.
                raise Forbidden()
            await self._check_ownership(principal, resource_id)

        return principal

    async def check(
        self,
        bearer_token: str | None,
        access: RouteAccess,
        *,
        resource_id: uuid.UUID | str | None = None,
    ) -> Principal:
        principal = self.authenticate(bearer_token)
        return await self.authorize(principal, access, resource_id=resource_id)

    async def _check_ownership(self, principal: Principal, resource_id: uuid.UUID | str) -> None:
        listing_id = _as_uuid(resource_id)
        listing = await self._listings.get(listing_id) if listing_id is not None else None
        if listing is None:
            raise NotFound("Listing not found")
        if listing.owner_email != principal.identity:
            log.info(
                "authz_denied",
                reason="ownership",
                identity=principal.identity,
                listing_id=str(resource_id),
            )
            raise Forbidden()


def _as_uuid(raw: uuid.UUID | str) -> uuid.UUID | None:
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(raw)
    except ValueError:
        return None


def require_self(principal: Principal, identity: str) -> None:
    # Self-lookup routes stop here on mismatch; nothing after this runs.
    if principal.identity != identity:
        log.info("authz_denied", reason="self_lookup", identity=principal.identity)
        raise Forbidden()


# --- Module Notes -----------------------------------------------------------
# The gate is the single implementation behind every protected route; routers
# only declare a `RouteAccess` (see `auth.models`) and never branch on roles.
