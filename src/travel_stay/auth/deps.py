"""
travel_stay.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Build the TokenService from settings.
- Run the AuthorizationGate for a route's declared access and yield the
  resulting `Principal`.
"""

from __future__ import annotations

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.api.deps import db_session, settings_dep
from travel_stay.auth.gate import AuthorizationGate
from travel_stay.auth.jwt import JwtConfig, TokenService
from travel_stay.auth.models import Principal, RouteAccess
from travel_stay.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def token_service(settings: Settings = Depends(settings_dep)) -> TokenService:
    return TokenService(JwtConfig.from_settings(settings))


def authorization_gate(
    tokens: TokenService = Depends(token_service),
    session: AsyncSession = Depends(db_session),
) -> AuthorizationGate:
    return AuthorizationGate(tokens=tokens, session=session)


def require_access(access: RouteAccess, *, resource_param: str = "listing_id"):
    async def _dep(
        request: Request,
        creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
        gate: AuthorizationGate = Depends(authorization_gate),
    ) -> Principal:
        resource_id = request.path_params.get(resource_param) if access.ownership_scoped else None
        principal = await gate.check(
            creds.credentials if creds is not None else None,
            access,
            resource_id=resource_id,
        )
        structlog.contextvars.bind_contextvars(identity=principal.identity)
        return principal

    return _dep
