"""
travel_stay.auth.jwt

Session token issuing and verification (TokenService).

Responsibilities:
- Sign caller-supplied claims into a short-lived HS256 JWT.
- Verify signature and registered claims, returning the caller's claims.

Note:
- This layer does not check passwords; the caller must have established the
  identity before asking for a token.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from travel_stay.errors import Unauthenticated
from travel_stay.settings import Settings

IDENTITY_CLAIM = "email"
# Caller claims live under this key so PyJWT never validates names like sub/nbf/jti.
CALLER_CLAIMS = "ctx"


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str
    ttl: timedelta = timedelta(hours=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
            ttl=timedelta(minutes=settings.token_ttl_minutes),
        )


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class TokenService:
    def __init__(self, cfg: JwtConfig, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._cfg = cfg
        self._clock = clock

    def issue(self, claims: dict[str, Any]) -> str:
        now = self._clock()
        payload: dict[str, Any] = {
            CALLER_CLAIMS: dict(claims),
            "iss": self._cfg.issuer,
            "aud": self._cfg.audience,
            "iat": int(now.timestamp()),
            "exp": int((now + self._cfg.ttl).timestamp()),
        }
        return jwt.encode(payload, self._cfg.secret, algorithm=self._cfg.alg)

    def verify(self, token: str | None) -> dict[str, Any]:
        if not token:
            raise Unauthenticated("unauthorized access without token")
        try:
            decoded = jwt.decode(
                token,
                self._cfg.secret,
                algorithms=[self._cfg.alg],
                issuer=self._cfg.issuer,
                audience=self._cfg.audience,
                options={"require": ["exp", "iat", "iss", "aud", CALLER_CLAIMS]},
            )
        except InvalidTokenError as e:
            raise Unauthenticated("unauthorized access") from e
        claims = decoded[CALLER_CLAIMS]
        if not isinstance(claims, dict):
            raise Unauthenticated("unauthorized access")
        return claims


# --- Module Notes -----------------------------------------------------------
# Expiry is the only time-bounded construct in the service; tokens are never
# persisted or revoked individually.
