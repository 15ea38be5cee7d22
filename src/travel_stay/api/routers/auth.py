"""
travel_stay.api.routers.auth

Session token issuance.

The caller is trusted to have authenticated the identity it submits (e.g. via
an external identity provider on the client); no password check happens here.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel

from travel_stay.auth.deps import token_service
from travel_stay.auth.jwt import TokenService

router = APIRouter(prefix="/v1", tags=["auth"])


class TokenResponse(BaseModel):
    token: str


@router.post("/jwt", response_model=TokenResponse)
async def issue_token(
    claims: dict[str, Any] = Body(...),
    tokens: TokenService = Depends(token_service),
) -> TokenResponse:
    return TokenResponse(token=tokens.issue(claims))
