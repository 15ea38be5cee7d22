"""
travel_stay.api.routers.users

Principal registration, role self-lookup and promotion endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.api.deps import db_session
from travel_stay.api.routers.schemas import UpdateResultResponse, UserResponse
from travel_stay.auth.deps import require_access
from travel_stay.auth.gate import require_self
from travel_stay.auth.models import ADMIN_ONLY, AUTHENTICATED, Principal
from travel_stay.db.models import Role
from travel_stay.services.lifecycle import ListingLifecycle
from travel_stay.services.users import UserService

router = APIRouter(prefix="/v1/users", tags=["users"])


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: str = Field(min_length=3, max_length=320)


class RegisterResponse(BaseModel):
    inserted_id: str | None = None
    message: str | None = None


@router.post("", response_model=RegisterResponse)
async def register_user(
    body: RegisterRequest,
    session: AsyncSession = Depends(db_session),
) -> RegisterResponse:
    user = await UserService(session=session).register(
        email=body.email, profile=dict(body.model_extra or {})
    )
    if user is None:
        return RegisterResponse(message="User Already Exists")
    return RegisterResponse(inserted_id=str(user.id))


@router.get("", response_model=list[UserResponse])
async def list_users(
    _: Principal = Depends(require_access(ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> list[UserResponse]:
    users = await UserService(session=session).list_all()
    return [UserResponse.from_user(u) for u in users]


@router.get("/admin/{email}")
async def check_admin(
    email: str,
    principal: Principal = Depends(require_access(AUTHENTICATED)),
    session: AsyncSession = Depends(db_session),
) -> dict[str, bool]:
    require_self(principal, email)
    return {"admin": await UserService(session=session).has_role(email, Role.admin)}


@router.get("/owner/{email}")
async def check_owner(
    email: str,
    principal: Principal = Depends(require_access(AUTHENTICATED)),
    session: AsyncSession = Depends(db_session),
) -> dict[str, bool]:
    require_self(principal, email)
    return {"owner": await UserService(session=session).has_role(email, Role.owner)}


@router.patch("/{email}/admin", response_model=UpdateResultResponse)
async def make_admin(
    email: str,
    _: Principal = Depends(require_access(ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> UpdateResultResponse:
    result = await ListingLifecycle(session=session).promote(email, Role.admin)
    return UpdateResultResponse.from_result(result)


@router.patch("/{email}/owner", response_model=UpdateResultResponse)
async def make_owner(
    email: str,
    owner: dict[str, Any] | None = Body(default=None),
    _: Principal = Depends(require_access(ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> UpdateResultResponse:
    result = await ListingLifecycle(session=session).promote(email, Role.owner, owner)
    return UpdateResultResponse.from_result(result)
