"""
travel_stay.api.routers.listings

Listing endpoints for owners (own listings only) and admins (moderation).

Responsibilities:
- Owner submission, read, edit and delete, each scoped to the caller's listings.
- Admin listing overview and status transitions.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.api.deps import db_session
from travel_stay.api.routers.schemas import ListingRequest, UpdateResultResponse
from travel_stay.auth.deps import require_access
from travel_stay.auth.gate import require_self
from travel_stay.auth.models import ADMIN_ONLY, OWNER_ONLY, OWNER_SCOPED, Principal
from travel_stay.services.lifecycle import ListingLifecycle

router = APIRouter(prefix="/v1/listings", tags=["listings"])
owner_router = APIRouter(prefix="/v1/owner", tags=["listings"])


@router.post("", status_code=201)
async def create_listing(
    body: ListingRequest,
    principal: Principal = Depends(require_access(OWNER_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    # Owners may only submit listings in their own name.
    if body.ownerIdentity is not None:
        require_self(principal, body.ownerIdentity)
    listing = await ListingLifecycle(session=session).create(
        owner_email=principal.identity,
        city=body.city,
        status=body.status,
        fields=body.extra_fields(),
    )
    return listing.to_document()


@router.get("")
async def list_listings(
    _: Principal = Depends(require_access(ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    listings = await ListingLifecycle(session=session).list_all()
    return [item.to_document() for item in listings]


@router.patch("/{listing_id}/status", response_model=UpdateResultResponse)
async def set_listing_status(
    listing_id: uuid.UUID,
    status: str | None = Query(default=None),
    _: Principal = Depends(require_access(ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> UpdateResultResponse:
    result = await ListingLifecycle(session=session).set_status(listing_id, status)
    return UpdateResultResponse.from_result(result)


@router.get("/{listing_id}")
async def get_listing(
    listing_id: uuid.UUID,
    _: Principal = Depends(require_access(OWNER_SCOPED)),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    listing = await ListingLifecycle(session=session).get(listing_id)
    return listing.to_document()


@router.patch("/{listing_id}", response_model=UpdateResultResponse)
async def update_listing(
    listing_id: uuid.UUID,
    changes: dict[str, Any] = Body(...),
    _: Principal = Depends(require_access(OWNER_SCOPED)),
    session: AsyncSession = Depends(db_session),
) -> UpdateResultResponse:
    result = await ListingLifecycle(session=session).update(listing_id, changes)
    return UpdateResultResponse.from_result(result)


@router.delete("/{listing_id}")
async def delete_listing(
    listing_id: uuid.UUID,
    _: Principal = Depends(require_access(OWNER_SCOPED)),
    session: AsyncSession = Depends(db_session),
) -> dict[str, int]:
    deleted = await ListingLifecycle(session=session).delete(listing_id)
    return {"deleted_count": deleted}


@owner_router.get("/listings")
async def list_owner_listings(
    email: str | None = Query(default=None),
    principal: Principal = Depends(require_access(OWNER_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    if email is not None:
        require_self(principal, email)
    listings = await ListingLifecycle(session=session).list_for_owner(principal.identity)
    return [item.to_document() for item in listings]
