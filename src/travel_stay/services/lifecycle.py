"""
travel_stay.services.lifecycle

Listing lifecycle and principal promotion (ListingLifecycle).

Responsibilities:
- Create listings, defaulting the moderation status to `pending`.
- Apply admin status transitions with insert-if-missing semantics.
- Apply owner field edits and deletions.
- Promote principals to owner/admin and keep owner records in step.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from travel_stay.db.models import Listing, ListingStatus, Role
from travel_stay.db.repositories import UpdateResult
from travel_stay.db.repositories.listings import ListingRepo
from travel_stay.db.repositories.owners import OwnerRepo
from travel_stay.db.repositories.users import UserRepo
from travel_stay.errors import NotFound, ValidationIgnored
from travel_stay.observability.logging import get_logger

log = get_logger(__name__)

# Labels an admin may set; `pending` is only ever an initial state.
MODERATION_LABELS = frozenset({ListingStatus.approved, ListingStatus.denied})

# Keys owned by the lifecycle rather than the open field mapping.
_RESERVED_FIELDS = frozenset({"id", "_id", "ownerIdentity", "ownerEmail", "status"})


class ListingLifecycle:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._listings = ListingRepo(session)
        self._users = UserRepo(session)
        self._owners = OwnerRepo(session)

    async def create(
        self,
        *,
        owner_email: str,
        city: str,
        status: str | None = None,
        fields: dict[str, Any] | None = None,
    ) -> Listing:
        initial = _parse_status(status) if status else ListingStatus.pending
        listing = await self._listings.create(
            owner_email=owner_email,
            city=city,
            status=initial,
            fields=_open_fields(fields),
        )
        await self._session.commit()
        log.info("listing_created", listing_id=str(listing.id), status=initial.value)
        return listing

    async def get(self, listing_id: uuid.UUID) -> Listing:
        listing = await self._listings.get(listing_id)
        if listing is None:
            raise NotFound("Listing not found")
        return listing

    async def list_all(self) -> list[Listing]:
        return await self._listings.list_all()

    async def list_for_owner(self, owner_email: str) -> list[Listing]:
        return await self._listings.list_by_owner(owner_email)

    async def set_status(self, listing_id: uuid.UUID, status: str | None) -> UpdateResult:
        label = _moderation_label(status)
        if label is None:
            log.warning("listing_status_ignored", listing_id=str(listing_id), status=status)
            raise ValidationIgnored(f"status must be one of: approved, denied (got {status!r})")

        result = await self._listings.upsert_status(listing_id, label)
        await self._session.commit()
        log.info(
            "listing_status_set",
            listing_id=str(listing_id),
            status=label.value,
            matched=result.matched_count,
            upserted=result.upserted_id is not None,
        )
        return result

    async def update(self, listing_id: uuid.UUID, changes: dict[str, Any]) -> UpdateResult:
        fields = _open_fields(changes)
        city = fields.pop("city", None)
        if "city" in changes and not (isinstance(city, str) and city.strip()):
            raise ValidationIgnored("city must be a non-empty string")
        result = await self._listings.patch_fields(listing_id, city=city, fields=fields)
        if not result.matched:
            raise NotFound("Listing not found")
        await self._session.commit()
        return result

    async def delete(self, listing_id: uuid.UUID) -> int:
        deleted = await self._listings.delete(listing_id)
        await self._session.commit()
        log.info("listing_deleted", listing_id=str(listing_id), deleted=deleted)
        return deleted

    async def promote(
        self,
        email: str,
        target: Role,
        owner_payload: dict[str, Any] | None = None,
    ) -> UpdateResult:
        if target is Role.admin:
            # Best-effort: a principal that never was an owner has nothing to remove.
            removed = await self._owners.delete_by_email(email)
            result = await self._users.set_role(email, Role.admin, upsert=True)
            log.info("principal_promoted", email=email, role="admin", owner_records_removed=removed)
        elif target is Role.owner:
            profile = {k: v for k, v in (owner_payload or {}).items() if k != "email"}
            await self._owners.put(email=email, profile=profile)
            result = await self._users.set_role(email, Role.owner, upsert=True)
            log.info("principal_promoted", email=email, role="owner")
        else:
            raise ValidationIgnored(f"cannot promote to role {target.value!r}")

        await self._session.commit()
        return result


def _parse_status(raw: str) -> ListingStatus:
    try:
        return ListingStatus(raw)
    except ValueError as e:
        raise ValidationIgnored(f"unknown listing status {raw!r}") from e


def _moderation_label(raw: str | None) -> ListingStatus | None:
    if raw is None:
        return None
    try:
        label = ListingStatus(raw)
    except ValueError:
        return None
    return label if label in MODERATION_LABELS else None


def _open_fields(payload: dict[str, Any] | None) -> dict[str, Any]:
    return {k: v for k, v in (payload or {}).items() if k not in _RESERVED_FIELDS}


# --- Module Notes -----------------------------------------------------------
# Promotion touches two collections. Both writes share one session and commit, so
# on this SQL backend a crash between them rolls back rather than leaving a
# stale owner record behind.
