"""
travel_stay.db.models

Persistence schema for the marketplace.

Responsibilities:
- Define the three document collections the authorization core works against:
  - User: a principal keyed by email, with at most one role
  - OwnerRecord: supplemental profile captured when a principal becomes an owner
  - Listing: a rentable unit with a moderation status and open descriptive fields
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Index, String, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from travel_stay.db.base import Base


def _utcnow() -> datetime:
    return datetime.utcnow()


class Role(enum.StrEnum):
    # `none` is never stored; an absent or NULL role resolves to it.
    none = "none"
    owner = "owner"
    admin = "admin"


class ListingStatus(enum.StrEnum):
    pending = "pending"
    approved = "approved"
    denied = "denied"


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    role: Mapped[str | None] = mapped_column(String(32), nullable=True)
    profile: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


class OwnerRecord(Base):
    __tablename__ = "owner_records"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    profile: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)


class Listing(Base):
    __tablename__ = "listings"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    # Nullable because a status upsert against an unknown id creates a bare record.
    owner_email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    city: Mapped[str | None] = mapped_column(String(256), nullable=True, index=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ListingStatus.pending.value, index=True
    )
    fields: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (Index("ix_listings_city_status", "city", "status"),)

    def to_document(self) -> dict[str, Any]:
        # Open fields first so the required attributes always win on collision.
        return {
            **(self.fields or {}),
            "id": str(self.id),
            "ownerIdentity": self.owner_email,
            "city": self.city,
            "status": self.status,
        }


# --- Module Notes -----------------------------------------------------------
# Roles and statuses are stored as plain strings so that documents written by
# older clients with unexpected labels still load; the services validate on write.
