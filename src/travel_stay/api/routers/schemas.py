"""
travel_stay.api.routers.schemas

Request/response models shared across routers.
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from travel_stay.db.models import User
from travel_stay.db.repositories import UpdateResult


class UpdateResultResponse(BaseModel):
    matched_count: int
    modified_count: int
    upserted_id: uuid.UUID | None = None

    @classmethod
    def from_result(cls, result: UpdateResult) -> UpdateResultResponse:
        return cls(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=result.upserted_id,
        )


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    role: str | None
    profile: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(id=user.id, email=user.email, role=user.role, profile=user.profile or {})


class ListingRequest(BaseModel):
    # Required attributes plus any number of descriptive fields.
    model_config = ConfigDict(extra="allow")

    city: str = Field(min_length=1, max_length=256)
    status: str | None = None
    ownerIdentity: str | None = None

    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})
