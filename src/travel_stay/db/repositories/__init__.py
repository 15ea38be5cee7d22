"""
travel_stay.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories for the persistence layer.
- Share the `UpdateResult` shape returned by update-or-insert operations.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpdateResult:
    matched_count: int
    modified_count: int
    upserted_id: uuid.UUID | None = None

    @property
    def matched(self) -> bool:
        return self.matched_count > 0


# --- Module Notes -----------------------------------------------------------
# Repositories are intentionally thin; authorization and lifecycle rules belong in
# `travel_stay.auth` and `travel_stay.services`.
