"""
tests.test_api

End-to-end flows through the FastAPI transport: token issuance, registration,
promotion, listing moderation, ownership scoping and analytics.
"""

from __future__ import annotations

import asyncio
import uuid

import pytest

from travel_stay.db.models import Role

ADMIN = "admin@example.com"
ALICE = "alice@example.com"


@pytest.mark.asyncio
async def test_health_endpoints(client) -> None:
    r = await client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = await client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


@pytest.mark.asyncio
async def test_issued_token_authenticates(client) -> None:
    r = await client.post("/v1/jwt", json={"email": ALICE, "name": "Alice"})
    assert r.status_code == 200
    token = r.json()["token"]

    r = await client.get(f"/v1/users/admin/{ALICE}", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json() == {"admin": False}


@pytest.mark.asyncio
async def test_register_is_idempotent_and_grants_no_role(client, headers_for) -> None:
    r = await client.post("/v1/users", json={"email": ALICE, "name": "Alice", "role": "admin"})
    assert r.status_code == 200
    assert r.json()["inserted_id"]

    r = await client.post("/v1/users", json={"email": ALICE})
    assert r.json()["message"] == "User Already Exists"

    r = await client.get(f"/v1/users/admin/{ALICE}", headers=headers_for(ALICE))
    assert r.json() == {"admin": False}


@pytest.mark.asyncio
async def test_missing_and_invalid_tokens_are_401(client) -> None:
    r = await client.get("/v1/users")
    assert r.status_code == 401
    assert r.json()["error"] is True

    r = await client.get("/v1/users", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_admin_routes_reject_non_admins(client, headers_for, seed_user) -> None:
    await seed_user(ALICE, Role.owner)
    r = await client.get("/v1/users", headers=headers_for(ALICE))
    assert r.status_code == 403

    r = await client.get("/v1/users", headers=headers_for(ADMIN))
    assert r.status_code == 200
    assert {u["email"] for u in r.json()} >= {ADMIN, ALICE}


@pytest.mark.asyncio
async def test_self_lookup_for_other_identity_is_forbidden(client, headers_for, seed_user) -> None:
    await seed_user(ALICE)
    r = await client.get(f"/v1/users/admin/{ADMIN}", headers=headers_for(ALICE))
    assert r.status_code == 403

    r = await client.get(f"/v1/users/owner/{ADMIN}", headers=headers_for(ALICE))
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_promotion_requires_admin(client, headers_for, seed_user) -> None:
    await seed_user(ALICE, Role.owner)
    r = await client.patch(f"/v1/users/{ALICE}/admin", headers=headers_for(ALICE))
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_owner_to_listing_approval_scenario(client, headers_for) -> None:
    await client.post("/v1/users", json={"email": ALICE})

    r = await client.patch(
        f"/v1/users/{ALICE}/owner", json={"phone": "555"}, headers=headers_for(ADMIN)
    )
    assert r.status_code == 200
    assert r.json()["matched_count"] == 1

    r = await client.get(f"/v1/users/owner/{ALICE}", headers=headers_for(ALICE))
    assert r.json() == {"owner": True}

    r = await client.post(
        "/v1/listings",
        json={"city": "Lisbon", "ownerIdentity": ALICE, "title": "Loft"},
        headers=headers_for(ALICE),
    )
    assert r.status_code == 201
    listing = r.json()
    assert listing["status"] == "pending"
    assert listing["title"] == "Loft"

    r = await client.patch(
        f"/v1/listings/{listing['id']}/status",
        params={"status": "approved"},
        headers=headers_for(ADMIN),
    )
    assert r.status_code == 200
    assert r.json() == {"matched_count": 1, "modified_count": 1, "upserted_id": None}

    missing = uuid.uuid4()
    r = await client.patch(
        f"/v1/listings/{missing}/status",
        params={"status": "approved"},
        headers=headers_for(ADMIN),
    )
    assert r.status_code == 200
    body = r.json()
    assert body["matched_count"] == 0
    assert body["upserted_id"] == str(missing)

    r = await client.get("/v1/top-cities")
    cities = {c["city"]: c for c in r.json()}
    assert cities["Lisbon"] == {"city": "Lisbon", "total": 1, "approved": 1}


@pytest.mark.asyncio
async def test_unsupported_status_is_explicitly_rejected(client, headers_for) -> None:
    r = await client.patch(
        f"/v1/listings/{uuid.uuid4()}/status",
        params={"status": "maybe"},
        headers=headers_for(ADMIN),
    )
    assert r.status_code == 422
    assert "approved" in r.json()["message"]


@pytest.mark.asyncio
async def test_admin_promotion_removes_owner_record(client, headers_for) -> None:
    await client.post("/v1/users", json={"email": ALICE})
    await client.patch(f"/v1/users/{ALICE}/owner", json={"phone": "555"}, headers=headers_for(ADMIN))

    r = await client.patch(f"/v1/users/{ALICE}/admin", headers=headers_for(ADMIN))
    assert r.status_code == 200

    r = await client.get(f"/v1/users/admin/{ALICE}", headers=headers_for(ALICE))
    assert r.json() == {"admin": True}
    r = await client.get(f"/v1/users/owner/{ALICE}", headers=headers_for(ALICE))
    assert r.json() == {"owner": False}


@pytest.mark.asyncio
async def test_owners_are_scoped_to_their_own_listings(client, headers_for, seed_user) -> None:
    bob = "bob@example.com"
    await seed_user(ALICE, Role.owner)
    await seed_user(bob, Role.owner)

    r = await client.post("/v1/listings", json={"city": "Lisbon"}, headers=headers_for(ALICE))
    listing_id = r.json()["id"]

    for method in ("GET", "DELETE"):
        r = await client.request(method, f"/v1/listings/{listing_id}", headers=headers_for(bob))
        assert r.status_code == 403
    r = await client.patch(
        f"/v1/listings/{listing_id}", json={"price": 1}, headers=headers_for(bob)
    )
    assert r.status_code == 403

    r = await client.patch(
        f"/v1/listings/{listing_id}", json={"price": 80}, headers=headers_for(ALICE)
    )
    assert r.status_code == 200
    r = await client.get(f"/v1/listings/{listing_id}", headers=headers_for(ALICE))
    assert r.json()["price"] == 80

    r = await client.get("/v1/owner/listings", headers=headers_for(bob))
    assert r.json() == []
    r = await client.get("/v1/owner/listings", params={"email": ALICE}, headers=headers_for(bob))
    assert r.status_code == 403

    r = await client.delete(f"/v1/listings/{listing_id}", headers=headers_for(ALICE))
    assert r.json() == {"deleted_count": 1}
    r = await client.get(f"/v1/listings/{listing_id}", headers=headers_for(ALICE))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_owner_cannot_submit_listing_for_someone_else(client, headers_for, seed_user) -> None:
    await seed_user(ALICE, Role.owner)
    r = await client.post(
        "/v1/listings",
        json={"city": "Lisbon", "ownerIdentity": "bob@example.com"},
        headers=headers_for(ALICE),
    )
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_admin_sees_all_listings(client, headers_for, seed_user) -> None:
    await seed_user(ALICE, Role.owner)
    await client.post("/v1/listings", json={"city": "Lisbon"}, headers=headers_for(ALICE))
    await client.post("/v1/listings", json={"city": "Porto"}, headers=headers_for(ALICE))

    r = await client.get("/v1/listings", headers=headers_for(ADMIN))
    assert r.status_code == 200
    assert sorted(item["city"] for item in r.json()) == ["Lisbon", "Porto"]

    r = await client.get("/v1/listings", headers=headers_for(ALICE))
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_store_failure_is_reported_as_unavailable(client, monkeypatch) -> None:
    from sqlalchemy.exc import OperationalError

    from travel_stay.services.analytics import CityAggregator

    async def _down(self, limit: int = 3):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(CityAggregator, "top_cities", _down)
    r = await client.get("/v1/top-cities")
    assert r.status_code == 503
    assert r.json() == {"error": True, "message": "Store unavailable"}


@pytest.mark.asyncio
async def test_concurrent_registration_of_same_email(client, headers_for) -> None:
    email = "race@example.com"
    responses = await asyncio.gather(
        *(client.post("/v1/users", json={"email": email}) for _ in range(8))
    )

    assert [r.status_code for r in responses] == [200] * 8
    bodies = [r.json() for r in responses]
    assert sum(1 for b in bodies if b["inserted_id"]) == 1
    assert all(b["message"] == "User Already Exists" for b in bodies if not b["inserted_id"])

    r = await client.get("/v1/users", headers=headers_for(ADMIN))
    assert [u["email"] for u in r.json()].count(email) == 1
