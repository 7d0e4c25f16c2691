from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import HTTPException

from catch_chronicles.database import SessionLocal
from catch_chronicles.models.profile import Profile
from catch_chronicles.schemas.profile import ProfileUpdate
from catch_chronicles.services import profile_service
from catch_chronicles.services.context import UserContext
from conftest import register_and_login, trip_payload


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def test_update_profile_fields(client, auth_headers) -> None:
    r = client.put(
        "/users/me/profile",
        json={"username": "@ada_fishes", "short_bio": "  Dry flies only.  "},
        headers=auth_headers,
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["username"] == "ada_fishes"
    assert body["short_bio"] == "Dry flies only."
    assert body["display_name"] == "Ada Angler"


def test_username_must_be_unique(client, auth_headers) -> None:
    assert client.put("/users/me/profile", json={"username": "riverrat"}, headers=auth_headers).status_code == 200
    other = register_and_login(client, "other@example.com")
    r = client.put("/users/me/profile", json={"username": "riverrat"}, headers=other)
    assert r.status_code == 409


def test_invalid_username_rejected(client, auth_headers) -> None:
    r = client.put("/users/me/profile", json={"username": "no spaces allowed"}, headers=auth_headers)
    assert r.status_code == 422


def test_avatar_upload_replaces_previous_file(client, auth_headers, uploads_dir: Path) -> None:
    first = client.post(
        "/users/me/profile/avatar",
        files={"file": ("me.png", PNG_BYTES, "image/png")},
        headers=auth_headers,
    )
    assert first.status_code == 200, first.text
    first_url = first.json()["avatar_url"]
    assert first_url.startswith("/uploads/avatars/")

    served = client.get(first_url)
    assert served.status_code == 200
    assert served.content == PNG_BYTES

    second = client.post(
        "/users/me/profile/avatar",
        files={"file": ("me2.png", PNG_BYTES, "image/png")},
        headers=auth_headers,
    )
    assert second.status_code == 200
    assert second.json()["avatar_url"] != first_url
    assert not (uploads_dir / first_url.split("/uploads/", 1)[1]).exists()


def test_avatar_upload_rejects_non_images(client, auth_headers) -> None:
    r = client.post(
        "/users/me/profile/avatar",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers,
    )
    assert r.status_code == 400


def test_trip_image_upload_and_cleanup_on_delete(client, auth_headers, uploads_dir: Path) -> None:
    trip = client.post("/api/trips", json=trip_payload(), headers=auth_headers).json()

    r = client.post(
        f"/api/trips/{trip['id']}/image",
        files={"file": ("river.jpg", b"\xff\xd8\xff" + b"\x00" * 32, "image/jpeg")},
        headers=auth_headers,
    )
    assert r.status_code == 200, r.text
    image_url = r.json()["image_url"]
    assert image_url.startswith("/uploads/trip-images/")
    stored = uploads_dir / image_url.split("/uploads/", 1)[1]
    assert stored.exists()

    detail = client.get(f"/api/trips/{trip['id']}", headers=auth_headers).json()
    assert detail["image_url"] == image_url

    assert client.delete(f"/api/trips/{trip['id']}", headers=auth_headers).status_code == 204
    assert not stored.exists()


def test_trip_image_upload_for_foreign_trip(client, auth_headers) -> None:
    trip = client.post("/api/trips", json=trip_payload(), headers=auth_headers).json()
    other = register_and_login(client, "other@example.com")
    r = client.post(
        f"/api/trips/{trip['id']}/image",
        files={"file": ("river.jpg", b"\xff\xd8\xff", "image/jpeg")},
        headers=other,
    )
    assert r.status_code == 404


def test_concurrent_username_claim_is_a_conflict(client, auth_headers) -> None:
    other = register_and_login(client, "other@example.com")
    me = client.get("/users/me", headers=auth_headers).json()
    them = client.get("/users/me", headers=other).json()

    db = SessionLocal()
    try:
        # Unflushed claim of the same username, invisible to the availability check.
        db.get(Profile, them["id"]).username = "riverrat"
        ctx = UserContext(user_id=me["id"], email=me["email"])
        with pytest.raises(HTTPException) as exc_info:
            profile_service.update_profile(db, ctx, ProfileUpdate(username="riverrat"))
        assert exc_info.value.status_code == 409
    finally:
        db.close()

    assert client.get("/users/me/profile", headers=auth_headers).json()["username"] is None
    assert client.get("/users/me/profile", headers=other).json()["username"] is None
