from __future__ import annotations

from catch_chronicles.database import SessionLocal
from catch_chronicles.models.fish_catch import FishCatch
from catch_chronicles.models.fishing_trip import FishingTrip
from conftest import register_and_login, trip_payload


def _create_trip(client, headers, **overrides) -> dict:
    r = client.post("/api/trips", json=trip_payload(**overrides), headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_trip_with_catches(client, auth_headers) -> None:
    trip = _create_trip(client, auth_headers)
    assert trip["location"] == "Gaula"
    assert trip["time_of_day"] == "Morning"
    assert trip["catch_count"] == 2
    assert len(trip["fish_catches"]) == 2

    trout = trip["fish_catches"][0]
    assert trout["fish_type"] == "Brown Trout"
    assert trout["condition"] == "Very Healthy"
    assert trout["condition_factor"] == 1.1111

    grayling = trip["fish_catches"][1]
    assert grayling["condition"] is None
    assert grayling["condition_factor"] is None


def test_create_trip_drops_empty_catch_rows(client, auth_headers) -> None:
    trip = _create_trip(
        client,
        auth_headers,
        fish_catches=[{"fish_type": "", "caught_on": ""}, {"fish_type": "Grayling", "caught_on": "Nymph"}],
    )
    assert trip["catch_count"] == 1
    assert [c["fish_type"] for c in trip["fish_catches"]] == ["Grayling"]


def test_create_trip_rejects_missing_required_fields(client, auth_headers) -> None:
    for field in ("date", "location", "weather", "time_of_day"):
        r = client.post("/api/trips", json=trip_payload(**{field: ""}), headers=auth_headers)
        assert r.status_code == 422, field

    blank = client.post("/api/trips", json=trip_payload(location="   "), headers=auth_headers)
    assert blank.status_code == 422

    unknown = client.post("/api/trips", json=trip_payload(time_of_day="Dawn"), headers=auth_headers)
    assert unknown.status_code == 422


def test_list_trips_sort_and_filter(client, auth_headers) -> None:
    _create_trip(client, auth_headers, date="2024-05-01", location="Orkla")
    _create_trip(client, auth_headers, date="2024-07-01", location="Gaula")
    _create_trip(client, auth_headers, date="2024-06-01", location="Stjørdalselva")

    default = client.get("/api/trips", headers=auth_headers).json()
    assert [t["date"] for t in default] == ["2024-07-01", "2024-06-01", "2024-05-01"]

    by_location = client.get("/api/trips", params={"sort_by": "location", "order": "asc"}, headers=auth_headers).json()
    assert [t["location"] for t in by_location] == ["Gaula", "Orkla", "Stjørdalselva"]

    filtered = client.get("/api/trips", params={"location": "ORK"}, headers=auth_headers).json()
    assert [t["location"] for t in filtered] == ["Orkla"]

    bad_sort = client.get("/api/trips", params={"sort_by": "weather"}, headers=auth_headers)
    assert bad_sort.status_code == 422


def test_trips_are_scoped_to_their_owner(client, auth_headers) -> None:
    trip = _create_trip(client, auth_headers)
    other = register_and_login(client, "other@example.com")

    assert client.get("/api/trips", headers=other).json() == []
    assert client.get(f"/api/trips/{trip['id']}", headers=other).status_code == 404
    assert client.put(f"/api/trips/{trip['id']}", json=trip_payload(), headers=other).status_code == 404
    assert client.delete(f"/api/trips/{trip['id']}", headers=other).status_code == 404
    assert client.get(f"/api/trips/{trip['id']}", headers=auth_headers).status_code == 200


def test_update_trip_upserts_and_removes_catches(client, auth_headers) -> None:
    trip = _create_trip(client, auth_headers)
    trout, grayling = trip["fish_catches"]

    payload = trip_payload(
        location="Gaula, Støren",
        weather="Rain",
        water_temperature=11.5,
        fish_catches=[
            {"id": trout["id"], "fish_type": "Brown Trout", "caught_on": "Klinkhammer", "length": 31, "weight": 320},
            {"fish_type": "Salmon", "caught_on": "Sunray Shadow", "length": 80, "weight": 5200},
        ],
    )
    r = client.put(f"/api/trips/{trip['id']}", json=payload, headers=auth_headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["location"] == "Gaula, Støren"
    assert body["weather"] == "Rain"
    assert body["water_temperature"] == 11.5
    assert body["catch_count"] == 2
    assert [c["fish_type"] for c in body["fish_catches"]] == ["Brown Trout", "Salmon"]
    assert body["fish_catches"][0]["id"] == trout["id"]
    assert body["fish_catches"][0]["length"] == 31

    with SessionLocal() as db:
        assert db.query(FishCatch).filter(FishCatch.id == grayling["id"]).first() is None


def test_update_without_catch_list_keeps_catches(client, auth_headers) -> None:
    trip = _create_trip(client, auth_headers)
    payload = trip_payload(notes="Edited")
    payload.pop("fish_catches")
    r = client.put(f"/api/trips/{trip['id']}", json=payload, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["notes"] == "Edited"
    assert r.json()["catch_count"] == 2


def test_failed_update_leaves_trip_unchanged(client, auth_headers) -> None:
    trip = _create_trip(client, auth_headers)
    trout = trip["fish_catches"][0]

    # The second catch id is unknown, so the whole edit must be rolled back.
    payload = trip_payload(
        location="Somewhere Else",
        fish_catches=[
            {"id": trout["id"], "fish_type": "Changed", "caught_on": "Changed"},
            {"id": 999999, "fish_type": "Ghost", "caught_on": "Ghost"},
        ],
    )
    r = client.put(f"/api/trips/{trip['id']}", json=payload, headers=auth_headers)
    assert r.status_code == 404

    after = client.get(f"/api/trips/{trip['id']}", headers=auth_headers).json()
    assert after["location"] == "Gaula"
    assert after["catch_count"] == 2
    assert [c["fish_type"] for c in after["fish_catches"]] == ["Brown Trout", "Grayling"]


def test_delete_trip_cascades_to_catches(client, auth_headers) -> None:
    trip = _create_trip(client, auth_headers)

    r = client.delete(f"/api/trips/{trip['id']}", headers=auth_headers)
    assert r.status_code == 204

    assert client.get(f"/api/trips/{trip['id']}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/trips/{trip['id']}/catches", headers=auth_headers).status_code == 404
    with SessionLocal() as db:
        assert db.query(FishingTrip).filter(FishingTrip.id == trip["id"]).first() is None
        assert db.query(FishCatch).filter(FishCatch.trip_id == trip["id"]).count() == 0
