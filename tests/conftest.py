from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient


_UPLOADS_DIR = Path(tempfile.gettempdir()) / "catch-chronicles-test-uploads"


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ["DB_URL"] = "sqlite:///./test.db"
    os.environ["UPLOADS_DIR"] = str(_UPLOADS_DIR)
    os.environ["JWT_SECRET"] = "test-secret"

    # Ensure local .env cannot leak into tests.
    os.environ["ENVIRONMENT"] = "test"


def reset_database() -> None:
    from catch_chronicles.database import Base, engine
    import catch_chronicles.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture()
def uploads_dir() -> Path:
    return _UPLOADS_DIR


@pytest.fixture()
def client() -> Any:
    from catch_chronicles.main import create_app

    reset_database()
    shutil.rmtree(_UPLOADS_DIR, ignore_errors=True)

    app = create_app()
    with TestClient(app) as c:
        yield c


def register_and_login(client, email: str, password: str = "SecretPass123", full_name: str | None = None) -> dict[str, str]:
    payload = {"email": email, "password": password}
    if full_name is not None:
        payload["full_name"] = full_name
    r = client.post("/auth/register", json=payload)
    assert r.status_code == 201, r.text
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture()
def auth_headers(client) -> dict[str, str]:
    return register_and_login(client, "angler@example.com", full_name="Ada Angler")


def trip_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "date": "2024-06-01",
        "time_of_day": "Morning",
        "location": "Gaula",
        "weather": "Overcast",
        "notes": "Low water",
        "fish_catches": [
            {"fish_type": "Brown Trout", "caught_on": "Klinkhammer", "length": 30, "weight": 300},
            {"fish_type": "Grayling", "caught_on": "Nymph", "length": 35, "weight": 400},
        ],
    }
    payload.update(overrides)
    return payload
