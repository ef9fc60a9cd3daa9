# tests/conftest.py - In-memory SQLite app and sessions for every test
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "test-admin-pass"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["NOTIFICATION_DELAY_SECONDS"] = "0"
os.environ["CANCELLATION_WINDOW_MINUTES"] = "30"
os.environ.pop("ADMIN_PASSWORD_HASH", None)
os.environ.pop("FIREBASE_SERVICE_ACCOUNT", None)
os.environ.pop("VERCEL", None)
os.environ.pop("VERCEL_ENV", None)

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from config import Base, engine, SessionLocal
from api.index import app
from services.booking_service import BookingService

ADMIN_PASSWORD = "test-admin-pass"
T0 = datetime(2024, 3, 1, 9, 0, 0)


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers(client):
    response = client.post("/admin/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def booking_payload(**overrides):
    payload = {
        "name": "Rina Wijaya",
        "phone": "081234567890",
        "address": "Jl. Kemang Raya No. 10, Jakarta Selatan",
        "service": "mandi-biasa",
        "date": "2024-03-02",
        "time": "10:00",
        "notes": "Two cats, one is shy",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_booking(db):
    async def _make(now=T0, **overrides):
        return await BookingService.create_booking(db, booking_payload(**overrides), now=now)
    return _make
