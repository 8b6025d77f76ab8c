import json
import os
from datetime import date, timedelta

# Must be set before sportbook.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sportbook.database import get_db
from sportbook.main import app
from sportbook.models.generated import Base
from sportbook.redis_client import get_redis
from tests.fakes import FakeRedis


WEEKDAY_AVAILABILITY = [
    {"day_of_week": d, "time_slots": [{"start": "08:00", "end": "10:30"}]}
    for d in range(7)
]

PRICING = [
    {"day_type": "weekday", "time_slot": {"start": "08:00", "end": "09:00"}, "price_per_hour": 100000},
    {"day_type": "weekday", "time_slot": {"start": "09:00", "end": "11:00"}, "price_per_hour": 80000},
    {"day_type": "weekend", "time_slot": {"start": "08:00", "end": "11:00"}, "price_per_hour": 120000},
]


def next_date(day_of_week: int, weeks_ahead: int = 1) -> date:
    """A future date with the given weekday (0 = Sunday)."""
    today = date.today()
    delta = (day_of_week - today.isoweekday() % 7) % 7
    return today + timedelta(days=delta + 7 * weeks_ahead)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_fk(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_redis(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr("sportbook.services.events.redis_client", fake)
    return fake


@pytest.fixture
def client(engine, fake_redis):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = lambda: fake_redis
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(client):
    resp = client.post("/users/", json={"full_name": "Nguyen Van A", "email": "a@example.com"})
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def venue(client):
    resp = client.post("/venues/", json={"name": "Riverside Sports", "city": "Hanoi"})
    assert resp.status_code == 201
    venue = resp.json()
    resp = client.post(f"/admin/venues/{venue['id']}/approve")
    assert resp.status_code == 200
    return resp.json()


@pytest.fixture
def court(client, venue):
    resp = client.post("/courts/", json={
        "venue_id": venue["id"],
        "name": "Court 1",
        "sport_type": "badminton",
        "default_availability": WEEKDAY_AVAILABILITY,
        "pricing": PRICING,
    })
    assert resp.status_code == 201
    return resp.json()


def events(fake_redis) -> list[dict]:
    return [json.loads(e) for e in fake_redis.lists.get("events:p2p", [])]
