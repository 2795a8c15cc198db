from datetime import date, time
from typing import Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from flight_dispatch import crud
from flight_dispatch.core.config import Settings
from flight_dispatch.core.security import create_access_token
from flight_dispatch.db.session import Storage
from flight_dispatch.models.job import Job
from flight_dispatch.schemas.driver import DriverCreate
from flight_dispatch.services.clients.aviationstack import AviationStackClient
from flight_dispatch.services.flight_status import FlightStatusFetcher

from main import create_app

TEST_API_KEY = "astack_test"


@pytest.fixture
def test_settings():
    return Settings(
        DATABASE_URL="sqlite://",
        ENABLE_SCHEDULER=False,
        ENABLE_REDIS=False,
        SEED_DEFAULT_DATA=False,
        AVIATIONSTACK_API_KEY=None,
        JWT_SECRET="test-secret",
    )


@pytest.fixture
def storage(test_settings):
    storage = Storage.from_settings(test_settings)
    storage.initialize_schema()
    yield storage
    storage.dispose()


@pytest.fixture
def db(storage):
    with storage.session() as session:
        yield session


@pytest.fixture
def client(test_settings):
    app = create_app(test_settings)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def client_db(client):
    with client.app.state.storage.session() as session:
        yield session


def make_driver(db, name="Dana Driver", email="dana@example.com", password="secret123", phone="5550100"):
    return crud.driver.create(db, obj_in=DriverCreate(name=name, email=email, password=password, phone=phone))


def make_job(
    db,
    *,
    flight_number="AA200",
    pickup_date: Optional[date] = None,
    driver_id=None,
    **fields,
):
    job = Job(
        pickup_date=pickup_date or date.today(),
        pickup_time=fields.pop("pickup_time", time(9, 30)),
        flight_number=flight_number,
        pickup_location=fields.pop("pickup_location", "Airport Terminal 1"),
        dropoff_location=fields.pop("dropoff_location", "Downtown Hotel"),
        driver_id=driver_id,
        **fields,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def auth_headers(settings: Settings, driver) -> dict:
    token = create_access_token(settings, driver_id=driver.id, email=driver.email, name=driver.name)
    return {"Authorization": f"Bearer {token}"}


def stub_fetcher(handler, api_key=TEST_API_KEY) -> FlightStatusFetcher:
    """A fetcher whose provider calls are answered by ``handler(request)``."""
    client = AviationStackClient(
        api_key=api_key,
        base_url="http://aviationstack.test/v1/",
        transport=httpx.MockTransport(handler),
    )
    return FlightStatusFetcher(client)
