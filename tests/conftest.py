"""
Pytest configuration and fixtures for the Super Farmer tests.

The app runs against a throwaway SQLite file, a fakeredis-backed cache and a
mocked RabbitMQ publisher.
"""

import os
import shutil
import tempfile
import uuid
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing the app
_TMP_DIR = tempfile.mkdtemp(prefix="superfarmer_test_")
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/test.db"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_EMAIL"] = "admin@superfarmer.test"
os.environ["ADMIN_PASSWORD"] = "admin-password"
os.environ["REPORTS_DIR"] = os.path.join(_TMP_DIR, "reports")

import fakeredis  # noqa: E402

from superfarmer.core.cache import Cache, get_cache  # noqa: E402
from superfarmer.core.messaging import Publisher, get_publisher  # noqa: E402
from superfarmer.main import app  # noqa: E402

API = "/api/v1"
ADMIN_EMAIL = os.environ["ADMIN_EMAIL"]
ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]


def unique(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


@pytest.fixture(scope="session")
def fake_cache():
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    return Cache(client, prefix="test")


@pytest.fixture(scope="session")
def publisher():
    return AsyncMock(spec=Publisher)


@pytest.fixture(scope="session")
def client(fake_cache, publisher):
    """A TestClient whose lifespan (table creation + seeding) runs once per session."""
    app.dependency_overrides[get_cache] = lambda: fake_cache
    app.dependency_overrides[get_publisher] = lambda: publisher
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    shutil.rmtree(_TMP_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def _reset_publisher(publisher):
    publisher.reset_mock()


def login(client, email: str, password: str) -> dict:
    response = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


@pytest.fixture(scope="session")
def admin_headers(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def farmer(client):
    """A freshly registered farmer: (user json, auth headers)."""
    email = f"{unique('farmer')}@superfarmer.test"
    response = client.post(
        f"{API}/users",
        json={"name": "Budi Farmer", "email": email, "password": "secret123"},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"], login(client, email, "secret123")


@pytest.fixture
def farmer_headers(farmer):
    return farmer[1]


@pytest.fixture
def city(client, admin_headers):
    province = client.post(
        f"{API}/provinces", json={"name": unique("Province")}, headers=admin_headers
    ).json()["data"]
    response = client.post(
        f"{API}/cities",
        json={"provinceId": province["id"], "name": unique("City")},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def commodity(client, admin_headers):
    response = client.post(
        f"{API}/commodities",
        json={"name": unique("Rice"), "code": unique("RC"), "description": "Paddy rice"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def land(client, farmer_headers, city):
    response = client.post(
        f"{API}/lands",
        json={"cityId": city["id"], "landArea": 10.0, "certificate": unique("CERT")},
        headers=farmer_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def land_commodity(client, farmer_headers, land, commodity):
    response = client.post(
        f"{API}/land_commodities",
        json={"landId": land["id"], "commodityId": commodity["id"], "landArea": 4.0},
        headers=farmer_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.fixture
def price(client, admin_headers, commodity, city):
    response = client.post(
        f"{API}/prices",
        json={"commodityId": commodity["id"], "cityId": city["id"], "price": 12000},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]
