import itertools

import pytest
from fastapi.testclient import TestClient

from config import Config
from hotel_api.api.users.models import User
from hotel_api.main import create_app
from hotel_api.utils.authorization import generate_token
from hotel_api.utils.geocoder import GeocodeResult

API = "/api/v1"

BOSTON = (42.3398, -71.0892)


class FakeGeocoder:
    """In-memory geocoder; unknown queries return no results."""

    def __init__(self):
        self.locations = {}
        self.calls = []

    def add(self, query, lat, lng, zipcode=None, formatted_address=None):
        self.locations[query] = [GeocodeResult(
            latitude=lat,
            longitude=lng,
            zipcode=zipcode,
            formatted_address=formatted_address or query,
        )]

    def geocode(self, query):
        self.calls.append(query)
        return list(self.locations.get(query, []))


@pytest.fixture
def config(tmp_path):
    class TestConfig(Config):
        LOG_LEVEL = "WARNING"
        DATABASE_URL = "sqlite://"
        JWT_SECRET = "test-secret"
        FILE_UPLOAD_PATH = str(tmp_path / "uploads")
        MAX_FILE_UPLOAD = 1024

    return TestConfig


@pytest.fixture
def geocoder():
    fake = FakeGeocoder()
    fake.add("02118", *BOSTON, zipcode="02118")
    return fake


@pytest.fixture
def app(config, geocoder):
    return create_app(config, geocoder=geocoder)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(app, client):
    counter = itertools.count(1)

    def _make(role="publisher"):
        n = next(counter)
        session = app.state.database.session()
        try:
            user = User(name=f"{role} {n}", email=f"{role}{n}@example.com", role=role)
            user.save(session)
            return user
        finally:
            session.close()

    return _make


@pytest.fixture
def auth(config):
    def _auth(user):
        return {"Authorization": f"Bearer {generate_token(config, user.id, user.role)}"}

    return _auth


@pytest.fixture
def publisher(make_user):
    return make_user("publisher")


@pytest.fixture
def admin(make_user):
    return make_user("admin")


def hotel_payload(name="Harbor Inn", lat=BOSTON[0], lng=BOSTON[1], **extra):
    payload = {"name": name, "description": "A quiet place by the water", "lat": lat, "lng": lng}
    payload.update(extra)
    return payload


def room_payload(cost=100, **extra):
    payload = {
        "title": "Sea view",
        "description": "Second floor, balcony",
        "cost": cost,
        "room_type": ["Double"],
        "minimum_occupancy": 2,
    }
    payload.update(extra)
    return payload


@pytest.fixture
def create_hotel(client, auth):
    def _create(user, **kwargs):
        resp = client.post(f"{API}/hotels", json=hotel_payload(**kwargs), headers=auth(user))
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create


@pytest.fixture
def add_room(client, auth):
    def _add(user, hotel_id, **kwargs):
        resp = client.post(f"{API}/hotels/{hotel_id}/rooms", json=room_payload(**kwargs), headers=auth(user))
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _add
