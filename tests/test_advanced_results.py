import pytest

from conftest import API
from hotel_api.utils.pagination import get_pagination_metadata


@pytest.fixture
def hotels(admin, create_hotel, add_room):
    created = []
    for name, lat, cost in [("Alpha", 40.0, 50), ("Bravo", 41.0, 150), ("Charlie", 42.0, 250), ("Delta", 43.0, 350)]:
        hotel = create_hotel(admin, name=name, lat=lat, lng=-71.0)
        add_room(admin, hotel["id"], cost=cost)
        created.append(hotel)
    return created


def test_default_listing_embeds_rooms(client, hotels):
    body = client.get(f"{API}/hotels").json()

    assert body["success"] is True
    assert body["count"] == 4
    # newest first by default
    assert [h["name"] for h in body["data"]] == ["Delta", "Charlie", "Bravo", "Alpha"]
    assert len(body["data"][0]["rooms"]) == 1
    assert body["pagination"]["total"] == 4
    assert body["pagination"]["has_next"] is False


def test_select_fields(client, hotels):
    body = client.get(f"{API}/hotels", params={"select": "name,average_cost"}).json()

    assert all(set(h) == {"id", "name", "average_cost"} for h in body["data"])


def test_sort_by_field(client, hotels):
    asc = client.get(f"{API}/hotels", params={"sort": "average_cost"}).json()
    desc = client.get(f"{API}/hotels", params={"sort": "-name"}).json()

    assert [h["average_cost"] for h in asc["data"]] == [50, 150, 250, 350]
    assert [h["name"] for h in desc["data"]] == ["Delta", "Charlie", "Bravo", "Alpha"]


def test_filter_operators(client, hotels):
    lte = client.get(f"{API}/hotels", params={"average_cost[lte]": 150, "sort": "name"}).json()
    gt = client.get(f"{API}/hotels", params={"lat[gt]": 41.5, "sort": "name"}).json()
    in_ = client.get(f"{API}/hotels", params={"name[in]": "Alpha,Delta", "sort": "name"}).json()
    eq = client.get(f"{API}/hotels", params={"name": "Bravo"}).json()

    assert [h["name"] for h in lte["data"]] == ["Alpha", "Bravo"]
    assert [h["name"] for h in gt["data"]] == ["Charlie", "Delta"]
    assert [h["name"] for h in in_["data"]] == ["Alpha", "Delta"]
    assert [h["name"] for h in eq["data"]] == ["Bravo"]


def test_unknown_fields_and_operators_are_ignored(client, hotels):
    body = client.get(f"{API}/hotels", params={"colour": "red", "lat[near]": 1}).json()

    assert body["count"] == 4


def test_bad_filter_value(client, hotels):
    resp = client.get(f"{API}/hotels", params={"average_cost[gte]": "cheap"})

    assert resp.status_code == 400


def test_search(client, hotels):
    body = client.get(f"{API}/hotels", params={"search": "arl"}).json()

    assert [h["name"] for h in body["data"]] == ["Charlie"]


def test_pagination(client, hotels):
    first = client.get(f"{API}/hotels", params={"limit": 3, "sort": "name"}).json()
    second = client.get(f"{API}/hotels", params={"limit": 3, "page": 2, "sort": "name"}).json()

    assert [h["name"] for h in first["data"]] == ["Alpha", "Bravo", "Charlie"]
    assert first["pagination"]["next"] == {"page": 2, "limit": 3}
    assert "prev" not in first["pagination"]
    assert [h["name"] for h in second["data"]] == ["Delta"]
    assert second["count"] == 1
    assert second["pagination"]["prev"] == {"page": 1, "limit": 3}
    assert "next" not in second["pagination"]


def test_invalid_page(client):
    assert client.get(f"{API}/hotels", params={"page": 0}).status_code == 400
    assert client.get(f"{API}/hotels", params={"limit": "ten"}).status_code == 400


def test_pagination_metadata():
    meta = get_pagination_metadata(total=45, skip=20, limit=20)

    assert meta["page"] == 2
    assert meta["pages"] == 3
    assert meta["has_next"] and meta["has_prev"]
    assert meta["next"] == {"page": 3, "limit": 20}
    assert meta["prev"] == {"page": 1, "limit": 20}
