from conftest import API, hotel_payload


def test_create_hotel(client, publisher, auth):
    resp = client.post(f"{API}/hotels", json=hotel_payload(), headers=auth(publisher))

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["name"] == "Harbor Inn"
    assert body["data"]["user_id"] == publisher.id
    assert body["data"]["photo"] == "no-photo.jpg"
    assert body["data"]["average_cost"] is None


def test_second_hotel_for_publisher_is_rejected(client, publisher, auth, create_hotel):
    create_hotel(publisher)

    resp = client.post(f"{API}/hotels", json=hotel_payload(name="Second"), headers=auth(publisher))

    assert resp.status_code == 400
    assert resp.json() == {
        "success": False,
        "error": f"The user with ID:{publisher.id} has already published a hotel",
    }


def test_admin_may_create_several_hotels(admin, create_hotel):
    create_hotel(admin, name="One")
    create_hotel(admin, name="Two")


def test_create_requires_token(client):
    resp = client.post(f"{API}/hotels", json=hotel_payload())

    assert resp.status_code == 401
    assert resp.json()["success"] is False


def test_create_rejects_invalid_token(client):
    resp = client.post(f"{API}/hotels", json=hotel_payload(), headers={"Authorization": "Bearer nope"})

    assert resp.status_code == 401


def test_plain_user_cannot_create_hotel(client, make_user, auth):
    user = make_user("user")

    resp = client.post(f"{API}/hotels", json=hotel_payload(), headers=auth(user))

    assert resp.status_code == 403
    assert "not authorized" in resp.json()["error"]


def test_create_validation_error_is_bad_request(client, publisher, auth):
    resp = client.post(
        f"{API}/hotels",
        json={"name": "x" * 51, "description": "d", "lat": 1, "lng": 1},
        headers=auth(publisher),
    )

    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert "name" in resp.json()["error"]


def test_create_geocodes_address_when_no_coordinates(client, publisher, auth, geocoder):
    geocoder.add("1 Main St, Boston", 42.36, -71.05, zipcode="02108", formatted_address="1 Main St, Boston, MA 02108")

    resp = client.post(
        f"{API}/hotels",
        json={"name": "Main", "description": "Downtown", "address": "1 Main St, Boston"},
        headers=auth(publisher),
    )

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert (data["lat"], data["lng"]) == (42.36, -71.05)
    assert data["zipcode"] == "02108"
    assert data["formatted_address"] == "1 Main St, Boston, MA 02108"


def test_create_with_unknown_address_fails(client, publisher, auth):
    resp = client.post(
        f"{API}/hotels",
        json={"name": "Nowhere", "description": "?", "address": "no such place"},
        headers=auth(publisher),
    )

    assert resp.status_code == 400


def test_duplicate_hotel_name_is_bad_request(admin, client, auth, create_hotel):
    create_hotel(admin, name="Same")

    resp = client.post(f"{API}/hotels", json=hotel_payload(name="Same"), headers=auth(admin))

    assert resp.status_code == 400


def test_get_hotel(client, publisher, create_hotel):
    hotel = create_hotel(publisher)

    resp = client.get(f"{API}/hotels/{hotel['id']}")

    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == hotel["id"]
    assert set(resp.json()) == {"success", "data"}


def test_get_missing_hotel(client):
    resp = client.get(f"{API}/hotels/999")

    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Hotel not found with id of 999"}


def test_owner_updates_hotel(client, publisher, auth, create_hotel):
    hotel = create_hotel(publisher)

    resp = client.put(f"{API}/hotels/{hotel['id']}", json={"description": "Renovated"}, headers=auth(publisher))

    assert resp.status_code == 200
    assert resp.json()["data"]["description"] == "Renovated"
    assert resp.json()["data"]["name"] == hotel["name"]


def test_other_publisher_cannot_update_or_delete(client, publisher, make_user, auth, create_hotel):
    hotel = create_hotel(publisher)
    intruder = make_user("publisher")

    update = client.put(f"{API}/hotels/{hotel['id']}", json={"name": "Mine"}, headers=auth(intruder))
    delete = client.delete(f"{API}/hotels/{hotel['id']}", headers=auth(intruder))

    assert update.status_code == 401
    assert delete.status_code == 401
    assert client.get(f"{API}/hotels/{hotel['id']}").json()["data"]["name"] == hotel["name"]


def test_admin_updates_any_hotel(client, publisher, admin, auth, create_hotel):
    hotel = create_hotel(publisher)

    resp = client.put(f"{API}/hotels/{hotel['id']}", json={"name": "Admin Pick"}, headers=auth(admin))

    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Admin Pick"


def test_update_revalidates_merged_record(client, publisher, auth, create_hotel):
    hotel = create_hotel(publisher)

    resp = client.put(f"{API}/hotels/{hotel['id']}", json={"lat": 123}, headers=auth(publisher))

    assert resp.status_code == 400
    assert resp.json()["errors"].keys() == {"lat"}


def test_clearing_coordinates_geocodes_address(client, publisher, auth, create_hotel, geocoder):
    geocoder.add("1 Main St", 42.36, -71.05, zipcode="02108")
    hotel = create_hotel(publisher)

    resp = client.put(
        f"{API}/hotels/{hotel['id']}",
        json={"address": "1 Main St", "lat": None, "lng": None},
        headers=auth(publisher),
    )

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert (data["lat"], data["lng"]) == (42.36, -71.05)
    assert data["zipcode"] == "02108"
    assert geocoder.calls == ["1 Main St"]


def test_update_missing_hotel(client, publisher, auth):
    resp = client.put(f"{API}/hotels/42", json={"name": "x"}, headers=auth(publisher))

    assert resp.status_code == 404


def test_delete_hotel_removes_rooms_and_reviews(client, publisher, make_user, auth, create_hotel, add_room):
    hotel = create_hotel(publisher)
    room = add_room(publisher, hotel["id"])
    reviewer = make_user("user")
    review = client.post(
        f"{API}/hotels/{hotel['id']}/reviews",
        json={"title": "Nice", "text": "Would stay again", "rating": 8},
        headers=auth(reviewer),
    ).json()["data"]

    resp = client.delete(f"{API}/hotels/{hotel['id']}", headers=auth(publisher))

    assert resp.status_code == 200
    assert resp.json()["data"] == {}
    assert client.get(f"{API}/hotels/{hotel['id']}").status_code == 404
    assert client.get(f"{API}/rooms/{room['id']}").status_code == 404
    assert client.get(f"{API}/reviews/{review['id']}").status_code == 404


def test_owner_can_publish_again_after_delete(client, publisher, auth, create_hotel):
    hotel = create_hotel(publisher)
    client.delete(f"{API}/hotels/{hotel['id']}", headers=auth(publisher))

    create_hotel(publisher, name="Fresh Start")


def test_health_check(client):
    resp = client.get("/check-api-status")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
