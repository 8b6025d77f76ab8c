from tests.conftest import next_date


def test_email_is_normalized(client):
    resp = client.post("/users/", json={"full_name": "Tran B", "email": "  B@Example.COM "})

    assert resp.status_code == 201
    assert resp.json()["email"] == "b@example.com"
    assert resp.json()["role"] == "customer"
    assert resp.json()["reward_points"] == 0


def test_update_and_soft_delete_user(client, user):
    resp = client.patch(f"/users/{user['id']}", json={"phone": "0901234567"})
    assert resp.json()["phone"] == "0901234567"

    assert client.delete(f"/users/{user['id']}").status_code == 204

    assert client.get(f"/users/{user['id']}").json()["is_active"] is False
    assert client.get("/users/").json() == []


def test_unknown_user(client):
    assert client.get("/users/999").status_code == 404
    assert client.patch("/users/999", json={}).status_code == 404


def test_venue_list_filters_by_city(client, venue):
    other = client.post("/venues/", json={"name": "Saigon Arena", "city": "HCMC"}).json()
    client.post(f"/admin/venues/{other['id']}/approve")

    assert len(client.get("/venues/").json()) == 2
    assert [v["name"] for v in client.get("/venues/", params={"city": "HCMC"}).json()] == ["Saigon Arena"]


def test_delete_venue_hides_it_and_drops_court_cache(client, venue, court, fake_redis):
    client.get(f"/courts/{court['id']}/slots", params={"date": next_date(1).isoformat()})
    assert fake_redis.store

    assert client.delete(f"/venues/{venue['id']}").status_code == 204

    assert client.get("/venues/").json() == []
    assert client.get(f"/venues/{venue['id']}").json()["is_active"] is False
    assert not fake_redis.store


def test_unknown_venue(client):
    assert client.get("/venues/999").status_code == 404
    assert client.get("/venues/999/courts").status_code == 404


def test_create_venue_with_unknown_owner_is_404(client):
    resp = client.post("/venues/", json={"name": "Ghost Hall", "city": "Hanoi", "owner_id": 9999})

    assert resp.status_code == 404


def test_create_venue_with_owner(client, user):
    resp = client.post("/venues/", json={"name": "Owner Hall", "city": "Hanoi", "owner_id": user["id"]})

    assert resp.status_code == 201
    assert resp.json()["owner_id"] == user["id"]


def test_deactivating_venue_drops_court_cache(client, venue, court, fake_redis):
    client.get(f"/courts/{court['id']}/slots", params={"date": next_date(1).isoformat()})
    assert fake_redis.store

    resp = client.patch(f"/venues/{venue['id']}", json={"is_active": False})

    assert resp.status_code == 200
    assert not fake_redis.store
