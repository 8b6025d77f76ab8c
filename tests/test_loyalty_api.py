from tests.conftest import next_date
from tests.test_bookings_api import book


def give_points(db, user_id, points):
    from sportbook.models.generated import Users

    user = db.get(Users, user_id)
    user.reward_points = points
    db.commit()


def test_tiers_table(client):
    body = client.get("/loyalty/tiers").json()

    assert list(body) == ["Bronze", "Silver", "Gold", "Diamond"]
    assert body["Gold"]["discount"] == 10


def test_loyalty_info_for_new_user(client, user):
    body = client.get(f"/loyalty/{user['id']}").json()

    assert body["current_tier"] == "Bronze"
    assert body["reward_points"] == 0
    assert body["next_tier"] == "Silver"
    assert body["spend_to_next_tier"] == 1_000_000


def test_loyalty_unknown_user(client):
    assert client.get("/loyalty/999").status_code == 404


def test_use_points_on_booking(client, db, user, court):
    give_points(db, user["id"], 300)
    booking = book(client, user, court, next_date(1)).json()

    resp = client.post(f"/loyalty/{user['id']}/use-points", json={
        "points": 200,
        "booking_id": booking["id"],
    })

    assert resp.status_code == 200
    body = resp.json()
    assert body["discount_amount"] == 20000
    assert body["remaining_points"] == 100
    assert body["booking_final_price"] == 160000

    updated = client.get(f"/bookings/{booking['id']}").json()
    assert updated["points_used"] == 200
    assert updated["final_price"] == 160000


def test_use_points_insufficient_balance(client, user):
    resp = client.post(f"/loyalty/{user['id']}/use-points", json={"points": 10})
    assert resp.status_code == 400


def test_use_points_requires_positive_amount(client, user):
    resp = client.post(f"/loyalty/{user['id']}/use-points", json={"points": 0})
    assert resp.status_code == 422


def test_use_points_on_someone_elses_booking(client, db, user, court):
    other = client.post("/users/", json={"full_name": "B", "email": "b@example.com"}).json()
    give_points(db, other["id"], 100)
    booking = book(client, user, court, next_date(1)).json()

    resp = client.post(f"/loyalty/{other['id']}/use-points", json={
        "points": 50,
        "booking_id": booking["id"],
    })

    assert resp.status_code == 404


def test_final_price_never_negative(client, db, user, court):
    give_points(db, user["id"], 5000)
    booking = book(client, user, court, next_date(1), "08:00", "09:00").json()

    body = client.post(f"/loyalty/{user['id']}/use-points", json={
        "points": 2000,
        "booking_id": booking["id"],
    }).json()

    assert body["booking_final_price"] == 0


def test_cancel_refunds_points_and_history(client, db, user, court):
    give_points(db, user["id"], 300)
    booking = book(client, user, court, next_date(1)).json()
    client.post(f"/loyalty/{user['id']}/use-points", json={"points": 100, "booking_id": booking["id"]})

    client.post(f"/bookings/{booking['id']}/cancel")

    assert client.get(f"/loyalty/{user['id']}").json()["reward_points"] == 300
    history = client.get(f"/loyalty/{user['id']}/history").json()
    assert sorted((tx["type"], tx["points"]) for tx in history) == [("redeem", -100), ("refund", 100)]


def test_silver_member_gets_tier_discount(client, db, user, court):
    give_points(db, user["id"], 1500)

    body = book(client, user, court, next_date(1)).json()

    assert body["total_price"] == 180000
    assert body["discount"] == 9000
    assert body["final_price"] == 171000
