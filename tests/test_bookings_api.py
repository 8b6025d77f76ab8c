from datetime import date, timedelta

from tests.conftest import events, next_date


def book(client, user, court, day, start="08:00", end="10:00"):
    return client.post("/bookings/", json={
        "user_id": user["id"],
        "court_id": court["id"],
        "date": day.isoformat(),
        "start_time": start,
        "end_time": end,
    })


def test_create_booking_sums_slot_prices(client, user, court, fake_redis):
    resp = book(client, user, court, next_date(1))

    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "pending"
    assert body["total_price"] == 180000
    assert body["discount"] == 0
    assert body["final_price"] == 180000
    assert body["venue_id"] == court["venue_id"]

    assert events(fake_redis)[-1]["type"] == "booking_created"
    assert events(fake_redis)[-1]["booking_id"] == body["id"]


def test_booked_slot_is_marked_unavailable(client, user, court):
    monday = next_date(1)
    book(client, user, court, monday, "08:00", "09:00")

    slots = client.get(f"/courts/{court['id']}/slots", params={"date": monday.isoformat()}).json()["slots"]

    assert [s["is_available"] for s in slots] == [False, True]


def test_overlapping_booking_conflicts(client, user, court):
    monday = next_date(1)
    assert book(client, user, court, monday, "08:00", "10:00").status_code == 201

    resp = book(client, user, court, monday, "09:00", "10:00")

    assert resp.status_code == 409


def test_cancelled_booking_frees_the_slot(client, user, court):
    monday = next_date(1)
    first = book(client, user, court, monday).json()
    client.post(f"/bookings/{first['id']}/cancel", json={"reason": "rain"})

    assert book(client, user, court, monday).status_code == 201


def test_range_not_covered_by_slots(client, user, court):
    # Court closes at 10:30; 10:00-11:00 is not a full slot
    resp = book(client, user, court, next_date(1), "09:00", "11:00")

    assert resp.status_code == 400
    assert "not available" in resp.json()["detail"]


def test_range_must_align_with_slots(client, user, court):
    resp = book(client, user, court, next_date(1), "08:30", "09:30")
    assert resp.status_code == 400


def test_unpriced_slot_is_not_bookable(client, user, court):
    client.patch(f"/courts/{court['id']}", json={"pricing": [
        {"day_type": "weekday", "time_slot": {"start": "08:00", "end": "09:00"}, "price_per_hour": 100000},
    ]})

    resp = book(client, user, court, next_date(1), "08:00", "10:00")

    assert resp.status_code == 400
    assert "pricing" in resp.json()["detail"]


def test_malformed_time_is_400(client, user, court):
    assert book(client, user, court, next_date(1), "8", "10:00").status_code == 400


def test_end_before_start_is_400(client, user, court):
    assert book(client, user, court, next_date(1), "10:00", "08:00").status_code == 400


def test_past_date_is_400(client, user, court):
    assert book(client, user, court, date.today() - timedelta(days=1)).status_code == 400


def test_unapproved_venue_is_not_bookable(client, user):
    venue = client.post("/venues/", json={"name": "New Place", "city": "Hue"}).json()
    court = client.post("/courts/", json={
        "venue_id": venue["id"],
        "name": "A",
        "sport_type": "football",
    }).json()

    assert book(client, user, court, next_date(1)).status_code == 404


def test_banned_user_cannot_book(client, user, court):
    client.post(f"/admin/users/{user['id']}/ban", json={"reason": "no-shows"})
    assert book(client, user, court, next_date(1)).status_code == 403


def test_status_flow_awards_points(client, user, court, fake_redis):
    booking = book(client, user, court, next_date(1)).json()

    assert client.post(f"/bookings/{booking['id']}/confirm").json()["status"] == "confirmed"
    resp = client.post(f"/bookings/{booking['id']}/complete")

    assert resp.status_code == 200
    assert resp.json()["status"] == "completed"
    assert resp.json()["points_earned"] == 180

    loyalty = client.get(f"/loyalty/{user['id']}").json()
    assert loyalty["reward_points"] == 180
    assert loyalty["total_spent"] == 180000
    assert [e["type"] for e in events(fake_redis)][-1] == "booking_completed"


def test_cannot_complete_pending_booking(client, user, court):
    booking = book(client, user, court, next_date(1)).json()
    assert client.post(f"/bookings/{booking['id']}/complete").status_code == 400


def test_cannot_cancel_completed_booking(client, user, court):
    booking = book(client, user, court, next_date(1)).json()
    client.post(f"/bookings/{booking['id']}/confirm")
    client.post(f"/bookings/{booking['id']}/complete")

    assert client.post(f"/bookings/{booking['id']}/cancel").status_code == 400


def test_cancel_without_body(client, user, court):
    booking = book(client, user, court, next_date(1)).json()

    resp = client.post(f"/bookings/{booking['id']}/cancel")

    assert resp.status_code == 200
    assert resp.json()["status"] == "cancelled"
    assert resp.json()["cancel_reason"] is None


def test_list_bookings_filters(client, user, court):
    b1 = book(client, user, court, next_date(1)).json()
    book(client, user, court, next_date(2))
    client.post(f"/bookings/{b1['id']}/cancel")

    assert len(client.get("/bookings/", params={"user_id": user["id"]}).json()) == 2
    cancelled = client.get("/bookings/", params={"status": "cancelled"}).json()
    assert [b["id"] for b in cancelled] == [b1["id"]]


def test_patch_and_delete_not_allowed(client, user, court):
    booking = book(client, user, court, next_date(1)).json()

    assert client.patch(f"/bookings/{booking['id']}", json={}).status_code == 405
    assert client.delete(f"/bookings/{booking['id']}").status_code == 405


def test_unknown_booking(client):
    assert client.get("/bookings/999").status_code == 404


FLAT_WEEKDAY_PRICE = [
    {"day_type": "weekday", "time_slot": {"start": "00:00", "end": "24:00"}, "price_per_hour": 50000},
]


def set_monday_blocks(client, court, *blocks):
    resp = client.patch(f"/courts/{court['id']}", json={
        "default_availability": [{
            "day_of_week": 1,
            "time_slots": [{"start": s, "end": e} for s, e in blocks],
        }],
        "pricing": FLAT_WEEKDAY_PRICE,
    })
    assert resp.status_code == 200


def test_booking_spans_blocks_listed_out_of_order(client, user, court):
    set_monday_blocks(client, court, ("10:00", "12:00"), ("08:00", "10:00"))

    resp = book(client, user, court, next_date(1), "08:00", "12:00")

    assert resp.status_code == 201
    assert resp.json()["total_price"] == 200000


def test_booking_spans_overlapping_blocks_once(client, user, court):
    set_monday_blocks(client, court, ("08:00", "10:00"), ("09:00", "11:00"))

    resp = book(client, user, court, next_date(1), "08:00", "11:00")

    assert resp.status_code == 201
    assert resp.json()["total_price"] == 150000


def test_date_beyond_horizon_is_400(client, user, court):
    resp = book(client, user, court, date.today() + timedelta(days=61))

    assert resp.status_code == 400
    assert "days ahead" in resp.json()["detail"]
