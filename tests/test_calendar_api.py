from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select, update

from trainer_aide.core.enums import BookingRequestStatus
from trainer_aide.core.seed_data import SOLO_ID, TRAINER_ID
from trainer_aide.models.calendar import BookingRequest

API = "/api/v1"


def _iso(dt: datetime) -> str:
    return dt.isoformat()


async def _service_id(client, name: str) -> str:
    services = (await client.get(f"{API}/services")).json()
    return next(s["id"] for s in services if s["name"] == name)


# --- Services ---


@pytest.mark.asyncio
async def test_list_services(client):
    services = (await client.get(f"{API}/services")).json()
    assert [s["duration"] for s in services] == sorted(s["duration"] for s in services)
    assert {s["type"] for s in services} == {"1-2-1", "duet", "group"}


@pytest.mark.asyncio
async def test_create_service_validates_capacity_and_duration(client):
    body = {"name": "Duet Strength", "duration": 45, "type": "duet", "max_capacity": 2, "credits_required": 1.5}
    r = await client.post(f"{API}/services", json=body)
    assert r.status_code == 201
    assert r.json()["color"] == "#12229D"

    assert (await client.post(f"{API}/services", json={**body, "max_capacity": 3})).status_code == 422
    assert (await client.post(f"{API}/services", json={**body, "duration": 50})).status_code == 422
    assert (await client.post(f"{API}/services", json={**body, "type": "group", "max_capacity": 6})).status_code == 422


@pytest.mark.asyncio
async def test_update_service(client):
    service_id = await _service_id(client, "30min Duet Session")
    r = await client.patch(f"{API}/services/{service_id}", json={"type": "1-2-1"})
    assert r.status_code == 400

    r = await client.patch(f"{API}/services/{service_id}", json={"type": "1-2-1", "max_capacity": 1})
    assert r.status_code == 200
    assert r.json()["type"] == "1-2-1"

    r = await client.patch(f"{API}/services/{service_id}", json={"is_active": False})
    assert r.json()["is_active"] is False
    active = (await client.get(f"{API}/services/active")).json()
    assert service_id not in [s["id"] for s in active]


@pytest.mark.asyncio
async def test_delete_service(client):
    service_id = await _service_id(client, "45min Group Session")
    assert (await client.delete(f"{API}/services/{service_id}")).status_code == 204
    assert (await client.get(f"{API}/services/{service_id}")).status_code == 404


# --- Bookings ---


@pytest.mark.asyncio
async def test_booking_lifecycle(client):
    service_id = await _service_id(client, "60min PT Session")
    when = datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)
    r = await client.post(
        f"{API}/calendar/bookings",
        json={"scheduled_at": _iso(when), "trainer_id": str(TRAINER_ID), "client_name": "Emma Clarke", "service_id": service_id},
    )
    assert r.status_code == 201
    booking = r.json()
    assert booking["status"] == "confirmed"
    assert booking["hold_expiry"] is None

    r = await client.post(f"{API}/calendar/bookings/{booking['id']}/check-in")
    assert r.json()["status"] == "checked-in"
    r = await client.post(f"{API}/calendar/bookings/{booking['id']}/complete")
    assert r.json()["status"] == "completed"

    r = await client.post(f"{API}/calendar/bookings/{booking['id']}/cancel")
    assert r.status_code == 409
    r = await client.post(f"{API}/calendar/bookings/{booking['id']}/complete")
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_late_no_show_and_cancel(client):
    when = datetime(2026, 3, 3, 9, 0, tzinfo=timezone.utc)
    body = {"scheduled_at": _iso(when), "trainer_id": str(TRAINER_ID)}
    booking = (await client.post(f"{API}/calendar/bookings", json=body)).json()

    assert (await client.post(f"{API}/calendar/bookings/{booking['id']}/late")).json()["status"] == "late"
    assert (await client.post(f"{API}/calendar/bookings/{booking['id']}/no-show")).json()["status"] == "no-show"
    assert (await client.post(f"{API}/calendar/bookings/{booking['id']}/cancel")).json()["status"] == "cancelled"
    assert (await client.post(f"{API}/calendar/bookings/{booking['id']}/check-in")).status_code == 409


@pytest.mark.asyncio
async def test_booking_requires_known_trainer_and_service(client):
    when = _iso(datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc))
    r = await client.post(f"{API}/calendar/bookings", json={"scheduled_at": when, "trainer_id": str(uuid.uuid4())})
    assert r.status_code == 404
    r = await client.post(
        f"{API}/calendar/bookings",
        json={"scheduled_at": when, "trainer_id": str(TRAINER_ID), "service_id": str(uuid.uuid4())},
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_soft_hold_gets_default_expiry(client):
    before = datetime.now(timezone.utc)
    r = await client.post(
        f"{API}/calendar/bookings",
        json={"scheduled_at": _iso(before + timedelta(days=2)), "trainer_id": str(TRAINER_ID), "status": "soft-hold"},
    )
    expiry = datetime.fromisoformat(r.json()["hold_expiry"])
    if expiry.tzinfo is None:
        expiry = expiry.replace(tzinfo=timezone.utc)
    assert before + timedelta(hours=23) < expiry < before + timedelta(hours=25)

    r = await client.post(f"{API}/calendar/bookings/{r.json()['id']}/check-in")
    assert r.json()["hold_expiry"] is None


@pytest.mark.asyncio
async def test_expired_soft_holds_are_cancelled_on_list(client):
    now = datetime.now(timezone.utc)
    expired = (
        await client.post(
            f"{API}/calendar/bookings",
            json={
                "scheduled_at": _iso(now + timedelta(days=1)),
                "trainer_id": str(TRAINER_ID),
                "status": "soft-hold",
                "hold_expiry": _iso(now - timedelta(minutes=5)),
            },
        )
    ).json()
    held = (
        await client.post(
            f"{API}/calendar/bookings",
            json={"scheduled_at": _iso(now + timedelta(days=1, hours=2)), "trainer_id": str(TRAINER_ID), "status": "soft-hold"},
        )
    ).json()

    bookings = (await client.get(f"{API}/calendar/bookings", params={"trainer_id": str(TRAINER_ID)})).json()
    statuses = {b["id"]: b["status"] for b in bookings}
    assert statuses == {expired["id"]: "cancelled", held["id"]: "soft-hold"}

    visible = (
        await client.get(f"{API}/calendar/bookings", params={"trainer_id": str(TRAINER_ID), "include_cancelled": False})
    ).json()
    assert [b["id"] for b in visible] == [held["id"]]


@pytest.mark.asyncio
async def test_final_bookings_cannot_be_reopened_by_update(client):
    when = datetime(2026, 3, 2, 11, 0, tzinfo=timezone.utc)
    booking = (await client.post(f"{API}/calendar/bookings", json={"scheduled_at": _iso(when), "trainer_id": str(TRAINER_ID)})).json()
    assert (await client.post(f"{API}/calendar/bookings/{booking['id']}/cancel")).status_code == 200

    r = await client.patch(f"{API}/calendar/bookings/{booking['id']}", json={"status": "confirmed"})
    assert r.status_code == 409
    r = await client.patch(f"{API}/calendar/bookings/{booking['id']}", json={"notes": "Client rebooked for Friday"})
    assert r.status_code == 200
    assert r.json()["status"] == "cancelled"


@pytest.mark.asyncio
async def test_list_bookings_by_date(client):
    for day, hour in ((2, 9), (2, 15), (3, 9)):
        when = datetime(2026, 3, day, hour, 0, tzinfo=timezone.utc)
        await client.post(f"{API}/calendar/bookings", json={"scheduled_at": _iso(when), "trainer_id": str(TRAINER_ID)})

    bookings = (await client.get(f"{API}/calendar/bookings", params={"on_date": "2026-03-02"})).json()
    assert len(bookings) == 2
    assert bookings[0]["scheduled_at"] < bookings[1]["scheduled_at"]


@pytest.mark.asyncio
async def test_update_and_delete_booking(client):
    when = datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)
    booking = (await client.post(f"{API}/calendar/bookings", json={"scheduled_at": _iso(when), "trainer_id": str(TRAINER_ID)})).json()

    r = await client.patch(f"{API}/calendar/bookings/{booking['id']}", json={"notes": "Bring bands", "status": "soft-hold"})
    assert r.json()["notes"] == "Bring bands"
    assert r.json()["hold_expiry"] is not None

    r = await client.patch(f"{API}/calendar/bookings/{booking['id']}", json={"status": None})
    assert r.status_code == 400
    assert r.json()["detail"]["errors"] == ["status cannot be null"]

    r = await client.patch(f"{API}/calendar/bookings/{booking['id']}", json={"status": "confirmed"})
    assert r.json()["status"] == "confirmed"
    assert r.json()["hold_expiry"] is None

    assert (await client.delete(f"{API}/calendar/bookings/{booking['id']}")).status_code == 204
    assert (await client.get(f"{API}/calendar/bookings/{booking['id']}")).status_code == 404


# --- Availability ---


@pytest.mark.asyncio
async def test_default_availability(client):
    blocks = (await client.get(f"{API}/trainers/{TRAINER_ID}/availability")).json()
    assert len(blocks) == 12
    blocked = (await client.get(f"{API}/trainers/{TRAINER_ID}/availability", params={"block_type": "blocked"})).json()
    assert {b["reason"] for b in blocked} == {"Lunch break", "Weekly admin tasks"}

    tuesday = (await client.get(f"{API}/trainers/{TRAINER_ID}/availability/date/2026-03-03")).json()
    assert sorted((b["block_type"], b["start_hour"]) for b in tuesday) == [
        ("available", 6),
        ("blocked", 12),
        ("blocked", 14),
    ]
    sunday = (await client.get(f"{API}/trainers/{TRAINER_ID}/availability/date/2026-03-01")).json()
    assert sunday == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("at", "available"),
    [
        ("2026-03-02T10:00:00", True),
        ("2026-03-02T12:30:00", False),
        ("2026-03-02T20:00:00", False),
        ("2026-03-03T15:00:00", False),
        ("2026-03-07T11:30:00", True),
        ("2026-03-01T10:00:00", False),
    ],
)
async def test_check_availability(client, at, available):
    r = await client.get(f"{API}/trainers/{TRAINER_ID}/availability/check", params={"at": at})
    assert r.status_code == 200
    assert r.json()["available"] is available


@pytest.mark.asyncio
async def test_one_time_blocks(client):
    r = await client.post(
        f"{API}/trainers/{TRAINER_ID}/availability",
        json={
            "block_type": "blocked",
            "recurrence": "once",
            "specific_date": "2026-03-02",
            "end_date": "2026-03-04",
            "start_hour": 0,
            "end_hour": 24,
            "reason": "Holiday",
        },
    )
    assert r.status_code == 201

    r = await client.get(f"{API}/trainers/{TRAINER_ID}/availability/check", params={"at": "2026-03-02T10:00:00"})
    assert r.json()["available"] is False
    r = await client.get(f"{API}/trainers/{TRAINER_ID}/availability/check", params={"at": "2026-03-05T10:00:00"})
    assert r.json()["available"] is True


@pytest.mark.asyncio
async def test_availability_block_validation(client):
    r = await client.post(f"{API}/trainers/{TRAINER_ID}/availability", json={"recurrence": "weekly"})
    assert r.status_code == 422
    r = await client.post(
        f"{API}/trainers/{TRAINER_ID}/availability", json={"day_of_week": 1, "start_hour": 10, "end_hour": 9}
    )
    assert r.status_code == 422
    r = await client.post(f"{API}/trainers/{uuid.uuid4()}/availability", json={"day_of_week": 1})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_block_checks_merged_window(client):
    blocks = (await client.get(f"{API}/trainers/{TRAINER_ID}/availability", params={"block_type": "available"})).json()
    block = blocks[0]
    r = await client.patch(f"{API}/trainers/{TRAINER_ID}/availability/{block['id']}", json={"end_hour": 5})
    assert r.status_code == 400

    r = await client.patch(f"{API}/trainers/{TRAINER_ID}/availability/{block['id']}", json={"end_hour": 18})
    assert r.status_code == 200
    assert r.json()["end_hour"] == 18

    r = await client.patch(f"{API}/trainers/{SOLO_ID}/availability/{block['id']}", json={"end_hour": 18})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_replace_reset_and_delete_blocks(client):
    r = await client.put(
        f"{API}/trainers/{TRAINER_ID}/availability",
        json=[{"day_of_week": 0, "start_hour": 8, "end_hour": 12}],
    )
    assert r.status_code == 200
    assert len(r.json()) == 1
    r = await client.get(f"{API}/trainers/{TRAINER_ID}/availability/check", params={"at": "2026-03-01T09:00:00"})
    assert r.json()["available"] is True

    block_id = (await client.get(f"{API}/trainers/{TRAINER_ID}/availability")).json()[0]["id"]
    assert (await client.delete(f"{API}/trainers/{TRAINER_ID}/availability/{block_id}")).status_code == 204
    assert (await client.get(f"{API}/trainers/{TRAINER_ID}/availability")).json() == []

    r = await client.post(f"{API}/trainers/{TRAINER_ID}/availability/reset")
    assert len(r.json()) == 12
    assert len((await client.get(f"{API}/trainers/{SOLO_ID}/availability")).json()) == 12


# --- Booking requests ---


async def _request(client, client_ids, times=None) -> dict:
    times = times or [
        _iso(datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc)),
        _iso(datetime(2026, 3, 3, 10, 0, tzinfo=timezone.utc)),
    ]
    r = await client.post(
        f"{API}/booking-requests",
        json={"trainer_id": str(TRAINER_ID), "client_profile_id": client_ids["Emma"], "preferred_times": times, "notes": "Mornings"},
    )
    assert r.status_code == 201, r.text
    return r.json()


@pytest.mark.asyncio
async def test_accept_booking_request(client, client_ids):
    req = await _request(client, client_ids)
    assert req["status"] == "pending"
    assert len(req["preferred_times"]) == 2

    r = await client.post(f"{API}/booking-requests/{req['id']}/accept", json={})
    assert r.status_code == 200
    booking = r.json()
    assert booking["status"] == "confirmed"
    assert booking["client_name"] == "Emma Clarke"
    assert booking["scheduled_at"].startswith("2026-03-02T10:00")
    assert booking["notes"] == "Mornings"

    accepted = (await client.get(f"{API}/booking-requests", params={"status": "accepted"})).json()
    assert [a["id"] for a in accepted] == [req["id"]]
    assert (await client.post(f"{API}/booking-requests/{req['id']}/accept", json={})).status_code == 409


@pytest.mark.asyncio
async def test_accept_at_chosen_time(client, client_ids):
    req = await _request(client, client_ids)
    chosen = _iso(datetime(2026, 3, 3, 10, 0, tzinfo=timezone.utc))
    booking = (await client.post(f"{API}/booking-requests/{req['id']}/accept", json={"scheduled_at": chosen})).json()
    assert booking["scheduled_at"].startswith("2026-03-03T10:00")


@pytest.mark.asyncio
async def test_decline_booking_request(client, client_ids):
    req = await _request(client, client_ids)
    r = await client.post(f"{API}/booking-requests/{req['id']}/decline")
    assert r.json()["status"] == "declined"
    assert (await client.post(f"{API}/booking-requests/{req['id']}/accept", json={})).status_code == 409


@pytest.mark.asyncio
async def test_stale_requests_expire(client, db, client_ids):
    req = await _request(client, client_ids)
    await db.execute(
        update(BookingRequest)
        .where(BookingRequest.id == uuid.UUID(req["id"]))
        .values(expires_at=datetime.now(timezone.utc) - timedelta(hours=1))
    )
    await db.commit()

    expired = (await client.get(f"{API}/booking-requests", params={"trainer_id": str(TRAINER_ID), "status": "expired"})).json()
    assert [e["id"] for e in expired] == [req["id"]]
    assert (await client.post(f"{API}/booking-requests/{req['id']}/accept", json={})).status_code == 409


@pytest.mark.asyncio
async def test_booking_request_needs_preferred_times(client, client_ids):
    r = await client.post(
        f"{API}/booking-requests",
        json={"trainer_id": str(TRAINER_ID), "client_profile_id": client_ids["Emma"], "preferred_times": []},
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_accepting_stale_request_records_expiry(client, db, client_ids):
    req = await _request(client, client_ids)
    request_id = uuid.UUID(req["id"])
    await db.execute(
        update(BookingRequest)
        .where(BookingRequest.id == request_id)
        .values(expires_at=datetime.now(timezone.utc) - timedelta(hours=1))
    )
    await db.commit()

    r = await client.post(f"{API}/booking-requests/{req['id']}/decline")
    assert r.status_code == 409
    assert r.json()["detail"] == "Booking request is expired"

    status = (await db.execute(select(BookingRequest.status).where(BookingRequest.id == request_id))).scalar_one()
    assert status == BookingRequestStatus.EXPIRED
