from __future__ import annotations

import uuid

import pytest

from trainer_aide.core.seed_data import SOLO_ID, TRAINER_ID

API = "/api/v1"


async def _template_id(client, name: str) -> str:
    templates = (await client.get(f"{API}/templates")).json()
    return next(t["id"] for t in templates if t["name"] == name)


async def _start(client, **body) -> dict:
    body.setdefault("trainer_id", str(TRAINER_ID))
    r = await client.post(f"{API}/sessions", json=body)
    assert r.status_code == 201, r.text
    return r.json()


@pytest.mark.asyncio
async def test_start_from_template(client, client_ids):
    template_id = await _template_id(client, "Full Body Circuit")
    s = await _start(client, template_id=template_id, client_profile_id=client_ids["Emma"])

    assert s["session_name"] == "Full Body Circuit with Emma"
    assert s["sign_off_mode"] == "per_block"
    assert s["completed"] is False
    assert [b["name"] for b in s["blocks"]] == ["Block 1", "Block 2", "Block 3"]
    first = s["blocks"][0]["exercises"]
    assert [ex["exercise_id"] for ex in first] == ["rowing-machine", "goblet-squat", "push-up"]
    assert first[0]["muscle_group"] == "cardio"
    assert first[1]["reps_min"] == 10 and first[1]["reps_max"] == 12

    timer = (await client.get(f"{API}/sessions/{s['id']}/timer")).json()
    assert timer["is_active"] is True
    assert timer["total_seconds"] == 1800
    assert 1790 <= timer["seconds_left"] <= 1800
    assert timer["alert_interval_minutes"] == 10
    assert 590 <= timer["next_alert_in_seconds"] <= 600
    assert timer["alerts_elapsed"] == 0


@pytest.mark.asyncio
async def test_template_session_does_not_change_template(client):
    template_id = await _template_id(client, "Upper Body Strength")
    s = await _start(client, template_id=template_id)
    ex = s["blocks"][0]["exercises"][0]
    await client.patch(f"{API}/sessions/{s['id']}/exercises/{ex['id']}", json={"resistance_value": 80})

    template = (await client.get(f"{API}/templates/{template_id}")).json()
    assert template["blocks"][0]["exercises"][0]["resistance_value"] == 60


@pytest.mark.asyncio
async def test_start_with_custom_blocks(client):
    blocks = [{"block_number": 1, "name": "Warm-up", "exercises": [{"exercise_id": "jumping-jacks", "muscle_group": "cardio"}]}]
    s = await _start(client, blocks=blocks, planned_duration_minutes=45)
    assert s["session_name"] == "Custom Session"
    assert s["sign_off_mode"] == "full_session"
    assert s["planned_duration_minutes"] == 45

    timer = (await client.get(f"{API}/sessions/{s['id']}/timer")).json()
    assert timer["total_seconds"] == 2700
    assert timer["alert_interval_minutes"] is None

    named = await _start(client, blocks=blocks, session_name="Morning HIIT", sign_off_mode="per_exercise")
    assert named["session_name"] == "Morning HIIT"
    assert named["sign_off_mode"] == "per_exercise"


@pytest.mark.asyncio
async def test_start_validation(client):
    r = await client.post(f"{API}/sessions", json={"trainer_id": str(TRAINER_ID)})
    assert r.status_code == 422
    r = await client.post(f"{API}/sessions", json={"trainer_id": str(TRAINER_ID), "blocks": []})
    assert r.status_code == 400
    assert r.json()["detail"] == "Session must have at least one block"
    r = await client.post(f"{API}/sessions", json={"trainer_id": str(uuid.uuid4()), "blocks": []})
    assert r.status_code == 404
    r = await client.post(f"{API}/sessions", json={"trainer_id": str(TRAINER_ID), "template_id": str(uuid.uuid4())})
    assert r.status_code == 404
    r = await client.post(f"{API}/sessions", json={"trainer_id": str(TRAINER_ID), "ai_workout_id": str(uuid.uuid4())})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_start_from_ai_workout(client, client_ids):
    r = await client.post(
        f"{API}/ai/generate-program",
        json={
            "trainer_id": str(SOLO_ID),
            "client_profile_id": client_ids["Lisa"],
            "total_weeks": 1,
            "sessions_per_week": 2,
        },
    )
    program_id = r.json()["program_id"]
    workout = (await client.get(f"{API}/ai-programs/{program_id}/workouts")).json()[0]

    s = await _start(client, trainer_id=str(SOLO_ID), ai_workout_id=workout["id"], client_profile_id=client_ids["Lisa"])
    assert s["session_name"] == "Week 1 Day 1 with Lisa"
    assert s["ai_workout_id"] == workout["id"]
    assert [b["name"] for b in s["blocks"]] == ["Block A", "Block B"]
    block_a = s["blocks"][0]["exercises"]
    assert [ex["exercise_id"] for ex in block_a] == [ex["exercise_id"] for ex in workout["exercises"][:2]]
    assert block_a[0]["muscle_group"] == "chest"
    assert block_a[0]["resistance_type"] == "bodyweight"
    assert block_a[0]["reps_min"] == 8 and block_a[0]["reps_max"] == 10
    assert block_a[0]["tempo"] == "3-1-1-0"
    assert block_a[0]["coaching_cues"] == ["Brace core"]


@pytest.mark.asyncio
async def test_log_exercises_and_track_progress(client):
    template_id = await _template_id(client, "Full Body Circuit")
    s = await _start(client, template_id=template_id)
    exercises = [ex for b in s["blocks"] for ex in b["exercises"]]

    for ex in exercises[:2]:
        r = await client.post(f"{API}/sessions/{s['id']}/exercises/{ex['id']}/toggle")
        assert r.json()["completed"] is True
    progress = (await client.get(f"{API}/sessions/{s['id']}/progress")).json()
    assert progress == {"completed": 2, "total": 8, "percentage": 25}

    r = await client.post(f"{API}/sessions/{s['id']}/exercises/{exercises[0]['id']}/toggle")
    assert r.json()["completed"] is False

    r = await client.patch(
        f"{API}/sessions/{s['id']}/exercises/{exercises[1]['id']}",
        json={"actual_reps": 11, "actual_resistance": 18, "rpe": 8},
    )
    assert r.status_code == 200
    assert r.json()["actual_reps"] == 11
    assert r.json()["rpe"] == 8

    r = await client.patch(f"{API}/sessions/{s['id']}/exercises/{exercises[1]['id']}", json={"rpe": 11})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_block_sign_off(client):
    template_id = await _template_id(client, "Full Body Circuit")
    s = await _start(client, template_id=template_id)
    block = s["blocks"][0]

    r = await client.post(f"{API}/sessions/{s['id']}/blocks/{block['id']}/complete", json={"rpe": 7})
    assert r.status_code == 200
    assert r.json()["completed"] is True
    assert r.json()["rpe"] == 7

    r = await client.patch(f"{API}/sessions/{s['id']}/blocks/{block['id']}", json={"name": "Opener"})
    assert r.json()["name"] == "Opener"

    r = await client.post(f"{API}/sessions/{s['id']}/blocks/{uuid.uuid4()}/complete", json={"rpe": 7})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_exercise_must_belong_to_session(client):
    template_id = await _template_id(client, "Full Body Circuit")
    first = await _start(client, template_id=template_id)
    second = await _start(client, template_id=template_id)
    foreign = second["blocks"][0]["exercises"][0]["id"]
    r = await client.post(f"{API}/sessions/{first['id']}/exercises/{foreign}/toggle")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_complete_session(client):
    template_id = await _template_id(client, "Upper Body Strength")
    s = await _start(client, template_id=template_id)

    active = (await client.get(f"{API}/sessions/active", params={"trainer_id": str(TRAINER_ID)})).json()
    assert active["id"] == s["id"]

    r = await client.post(
        f"{API}/sessions/{s['id']}/complete",
        json={"overall_rpe": 8, "public_notes": "Great work", "trainer_declaration": True},
    )
    assert r.status_code == 200
    done = r.json()
    assert done["completed"] is True
    assert done["overall_rpe"] == 8
    assert done["public_notes"] == "Great work"
    assert done["duration_seconds"] >= 0
    assert done["completed_at"] is not None

    timer = (await client.get(f"{API}/sessions/{s['id']}/timer")).json()
    assert timer["is_active"] is False

    r = await client.post(f"{API}/sessions/{s['id']}/complete", json={"overall_rpe": 5})
    assert r.status_code == 409
    r = await client.post(f"{API}/sessions/{s['id']}/timer/start", json={})
    assert r.status_code == 409

    assert (await client.get(f"{API}/sessions/active", params={"trainer_id": str(TRAINER_ID)})).json() is None
    completed = (await client.get(f"{API}/sessions", params={"completed": True})).json()
    assert [c["id"] for c in completed] == [s["id"]]
    assert (await client.get(f"{API}/sessions", params={"completed": False})).json() == []


@pytest.mark.asyncio
async def test_timer_lifecycle(client):
    template_id = await _template_id(client, "Upper Body Strength")
    s = await _start(client, template_id=template_id, start_timer=False)
    base = f"{API}/sessions/{s['id']}/timer"

    idle = (await client.get(base)).json()
    assert idle["is_active"] is False
    assert idle["seconds_left"] == idle["total_seconds"] == 1800
    assert idle["formatted"] == "30:00"
    assert (await client.post(f"{base}/pause")).status_code == 404

    started = (await client.post(f"{base}/start", json={"total_seconds": 600})).json()
    assert started["is_active"] is True
    assert started["total_seconds"] == 600

    paused = (await client.post(f"{base}/pause")).json()
    assert paused["is_paused"] is True
    assert paused["paused_at"] is not None

    resumed = (await client.post(f"{base}/resume")).json()
    assert resumed["is_paused"] is False
    assert resumed["accumulated_paused_seconds"] >= 0

    reset = (await client.post(f"{base}/reset")).json()
    assert reset["total_seconds"] == 600
    assert reset["accumulated_paused_seconds"] == 0
    assert 590 <= reset["seconds_left"] <= 600

    cleared = (await client.delete(base)).json()
    assert cleared["is_active"] is False
    assert cleared["total_seconds"] == 1800
    assert (await client.post(f"{base}/resume")).status_code == 404


@pytest.mark.asyncio
async def test_update_and_delete_session(client):
    blocks = [{"block_number": 1, "exercises": [{"exercise_id": "plank", "muscle_group": "core"}]}]
    s = await _start(client, blocks=blocks)

    r = await client.patch(f"{API}/sessions/{s['id']}", json={"session_name": "Core Finisher", "private_notes": "Low back tight"})
    assert r.json()["session_name"] == "Core Finisher"
    assert r.json()["private_notes"] == "Low back tight"

    r = await client.patch(f"{API}/sessions/{s['id']}", json={"session_name": None})
    assert r.status_code == 400
    assert r.json()["detail"]["errors"] == ["session_name cannot be null"]
    r = await client.patch(f"{API}/sessions/{s['id']}", json={"private_notes": None})
    assert r.status_code == 200
    assert r.json()["session_name"] == "Core Finisher"
    assert r.json()["private_notes"] is None

    assert (await client.delete(f"{API}/sessions/{s['id']}")).status_code == 204
    assert (await client.get(f"{API}/sessions/{s['id']}")).status_code == 404
