from __future__ import annotations

import uuid

import pytest

from trainer_aide.core.seed_data import STUDIO_OWNER_ID

API = "/api/v1/templates"

CIRCUIT = {
    "name": "Leg Day Circuit",
    "type": "standard",
    "assigned_studios": ["studio-north"],
    "alert_interval_minutes": 5,
    "blocks": [
        {
            "block_number": 1,
            "name": "Opener",
            "exercises": [
                {"exercise_id": "assault-bike", "position": 0, "muscle_group": "cardio", "cardio_duration": 120},
                {"exercise_id": "goblet-squat", "position": 1, "muscle_group": "legs", "reps_min": 10, "reps_max": 12, "sets": 3},
            ],
        }
    ],
}


@pytest.mark.asyncio
async def test_seeded_templates(client):
    templates = (await client.get(API)).json()
    names = {t["name"] for t in templates}
    assert names == {"Full Body Circuit", "Upper Body Strength"}
    circuit = next(t for t in templates if t["name"] == "Full Body Circuit")
    assert [len(b["exercises"]) for b in circuit["blocks"]] == [3, 3, 2]
    assert all(b["exercises"][0]["muscle_group"] == "cardio" for b in circuit["blocks"])

    owned = (await client.get(API, params={"created_by": str(STUDIO_OWNER_ID)})).json()
    assert len(owned) == 2


@pytest.mark.asyncio
async def test_create_template(client):
    r = await client.post(API, json=CIRCUIT)
    assert r.status_code == 201, r.text
    t = r.json()
    assert t["blocks"][0]["name"] == "Opener"
    assert [ex["exercise_id"] for ex in t["blocks"][0]["exercises"]] == ["assault-bike", "goblet-squat"]

    by_studio = (await client.get(API, params={"studio_id": "studio-north"})).json()
    assert [x["id"] for x in by_studio] == [t["id"]]


@pytest.mark.asyncio
async def test_standard_template_needs_cardio_first(client):
    body = {**CIRCUIT, "blocks": [{**CIRCUIT["blocks"][0], "exercises": list(reversed(CIRCUIT["blocks"][0]["exercises"]))}]}
    body["blocks"][0]["exercises"] = [
        {**ex, "position": i} for i, ex in enumerate(body["blocks"][0]["exercises"])
    ]
    r = await client.post(API, json=body)
    assert r.status_code == 400
    assert r.json()["detail"]["errors"] == ["Opener must start with a cardio exercise"]

    r = await client.post(API, json={**body, "type": "resistance_only"})
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_template_needs_blocks(client):
    r = await client.post(API, json={"name": "Empty", "blocks": []})
    assert r.status_code == 400
    assert "Template must have at least one block" in r.json()["detail"]["errors"]


@pytest.mark.asyncio
async def test_update_metadata_keeps_blocks(client):
    t = (await client.post(API, json=CIRCUIT)).json()
    r = await client.patch(f"{API}/{t['id']}", json={"description": "Quads and glutes", "alert_interval_minutes": 8})
    assert r.status_code == 200
    updated = r.json()
    assert updated["description"] == "Quads and glutes"
    assert updated["alert_interval_minutes"] == 8
    assert len(updated["blocks"]) == 1

    r = await client.patch(f"{API}/{t['id']}", json={"name": "   "})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_update_replaces_blocks(client):
    t = (await client.post(API, json=CIRCUIT)).json()
    new_blocks = [
        {"block_number": 1, "name": "A", "exercises": [{"exercise_id": "rowing-machine", "muscle_group": "cardio"}]},
        {"block_number": 2, "name": "B", "exercises": [{"exercise_id": "treadmill-run", "muscle_group": "cardio"}]},
    ]
    r = await client.patch(f"{API}/{t['id']}", json={"blocks": new_blocks})
    assert r.status_code == 200
    assert [b["name"] for b in r.json()["blocks"]] == ["A", "B"]

    bad = [{"block_number": 1, "name": "A", "exercises": [{"exercise_id": "plank", "muscle_group": "core"}]}]
    r = await client.patch(f"{API}/{t['id']}", json={"blocks": bad})
    assert r.status_code == 400
    assert [b["name"] for b in (await client.get(f"{API}/{t['id']}")).json()["blocks"]] == ["A", "B"]


@pytest.mark.asyncio
async def test_duplicate_template(client):
    templates = (await client.get(API)).json()
    src = next(t for t in templates if t["name"] == "Full Body Circuit")
    r = await client.post(f"{API}/{src['id']}/duplicate")
    assert r.status_code == 201
    copy = r.json()
    assert copy["name"] == "Full Body Circuit (Copy)"
    assert copy["is_default"] is False
    assert copy["id"] != src["id"]
    assert [ex["exercise_id"] for b in copy["blocks"] for ex in b["exercises"]] == [
        ex["exercise_id"] for b in src["blocks"] for ex in b["exercises"]
    ]
    assert {ex["id"] for b in copy["blocks"] for ex in b["exercises"]}.isdisjoint(
        {ex["id"] for b in src["blocks"] for ex in b["exercises"]}
    )


@pytest.mark.asyncio
async def test_delete_template(client):
    t = (await client.post(API, json=CIRCUIT)).json()
    assert (await client.delete(f"{API}/{t['id']}")).status_code == 204
    assert (await client.get(f"{API}/{t['id']}")).status_code == 404
    assert (await client.delete(f"{API}/{uuid.uuid4()}")).status_code == 404


@pytest.mark.asyncio
async def test_type_change_is_checked_against_existing_blocks(client):
    templates = (await client.get(API)).json()
    upper = next(t for t in templates if t["name"] == "Upper Body Strength")

    r = await client.patch(f"{API}/{upper['id']}", json={"type": "standard"})
    assert r.status_code == 400
    assert r.json()["detail"]["errors"] == [
        "Push must start with a cardio exercise",
        "Pull must start with a cardio exercise",
    ]
    assert (await client.get(f"{API}/{upper['id']}")).json()["type"] == "resistance_only"

    r = await client.patch(f"{API}/{upper['id']}", json={"name": "Upper Body Power"})
    assert r.status_code == 200
    assert r.json()["name"] == "Upper Body Power"


@pytest.mark.asyncio
async def test_null_for_required_field_is_rejected(client):
    t = (await client.post(API, json=CIRCUIT)).json()
    r = await client.patch(f"{API}/{t['id']}", json={"is_default": None})
    assert r.status_code == 400
    assert r.json()["detail"]["errors"] == ["is_default cannot be null"]
    r = await client.patch(f"{API}/{t['id']}", json={"alert_interval_minutes": None})
    assert r.status_code == 200
    assert r.json()["alert_interval_minutes"] is None
