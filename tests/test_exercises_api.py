from __future__ import annotations

import pytest

API = "/api/v1/exercises"


@pytest.mark.asyncio
async def test_filter_library(client):
    everything = (await client.get(API)).json()
    assert len(everything) == 27
    assert [e["name"] for e in everything] == sorted(e["name"] for e in everything)

    hinges = (await client.get(API, params={"movement_pattern": "hinge", "level": "beginner"})).json()
    assert {e["slug"] for e in hinges} == {"kettlebell-swing", "glute-bridge"}

    bodyweight = (await client.get(API, params={"is_bodyweight": True})).json()
    assert len(bodyweight) == 9

    found = (await client.get(API, params={"search": "press"})).json()
    assert {e["slug"] for e in found} == {
        "barbell-bench-press",
        "dumbbell-bench-press",
        "overhead-press",
        "pallof-press",
    }


@pytest.mark.asyncio
async def test_equipment_and_categories(client):
    equipment = (await client.get(f"{API}/equipment")).json()
    assert equipment == ["bands", "barbell", "cable", "dumbbell", "kettlebells", "machine"]
    categories = (await client.get(f"{API}/categories")).json()
    assert "Core" in categories and "Legs" in categories


@pytest.mark.asyncio
async def test_lookup_by_slug_and_id(client):
    by_slug = (await client.get(f"{API}/slug/goblet-squat")).json()
    assert by_slug["name"] == "Goblet Squat"
    by_id = (await client.get(f"{API}/{by_slug['id']}")).json()
    assert by_id["slug"] == "goblet-squat"
    assert (await client.get(f"{API}/slug/not-there")).status_code == 404


@pytest.mark.asyncio
async def test_create_update_delete_exercise(client):
    body = {
        "slug": "farmer-carry",
        "name": "Farmer Carry",
        "anatomical_category": "Full Body",
        "equipment": "dumbbell",
        "mechanic": "compound",
        "primary_muscles": ["forearms", "traps"],
    }
    r = await client.post(API, json=body)
    assert r.status_code == 201
    ex = r.json()
    assert ex["level"] == "beginner"
    assert (await client.post(API, json=body)).status_code == 409

    r = await client.patch(f"{API}/{ex['id']}", json={"level": "intermediate", "tempo_default": "1-0-1-0"})
    assert r.json()["level"] == "intermediate"

    assert (await client.delete(f"{API}/{ex['id']}")).status_code == 204
    assert (await client.get(f"{API}/{ex['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_slug_format_is_checked(client):
    r = await client.post(API, json={"slug": "Farmer Carry", "name": "Farmer Carry"})
    assert r.status_code == 422
