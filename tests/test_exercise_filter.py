from __future__ import annotations

import pytest

from trainer_aide.core.seed_data import CLIENT_PROFILES, EXERCISES
from trainer_aide.models.exercise import Exercise
from trainer_aide.services.exercise_filter import (
    filter_by_aversions,
    filter_by_equipment,
    filter_by_experience,
    filter_by_injuries,
    filter_exercises_for_client,
    sort_by_priority,
    validate_exercise_variety,
)


@pytest.fixture
def library() -> list[Exercise]:
    return [Exercise(**data) for data in EXERCISES]


def _names(exercises) -> set[str]:
    return {ex.name for ex in exercises}


def test_empty_equipment_allows_everything(library):
    assert len(filter_by_equipment(library, [])) == len(library)


def test_bodyweight_always_allowed(library):
    names = _names(filter_by_equipment(library, ["nothing"]))
    assert {"Push-Up", "Plank", "Glute Bridge", "Pull-Up", "Burpee"} <= names
    assert "Goblet Squat" not in names


def test_equipment_substring_matching(library):
    names = _names(filter_by_equipment(library, ["kettlebells", "bands"]))
    assert "Kettlebell Swing" in names
    assert "Pallof Press" in names
    assert "Barbell Back Squat" not in names


def test_experience_levels(library):
    beginner_only = filter_by_experience(library, "complete_beginner")
    assert {ex.level.value for ex in beginner_only} == {"beginner"}
    assert "Power Clean" not in _names(filter_by_experience(library, "beginner"))
    assert "Power Clean" in _names(filter_by_experience(library, "advanced"))


def test_injury_restrictions(library):
    injuries = [{"body_part": "shoulder", "restrictions": ["no overhead press"]}]
    names = _names(filter_by_injuries(library, injuries))
    assert "Overhead Press" not in names
    assert "Barbell Bench Press" in names


def test_aversions(library):
    names = _names(filter_by_aversions(library, ["burpees", "running"]))
    assert "Burpee" not in names
    assert "Treadmill Run" not in names
    assert "Rowing Machine" in names


def test_full_filter_for_beginner_client(library):
    emma = CLIENT_PROFILES[0]
    filtered, stats = filter_exercises_for_client(
        library,
        emma["available_equipment"],
        emma["experience_level"],
        exercise_aversions=emma["exercise_aversions"],
    )
    assert stats.total_available == len(library)
    assert stats.final_count == len(filtered) == 15
    assert stats.filtered_by_aversions == 1
    assert "Burpee" not in _names(filtered)


def test_variety_warnings(library):
    ok, warnings = validate_exercise_variety(library, 3)
    assert ok, warnings

    ok, warnings = validate_exercise_variety(library[:3], 3)
    assert not ok
    assert warnings[0] == "Insufficient exercises: 3 available, need at least 12"


def test_sort_by_priority_puts_compounds_first(library):
    ordered = sort_by_priority(library, "strength")
    first_isolation = next(i for i, ex in enumerate(ordered) if ex.mechanic != "compound")
    assert all(ex.mechanic == "compound" for ex in ordered[:first_isolation])
    assert ordered[0].is_unilateral is not True
