"""Turn a stored AI workout into session blocks a trainer can run."""

from __future__ import annotations

import re
from collections import defaultdict
from typing import Any

from trainer_aide.core.enums import MuscleGroup, ResistanceType
from trainer_aide.models.ai_program import AIWorkout, AIWorkoutExercise

DEFAULT_BLOCK_LABEL = "A"

# First match wins, so "row" resolves to back before cardio.
_MUSCLE_KEYWORDS: list[tuple[MuscleGroup, tuple[str, ...]]] = [
    (MuscleGroup.CHEST, ("chest", "press", "pushup", "push-up")),
    (MuscleGroup.BACK, ("back", "row", "pulldown", "pull-up")),
    (MuscleGroup.LEGS, ("squat", "lunge", "leg")),
    (MuscleGroup.SHOULDERS, ("shoulder", "lateral", "overhead")),
    (MuscleGroup.BICEPS, ("bicep", "curl")),
    (MuscleGroup.TRICEPS, ("tricep", "extension")),
    (MuscleGroup.CORE, ("core", "plank", "crunch", "ab")),
    (MuscleGroup.CARDIO, ("cardio", "run", "bike")),
    (MuscleGroup.STRETCH, ("stretch",)),
]


def determine_muscle_group(exercise_name: str | None) -> MuscleGroup:
    name = (exercise_name or "").lower()
    for group, keywords in _MUSCLE_KEYWORDS:
        if any(k in name for k in keywords):
            return group
    return MuscleGroup.OTHER


def _leading_int(text: str) -> int:
    match = re.match(r"\s*(\d+)", text)
    return int(match.group(1)) if match else 0


def parse_reps(reps: str | None) -> tuple[int, int]:
    """'8-10' -> (8, 10); '12' -> (12, 12); anything unparsable -> 0."""
    reps = reps or ""
    if "-" in reps:
        low, _, high = reps.partition("-")
        return _leading_int(low), _leading_int(high)
    count = _leading_int(reps)
    return count, count


def block_letter(label: str | None) -> str:
    """'B2' -> 'B'; missing or non-alphabetic labels fall into the default block."""
    if label:
        first = label.strip()[:1].upper()
        if first.isalpha():
            return first
    return DEFAULT_BLOCK_LABEL


def convert_exercise(ex: AIWorkoutExercise, position: int) -> dict[str, Any]:
    name = ex.exercise.name if ex.exercise is not None else None
    reps_min, reps_max = parse_reps(ex.reps_target)
    return {
        "exercise_id": str(ex.exercise_id) if ex.exercise_id else f"custom_{ex.id}",
        "position": position,
        "muscle_group": determine_muscle_group(name),
        "resistance_type": ResistanceType.BODYWEIGHT if ex.is_bodyweight else ResistanceType.WEIGHT,
        "resistance_value": ex.target_load_kg or 0,
        "reps_min": reps_min,
        "reps_max": reps_max,
        "sets": ex.sets or 1,
        "tempo": ex.tempo,
        "rest_seconds": ex.rest_seconds,
        "rir": ex.target_rir,
        "coaching_cues": list(ex.coaching_cues or []),
        "notes": "; ".join(ex.modifications) if ex.modifications else None,
    }


def convert_ai_workout_to_session_blocks(workout: AIWorkout) -> list[dict[str, Any]]:
    """Group by block letter (A, B, ...), order by exercise_order, number from 1."""
    if not workout.exercises:
        return []
    grouped: dict[str, list[AIWorkoutExercise]] = defaultdict(list)
    for ex in workout.exercises:
        grouped[block_letter(ex.block_label)].append(ex)

    blocks = []
    for number, letter in enumerate(sorted(grouped), start=1):
        ordered = sorted(grouped[letter], key=lambda e: e.exercise_order or 0)
        blocks.append(
            {
                "block_number": number,
                "name": f"Block {letter}",
                "exercises": [convert_exercise(ex, i) for i, ex in enumerate(ordered, start=1)],
            }
        )
    return blocks


def ai_workout_session_name(workout: AIWorkout, client_first_name: str | None = None) -> str:
    name = workout.workout_name or f"Week {workout.week_number} Day {workout.day_number}"
    return f"{name} with {client_first_name}" if client_first_name else name
