"""Narrow the exercise library to what a client can safely do with their kit."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from trainer_aide.core.constants import MIN_EXERCISES_PER_SESSION
from trainer_aide.models.exercise import Exercise
from trainer_aide.schemas.user import Injury

logger = logging.getLogger(__name__)

ALLOWED_LEVELS: dict[str, list[str]] = {
    "complete_beginner": ["beginner"],
    "beginner": ["beginner", "intermediate"],
    "intermediate": ["beginner", "intermediate", "advanced"],
    "advanced": ["beginner", "intermediate", "advanced"],
    "elite": ["beginner", "intermediate", "advanced"],
}
DEFAULT_LEVELS = ["beginner", "intermediate"]

REQUIRED_PATTERNS = ("push_horizontal", "pull_horizontal", "squat", "hinge")


@dataclass
class ExerciseFilterStats:
    total_available: int = 0
    filtered_by_equipment: int = 0
    filtered_by_experience: int = 0
    filtered_by_injuries: int = 0
    filtered_by_aversions: int = 0
    final_count: int = 0


def _value(v) -> str:
    return str(getattr(v, "value", v) or "")


def _is_bodyweight(ex: Exercise) -> bool:
    return bool(ex.is_bodyweight) or not ex.equipment or ex.equipment.lower() == "body only"


def _equipment_matches(ex_equipment: str, available: str) -> bool:
    if ex_equipment == available:
        return True
    if available in ex_equipment or ex_equipment in available:
        return True
    if available == "barbell" and "bar" in ex_equipment:
        return True
    if available == "bar" and "barbell" in ex_equipment:
        return True
    return "dumbbell" in available and "dumbbell" in ex_equipment


def filter_by_equipment(exercises: Sequence[Exercise], available_equipment: Iterable[str]) -> list[Exercise]:
    """Bodyweight work is always allowed; an empty kit list allows everything."""
    normalized = [e.lower().strip() for e in available_equipment if e and e.strip()]
    if not normalized:
        return list(exercises)
    out = []
    for ex in exercises:
        if _is_bodyweight(ex):
            out.append(ex)
            continue
        ex_equipment = ex.equipment.lower().strip()
        if any(_equipment_matches(ex_equipment, available) for available in normalized):
            out.append(ex)
    return out


def filter_by_experience(exercises: Sequence[Exercise], experience_level: str) -> list[Exercise]:
    allowed = ALLOWED_LEVELS.get(_value(experience_level).lower(), DEFAULT_LEVELS)
    return [ex for ex in exercises if _value(ex.level) in allowed]


def _conflicts_with(ex: Exercise, restriction: str) -> bool:
    name = ex.name.lower()
    category = (ex.anatomical_category or "").lower()
    movement = (ex.movement_pattern or "").lower()
    muscles = [m.lower() for m in [*(ex.primary_muscles or []), *(ex.secondary_muscles or [])]]

    if restriction in name or name in restriction:
        return True
    if "overhead" in restriction and "push_vertical" in movement:
        return True
    if "squat" in restriction and "squat" in movement:
        return True
    if "hinge" in restriction and "hinge" in movement:
        return True
    if "shoulder" in restriction and "shoulder" in category:
        return True
    if "knee" in restriction and ("leg" in category or "squat" in movement):
        return True
    if "back" in restriction and "back" in category:
        return True
    return any(m in restriction or restriction in m for m in muscles if m)


def filter_by_injuries(exercises: Sequence[Exercise], injuries: Iterable[Injury | dict]) -> list[Exercise]:
    restrictions: list[str] = []
    for injury in injuries:
        items = injury.get("restrictions", []) if isinstance(injury, dict) else injury.restrictions
        restrictions.extend(r.lower().strip() for r in items if r and r.strip())
    if not restrictions:
        return list(exercises)
    return [ex for ex in exercises if not any(_conflicts_with(ex, r) for r in restrictions)]


def _is_averse(ex: Exercise, aversion: str) -> bool:
    name = ex.name.lower()
    ex_type = (ex.exercise_type or "").lower()
    if aversion in name or name in aversion:
        return True
    if "cardio" in aversion and "cardio" in ex_type:
        return True
    if "plyo" in aversion and "plyometric" in ex_type:
        return True
    if "burpee" in aversion and "burpee" in name:
        return True
    return "running" in aversion and "run" in name


def filter_by_aversions(exercises: Sequence[Exercise], aversions: Iterable[str]) -> list[Exercise]:
    normalized = [a.lower().strip() for a in aversions if a and a.strip()]
    if not normalized:
        return list(exercises)
    return [ex for ex in exercises if not any(_is_averse(ex, a) for a in normalized)]


def filter_exercises_for_client(
    exercises: Sequence[Exercise],
    available_equipment: Iterable[str],
    experience_level: str,
    injuries: Iterable[Injury | dict] = (),
    exercise_aversions: Iterable[str] = (),
) -> tuple[list[Exercise], ExerciseFilterStats]:
    """Apply equipment, experience, injury and aversion filters in that order."""
    stats = ExerciseFilterStats(total_available=len(exercises))

    filtered = filter_by_equipment(exercises, available_equipment)
    stats.filtered_by_equipment = stats.total_available - len(filtered)

    before = len(filtered)
    filtered = filter_by_experience(filtered, experience_level)
    stats.filtered_by_experience = before - len(filtered)

    before = len(filtered)
    filtered = filter_by_injuries(filtered, injuries)
    stats.filtered_by_injuries = before - len(filtered)

    before = len(filtered)
    filtered = filter_by_aversions(filtered, exercise_aversions)
    stats.filtered_by_aversions = before - len(filtered)

    stats.final_count = len(filtered)
    logger.info(
        "Exercise filter: %s available, -%s equipment, -%s experience, -%s injuries, -%s aversions, %s left",
        stats.total_available,
        stats.filtered_by_equipment,
        stats.filtered_by_experience,
        stats.filtered_by_injuries,
        stats.filtered_by_aversions,
        stats.final_count,
    )
    return filtered, stats


def count_by_pattern(exercises: Iterable[Exercise]) -> dict[str, int]:
    return dict(Counter(ex.movement_pattern or "unknown" for ex in exercises))


def count_by_equipment(exercises: Iterable[Exercise]) -> dict[str, int]:
    return dict(Counter(ex.equipment or "bodyweight" for ex in exercises))


def validate_exercise_variety(exercises: Sequence[Exercise], sessions_per_week: int) -> tuple[bool, list[str]]:
    """Warnings when the filtered pool is too thin for a balanced program."""
    warnings: list[str] = []
    min_required = sessions_per_week * MIN_EXERCISES_PER_SESSION
    if len(exercises) < min_required:
        warnings.append(f"Insufficient exercises: {len(exercises)} available, need at least {min_required}")

    patterns = count_by_pattern(exercises)
    for pattern in REQUIRED_PATTERNS:
        if patterns.get(pattern, 0) < 2:
            warnings.append(f"Low variety for {pattern}: only {patterns.get(pattern, 0)} exercises")

    if len(count_by_equipment(exercises)) < 2:
        warnings.append("Limited equipment variety may reduce program effectiveness")
    return not warnings, warnings


def sort_by_priority(exercises: Iterable[Exercise], primary_goal: str) -> list[Exercise]:
    """Compounds first; for strength, bilateral compounds before unilateral; then by name."""
    goal = _value(primary_goal)

    def key(ex: Exercise):
        compound = ex.mechanic == "compound"
        strength_fit = goal == "strength" and compound and not ex.is_unilateral
        return (not compound, not strength_fit, ex.name.lower())

    return sorted(exercises, key=key)
