from __future__ import annotations

import pytest

from trainer_aide.core.enums import MuscleGroup, TemplateType
from trainer_aide.core.exceptions import ValidationError
from trainer_aide.schemas.template import TemplateBlockCreate, TemplateExerciseCreate
from trainer_aide.services.template_validation import template_errors, validate_template


def _block(*groups: MuscleGroup, name="Block 1", **extra) -> TemplateBlockCreate:
    return TemplateBlockCreate(
        name=name,
        exercises=[
            TemplateExerciseCreate(exercise_id=f"ex-{i}", position=i, muscle_group=g, **extra)
            for i, g in enumerate(groups)
        ],
    )


def test_valid_standard_template():
    assert template_errors("Circuit", TemplateType.STANDARD, [_block(MuscleGroup.CARDIO, MuscleGroup.LEGS)]) == []


def test_standard_blocks_must_start_with_cardio():
    errors = template_errors("Circuit", TemplateType.STANDARD, [_block(MuscleGroup.LEGS, MuscleGroup.CARDIO)])
    assert errors == ["Block 1 must start with a cardio exercise"]


def test_resistance_only_has_no_cardio_rule():
    assert template_errors("Strength", TemplateType.RESISTANCE_ONLY, [_block(MuscleGroup.CHEST)]) == []


def test_structural_errors():
    errors = template_errors("  ", TemplateType.STANDARD, [])
    assert errors == ["Template name is required", "Template must have at least one block"]

    errors = template_errors("X", TemplateType.RESISTANCE_ONLY, [TemplateBlockCreate(name="Empty")])
    assert errors == ["Empty has no exercises"]


def test_reps_range_checked():
    block = _block(MuscleGroup.CHEST, reps_min=12, reps_max=8)
    errors = template_errors("X", TemplateType.RESISTANCE_ONLY, [block])
    assert errors == ["Block 1: ex-0 has reps_min greater than reps_max"]


def test_validate_template_raises_with_all_errors():
    with pytest.raises(ValidationError) as exc:
        validate_template("", TemplateType.STANDARD, [_block(MuscleGroup.CORE)])
    assert len(exc.value.errors) == 2
