"""Structural rules for workout templates."""

from __future__ import annotations

from collections.abc import Sequence

from trainer_aide.core.enums import MuscleGroup, TemplateType
from trainer_aide.core.exceptions import ValidationError
from trainer_aide.schemas.template import TemplateBlockCreate


def template_errors(name: str | None, template_type: TemplateType, blocks: Sequence[TemplateBlockCreate]) -> list[str]:
    errors: list[str] = []
    if not name or not name.strip():
        errors.append("Template name is required")
    if not blocks:
        errors.append("Template must have at least one block")

    for block in blocks:
        label = block.name or f"Block {block.block_number}"
        if not block.exercises:
            errors.append(f"{label} has no exercises")
            continue
        ordered = sorted(block.exercises, key=lambda e: e.position)
        if template_type == TemplateType.STANDARD and ordered[0].muscle_group != MuscleGroup.CARDIO:
            errors.append(f"{label} must start with a cardio exercise")
        for ex in ordered:
            if ex.reps_min > ex.reps_max:
                errors.append(f"{label}: {ex.exercise_id} has reps_min greater than reps_max")
    return errors


def validate_template(name: str | None, template_type: TemplateType, blocks: Sequence[TemplateBlockCreate]) -> None:
    errors = template_errors(name, template_type, blocks)
    if errors:
        raise ValidationError("Invalid template", errors)
