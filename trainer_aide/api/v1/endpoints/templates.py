"""Workout templates - ordered blocks of exercises reused by sessions."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from trainer_aide.core.exceptions import ValidationError
from trainer_aide.db.base import apply_changes, utcnow
from trainer_aide.db.session import get_db
from trainer_aide.models.template import TemplateBlock, TemplateExercise, WorkoutTemplate
from trainer_aide.schemas.template import (
    TemplateBlockCreate,
    WorkoutTemplateCreate,
    WorkoutTemplateRead,
    WorkoutTemplateUpdate,
)
from trainer_aide.services.template_validation import validate_template

router = APIRouter()


def _template_query():
    return select(WorkoutTemplate).options(
        selectinload(WorkoutTemplate.blocks).selectinload(TemplateBlock.exercises)
    )


def _build_blocks(blocks: list[TemplateBlockCreate]) -> list[TemplateBlock]:
    return [
        TemplateBlock(
            block_number=b.block_number,
            name=b.name,
            exercises=[TemplateExercise(**ex.model_dump()) for ex in b.exercises],
        )
        for b in blocks
    ]


async def _load(db: AsyncSession, template_id: uuid.UUID) -> WorkoutTemplate:
    result = await db.execute(
        _template_query().where(WorkoutTemplate.id == template_id).execution_options(populate_existing=True)
    )
    t = result.scalar_one_or_none()
    if not t:
        raise HTTPException(status_code=404, detail="Template not found")
    return t


def _check(name: str | None, template_type, blocks: list[TemplateBlockCreate]) -> None:
    try:
        validate_template(name, template_type, blocks)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "errors": e.errors}) from e


@router.get("", response_model=list[WorkoutTemplateRead])
async def list_templates(
    db: AsyncSession = Depends(get_db),
    studio_id: str | None = None,
    created_by: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
):
    """List templates. studio_id keeps those assigned to that studio."""
    stmt = _template_query().order_by(WorkoutTemplate.created_at.desc())
    if created_by:
        stmt = stmt.where(WorkoutTemplate.created_by == created_by)
    result = await db.execute(stmt)
    templates = list(result.scalars().all())
    if studio_id:
        templates = [t for t in templates if studio_id in (t.assigned_studios or [])]
    return templates[skip : skip + limit]


@router.post("", response_model=WorkoutTemplateRead, status_code=201)
async def create_template(
    payload: WorkoutTemplateCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a template with its blocks. Standard templates start every block with cardio."""
    _check(payload.name, payload.type, payload.blocks)
    t = WorkoutTemplate(**payload.model_dump(exclude={"blocks"}))
    t.blocks = _build_blocks(payload.blocks)
    db.add(t)
    await db.flush()
    return await _load(db, t.id)


@router.get("/{template_id}", response_model=WorkoutTemplateRead)
async def get_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a template with its blocks and exercises."""
    return await _load(db, template_id)


@router.patch("/{template_id}", response_model=WorkoutTemplateRead)
async def update_template(
    template_id: uuid.UUID,
    payload: WorkoutTemplateUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update metadata; sending blocks replaces all of them."""
    t = await _load(db, template_id)
    data = payload.model_dump(exclude_unset=True, exclude={"blocks"})
    if payload.blocks is not None:
        _check(data.get("name", t.name), data.get("type", t.type), payload.blocks)
    elif "name" in data or "type" in data:
        current = [TemplateBlockCreate.model_validate(b, from_attributes=True) for b in t.blocks]
        _check(data.get("name", t.name), data.get("type", t.type), current)

    apply_changes(t, data)
    if payload.blocks is not None:
        t.blocks.clear()
        await db.flush()
        t.blocks.extend(_build_blocks(payload.blocks))
    t.updated_at = utcnow()
    await db.flush()
    return await _load(db, template_id)


@router.post("/{template_id}/duplicate", response_model=WorkoutTemplateRead, status_code=201)
async def duplicate_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Deep copy as "<name> (Copy)" with fresh timestamps."""
    src = await _load(db, template_id)
    now = utcnow()
    copy = WorkoutTemplate(
        name=f"{src.name} (Copy)",
        description=src.description,
        type=src.type,
        created_by=src.created_by,
        assigned_studios=list(src.assigned_studios or []),
        default_sign_off_mode=src.default_sign_off_mode,
        alert_interval_minutes=src.alert_interval_minutes,
        is_default=False,
        created_at=now,
        updated_at=now,
    )
    copy.blocks = [
        TemplateBlock(
            block_number=b.block_number,
            name=b.name,
            exercises=[
                TemplateExercise(
                    exercise_id=ex.exercise_id,
                    position=ex.position,
                    muscle_group=ex.muscle_group,
                    resistance_type=ex.resistance_type,
                    resistance_value=ex.resistance_value,
                    reps_min=ex.reps_min,
                    reps_max=ex.reps_max,
                    sets=ex.sets,
                    cardio_duration=ex.cardio_duration,
                    cardio_intensity=ex.cardio_intensity,
                )
                for ex in b.exercises
            ],
        )
        for b in src.blocks
    ]
    db.add(copy)
    await db.flush()
    return await _load(db, copy.id)


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a template. Sessions started from it keep their copied blocks."""
    result = await db.execute(select(WorkoutTemplate).where(WorkoutTemplate.id == template_id))
    t = result.scalar_one_or_none()
    if not t:
        raise HTTPException(status_code=404, detail="Template not found")
    await db.delete(t)
    return None
