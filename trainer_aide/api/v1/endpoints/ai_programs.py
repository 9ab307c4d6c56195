"""Stored AI programs: browse, edit, assign, template, duplicate and inspect."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.core.enums import ProgramStatus, UserRole
from trainer_aide.db.base import apply_changes, utcnow
from trainer_aide.db.session import get_db
from trainer_aide.models.ai_program import AIGeneration, AIProgram, AIProgramRevision, AIWorkout
from trainer_aide.models.user import ClientProfile, User
from trainer_aide.schemas.ai_program import (
    AIGenerationRead,
    AIProgramAssign,
    AIProgramRead,
    AIProgramRevisionRead,
    AIProgramStatistics,
    AIProgramTemplateToggle,
    AIProgramUpdate,
    AIWorkoutRead,
    AIWorkoutUpdate,
)
from trainer_aide.services.ai_programs import (
    create_revision,
    duplicate_program,
    get_program,
    load_workouts,
    program_statistics,
    workout_read,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _require_solo_practitioner(db: AsyncSession, program: AIProgram) -> None:
    """Only programs owned by a solo practitioner can be edited or deleted."""
    trainer = await db.get(User, program.trainer_id)
    if not trainer or trainer.role != UserRole.SOLO_PRACTITIONER:
        raise HTTPException(status_code=403, detail="Only solo practitioners can modify AI programs")


def _apply_workout_updates(workouts: list[AIWorkout], updates: list[AIWorkoutUpdate]) -> None:
    by_id = {w.id: w for w in workouts}
    for wu in updates:
        workout = by_id.get(wu.id)
        if workout is None:
            raise HTTPException(status_code=404, detail=f"Workout {wu.id} not found in this program")
        fields = wu.model_dump(exclude_unset=True, exclude={"id", "exercises"})
        apply_changes(workout, fields)
        if "is_completed" in fields:
            workout.completed_at = utcnow() if workout.is_completed else None

        exercises = {ex.id: ex for ex in workout.exercises}
        for eu in wu.exercises or []:
            ex = exercises.get(eu.id)
            if ex is None:
                raise HTTPException(status_code=404, detail=f"Exercise {eu.id} not found in workout {wu.id}")
            apply_changes(ex, eu.model_dump(exclude_unset=True, exclude={"id"}))


@router.get("", response_model=list[AIProgramRead])
async def list_programs(
    db: AsyncSession = Depends(get_db),
    trainer_id: uuid.UUID | None = None,
    client_profile_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
):
    """Programs newest first, by trainer and/or client."""
    stmt = select(AIProgram)
    if trainer_id:
        stmt = stmt.where(AIProgram.trainer_id == trainer_id)
    if client_profile_id:
        stmt = stmt.where(AIProgram.client_profile_id == client_profile_id)
    result = await db.execute(stmt.order_by(AIProgram.created_at.desc()).offset(skip).limit(limit))
    return list(result.scalars().all())


@router.get("/templates", response_model=list[AIProgramRead])
async def list_program_templates(db: AsyncSession = Depends(get_db)):
    """Published programs marked as templates."""
    result = await db.execute(
        select(AIProgram)
        .where(AIProgram.is_template.is_(True), AIProgram.is_published.is_(True))
        .order_by(AIProgram.created_at.desc())
    )
    return list(result.scalars().all())


@router.get("/{program_id}", response_model=AIProgramRead)
async def read_program(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    return await get_program(db, program_id)


@router.patch("/{program_id}", response_model=AIProgramRead)
async def update_program(
    program_id: uuid.UUID,
    payload: AIProgramUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Edit program fields and, optionally, nested workouts and exercises. Snapshots a revision."""
    program = await get_program(db, program_id)
    await _require_solo_practitioner(db, program)

    apply_changes(program, payload.model_dump(exclude_unset=True, exclude={"workouts"}))
    if payload.workouts:
        _apply_workout_updates(await load_workouts(db, program_id), payload.workouts)
    program.updated_at = utcnow()
    await db.flush()
    await create_revision(db, program, "Program updated", created_by=program.trainer_id)
    return await get_program(db, program_id)


@router.delete("/{program_id}", status_code=204)
async def delete_program(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a program and everything under it."""
    program = await get_program(db, program_id)
    await _require_solo_practitioner(db, program)
    await db.delete(program)
    logger.info("Deleted AI program %s", program_id)
    return None


@router.post("/{program_id}/assign", response_model=AIProgramRead)
async def assign_program(
    program_id: uuid.UUID,
    payload: AIProgramAssign,
    db: AsyncSession = Depends(get_db),
):
    """Give the program to a client; it becomes active."""
    program = await get_program(db, program_id)
    if not await db.get(ClientProfile, payload.client_profile_id):
        raise HTTPException(status_code=404, detail="Client profile not found")
    program.client_profile_id = payload.client_profile_id
    program.status = ProgramStatus.ACTIVE
    program.updated_at = utcnow()
    await db.flush()
    return await get_program(db, program_id)


@router.post("/{program_id}/template", response_model=AIProgramRead)
async def toggle_program_template(
    program_id: uuid.UUID,
    payload: AIProgramTemplateToggle,
    db: AsyncSession = Depends(get_db),
):
    """Mark or unmark as a template. Templates belong to no client."""
    program = await get_program(db, program_id)
    program.is_template = payload.is_template
    if payload.is_template:
        program.client_profile_id = None
    program.updated_at = utcnow()
    await db.flush()
    return await get_program(db, program_id)


@router.post("/{program_id}/duplicate", response_model=AIProgramRead, status_code=201)
async def duplicate(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    program = await get_program(db, program_id)
    copy = await duplicate_program(db, program)
    logger.info("Duplicated AI program %s as %s", program_id, copy.id)
    return await get_program(db, copy.id)


@router.get("/{program_id}/workouts", response_model=list[AIWorkoutRead])
async def list_program_workouts(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    week_number: int | None = None,
):
    """Workouts by week and day, with exercise prescriptions and names."""
    await get_program(db, program_id)
    workouts = await load_workouts(db, program_id)
    if week_number is not None:
        workouts = [w for w in workouts if w.week_number == week_number]
    return [workout_read(w) for w in workouts]


@router.get("/{program_id}/revisions", response_model=list[AIProgramRevisionRead])
async def list_program_revisions(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    await get_program(db, program_id)
    result = await db.execute(
        select(AIProgramRevision)
        .where(AIProgramRevision.program_id == program_id)
        .order_by(AIProgramRevision.revision_number.desc())
    )
    return list(result.scalars().all())


@router.get("/{program_id}/generations", response_model=list[AIGenerationRead])
async def list_program_generations(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Model runs (tokens, cost, latency) recorded for the program."""
    await get_program(db, program_id)
    result = await db.execute(
        select(AIGeneration).where(AIGeneration.entity_id == program_id).order_by(AIGeneration.created_at.desc())
    )
    return list(result.scalars().all())


@router.get("/{program_id}/statistics", response_model=AIProgramStatistics)
async def get_program_statistics(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    await get_program(db, program_id)
    return AIProgramStatistics(**program_statistics(await load_workouts(db, program_id)))
