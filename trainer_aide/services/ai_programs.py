"""AI program persistence helpers shared by endpoints and the generator."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from trainer_aide.core.enums import ProgramStatus
from trainer_aide.core.exceptions import NotFoundError
from trainer_aide.models.ai_program import AIProgram, AIProgramRevision, AIWorkout, AIWorkoutExercise
from trainer_aide.schemas.ai_program import AIProgramRead, AIWorkoutExerciseRead, AIWorkoutRead
from trainer_aide.services.calculations import round_half_up


async def get_program(db: AsyncSession, program_id: uuid.UUID) -> AIProgram:
    result = await db.execute(
        select(AIProgram).where(AIProgram.id == program_id).execution_options(populate_existing=True)
    )
    program = result.scalar_one_or_none()
    if not program:
        raise NotFoundError("AI program not found")
    return program


def workouts_query(program_id: uuid.UUID):
    return (
        select(AIWorkout)
        .where(AIWorkout.program_id == program_id)
        .options(selectinload(AIWorkout.exercises).selectinload(AIWorkoutExercise.exercise))
        .order_by(AIWorkout.week_number, AIWorkout.day_number)
        .execution_options(populate_existing=True)
    )


async def load_workouts(db: AsyncSession, program_id: uuid.UUID) -> list[AIWorkout]:
    result = await db.execute(workouts_query(program_id))
    return list(result.scalars().all())


def exercise_read(ex: AIWorkoutExercise) -> AIWorkoutExerciseRead:
    read = AIWorkoutExerciseRead.model_validate(ex)
    read.exercise_name = ex.exercise.name if ex.exercise is not None else None
    return read


def workout_read(workout: AIWorkout) -> AIWorkoutRead:
    read = AIWorkoutRead.model_validate(workout, from_attributes=True)
    read.exercises = [exercise_read(ex) for ex in workout.exercises]
    return read


def program_snapshot(program: AIProgram, workouts: list[AIWorkout]) -> dict[str, Any]:
    """JSON-safe copy of a program, its workouts and their exercises."""
    return {
        "program": AIProgramRead.model_validate(program).model_dump(mode="json"),
        "workouts": [
            workout_read(w).model_dump(mode="json", exclude={"exercises"}) for w in workouts
        ],
        "exercises": [exercise_read(ex).model_dump(mode="json") for w in workouts for ex in w.exercises],
    }


async def next_revision_number(db: AsyncSession, program_id: uuid.UUID) -> int:
    result = await db.execute(
        select(func.max(AIProgramRevision.revision_number)).where(AIProgramRevision.program_id == program_id)
    )
    return (result.scalar() or 0) + 1


async def create_revision(
    db: AsyncSession,
    program: AIProgram,
    change_description: str,
    created_by: uuid.UUID | None = None,
) -> AIProgramRevision:
    workouts = await load_workouts(db, program.id)
    revision = AIProgramRevision(
        program_id=program.id,
        revision_number=await next_revision_number(db, program.id),
        program_snapshot=program_snapshot(program, workouts),
        change_description=change_description,
        created_by=created_by,
    )
    db.add(revision)
    await db.flush()
    return revision


def program_statistics(workouts: list[AIWorkout]) -> dict[str, int]:
    total = len(workouts)
    completed = sum(1 for w in workouts if w.is_completed)
    return {
        "total_workouts": total,
        "completed_workouts": completed,
        "total_exercises": sum(len(w.exercises) for w in workouts),
        "completion_percentage": round_half_up(completed / total * 100) if total else 0,
    }


_PROGRAM_COPY_FIELDS = (
    "trainer_id",
    "created_by",
    "description",
    "total_weeks",
    "sessions_per_week",
    "session_duration_minutes",
    "primary_goal",
    "secondary_goals",
    "experience_level",
    "ai_model",
    "generation_prompt_version",
    "ai_rationale",
    "movement_balance_summary",
    "allow_client_modifications",
    "generation_status",
    "generation_error",
    "progress_message",
    "current_step",
    "total_steps",
    "progress_percentage",
    "generated_at",
)
_WORKOUT_COPY_FIELDS = (
    "week_number",
    "day_number",
    "session_order",
    "workout_name",
    "workout_focus",
    "session_type",
    "planned_duration_minutes",
    "movement_patterns_covered",
    "planes_of_motion_covered",
    "primary_muscle_groups",
    "ai_rationale",
)
_EXERCISE_COPY_FIELDS = (
    "exercise_id",
    "exercise_order",
    "block_label",
    "sets",
    "reps_target",
    "target_load_kg",
    "target_rpe",
    "target_rir",
    "tempo",
    "rest_seconds",
    "is_unilateral",
    "is_bodyweight",
    "coaching_cues",
    "modifications",
)


async def duplicate_program(db: AsyncSession, program: AIProgram) -> AIProgram:
    """Draft copy with no client, not a template, not published.

    Prescriptions and generation state are copied; generation logs and revisions are not.
    """
    copy = AIProgram(
        **{f: getattr(program, f) for f in _PROGRAM_COPY_FIELDS},
        program_name=f"{program.program_name} (Copy)",
        client_profile_id=None,
        status=ProgramStatus.DRAFT,
        is_template=False,
        is_published=False,
    )
    db.add(copy)
    await db.flush()
    for workout in await load_workouts(db, program.id):
        new_workout = AIWorkout(program_id=copy.id, **{f: getattr(workout, f) for f in _WORKOUT_COPY_FIELDS})
        db.add(new_workout)
        await db.flush()
        for ex in workout.exercises:
            db.add(AIWorkoutExercise(workout_id=new_workout.id, **{f: getattr(ex, f) for f in _EXERCISE_COPY_FIELDS}))
    await db.flush()
    return copy
