"""Background pipeline that turns a generation request into a stored AI program.

Linear and single attempt: filter exercises, build prompts, call the model in
week chunks, validate, persist, log and snapshot. Any failure is recorded on
the program row instead of escaping the background task.
"""

from __future__ import annotations

import copy
import logging
import math
import time
import uuid
from collections.abc import Callable
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.core.constants import (
    CHUNK_MAX_TOKENS,
    CHUNK_MIN_TOKENS,
    CHUNK_WEEKS,
    MIN_EXERCISES_PER_SESSION,
    PROMPT_VERSION,
    SINGLE_CHUNK_MAX_WEEKS,
)
from trainer_aide.core.enums import GenerationStatus, SessionType
from trainer_aide.core.exceptions import AIClientError, ProgramGenerationError, ProgramValidationError
from trainer_aide.db.base import utcnow
from trainer_aide.models.ai_program import (
    AIGeneration,
    AINutritionPlan,
    AIProgram,
    AIWorkout,
    AIWorkoutExercise,
)
from trainer_aide.models.exercise import Exercise
from trainer_aide.schemas.ai_program import ProgramGenerationInput
from trainer_aide.services.ai_programs import create_revision
from trainer_aide.services.anthropic_client import ClaudeClient, ClaudeUsage, estimate_cost
from trainer_aide.services.calculations import round_half_up
from trainer_aide.services.exercise_filter import filter_exercises_for_client
from trainer_aide.services.workout_prompt import build_chunk_prompt, generate_workout_prompt

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AsyncSession]

NUTRITION_DISCLAIMER = "AI-generated - review with a nutritionist before implementation"


def chunk_size_for(total_weeks: int) -> int:
    return total_weeks if total_weeks <= SINGLE_CHUNK_MAX_WEEKS else CHUNK_WEEKS


def chunk_ranges(total_weeks: int) -> list[tuple[int, int]]:
    """Inclusive (start_week, end_week) per model call."""
    size = chunk_size_for(total_weeks)
    chunks = math.ceil(total_weeks / size)
    return [(i * size + 1, min((i + 1) * size, total_weeks)) for i in range(chunks)]


def chunk_max_tokens(weeks_in_chunk: int, sessions_per_week: int) -> int:
    estimated = 5000 + weeks_in_chunk * sessions_per_week * 6 * 180
    return min(CHUNK_MAX_TOKENS, max(CHUNK_MIN_TOKENS, estimated))


def merge_chunk(combined: dict[str, Any] | None, chunk: dict[str, Any]) -> dict[str, Any]:
    """First chunk is the base; later chunks only contribute weeks."""
    if combined is None:
        base = copy.deepcopy(chunk)
        base["weekly_structure"] = list(base.get("weekly_structure") or [])
        return base
    combined["weekly_structure"].extend(chunk.get("weekly_structure") or [])
    return combined


def validate_generated_program(program: dict[str, Any], exercise_ids: set[str]) -> list[str]:
    errors: list[str] = []
    if not program.get("program_name"):
        errors.append("Missing program_name")
    if not program.get("total_weeks"):
        errors.append("Missing total_weeks")
    weeks = program.get("weekly_structure") or []
    if not weeks:
        errors.append("Missing weekly_structure")

    for week in weeks:
        week_number = week.get("week_number")
        workouts = week.get("workouts") or []
        if not workouts:
            errors.append(f"Week {week_number} has no workouts")
            continue
        for workout in workouts:
            exercises = workout.get("exercises") or []
            if not exercises:
                errors.append(f"Week {week_number}, day {workout.get('day_number')} has no exercises")
                continue
            for ex in exercises:
                if str(ex.get("exercise_id")) not in exercise_ids:
                    errors.append(f"Invalid exercise_id: {ex.get('exercise_id')}")
    return errors


def dedupe_weeks(weekly_structure: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep the first occurrence of each week_number, sorted ascending."""
    unique: dict[int, dict[str, Any]] = {}
    for week in weekly_structure:
        unique.setdefault(week["week_number"], week)
    if len(unique) != len(weekly_structure):
        logger.warning("Removed %s duplicate weeks", len(weekly_structure) - len(unique))
    return [unique[k] for k in sorted(unique)]


def _session_type(value: Any) -> SessionType | None:
    try:
        return SessionType(value)
    except ValueError:
        return None


async def _progress(db: AsyncSession, program: AIProgram, **fields: Any) -> None:
    for key, value in fields.items():
        setattr(program, key, value)
    await db.commit()


async def _save_workouts(
    db: AsyncSession,
    program: AIProgram,
    weeks: list[dict[str, Any]],
    library: dict[str, Exercise],
    session_duration_minutes: int,
) -> tuple[int, int]:
    """Upsert workouts by (program, week, day) and replace their exercises."""
    result = await db.execute(select(AIWorkout).where(AIWorkout.program_id == program.id))
    existing = {(w.week_number, w.day_number): w for w in result.scalars().all()}

    saved_workouts = saved_exercises = 0
    for week in weeks:
        seen_days: set[int] = set()
        for order, data in enumerate(week["workouts"], start=1):
            day = data.get("day_number") or order
            if day in seen_days:
                logger.warning("Week %s has day %s twice; keeping the first", week["week_number"], day)
                continue
            seen_days.add(day)

            workout = existing.get((week["week_number"], day))
            if workout is None:
                workout = AIWorkout(program_id=program.id, week_number=week["week_number"], day_number=day)
                db.add(workout)
            else:
                result = await db.execute(select(AIWorkoutExercise).where(AIWorkoutExercise.workout_id == workout.id))
                for old in result.scalars().all():
                    await db.delete(old)
            workout.session_order = order
            workout.workout_name = data.get("workout_name") or f"Week {week['week_number']} Day {day}"
            workout.workout_focus = data.get("workout_focus")
            workout.session_type = _session_type(data.get("session_type"))
            workout.planned_duration_minutes = session_duration_minutes
            workout.movement_patterns_covered = data.get("movement_patterns_covered") or []
            workout.planes_of_motion_covered = data.get("planes_of_motion_covered") or []
            workout.primary_muscle_groups = data.get("primary_muscle_groups") or []
            workout.ai_rationale = data.get("ai_rationale")
            await db.flush()
            saved_workouts += 1

            for position, ex in enumerate(data["exercises"], start=1):
                library_ex = library[str(ex["exercise_id"])]
                db.add(
                    AIWorkoutExercise(
                        workout_id=workout.id,
                        exercise_id=library_ex.id,
                        exercise_order=ex.get("exercise_order") or position,
                        block_label=ex.get("block_label"),
                        sets=ex.get("sets"),
                        reps_target=str(ex["reps_target"]) if ex.get("reps_target") is not None else None,
                        target_rpe=ex.get("target_rpe"),
                        target_rir=ex.get("target_rir"),
                        tempo=ex.get("tempo"),
                        rest_seconds=ex.get("rest_seconds"),
                        is_unilateral=bool(library_ex.is_unilateral),
                        is_bodyweight=bool(library_ex.is_bodyweight),
                        coaching_cues=ex.get("coaching_cues") or [],
                        modifications=ex.get("modifications") or [],
                    )
                )
                saved_exercises += 1
    await db.flush()
    return saved_workouts, saved_exercises


async def generate_program(
    db: AsyncSession,
    program: AIProgram,
    request: ProgramGenerationInput,
    claude: ClaudeClient,
) -> None:
    """Run every pipeline step against an existing program row. Raises on failure."""
    started = time.perf_counter()
    ranges = chunk_ranges(request.total_weeks)
    total_steps = 2 + len(ranges) * 2 + 3

    await _progress(
        db,
        program,
        progress_message="Filtering exercises from library...",
        current_step=1,
        total_steps=total_steps,
        progress_percentage=5,
    )
    result = await db.execute(select(Exercise).order_by(Exercise.name))
    filtered, _stats = filter_exercises_for_client(
        list(result.scalars().all()),
        request.available_equipment,
        request.experience_level,
        request.injuries,
        request.exercise_aversions,
    )
    min_required = request.sessions_per_week * MIN_EXERCISES_PER_SESSION
    if len(filtered) < min_required:
        raise ProgramGenerationError(
            f"Insufficient exercises: only {len(filtered)} available (need at least {min_required})"
        )
    await _progress(
        db,
        program,
        progress_message=f"Filtered to {len(filtered)} exercises",
        current_step=2,
        progress_percentage=10,
    )

    system_prompt, user_prompt = generate_workout_prompt(request, filtered)

    combined: dict[str, Any] | None = None
    usage = ClaudeUsage()
    model = claude.model
    for index, (start_week, end_week) in enumerate(ranges):
        label = f"{start_week}" if start_week == end_week else f"{start_week}-{end_week}"
        await _progress(
            db,
            program,
            progress_message=f"Generating week {label} (chunk {index + 1}/{len(ranges)})...",
            current_step=2 + index * 2 + 1,
            progress_percentage=round_half_up(10 + index / len(ranges) * 75),
        )
        prompt = build_chunk_prompt(
            user_prompt,
            start_week,
            end_week,
            request.total_weeks,
            request.sessions_per_week,
            combined["weekly_structure"] if combined else None,
        )
        max_tokens = chunk_max_tokens(end_week - start_week + 1, request.sessions_per_week)
        logger.info("Program %s: chunk %s/%s weeks %s, max_tokens=%s", program.id, index + 1, len(ranges), label, max_tokens)
        try:
            data, raw = await claude.call_claude_json(system_prompt, prompt, max_tokens=max_tokens)
        except AIClientError as e:
            raise ProgramGenerationError(f"Chunk {index + 1} failed: {e}") from e
        if not isinstance(data, dict):
            raise ProgramGenerationError(f"Chunk {index + 1} failed: expected a JSON object")
        if data.get("error"):
            raise ProgramGenerationError(str(data["error"]))

        usage.input_tokens += raw.usage.input_tokens
        usage.output_tokens += raw.usage.output_tokens
        model = raw.model or model
        combined = merge_chunk(combined, data)
        await _progress(
            db,
            program,
            progress_message=f"Week {label} complete",
            current_step=2 + index * 2 + 2,
            progress_percentage=round_half_up(10 + (index + 1) / len(ranges) * 75),
        )

    await _progress(
        db,
        program,
        progress_message="Validating program structure...",
        current_step=total_steps - 2,
        progress_percentage=87,
    )
    library = {str(ex.id): ex for ex in filtered}
    errors = validate_generated_program(combined, set(library))
    if errors:
        raise ProgramValidationError(f"Validation failed: {', '.join(errors)}", errors)

    program.description = combined.get("description") or program.description
    program.ai_rationale = combined.get("ai_rationale")
    program.movement_balance_summary = combined.get("movement_balance_summary")
    program.ai_model = model
    program.generation_prompt_version = PROMPT_VERSION

    weeks = dedupe_weeks(combined["weekly_structure"])
    saved_workouts, saved_exercises = await _save_workouts(
        db, program, weeks, library, request.session_duration_minutes
    )
    logger.info("Program %s: saved %s workouts, %s exercises", program.id, saved_workouts, saved_exercises)
    await _progress(
        db,
        program,
        progress_message=f"Saving {saved_workouts} workouts and exercises...",
        current_step=total_steps - 1,
        progress_percentage=93,
    )

    if request.include_nutrition and request.client_profile_id:
        db.add(
            AINutritionPlan(
                program_id=program.id,
                ai_rationale="Nutrition plan to be customized",
                disclaimer=NUTRITION_DISCLAIMER,
            )
        )

    db.add(
        AIGeneration(
            entity_id=program.id,
            status="completed",
            ai_model=model,
            prompt_version=PROMPT_VERSION,
            input_tokens=usage.input_tokens,
            output_tokens=usage.output_tokens,
            estimated_cost_usd=estimate_cost(model, usage),
            latency_ms=int((time.perf_counter() - started) * 1000),
        )
    )
    await db.flush()
    await create_revision(db, program, "Initial AI-generated program", created_by=request.trainer_id)

    await _progress(
        db,
        program,
        generation_status=GenerationStatus.COMPLETED,
        generation_error=None,
        progress_message="Program generation complete!",
        current_step=total_steps,
        progress_percentage=100,
        generated_at=utcnow(),
    )


async def run_program_generation(
    program_id: uuid.UUID,
    request: ProgramGenerationInput,
    claude: ClaudeClient,
    session_factory: SessionFactory,
) -> None:
    """Background-task entry point: never raises, records failures on the program."""
    logger.info("Starting background generation for program %s", program_id)
    started = time.perf_counter()
    async with session_factory() as db:
        program = await db.get(AIProgram, program_id)
        if program is None:
            logger.error("Program %s vanished before generation started", program_id)
            return
        try:
            await generate_program(db, program, request, claude)
        except Exception as e:
            logger.exception("Generation failed for program %s", program_id)
            await db.rollback()
            message = str(e) or type(e).__name__
            await db.execute(
                update(AIProgram)
                .where(AIProgram.id == program_id)
                .values(generation_status=GenerationStatus.FAILED, generation_error=message)
            )
            db.add(
                AIGeneration(
                    entity_id=program_id,
                    status="failed",
                    ai_model=claude.model,
                    prompt_version=PROMPT_VERSION,
                    latency_ms=int((time.perf_counter() - started) * 1000),
                    error_message=message,
                )
            )
            await db.commit()
            return
    logger.info("Generation complete for program %s in %.1fs", program_id, time.perf_counter() - started)
