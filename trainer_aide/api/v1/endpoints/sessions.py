"""Training sessions - start, log, sign off - plus the per-session countdown timer."""

from __future__ import annotations

import logging
import math
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from trainer_aide.core.config import get_settings
from trainer_aide.core.enums import SignOffMode
from trainer_aide.db.base import apply_changes, as_utc, utcnow
from trainer_aide.db.session import get_db
from trainer_aide.models.ai_program import AIWorkout, AIWorkoutExercise
from trainer_aide.models.template import TemplateBlock, WorkoutTemplate
from trainer_aide.models.training_session import SessionBlock, SessionExercise, SessionTimer, TrainingSession
from trainer_aide.models.user import ClientProfile, User
from trainer_aide.schemas.session import (
    BlockComplete,
    SessionBlockRead,
    SessionBlockUpdate,
    SessionExerciseRead,
    SessionExerciseUpdate,
    SessionProgress,
    SessionSummary,
    TimerStart,
    TimerState,
    TrainingSessionComplete,
    TrainingSessionRead,
    TrainingSessionStart,
    TrainingSessionUpdate,
)
from trainer_aide.services import session_timer
from trainer_aide.services.ai_workout_converter import ai_workout_session_name, convert_ai_workout_to_session_blocks
from trainer_aide.services.calculations import calculate_exercise_progress, format_duration

logger = logging.getLogger(__name__)

router = APIRouter()

_COPIED_FIELDS = (
    "exercise_id",
    "position",
    "muscle_group",
    "resistance_type",
    "resistance_value",
    "reps_min",
    "reps_max",
    "sets",
    "cardio_duration",
    "cardio_intensity",
)


def _session_query():
    return select(TrainingSession).options(
        selectinload(TrainingSession.blocks).selectinload(SessionBlock.exercises),
        selectinload(TrainingSession.timer),
        selectinload(TrainingSession.template),
    )


async def _load_session(db: AsyncSession, session_id: uuid.UUID) -> TrainingSession:
    result = await db.execute(
        _session_query().where(TrainingSession.id == session_id).execution_options(populate_existing=True)
    )
    s = result.scalar_one_or_none()
    if not s:
        raise HTTPException(status_code=404, detail="Session not found")
    return s


def _blocks_from_dicts(blocks: list[dict]) -> list[SessionBlock]:
    return [
        SessionBlock(
            block_number=b["block_number"],
            name=b.get("name", ""),
            exercises=[SessionExercise(**ex) for ex in b["exercises"]],
        )
        for b in blocks
    ]


def _template_block_dicts(blocks: list[TemplateBlock]) -> list[dict]:
    return [
        {
            "block_number": b.block_number,
            "name": b.name,
            "exercises": [{f: getattr(ex, f) for f in _COPIED_FIELDS} for ex in b.exercises],
        }
        for b in blocks
    ]


def _with_client(name: str, client: ClientProfile | None) -> str:
    return f"{name} with {client.first_name}" if client else name


def _timer_state(s: TrainingSession, timer: SessionTimer | None) -> TimerState:
    if timer is None:
        total = get_settings().default_timer_seconds
        return TimerState(
            session_id=s.id,
            total_seconds=total,
            seconds_left=total,
            formatted=format_duration(total),
            is_active=False,
            is_paused=False,
        )
    now = utcnow()
    interval = s.template.alert_interval_minutes if s.template else None
    next_alert, alerts_elapsed = session_timer.alert_progress(timer, interval, now)
    left = session_timer.seconds_left(timer, now)
    return TimerState(
        session_id=s.id,
        total_seconds=timer.total_seconds,
        seconds_left=left,
        formatted=format_duration(left),
        is_active=session_timer.is_active(timer),
        is_paused=timer.is_paused,
        start_time=timer.start_time,
        paused_at=timer.paused_at,
        accumulated_paused_seconds=timer.accumulated_paused_seconds or 0,
        alert_interval_minutes=interval,
        next_alert_in_seconds=next_alert,
        alerts_elapsed=alerts_elapsed,
    )


@router.post("", response_model=TrainingSessionRead, status_code=201)
async def start_session(
    payload: TrainingSessionStart,
    db: AsyncSession = Depends(get_db),
):
    """Start a session from a template, an AI workout or explicit blocks."""
    trainer = await db.get(User, payload.trainer_id)
    if not trainer:
        raise HTTPException(status_code=404, detail="Trainer not found")
    client = None
    if payload.client_profile_id:
        client = await db.get(ClientProfile, payload.client_profile_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client profile not found")

    sign_off_mode = payload.sign_off_mode
    if payload.template_id:
        result = await db.execute(
            select(WorkoutTemplate)
            .options(selectinload(WorkoutTemplate.blocks).selectinload(TemplateBlock.exercises))
            .where(WorkoutTemplate.id == payload.template_id)
        )
        template = result.scalar_one_or_none()
        if not template:
            raise HTTPException(status_code=404, detail="Template not found")
        blocks = _template_block_dicts(template.blocks)
        name = _with_client(template.name, client)
        sign_off_mode = sign_off_mode or template.default_sign_off_mode
    elif payload.ai_workout_id:
        result = await db.execute(
            select(AIWorkout)
            .options(selectinload(AIWorkout.exercises).selectinload(AIWorkoutExercise.exercise))
            .where(AIWorkout.id == payload.ai_workout_id)
        )
        workout = result.scalar_one_or_none()
        if not workout:
            raise HTTPException(status_code=404, detail="AI workout not found")
        blocks = convert_ai_workout_to_session_blocks(workout)
        name = ai_workout_session_name(workout, client.first_name if client else None)
    else:
        if not payload.blocks:
            raise HTTPException(status_code=400, detail="Session must have at least one block")
        blocks = [
            {
                "block_number": b.block_number,
                "name": b.name,
                "exercises": [ex.model_dump() for ex in b.exercises],
            }
            for b in payload.blocks
        ]
        name = _with_client("Custom Session", client)

    s = TrainingSession(
        trainer_id=payload.trainer_id,
        client_profile_id=payload.client_profile_id,
        template_id=payload.template_id,
        ai_workout_id=payload.ai_workout_id,
        session_name=payload.session_name or name,
        sign_off_mode=sign_off_mode or SignOffMode.FULL_SESSION,
        planned_duration_minutes=payload.planned_duration_minutes,
        started_at=utcnow(),
    )
    s.blocks = _blocks_from_dicts(blocks)
    if payload.start_timer:
        total = (payload.planned_duration_minutes or 0) * 60 or get_settings().default_timer_seconds
        s.timer = session_timer.start(SessionTimer(), total)
    db.add(s)
    await db.flush()
    logger.info("Started session %s (%s) for trainer %s", s.id, s.session_name, s.trainer_id)
    return await _load_session(db, s.id)


@router.get("", response_model=list[SessionSummary])
async def list_sessions(
    db: AsyncSession = Depends(get_db),
    trainer_id: uuid.UUID | None = None,
    client_profile_id: uuid.UUID | None = None,
    completed: bool | None = None,
    skip: int = 0,
    limit: int = 50,
):
    """List sessions (newest first). completed=false gives in-progress ones."""
    stmt = select(TrainingSession)
    if trainer_id:
        stmt = stmt.where(TrainingSession.trainer_id == trainer_id)
    if client_profile_id:
        stmt = stmt.where(TrainingSession.client_profile_id == client_profile_id)
    if completed is not None:
        stmt = stmt.where(TrainingSession.completed.is_(completed))
    stmt = stmt.order_by(TrainingSession.started_at.desc()).offset(skip).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


@router.get("/active", response_model=TrainingSessionRead | None)
async def get_active_session(
    trainer_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Most recently started in-progress session for a trainer, or null."""
    result = await db.execute(
        _session_query()
        .where(TrainingSession.trainer_id == trainer_id, TrainingSession.completed.is_(False))
        .order_by(TrainingSession.started_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


@router.get("/{session_id}", response_model=TrainingSessionRead)
async def get_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    return await _load_session(db, session_id)


@router.get("/{session_id}/progress", response_model=SessionProgress)
async def get_session_progress(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Completed vs total exercises across all blocks."""
    s = await _load_session(db, session_id)
    return SessionProgress(**calculate_exercise_progress(s))


@router.patch("/{session_id}", response_model=TrainingSessionRead)
async def update_session(
    session_id: uuid.UUID,
    payload: TrainingSessionUpdate,
    db: AsyncSession = Depends(get_db),
):
    s = await _load_session(db, session_id)
    apply_changes(s, payload.model_dump(exclude_unset=True))
    await db.flush()
    return await _load_session(db, session_id)


@router.post("/{session_id}/complete", response_model=TrainingSessionRead)
async def complete_session(
    session_id: uuid.UUID,
    payload: TrainingSessionComplete,
    db: AsyncSession = Depends(get_db),
):
    """Sign off: record RPE and notes, fix the duration, clear the timer."""
    s = await _load_session(db, session_id)
    if s.completed:
        raise HTTPException(status_code=409, detail="Session is already completed")
    now = utcnow()
    for k, v in payload.model_dump().items():
        if v is not None:
            setattr(s, k, v)
    s.completed = True
    s.completed_at = now
    s.duration_seconds = math.floor((now - as_utc(s.started_at)).total_seconds())
    s.timer = None
    await db.flush()
    logger.info("Completed session %s in %ss (RPE %s)", s.id, s.duration_seconds, s.overall_rpe)
    return await _load_session(db, session_id)


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    s = await _load_session(db, session_id)
    await db.delete(s)
    return None


# --- Blocks and exercises ---


async def _load_block(db: AsyncSession, session_id: uuid.UUID, block_id: uuid.UUID) -> SessionBlock:
    result = await db.execute(
        select(SessionBlock)
        .options(selectinload(SessionBlock.exercises))
        .where(SessionBlock.id == block_id, SessionBlock.session_id == session_id)
        .execution_options(populate_existing=True)
    )
    block = result.scalar_one_or_none()
    if not block:
        raise HTTPException(status_code=404, detail="Block not found")
    return block


async def _load_exercise(db: AsyncSession, session_id: uuid.UUID, exercise_id: uuid.UUID) -> SessionExercise:
    result = await db.execute(
        select(SessionExercise)
        .join(SessionBlock, SessionExercise.block_id == SessionBlock.id)
        .where(SessionExercise.id == exercise_id, SessionBlock.session_id == session_id)
    )
    ex = result.scalar_one_or_none()
    if not ex:
        raise HTTPException(status_code=404, detail="Exercise not found in this session")
    return ex


@router.patch("/{session_id}/blocks/{block_id}", response_model=SessionBlockRead)
async def update_block(
    session_id: uuid.UUID,
    block_id: uuid.UUID,
    payload: SessionBlockUpdate,
    db: AsyncSession = Depends(get_db),
):
    block = await _load_block(db, session_id, block_id)
    apply_changes(block, payload.model_dump(exclude_unset=True))
    await db.flush()
    return await _load_block(db, session_id, block_id)


@router.post("/{session_id}/blocks/{block_id}/complete", response_model=SessionBlockRead)
async def complete_block(
    session_id: uuid.UUID,
    block_id: uuid.UUID,
    payload: BlockComplete,
    db: AsyncSession = Depends(get_db),
):
    """Mark a block done with the client's RPE for it."""
    block = await _load_block(db, session_id, block_id)
    block.completed = True
    block.rpe = payload.rpe
    await db.flush()
    return await _load_block(db, session_id, block_id)


@router.patch("/{session_id}/exercises/{exercise_id}", response_model=SessionExerciseRead)
async def update_exercise(
    session_id: uuid.UUID,
    exercise_id: uuid.UUID,
    payload: SessionExerciseUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Log actuals (resistance, reps, duration) and RPE for one exercise."""
    ex = await _load_exercise(db, session_id, exercise_id)
    apply_changes(ex, payload.model_dump(exclude_unset=True))
    await db.flush()
    await db.refresh(ex)
    return ex


@router.post("/{session_id}/exercises/{exercise_id}/toggle", response_model=SessionExerciseRead)
async def toggle_exercise(
    session_id: uuid.UUID,
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    ex = await _load_exercise(db, session_id, exercise_id)
    ex.completed = not ex.completed
    await db.flush()
    await db.refresh(ex)
    return ex


# --- Timer ---


def _require_timer(s: TrainingSession) -> SessionTimer:
    if s.timer is None:
        raise HTTPException(status_code=404, detail="Timer not started for this session")
    return s.timer


@router.get("/{session_id}/timer", response_model=TimerState)
async def get_timer(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Current countdown; an unstarted timer reports the full default duration."""
    s = await _load_session(db, session_id)
    return _timer_state(s, s.timer)


@router.post("/{session_id}/timer/start", response_model=TimerState)
async def start_timer(
    session_id: uuid.UUID,
    payload: TimerStart,
    db: AsyncSession = Depends(get_db),
):
    s = await _load_session(db, session_id)
    if s.completed:
        raise HTTPException(status_code=409, detail="Session is already completed")
    total = payload.total_seconds or get_settings().default_timer_seconds
    if s.timer is None:
        s.timer = SessionTimer(session_id=s.id)
    session_timer.start(s.timer, total)
    await db.flush()
    return _timer_state(s, s.timer)


@router.post("/{session_id}/timer/pause", response_model=TimerState)
async def pause_timer(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    s = await _load_session(db, session_id)
    session_timer.pause(_require_timer(s))
    await db.flush()
    return _timer_state(s, s.timer)


@router.post("/{session_id}/timer/resume", response_model=TimerState)
async def resume_timer(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    s = await _load_session(db, session_id)
    session_timer.resume(_require_timer(s))
    await db.flush()
    return _timer_state(s, s.timer)


@router.post("/{session_id}/timer/reset", response_model=TimerState)
async def reset_timer(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    s = await _load_session(db, session_id)
    session_timer.reset(_require_timer(s))
    await db.flush()
    return _timer_state(s, s.timer)


@router.delete("/{session_id}/timer", response_model=TimerState)
async def clear_timer(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Drop the timer; the state falls back to an unstarted default countdown."""
    s = await _load_session(db, session_id)
    if s.timer is not None:
        s.timer = None
        await db.flush()
    return _timer_state(s, None)
