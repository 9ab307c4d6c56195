"""Kick off AI program generation in the background and poll its progress."""

import logging
import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trainer_aide.core.config import get_settings
from trainer_aide.core.constants import MAX_PROGRAM_WEEKS, MAX_SESSIONS_PER_WEEK
from trainer_aide.core.enums import GenerationStatus, ProgramStatus
from trainer_aide.db.session import get_db, get_session_factory
from trainer_aide.models.ai_program import AIProgram
from trainer_aide.models.user import ClientProfile, User
from trainer_aide.schemas.ai_program import (
    GenerateProgramRequest,
    GenerateProgramResponse,
    GenerationStatusRead,
    ProgramGenerationInput,
)
from trainer_aide.services.anthropic_client import ClaudeClient, get_claude_client
from trainer_aide.services.client_constraints import extract_workout_constraints
from trainer_aide.services.program_generation import run_program_generation

logger = logging.getLogger(__name__)

router = APIRouter()


def _resolve_input(payload: GenerateProgramRequest, profile: ClientProfile | None) -> ProgramGenerationInput:
    """Profile-derived constraints when a client is given, otherwise the manual fields."""
    common = {
        "trainer_id": payload.trainer_id,
        "total_weeks": payload.total_weeks,
        "sessions_per_week": payload.sessions_per_week,
        "session_duration_minutes": payload.session_duration_minutes,
        "include_nutrition": payload.include_nutrition,
    }
    if profile is not None:
        c = extract_workout_constraints(profile)
        return ProgramGenerationInput(
            **common,
            client_profile_id=profile.id,
            primary_goal=c.primary_goal.value,
            secondary_goals=c.secondary_goals,
            experience_level=c.experience_level.value,
            available_equipment=c.available_equipment,
            training_location=c.training_location,
            injuries=c.injuries,
            physical_limitations=c.physical_limitations,
            exercise_aversions=c.exercise_aversions,
            preferred_exercise_types=c.preferred_exercise_types,
            preferred_movement_patterns=c.preferred_movement_patterns,
        )
    return ProgramGenerationInput(
        **common,
        primary_goal=payload.primary_goal.value,
        secondary_goals=payload.secondary_goals,
        experience_level=payload.experience_level.value,
        available_equipment=payload.available_equipment,
        training_location=payload.training_location or "home",
        injuries=payload.injuries,
        physical_limitations=payload.physical_limitations,
        exercise_aversions=payload.exercise_aversions,
        preferred_exercise_types=payload.preferred_exercise_types,
        preferred_movement_patterns=payload.preferred_movement_patterns,
    )


@router.post("/generate-program", response_model=GenerateProgramResponse, status_code=202)
async def generate_program(
    payload: GenerateProgramRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    claude: ClaudeClient = Depends(get_claude_client),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    """Create the program row and generate its workouts in the background.

    Poll GET /ai/programs/{id}/status for progress.
    """
    if not payload.trainer_id:
        raise HTTPException(status_code=400, detail="trainer_id is required")
    if not 1 <= payload.total_weeks <= MAX_PROGRAM_WEEKS:
        raise HTTPException(status_code=400, detail=f"total_weeks must be between 1 and {MAX_PROGRAM_WEEKS}")
    if not 1 <= payload.sessions_per_week <= MAX_SESSIONS_PER_WEEK:
        raise HTTPException(
            status_code=400, detail=f"sessions_per_week must be between 1 and {MAX_SESSIONS_PER_WEEK}"
        )
    if not await db.get(User, payload.trainer_id):
        raise HTTPException(status_code=404, detail="Trainer not found")

    profile = None
    if payload.client_profile_id:
        profile = await db.get(ClientProfile, payload.client_profile_id)
        if not profile:
            raise HTTPException(status_code=404, detail="Client profile not found")
    elif payload.primary_goal is None or payload.experience_level is None or payload.available_equipment is None:
        raise HTTPException(
            status_code=400,
            detail="Without client_profile_id, primary_goal, experience_level and available_equipment are required",
        )

    request = _resolve_input(payload, profile)
    if payload.program_name:
        name = payload.program_name
    elif profile is not None:
        name = f"{profile.first_name}'s Training Program"
    else:
        name = "AI-Generated Training Program"

    program = AIProgram(
        client_profile_id=request.client_profile_id,
        trainer_id=request.trainer_id,
        created_by=request.trainer_id,
        program_name=name,
        description="Generating AI workout program...",
        status=ProgramStatus.DRAFT,
        total_weeks=request.total_weeks,
        sessions_per_week=request.sessions_per_week,
        session_duration_minutes=request.session_duration_minutes,
        primary_goal=request.primary_goal,
        secondary_goals=request.secondary_goals,
        experience_level=request.experience_level,
        ai_model=get_settings().ai_model,
        generation_status=GenerationStatus.GENERATING,
        progress_message="Queued for generation",
        progress_percentage=0,
    )
    db.add(program)
    await db.flush()
    # Background session must see the row.
    await db.commit()

    background_tasks.add_task(run_program_generation, program.id, request, claude, session_factory)
    logger.info("Queued generation for program %s (%s weeks x %s sessions)", program.id, request.total_weeks, request.sessions_per_week)
    return GenerateProgramResponse(
        program_id=program.id,
        generation_status=GenerationStatus.GENERATING,
        message="Program generation started",
    )


@router.get("/programs/{program_id}/status", response_model=GenerationStatusRead)
async def get_generation_status(
    program_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    program = await db.get(AIProgram, program_id, populate_existing=True)
    if not program:
        raise HTTPException(status_code=404, detail="AI program not found")
    return program
