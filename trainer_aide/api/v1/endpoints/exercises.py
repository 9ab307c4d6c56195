"""Exercise library endpoints."""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.core.enums import ExerciseLevel
from trainer_aide.db.base import apply_changes
from trainer_aide.db.session import get_db
from trainer_aide.models.exercise import Exercise
from trainer_aide.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    db: AsyncSession = Depends(get_db),
    equipment: str | None = None,
    level: ExerciseLevel | None = None,
    movement_pattern: str | None = None,
    exercise_type: str | None = None,
    anatomical_category: str | None = None,
    is_bodyweight: bool | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 100,
):
    """List exercises, filtered by any combination of the query params."""
    stmt = select(Exercise)
    if equipment:
        stmt = stmt.where(Exercise.equipment == equipment)
    if level:
        stmt = stmt.where(Exercise.level == level)
    if movement_pattern:
        stmt = stmt.where(Exercise.movement_pattern == movement_pattern)
    if exercise_type:
        stmt = stmt.where(Exercise.exercise_type == exercise_type)
    if anatomical_category:
        stmt = stmt.where(Exercise.anatomical_category == anatomical_category)
    if is_bodyweight is not None:
        stmt = stmt.where(Exercise.is_bodyweight.is_(is_bodyweight))
    if search:
        stmt = stmt.where(Exercise.name.ilike(f"%{search.strip()}%"))
    result = await db.execute(stmt.order_by(Exercise.name).offset(skip).limit(limit))
    return list(result.scalars().all())


@router.get("/equipment", response_model=list[str])
async def list_equipment(db: AsyncSession = Depends(get_db)):
    """Distinct equipment values in the library."""
    result = await db.execute(
        select(Exercise.equipment).where(Exercise.equipment.is_not(None)).distinct().order_by(Exercise.equipment)
    )
    return [e for e in result.scalars().all() if e]


@router.get("/categories", response_model=list[str])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """Distinct anatomical categories in the library."""
    result = await db.execute(
        select(Exercise.anatomical_category).distinct().order_by(Exercise.anatomical_category)
    )
    return [c for c in result.scalars().all() if c]


@router.get("/slug/{slug}", response_model=ExerciseRead)
async def get_exercise_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Exercise).where(Exercise.slug == slug))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    existing = await db.execute(select(Exercise.id).where(Exercise.slug == payload.slug))
    if existing.first():
        raise HTTPException(status_code=409, detail="An exercise with this slug already exists")
    exercise = Exercise(**payload.model_dump())
    db.add(exercise)
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a single exercise by id."""
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.patch("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an exercise (partial)."""
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    apply_changes(exercise, payload.model_dump(exclude_unset=True))
    await db.flush()
    await db.refresh(exercise)
    return exercise


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Exercise).where(Exercise.id == exercise_id))
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    await db.delete(exercise)
    return None
