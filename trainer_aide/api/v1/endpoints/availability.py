"""Trainer availability: weekly and one-time windows, open or blocked."""

import uuid
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.core.enums import AvailabilityBlockType
from trainer_aide.db.base import apply_changes
from trainer_aide.db.session import get_db
from trainer_aide.models.calendar import AvailabilityBlock
from trainer_aide.models.user import User
from trainer_aide.schemas.calendar import (
    AvailabilityBlockBase,
    AvailabilityBlockCreate,
    AvailabilityBlockRead,
    AvailabilityBlockUpdate,
)
from trainer_aide.services.availability import blocks_for_date, default_blocks, is_within_availability

router = APIRouter()


async def _require_trainer(db: AsyncSession, trainer_id: uuid.UUID) -> None:
    if not await db.get(User, trainer_id):
        raise HTTPException(status_code=404, detail="Trainer not found")


async def _trainer_blocks(db: AsyncSession, trainer_id: uuid.UUID) -> list[AvailabilityBlock]:
    result = await db.execute(
        select(AvailabilityBlock)
        .where(AvailabilityBlock.trainer_id == trainer_id)
        .order_by(AvailabilityBlock.day_of_week, AvailabilityBlock.specific_date, AvailabilityBlock.start_hour)
    )
    return list(result.scalars().all())


async def _get_block(db: AsyncSession, trainer_id: uuid.UUID, block_id: uuid.UUID) -> AvailabilityBlock:
    result = await db.execute(
        select(AvailabilityBlock).where(AvailabilityBlock.id == block_id, AvailabilityBlock.trainer_id == trainer_id)
    )
    block = result.scalar_one_or_none()
    if not block:
        raise HTTPException(status_code=404, detail="Availability block not found")
    return block


@router.get("/{trainer_id}/availability", response_model=list[AvailabilityBlockRead])
async def list_availability(
    trainer_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    block_type: AvailabilityBlockType | None = None,
):
    """All blocks, or only available / blocked ones."""
    blocks = await _trainer_blocks(db, trainer_id)
    if block_type:
        blocks = [b for b in blocks if b.block_type == block_type]
    return blocks


@router.get("/{trainer_id}/availability/date/{on_date}", response_model=list[AvailabilityBlockRead])
async def availability_for_date(
    trainer_id: uuid.UUID,
    on_date: date,
    db: AsyncSession = Depends(get_db),
):
    """Weekly blocks for that weekday plus one-time blocks covering the date."""
    return blocks_for_date(await _trainer_blocks(db, trainer_id), on_date)


@router.get("/{trainer_id}/availability/check")
async def check_availability(
    trainer_id: uuid.UUID,
    at: datetime,
    db: AsyncSession = Depends(get_db),
):
    """Whether `at` (trainer's wall-clock time) is bookable."""
    blocks = await _trainer_blocks(db, trainer_id)
    return {"trainer_id": trainer_id, "at": at, "available": is_within_availability(blocks, at)}


@router.post("/{trainer_id}/availability", response_model=AvailabilityBlockRead, status_code=201)
async def add_availability_block(
    trainer_id: uuid.UUID,
    payload: AvailabilityBlockCreate,
    db: AsyncSession = Depends(get_db),
):
    await _require_trainer(db, trainer_id)
    block = AvailabilityBlock(trainer_id=trainer_id, **payload.model_dump())
    db.add(block)
    await db.flush()
    await db.refresh(block)
    return block


@router.put("/{trainer_id}/availability", response_model=list[AvailabilityBlockRead])
async def replace_availability(
    trainer_id: uuid.UUID,
    payload: list[AvailabilityBlockCreate],
    db: AsyncSession = Depends(get_db),
):
    """Replace every block for the trainer."""
    await _require_trainer(db, trainer_id)
    await db.execute(delete(AvailabilityBlock).where(AvailabilityBlock.trainer_id == trainer_id))
    db.add_all(AvailabilityBlock(trainer_id=trainer_id, **b.model_dump()) for b in payload)
    await db.flush()
    return await _trainer_blocks(db, trainer_id)


@router.post("/{trainer_id}/availability/reset", response_model=list[AvailabilityBlockRead])
async def reset_availability(
    trainer_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Back to the default week (Mon-Fri 06-20, Sat 07-12, lunch and admin blocked)."""
    await _require_trainer(db, trainer_id)
    await db.execute(delete(AvailabilityBlock).where(AvailabilityBlock.trainer_id == trainer_id))
    db.add_all(default_blocks(trainer_id))
    await db.flush()
    return await _trainer_blocks(db, trainer_id)


@router.patch("/{trainer_id}/availability/{block_id}", response_model=AvailabilityBlockRead)
async def update_availability_block(
    trainer_id: uuid.UUID,
    block_id: uuid.UUID,
    payload: AvailabilityBlockUpdate,
    db: AsyncSession = Depends(get_db),
):
    block = await _get_block(db, trainer_id, block_id)
    merged = AvailabilityBlockRead.model_validate(block).model_dump(include=set(AvailabilityBlockBase.model_fields))
    merged.update(payload.model_dump(exclude_unset=True))
    try:
        AvailabilityBlockBase.model_validate(merged)
    except PydanticValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False)) from e
    apply_changes(block, payload.model_dump(exclude_unset=True))
    await db.flush()
    await db.refresh(block)
    return block


@router.delete("/{trainer_id}/availability/{block_id}", status_code=204)
async def remove_availability_block(
    trainer_id: uuid.UUID,
    block_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    block = await _get_block(db, trainer_id, block_id)
    await db.delete(block)
    return None
