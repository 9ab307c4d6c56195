"""Trainer dashboard numbers."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.core.config import get_settings
from trainer_aide.db.base import as_utc, utcnow
from trainer_aide.db.session import get_db
from trainer_aide.models.template import WorkoutTemplate
from trainer_aide.models.training_session import TrainingSession
from trainer_aide.schemas.stats import DashboardStats
from trainer_aide.services.calculations import (
    calculate_average_rpe,
    calculate_earnings,
    consistency_streak,
    sessions_from_last_n_days,
)

router = APIRouter()


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    trainer_id: uuid.UUID | None = None,
):
    """Session counts, average RPE, earnings and training streak (all trainers when trainer_id is omitted)."""
    stmt = select(TrainingSession)
    template_stmt = select(func.count()).select_from(WorkoutTemplate)
    if trainer_id:
        stmt = stmt.where(TrainingSession.trainer_id == trainer_id)
    result = await db.execute(stmt)
    sessions = list(result.scalars().all())
    template_count = (await db.execute(template_stmt)).scalar_one()

    now = utcnow()
    today = now.date()
    completed = [s for s in sessions if s.completed]
    current, longest = consistency_streak((as_utc(s.started_at).date() for s in completed), today)
    return DashboardStats(
        total_sessions=len(sessions),
        completed_sessions=len(completed),
        in_progress_sessions=len(sessions) - len(completed),
        sessions_today=sum(1 for s in completed if as_utc(s.started_at).date() == today),
        sessions_this_week=len(sessions_from_last_n_days(completed, 7, now)),
        sessions_this_month=len(sessions_from_last_n_days(completed, 30, now)),
        average_rpe=calculate_average_rpe(completed),
        earnings=calculate_earnings(len(completed), get_settings().rate_per_session),
        template_count=template_count,
        current_streak_days=current,
        longest_streak_days=longest,
    )
