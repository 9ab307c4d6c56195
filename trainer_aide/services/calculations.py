"""Session progress, RPE, earnings and streak helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from trainer_aide.core.constants import DEFAULT_RATE_PER_SESSION
from trainer_aide.db.base import as_utc, utcnow
from trainer_aide.models.training_session import SessionBlock, TrainingSession


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded up (12.5 -> 13), unlike round()."""
    return math.floor(value + 0.5)


def calculate_exercise_progress(session: TrainingSession) -> dict[str, int]:
    total = sum(len(block.exercises) for block in session.blocks)
    completed = sum(1 for block in session.blocks for ex in block.exercises if ex.completed)
    percentage = round_half_up(completed / total * 100) if total else 0
    return {"completed": completed, "total": total, "percentage": percentage}


def calculate_block_progress(block: SessionBlock) -> int:
    total = len(block.exercises)
    if not total:
        return 0
    return round_half_up(sum(1 for ex in block.exercises if ex.completed) / total * 100)


def calculate_average_rpe(sessions: Iterable[TrainingSession]) -> int:
    """Rounded mean of overall RPE; sessions without RPE are ignored, 0 when none."""
    rpes = [s.overall_rpe for s in sessions if s.overall_rpe]
    if not rpes:
        return 0
    return round_half_up(sum(rpes) / len(rpes))


def calculate_earnings(completed_count: int, rate_per_session: float = DEFAULT_RATE_PER_SESSION) -> float:
    return completed_count * rate_per_session


def sessions_from_last_n_days(
    sessions: Iterable[TrainingSession], days: int = 7, now: datetime | None = None
) -> list[TrainingSession]:
    """Completed sessions started within the last `days` days."""
    start = (now or utcnow()) - timedelta(days=days)
    return [s for s in sessions if s.completed and as_utc(s.started_at) >= as_utc(start)]


def format_duration(seconds: int | float) -> str:
    """MM:SS; minutes are not wrapped at an hour."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def consistency_streak(session_dates: Iterable[date], today: date) -> tuple[int, int]:
    """(current, longest) runs of consecutive training days.

    The current streak only counts when the last session was today or yesterday.
    """
    dates = sorted(set(session_dates), reverse=True)
    if not dates:
        return 0, 0

    current = 0
    if dates[0] >= today - timedelta(days=1):
        current = 1
        for i in range(1, len(dates)):
            if dates[i] == dates[i - 1] - timedelta(days=1):
                current += 1
            else:
                break

    longest = run = 1
    for i in range(1, len(dates)):
        if dates[i] == dates[i - 1] - timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return current, longest
