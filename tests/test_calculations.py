from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from trainer_aide.models.training_session import SessionBlock, SessionExercise, TrainingSession
from trainer_aide.services.calculations import (
    calculate_average_rpe,
    calculate_block_progress,
    calculate_earnings,
    calculate_exercise_progress,
    consistency_streak,
    format_duration,
    round_half_up,
    sessions_from_last_n_days,
)

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def _block(*completed: bool) -> SessionBlock:
    return SessionBlock(exercises=[SessionExercise(exercise_id="push-up", completed=c) for c in completed])


def test_exercise_progress():
    session = TrainingSession(blocks=[_block(True, False), _block(True, True, False)])
    assert calculate_exercise_progress(session) == {"completed": 3, "total": 5, "percentage": 60}


def test_exercise_progress_empty_session():
    assert calculate_exercise_progress(TrainingSession(blocks=[])) == {"completed": 0, "total": 0, "percentage": 0}


def test_block_progress():
    assert calculate_block_progress(_block(True, False, False)) == 33
    assert calculate_block_progress(_block()) == 0


def test_average_rpe_ignores_missing():
    sessions = [TrainingSession(overall_rpe=7), TrainingSession(overall_rpe=8), TrainingSession(overall_rpe=None)]
    assert calculate_average_rpe(sessions) == 8
    assert calculate_average_rpe([]) == 0


def test_halves_round_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(12.5) == 13
    assert round_half_up(12.49) == 12
    assert calculate_average_rpe([TrainingSession(overall_rpe=6), TrainingSession(overall_rpe=7)]) == 7
    assert calculate_block_progress(_block(True, False, False, False, False, False, False, False)) == 13


def test_earnings():
    assert calculate_earnings(4) == 120.0
    assert calculate_earnings(3, rate_per_session=45) == 135


def test_sessions_from_last_n_days():
    recent = TrainingSession(completed=True, started_at=NOW - timedelta(days=2))
    old = TrainingSession(completed=True, started_at=NOW - timedelta(days=12))
    open_session = TrainingSession(completed=False, started_at=NOW - timedelta(days=1))
    assert sessions_from_last_n_days([recent, old, open_session], days=7, now=NOW) == [recent]


def test_format_duration():
    assert format_duration(125) == "02:05"
    assert format_duration(3725) == "62:05"
    assert format_duration(-4) == "00:00"


def test_consistency_streak():
    today = date(2026, 3, 10)
    dates = [today, today - timedelta(days=1), today - timedelta(days=2), today - timedelta(days=5),
             today - timedelta(days=6), today - timedelta(days=7), today - timedelta(days=8)]
    assert consistency_streak(dates, today) == (3, 4)


def test_streak_broken_when_last_session_is_old():
    today = date(2026, 3, 10)
    assert consistency_streak([today - timedelta(days=3), today - timedelta(days=4)], today) == (0, 2)
    assert consistency_streak([], today) == (0, 0)
