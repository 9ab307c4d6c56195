from __future__ import annotations

from datetime import datetime, timedelta, timezone

from trainer_aide.core.constants import DEFAULT_TIMER_SECONDS
from trainer_aide.models.training_session import SessionTimer
from trainer_aide.services import session_timer

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def _started(total=1800) -> SessionTimer:
    return session_timer.start(SessionTimer(), total, now=T0)


def test_unstarted_timer_reports_full_total():
    timer = SessionTimer(total_seconds=1200)
    assert session_timer.seconds_left(timer, now=T0) == 1200
    assert not session_timer.is_active(timer)


def test_countdown_while_running():
    timer = _started()
    assert session_timer.seconds_left(timer, now=T0 + timedelta(seconds=90)) == 1710
    assert session_timer.is_active(timer)


def test_pause_freezes_remaining_time():
    timer = _started()
    session_timer.pause(timer, now=T0 + timedelta(minutes=5))
    assert session_timer.seconds_left(timer, now=T0 + timedelta(minutes=20)) == 1500


def test_resume_excludes_paused_span():
    timer = _started()
    session_timer.pause(timer, now=T0 + timedelta(minutes=5))
    session_timer.resume(timer, now=T0 + timedelta(minutes=15))
    assert timer.accumulated_paused_seconds == 600
    assert session_timer.seconds_left(timer, now=T0 + timedelta(minutes=20)) == 1200


def test_pause_and_resume_are_idempotent():
    timer = _started()
    session_timer.resume(timer, now=T0 + timedelta(minutes=1))
    assert timer.accumulated_paused_seconds == 0

    session_timer.pause(timer, now=T0 + timedelta(minutes=2))
    session_timer.pause(timer, now=T0 + timedelta(minutes=3))
    assert timer.paused_at == T0 + timedelta(minutes=2)


def test_never_goes_below_zero():
    timer = _started(total=60)
    assert session_timer.seconds_left(timer, now=T0 + timedelta(hours=2)) == 0


def test_reset_restarts_and_keeps_total():
    timer = _started(total=900)
    session_timer.pause(timer, now=T0 + timedelta(minutes=3))
    later = T0 + timedelta(minutes=10)
    session_timer.reset(timer, now=later)
    assert timer.total_seconds == 900
    assert not timer.is_paused
    assert session_timer.seconds_left(timer, now=later + timedelta(seconds=30)) == 870


def test_clear_returns_to_default():
    timer = _started(total=900)
    session_timer.clear(timer)
    assert timer.start_time is None
    assert timer.total_seconds == DEFAULT_TIMER_SECONDS
    assert not session_timer.is_active(timer)


def test_naive_datetimes_are_treated_as_utc():
    timer = _started()
    timer.start_time = T0.replace(tzinfo=None)
    assert session_timer.seconds_left(timer, now=T0 + timedelta(seconds=60)) == 1740


def test_alert_progress():
    timer = _started()
    assert session_timer.alert_progress(timer, None, now=T0) == (None, None)

    next_alert, alerts = session_timer.alert_progress(timer, 10, now=T0 + timedelta(minutes=25))
    assert alerts == 2
    assert next_alert == 300
