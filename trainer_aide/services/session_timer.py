"""Countdown arithmetic for session timers.

The timer stores wall-clock anchors, not a ticking counter, so the remaining
time is derived whenever it is read. Every function takes ``now`` so callers
(and tests) control the clock.
"""

from __future__ import annotations

import math
from datetime import datetime

from trainer_aide.core.constants import DEFAULT_TIMER_SECONDS
from trainer_aide.db.base import as_utc, utcnow
from trainer_aide.models.training_session import SessionTimer


def start(timer: SessionTimer, total_seconds: int, now: datetime | None = None) -> SessionTimer:
    timer.start_time = now or utcnow()
    timer.total_seconds = total_seconds
    timer.is_paused = False
    timer.paused_at = None
    timer.accumulated_paused_seconds = 0
    return timer


def pause(timer: SessionTimer, now: datetime | None = None) -> SessionTimer:
    """No-op when already paused or never started."""
    if timer.is_paused or timer.start_time is None:
        return timer
    timer.is_paused = True
    timer.paused_at = now or utcnow()
    return timer


def resume(timer: SessionTimer, now: datetime | None = None) -> SessionTimer:
    """No-op unless paused; the paused span is added to the accumulator."""
    if not timer.is_paused or timer.paused_at is None:
        return timer
    now = now or utcnow()
    paused_for = (as_utc(now) - as_utc(timer.paused_at)).total_seconds()
    timer.accumulated_paused_seconds = (timer.accumulated_paused_seconds or 0) + paused_for
    timer.is_paused = False
    timer.paused_at = None
    return timer


def reset(timer: SessionTimer, now: datetime | None = None) -> SessionTimer:
    """Restart from now, keeping total_seconds."""
    timer.start_time = now or utcnow()
    timer.is_paused = False
    timer.paused_at = None
    timer.accumulated_paused_seconds = 0
    return timer


def clear(timer: SessionTimer) -> SessionTimer:
    timer.start_time = None
    timer.total_seconds = DEFAULT_TIMER_SECONDS
    timer.is_paused = False
    timer.paused_at = None
    timer.accumulated_paused_seconds = 0
    return timer


def active_elapsed_seconds(timer: SessionTimer, now: datetime | None = None) -> float:
    """Seconds the timer has actually been running (pauses excluded)."""
    if timer.start_time is None:
        return 0.0
    start_time = as_utc(timer.start_time)
    if timer.is_paused and timer.paused_at is not None:
        effective_end = as_utc(timer.paused_at)
    else:
        effective_end = as_utc(now or utcnow())
    elapsed = (effective_end - start_time).total_seconds()
    return max(0.0, elapsed - (timer.accumulated_paused_seconds or 0))


def seconds_left(timer: SessionTimer, now: datetime | None = None) -> int:
    if timer.start_time is None:
        return timer.total_seconds
    return math.floor(max(0.0, timer.total_seconds - active_elapsed_seconds(timer, now)))


def is_active(timer: SessionTimer) -> bool:
    return timer.start_time is not None


def alert_progress(
    timer: SessionTimer, alert_interval_minutes: int | None, now: datetime | None = None
) -> tuple[int | None, int | None]:
    """(next_alert_in_seconds, alerts_elapsed) for a periodic trainer alert."""
    if not alert_interval_minutes or timer.start_time is None:
        return None, None
    interval = alert_interval_minutes * 60
    elapsed = active_elapsed_seconds(timer, now)
    alerts_elapsed = int(elapsed // interval)
    next_alert = interval - (elapsed - alerts_elapsed * interval)
    return math.ceil(next_alert), alerts_elapsed
