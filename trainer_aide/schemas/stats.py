"""Dashboard statistics schema."""

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_sessions: int
    completed_sessions: int
    in_progress_sessions: int
    sessions_today: int
    sessions_this_week: int
    sessions_this_month: int
    average_rpe: int
    earnings: float
    template_count: int
    current_streak_days: int
    longest_streak_days: int
