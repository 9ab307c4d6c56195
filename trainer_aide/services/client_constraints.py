"""Derive generation constraints from a client profile."""

from trainer_aide.models.user import ClientProfile
from trainer_aide.schemas.user import Injury, WorkoutConstraints


def extract_workout_constraints(profile: ClientProfile) -> WorkoutConstraints:
    return WorkoutConstraints(
        experience_level=profile.experience_level,
        primary_goal=profile.primary_goal,
        secondary_goals=[getattr(g, "value", g) for g in profile.secondary_goals or []],
        available_equipment=profile.available_equipment or [],
        training_location=profile.training_location or "gym",
        sessions_per_week=profile.preferred_training_frequency or 3,
        session_duration_minutes=profile.preferred_session_duration_minutes or 60,
        injuries=[Injury.model_validate(i) for i in profile.injuries or []],
        physical_limitations=profile.physical_limitations or [],
        exercise_aversions=profile.exercise_aversions or [],
        preferred_exercise_types=profile.preferred_exercise_types or [],
        preferred_movement_patterns=profile.preferred_movement_patterns or [],
        preferred_training_days=profile.preferred_training_days or [],
        preferred_training_times=profile.preferred_training_times or [],
        sleep_hours=profile.average_sleep_hours,
        sleep_quality=profile.sleep_quality,
        stress_level=profile.stress_level,
        recovery_capacity=profile.recovery_capacity,
        activity_level=profile.current_activity_level,
    )
