"""Initial schema: users, clients, library, templates, sessions, calendar, AI programs.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Uuid(), nullable=False)


def _ts(name: str = "created_at", nullable: bool = True) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def upgrade() -> None:
    op.create_table(
        "users",
        _id(),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        _ts(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_role"), "users", ["role"], unique=False)

    op.create_table(
        "client_profiles",
        _id(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(length=32), nullable=True),
        sa.Column("height_cm", sa.Float(), nullable=True),
        sa.Column("current_weight_kg", sa.Float(), nullable=True),
        sa.Column("target_weight_kg", sa.Float(), nullable=True),
        sa.Column("experience_level", sa.String(length=32), nullable=False),
        sa.Column("training_history", sa.Text(), nullable=True),
        sa.Column("current_activity_level", sa.String(length=32), nullable=True),
        sa.Column("primary_goal", sa.String(length=32), nullable=False),
        sa.Column("secondary_goals", sa.JSON(), nullable=True),
        sa.Column("preferred_training_frequency", sa.Integer(), nullable=True),
        sa.Column("preferred_session_duration_minutes", sa.Integer(), nullable=True),
        sa.Column("preferred_training_days", sa.JSON(), nullable=True),
        sa.Column("preferred_training_times", sa.JSON(), nullable=True),
        sa.Column("available_equipment", sa.JSON(), nullable=True),
        sa.Column("training_location", sa.String(length=32), nullable=True),
        sa.Column("injuries", sa.JSON(), nullable=True),
        sa.Column("medical_conditions", sa.JSON(), nullable=True),
        sa.Column("physical_limitations", sa.JSON(), nullable=True),
        sa.Column("doctor_clearance", sa.Boolean(), nullable=True),
        sa.Column("preferred_exercise_types", sa.JSON(), nullable=True),
        sa.Column("exercise_aversions", sa.JSON(), nullable=True),
        sa.Column("preferred_movement_patterns", sa.JSON(), nullable=True),
        sa.Column("average_sleep_hours", sa.Float(), nullable=True),
        sa.Column("sleep_quality", sa.Integer(), nullable=True),
        sa.Column("stress_level", sa.Integer(), nullable=True),
        sa.Column("recovery_capacity", sa.Integer(), nullable=True),
        sa.Column("assigned_trainer_id", sa.Uuid(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        _ts(),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["assigned_trainer_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_client_profiles_email"), "client_profiles", ["email"], unique=True)
    op.create_index(
        op.f("ix_client_profiles_assigned_trainer_id"), "client_profiles", ["assigned_trainer_id"], unique=False
    )

    op.create_table(
        "exercises",
        _id(),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("exercise_type", sa.String(length=32), nullable=True),
        sa.Column("anatomical_category", sa.String(length=64), nullable=True),
        sa.Column("movement_pattern", sa.String(length=32), nullable=True),
        sa.Column("plane_of_motion", sa.String(length=32), nullable=True),
        sa.Column("force", sa.String(length=16), nullable=True),
        sa.Column("mechanic", sa.String(length=16), nullable=True),
        sa.Column("is_unilateral", sa.Boolean(), nullable=True),
        sa.Column("is_bodyweight", sa.Boolean(), nullable=True),
        sa.Column("level", sa.String(length=32), nullable=False),
        sa.Column("equipment", sa.String(length=64), nullable=True),
        sa.Column("primary_muscles", sa.JSON(), nullable=True),
        sa.Column("secondary_muscles", sa.JSON(), nullable=True),
        sa.Column("instructions", sa.JSON(), nullable=True),
        sa.Column("tempo_default", sa.String(length=16), nullable=True),
        sa.Column("image_folder", sa.String(length=255), nullable=True),
        _ts(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_exercises_slug"), "exercises", ["slug"], unique=True)
    op.create_index(op.f("ix_exercises_name"), "exercises", ["name"], unique=False)
    op.create_index(op.f("ix_exercises_anatomical_category"), "exercises", ["anatomical_category"], unique=False)
    op.create_index(op.f("ix_exercises_movement_pattern"), "exercises", ["movement_pattern"], unique=False)
    op.create_index(op.f("ix_exercises_equipment"), "exercises", ["equipment"], unique=False)

    op.create_table(
        "workout_templates",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("assigned_studios", sa.JSON(), nullable=True),
        sa.Column("default_sign_off_mode", sa.String(length=32), nullable=True),
        sa.Column("alert_interval_minutes", sa.Integer(), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=True),
        _ts(),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_workout_templates_name"), "workout_templates", ["name"], unique=False)
    op.create_index(op.f("ix_workout_templates_created_by"), "workout_templates", ["created_by"], unique=False)

    op.create_table(
        "template_blocks",
        _id(),
        sa.Column("template_id", sa.Uuid(), nullable=False),
        sa.Column("block_number", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.ForeignKeyConstraint(["template_id"], ["workout_templates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_template_blocks_template_id"), "template_blocks", ["template_id"], unique=False)

    op.create_table(
        "template_exercises",
        _id(),
        sa.Column("block_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.String(length=255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("muscle_group", sa.String(length=32), nullable=True),
        sa.Column("resistance_type", sa.String(length=32), nullable=True),
        sa.Column("resistance_value", sa.Float(), nullable=True),
        sa.Column("reps_min", sa.Integer(), nullable=True),
        sa.Column("reps_max", sa.Integer(), nullable=True),
        sa.Column("sets", sa.Integer(), nullable=True),
        sa.Column("cardio_duration", sa.Integer(), nullable=True),
        sa.Column("cardio_intensity", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["block_id"], ["template_blocks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_template_exercises_block_id"), "template_exercises", ["block_id"], unique=False)

    op.create_table(
        "ai_programs",
        _id(),
        sa.Column("client_profile_id", sa.Uuid(), nullable=True),
        sa.Column("trainer_id", sa.Uuid(), nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("program_name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("total_weeks", sa.Integer(), nullable=False),
        sa.Column("sessions_per_week", sa.Integer(), nullable=False),
        sa.Column("session_duration_minutes", sa.Integer(), nullable=True),
        sa.Column("primary_goal", sa.String(length=32), nullable=False),
        sa.Column("secondary_goals", sa.JSON(), nullable=True),
        sa.Column("experience_level", sa.String(length=32), nullable=False),
        sa.Column("ai_model", sa.String(length=64), nullable=False),
        sa.Column("generation_prompt_version", sa.String(length=16), nullable=True),
        sa.Column("ai_rationale", sa.Text(), nullable=True),
        sa.Column("movement_balance_summary", sa.JSON(), nullable=True),
        sa.Column("generation_status", sa.String(length=32), nullable=False),
        sa.Column("generation_error", sa.Text(), nullable=True),
        sa.Column("progress_message", sa.String(length=255), nullable=True),
        sa.Column("current_step", sa.Integer(), nullable=True),
        sa.Column("total_steps", sa.Integer(), nullable=True),
        sa.Column("progress_percentage", sa.Integer(), nullable=True),
        _ts("generated_at"),
        sa.Column("is_template", sa.Boolean(), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        sa.Column("allow_client_modifications", sa.Boolean(), nullable=False),
        _ts(),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["client_profile_id"], ["client_profiles.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["trainer_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ai_programs_client_profile_id"), "ai_programs", ["client_profile_id"], unique=False)
    op.create_index(op.f("ix_ai_programs_trainer_id"), "ai_programs", ["trainer_id"], unique=False)

    op.create_table(
        "ai_workouts",
        _id(),
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("week_number", sa.Integer(), nullable=False),
        sa.Column("day_number", sa.Integer(), nullable=False),
        sa.Column("session_order", sa.Integer(), nullable=True),
        sa.Column("workout_name", sa.String(length=255), nullable=False),
        sa.Column("workout_focus", sa.String(length=255), nullable=True),
        sa.Column("session_type", sa.String(length=32), nullable=True),
        sa.Column("planned_duration_minutes", sa.Integer(), nullable=True),
        sa.Column("movement_patterns_covered", sa.JSON(), nullable=True),
        sa.Column("planes_of_motion_covered", sa.JSON(), nullable=True),
        sa.Column("primary_muscle_groups", sa.JSON(), nullable=True),
        sa.Column("ai_rationale", sa.Text(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        _ts("completed_at"),
        sa.Column("overall_rpe", sa.Integer(), nullable=True),
        sa.Column("trainer_notes", sa.Text(), nullable=True),
        sa.Column("client_feedback", sa.Text(), nullable=True),
        _ts(),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["program_id"], ["ai_programs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("program_id", "week_number", "day_number", name="uq_ai_workouts_program_week_day"),
    )
    op.create_index(op.f("ix_ai_workouts_program_id"), "ai_workouts", ["program_id"], unique=False)

    op.create_table(
        "ai_workout_exercises",
        _id(),
        sa.Column("workout_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=True),
        sa.Column("exercise_order", sa.Integer(), nullable=True),
        sa.Column("block_label", sa.String(length=8), nullable=True),
        sa.Column("sets", sa.Integer(), nullable=True),
        sa.Column("reps_target", sa.String(length=32), nullable=True),
        sa.Column("target_load_kg", sa.Float(), nullable=True),
        sa.Column("target_rpe", sa.Float(), nullable=True),
        sa.Column("target_rir", sa.Integer(), nullable=True),
        sa.Column("tempo", sa.String(length=16), nullable=True),
        sa.Column("rest_seconds", sa.Integer(), nullable=True),
        sa.Column("is_unilateral", sa.Boolean(), nullable=True),
        sa.Column("is_bodyweight", sa.Boolean(), nullable=True),
        sa.Column("coaching_cues", sa.JSON(), nullable=True),
        sa.Column("modifications", sa.JSON(), nullable=True),
        sa.Column("actual_sets", sa.Integer(), nullable=True),
        sa.Column("actual_reps", sa.Integer(), nullable=True),
        sa.Column("actual_load_kg", sa.Float(), nullable=True),
        sa.Column("actual_rpe", sa.Integer(), nullable=True),
        sa.Column("performance_notes", sa.Text(), nullable=True),
        sa.Column("skip_reason", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["workout_id"], ["ai_workouts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_ai_workout_exercises_workout_id"), "ai_workout_exercises", ["workout_id"], unique=False
    )

    op.create_table(
        "ai_nutrition_plans",
        _id(),
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("daily_calories", sa.Integer(), nullable=True),
        sa.Column("protein_grams", sa.Integer(), nullable=True),
        sa.Column("carbs_grams", sa.Integer(), nullable=True),
        sa.Column("fats_grams", sa.Integer(), nullable=True),
        sa.Column("dietary_restrictions", sa.JSON(), nullable=True),
        sa.Column("ai_rationale", sa.Text(), nullable=True),
        sa.Column("disclaimer", sa.Text(), nullable=True),
        _ts(),
        sa.ForeignKeyConstraint(["program_id"], ["ai_programs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("program_id"),
    )

    op.create_table(
        "ai_generations",
        _id(),
        sa.Column("entity_id", sa.Uuid(), nullable=False),
        sa.Column("entity_type", sa.String(length=32), nullable=True),
        sa.Column("generation_type", sa.String(length=32), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("ai_provider", sa.String(length=32), nullable=True),
        sa.Column("ai_model", sa.String(length=64), nullable=False),
        sa.Column("prompt_version", sa.String(length=16), nullable=True),
        sa.Column("input_tokens", sa.Integer(), nullable=True),
        sa.Column("output_tokens", sa.Integer(), nullable=True),
        sa.Column("estimated_cost_usd", sa.Float(), nullable=True),
        sa.Column("latency_ms", sa.Integer(), nullable=True),
        sa.Column("retry_count", sa.Integer(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        _ts(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_ai_generations_entity_id"), "ai_generations", ["entity_id"], unique=False)

    op.create_table(
        "ai_program_revisions",
        _id(),
        sa.Column("program_id", sa.Uuid(), nullable=False),
        sa.Column("revision_number", sa.Integer(), nullable=False),
        sa.Column("program_snapshot", sa.JSON(), nullable=False),
        sa.Column("change_description", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        _ts(),
        sa.ForeignKeyConstraint(["program_id"], ["ai_programs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("program_id", "revision_number", name="uq_ai_program_revisions_number"),
    )
    op.create_index(
        op.f("ix_ai_program_revisions_program_id"), "ai_program_revisions", ["program_id"], unique=False
    )

    op.create_table(
        "training_sessions",
        _id(),
        sa.Column("trainer_id", sa.Uuid(), nullable=False),
        sa.Column("client_profile_id", sa.Uuid(), nullable=True),
        sa.Column("template_id", sa.Uuid(), nullable=True),
        sa.Column("ai_workout_id", sa.Uuid(), nullable=True),
        sa.Column("session_name", sa.String(length=255), nullable=False),
        sa.Column("sign_off_mode", sa.String(length=32), nullable=False),
        _ts("started_at"),
        _ts("completed_at"),
        sa.Column("duration_seconds", sa.Integer(), nullable=True),
        sa.Column("planned_duration_minutes", sa.Integer(), nullable=True),
        sa.Column("overall_rpe", sa.Integer(), nullable=True),
        sa.Column("private_notes", sa.Text(), nullable=True),
        sa.Column("public_notes", sa.Text(), nullable=True),
        sa.Column("recommendations", sa.Text(), nullable=True),
        sa.Column("trainer_declaration", sa.Boolean(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["trainer_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["client_profile_id"], ["client_profiles.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["template_id"], ["workout_templates.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["ai_workout_id"], ["ai_workouts.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_training_sessions_client_profile_id"), "training_sessions", ["client_profile_id"], unique=False
    )
    op.create_index(op.f("ix_training_sessions_completed"), "training_sessions", ["completed"], unique=False)
    op.create_index(
        "ix_training_sessions_trainer_started", "training_sessions", ["trainer_id", "started_at"], unique=False
    )

    op.create_table(
        "session_blocks",
        _id(),
        sa.Column("session_id", sa.Uuid(), nullable=False),
        sa.Column("block_number", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("rpe", sa.Integer(), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["session_id"], ["training_sessions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_session_blocks_session_id"), "session_blocks", ["session_id"], unique=False)

    op.create_table(
        "session_exercises",
        _id(),
        sa.Column("block_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.String(length=255), nullable=False),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("muscle_group", sa.String(length=32), nullable=True),
        sa.Column("resistance_type", sa.String(length=32), nullable=True),
        sa.Column("resistance_value", sa.Float(), nullable=True),
        sa.Column("reps_min", sa.Integer(), nullable=True),
        sa.Column("reps_max", sa.Integer(), nullable=True),
        sa.Column("sets", sa.Integer(), nullable=True),
        sa.Column("cardio_duration", sa.Integer(), nullable=True),
        sa.Column("cardio_intensity", sa.Integer(), nullable=True),
        sa.Column("tempo", sa.String(length=16), nullable=True),
        sa.Column("rest_seconds", sa.Integer(), nullable=True),
        sa.Column("rir", sa.Integer(), nullable=True),
        sa.Column("coaching_cues", sa.JSON(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.Column("actual_resistance", sa.Float(), nullable=True),
        sa.Column("actual_reps", sa.Integer(), nullable=True),
        sa.Column("actual_duration", sa.Integer(), nullable=True),
        sa.Column("rpe", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["block_id"], ["session_blocks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_session_exercises_block_id"), "session_exercises", ["block_id"], unique=False)

    op.create_table(
        "session_timers",
        _id(),
        sa.Column("session_id", sa.Uuid(), nullable=False),
        _ts("start_time"),
        sa.Column("total_seconds", sa.Integer(), nullable=True),
        sa.Column("is_paused", sa.Boolean(), nullable=False),
        _ts("paused_at"),
        sa.Column("accumulated_paused_seconds", sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(["session_id"], ["training_sessions.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("session_id"),
    )

    op.create_table(
        "services",
        _id(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=True),
        sa.Column("max_capacity", sa.Integer(), nullable=True),
        sa.Column("credits_required", sa.Float(), nullable=True),
        sa.Column("color", sa.String(length=7), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("assigned_studios", sa.JSON(), nullable=True),
        _ts(),
        _ts("updated_at"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "calendar_bookings",
        _id(),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("trainer_id", sa.Uuid(), nullable=False),
        sa.Column("client_profile_id", sa.Uuid(), nullable=True),
        sa.Column("client_name", sa.String(length=255), nullable=True),
        sa.Column("service_id", sa.Uuid(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("workout_id", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _ts("hold_expiry"),
        _ts(),
        sa.ForeignKeyConstraint(["trainer_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["client_profile_id"], ["client_profiles.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["service_id"], ["services.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_calendar_bookings_trainer_scheduled", "calendar_bookings", ["trainer_id", "scheduled_at"], unique=False
    )

    op.create_table(
        "booking_requests",
        _id(),
        sa.Column("trainer_id", sa.Uuid(), nullable=False),
        sa.Column("client_profile_id", sa.Uuid(), nullable=False),
        sa.Column("service_id", sa.Uuid(), nullable=True),
        sa.Column("preferred_times", sa.JSON(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False),
        _ts(),
        _ts("expires_at", nullable=False),
        sa.ForeignKeyConstraint(["trainer_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["client_profile_id"], ["client_profiles.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["service_id"], ["services.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_booking_requests_trainer_id"), "booking_requests", ["trainer_id"], unique=False)

    op.create_table(
        "availability_blocks",
        _id(),
        sa.Column("trainer_id", sa.Uuid(), nullable=False),
        sa.Column("block_type", sa.String(length=32), nullable=False),
        sa.Column("recurrence", sa.String(length=32), nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=True),
        sa.Column("specific_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("start_hour", sa.Integer(), nullable=True),
        sa.Column("start_minute", sa.Integer(), nullable=True),
        sa.Column("end_hour", sa.Integer(), nullable=True),
        sa.Column("end_minute", sa.Integer(), nullable=True),
        sa.Column("reason", sa.String(length=255), nullable=True),
        sa.ForeignKeyConstraint(["trainer_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_availability_blocks_trainer_id"), "availability_blocks", ["trainer_id"], unique=False)


def downgrade() -> None:
    for table in (
        "availability_blocks",
        "booking_requests",
        "calendar_bookings",
        "services",
        "session_timers",
        "session_exercises",
        "session_blocks",
        "training_sessions",
        "ai_program_revisions",
        "ai_generations",
        "ai_nutrition_plans",
        "ai_workout_exercises",
        "ai_workouts",
        "ai_programs",
        "template_exercises",
        "template_blocks",
        "workout_templates",
        "exercises",
        "client_profiles",
        "users",
    ):
        op.drop_table(table)
