"""Shared enums for models and API."""

from enum import Enum


class UserRole(str, Enum):
    """Who is using the app."""

    STUDIO_OWNER = "studio_owner"
    TRAINER = "trainer"
    CLIENT = "client"
    SOLO_PRACTITIONER = "solo_practitioner"


class SignOffMode(str, Enum):
    """How a trainer signs off a session."""

    FULL_SESSION = "full_session"
    PER_BLOCK = "per_block"
    PER_EXERCISE = "per_exercise"


class TemplateType(str, Enum):
    STANDARD = "standard"  # Cardio first in every block
    RESISTANCE_ONLY = "resistance_only"


class ResistanceType(str, Enum):
    BODYWEIGHT = "bodyweight"
    WEIGHT = "weight"


class MuscleGroup(str, Enum):
    """Category groups used to classify template and session exercises."""

    CARDIO = "cardio"
    CHEST = "chest"
    BACK = "back"
    LEGS = "legs"
    CORE = "core"
    SHOULDERS = "shoulders"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    FULL_BODY = "full_body"
    STRETCH = "stretch"
    FOREARMS = "forearms"
    NECK = "neck"
    OTHER = "other"


class ExerciseLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class GoalType(str, Enum):
    FAT_LOSS = "fat_loss"
    MUSCLE_GAIN = "muscle_gain"
    STRENGTH = "strength"
    ENDURANCE = "endurance"
    HYPERTROPHY = "hypertrophy"
    MOBILITY = "mobility"
    GENERAL_FITNESS = "general_fitness"
    ATHLETIC_PERFORMANCE = "athletic_performance"
    REHAB = "rehab"
    RECOMP = "recomp"


class ExperienceLevel(str, Enum):
    COMPLETE_BEGINNER = "complete_beginner"
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    ELITE = "elite"


class ProgramStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class GenerationStatus(str, Enum):
    """Lifecycle of the background AI generation for a program."""

    PENDING = "pending"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


class SessionType(str, Enum):
    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    CONDITIONING = "conditioning"
    MOBILITY = "mobility"
    RECOVERY = "recovery"
    MIXED = "mixed"


class BookingStatus(str, Enum):
    """Calendar booking status."""

    UPCOMING = "upcoming"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked-in"
    SOFT_HOLD = "soft-hold"
    NO_SHOW = "no-show"
    LATE = "late"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class BookingRequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class ServiceType(str, Enum):
    ONE_TO_ONE = "1-2-1"
    DUET = "duet"
    GROUP = "group"


class AvailabilityBlockType(str, Enum):
    AVAILABLE = "available"
    BLOCKED = "blocked"


class Recurrence(str, Enum):
    WEEKLY = "weekly"
    ONCE = "once"
