"""ORM models - import all so Base.metadata is complete for migrations."""

from trainer_aide.models.ai_program import (
    AIGeneration,
    AINutritionPlan,
    AIProgram,
    AIProgramRevision,
    AIWorkout,
    AIWorkoutExercise,
)
from trainer_aide.models.calendar import AvailabilityBlock, BookingRequest, CalendarBooking, Service
from trainer_aide.models.exercise import Exercise
from trainer_aide.models.template import TemplateBlock, TemplateExercise, WorkoutTemplate
from trainer_aide.models.training_session import SessionBlock, SessionExercise, SessionTimer, TrainingSession
from trainer_aide.models.user import ClientProfile, User

__all__ = [
    "AIGeneration",
    "AINutritionPlan",
    "AIProgram",
    "AIProgramRevision",
    "AIWorkout",
    "AIWorkoutExercise",
    "AvailabilityBlock",
    "BookingRequest",
    "CalendarBooking",
    "ClientProfile",
    "Exercise",
    "Service",
    "SessionBlock",
    "SessionExercise",
    "SessionTimer",
    "TemplateBlock",
    "TemplateExercise",
    "TrainingSession",
    "User",
    "WorkoutTemplate",
]
