"""Demo fixtures: users, clients, a small exercise library, templates, services, availability."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from trainer_aide.core.enums import (
    ExerciseLevel,
    ExperienceLevel,
    GoalType,
    MuscleGroup,
    ResistanceType,
    ServiceType,
    SignOffMode,
    TemplateType,
    UserRole,
)
from trainer_aide.models.calendar import AvailabilityBlock, Service
from trainer_aide.models.exercise import Exercise
from trainer_aide.models.template import TemplateBlock, TemplateExercise, WorkoutTemplate
from trainer_aide.models.user import ClientProfile, User
from trainer_aide.services.availability import default_blocks

logger = logging.getLogger(__name__)

# Fixed ids so repeated seeding and demo links stay stable.
STUDIO_OWNER_ID = uuid.UUID("00000000-0000-4000-8000-000000000001")
TRAINER_ID = uuid.UUID("00000000-0000-4000-8000-000000000002")
SECOND_TRAINER_ID = uuid.UUID("00000000-0000-4000-8000-000000000003")
CLIENT_USER_ID = uuid.UUID("00000000-0000-4000-8000-000000000004")
SOLO_ID = uuid.UUID("00000000-0000-4000-8000-000000000005")

USERS = [
    {"id": STUDIO_OWNER_ID, "first_name": "Sarah", "last_name": "Mitchell", "email": "sarah@example.com", "role": UserRole.STUDIO_OWNER},
    {"id": TRAINER_ID, "first_name": "Jake", "last_name": "Turner", "email": "jake@example.com", "role": UserRole.TRAINER},
    {"id": SECOND_TRAINER_ID, "first_name": "Priya", "last_name": "Shah", "email": "priya@example.com", "role": UserRole.TRAINER},
    {"id": CLIENT_USER_ID, "first_name": "Emma", "last_name": "Clarke", "email": "emma@example.com", "role": UserRole.CLIENT},
    {"id": SOLO_ID, "first_name": "Tom", "last_name": "Reyes", "email": "tom@example.com", "role": UserRole.SOLO_PRACTITIONER},
]

CLIENT_PROFILES = [
    {
        "email": "emma@example.com",
        "first_name": "Emma",
        "last_name": "Clarke",
        "experience_level": ExperienceLevel.BEGINNER,
        "primary_goal": GoalType.FAT_LOSS,
        "secondary_goals": [GoalType.GENERAL_FITNESS],
        "preferred_training_frequency": 3,
        "preferred_session_duration_minutes": 45,
        "available_equipment": ["dumbbell", "kettlebells", "bands"],
        "training_location": "home",
        "exercise_aversions": ["burpees"],
        "assigned_trainer_id": TRAINER_ID,
    },
    {
        "email": "james@example.com",
        "first_name": "James",
        "last_name": "Wilson",
        "experience_level": ExperienceLevel.INTERMEDIATE,
        "primary_goal": GoalType.STRENGTH,
        "available_equipment": ["barbell", "dumbbell", "cable", "machine"],
        "training_location": "gym",
        "injuries": [
            {
                "body_part": "shoulder",
                "description": "Old rotator cuff strain",
                "restrictions": ["no overhead press"],
                "severity": "mild",
            }
        ],
        "assigned_trainer_id": TRAINER_ID,
    },
    {
        "email": "lisa@example.com",
        "first_name": "Lisa",
        "last_name": "Anderson",
        "experience_level": ExperienceLevel.ADVANCED,
        "primary_goal": GoalType.HYPERTROPHY,
        "preferred_training_frequency": 4,
        "available_equipment": ["barbell", "dumbbell", "cable", "machine"],
        "assigned_trainer_id": SOLO_ID,
    },
]


def _ex(slug, name, category, pattern, equipment, level="beginner", **extra) -> dict:
    return {
        "slug": slug,
        "name": name,
        "anatomical_category": category,
        "movement_pattern": pattern,
        "equipment": equipment,
        "level": ExerciseLevel(level),
        "is_bodyweight": equipment is None,
        **extra,
    }


EXERCISES = [
    _ex("treadmill-run", "Treadmill Run", "Cardio", None, "machine", exercise_type="cardio"),
    _ex("rowing-machine", "Rowing Machine", "Cardio", None, "machine", exercise_type="cardio"),
    _ex("assault-bike", "Assault Bike", "Cardio", None, "machine", exercise_type="cardio"),
    _ex("burpee", "Burpee", "Full Body", None, None, exercise_type="plyometric"),
    _ex("jumping-jacks", "Jumping Jacks", "Cardio", None, None, exercise_type="cardio", plane_of_motion="frontal"),
    _ex("push-up", "Push-Up", "Chest", "push_horizontal", None, mechanic="compound", primary_muscles=["chest", "triceps"]),
    _ex("barbell-bench-press", "Barbell Bench Press", "Chest", "push_horizontal", "barbell", "intermediate", mechanic="compound", primary_muscles=["chest"], secondary_muscles=["triceps", "shoulders"]),
    _ex("dumbbell-bench-press", "Dumbbell Bench Press", "Chest", "push_horizontal", "dumbbell", mechanic="compound", primary_muscles=["chest"]),
    _ex("overhead-press", "Overhead Press", "Shoulders", "push_vertical", "barbell", "intermediate", mechanic="compound", primary_muscles=["shoulders"]),
    _ex("dumbbell-lateral-raise", "Dumbbell Lateral Raise", "Shoulders", None, "dumbbell", mechanic="isolation", plane_of_motion="frontal", primary_muscles=["shoulders"]),
    _ex("bent-over-row", "Barbell Bent-Over Row", "Back", "pull_horizontal", "barbell", "intermediate", mechanic="compound", primary_muscles=["lats", "middle back"]),
    _ex("dumbbell-row", "Single-Arm Dumbbell Row", "Back", "pull_horizontal", "dumbbell", mechanic="compound", is_unilateral=True, primary_muscles=["lats"]),
    _ex("lat-pulldown", "Lat Pulldown", "Back", "pull_vertical", "cable", mechanic="compound", primary_muscles=["lats"]),
    _ex("pull-up", "Pull-Up", "Back", "pull_vertical", None, "intermediate", mechanic="compound", primary_muscles=["lats", "biceps"]),
    _ex("goblet-squat", "Goblet Squat", "Legs", "squat", "dumbbell", mechanic="compound", primary_muscles=["quadriceps", "glutes"]),
    _ex("back-squat", "Barbell Back Squat", "Legs", "squat", "barbell", "intermediate", mechanic="compound", primary_muscles=["quadriceps", "glutes"]),
    _ex("romanian-deadlift", "Romanian Deadlift", "Legs", "hinge", "barbell", "intermediate", mechanic="compound", primary_muscles=["hamstrings", "glutes"]),
    _ex("kettlebell-swing", "Kettlebell Swing", "Legs", "hinge", "kettlebells", mechanic="compound", primary_muscles=["glutes", "hamstrings"]),
    _ex("glute-bridge", "Glute Bridge", "Legs", "hinge", None, mechanic="compound", primary_muscles=["glutes"]),
    _ex("walking-lunge", "Walking Lunge", "Legs", "lunge", None, mechanic="compound", is_unilateral=True, primary_muscles=["quadriceps", "glutes"]),
    _ex("bicep-curl", "Dumbbell Bicep Curl", "Arms", None, "dumbbell", mechanic="isolation", primary_muscles=["biceps"]),
    _ex("tricep-pushdown", "Cable Tricep Pushdown", "Arms", None, "cable", mechanic="isolation", primary_muscles=["triceps"]),
    _ex("plank", "Plank", "Core", "core", None, primary_muscles=["abdominals"], tempo_default="0-0-0-0"),
    _ex("pallof-press", "Pallof Press", "Core", "core", "bands", plane_of_motion="transverse", primary_muscles=["abdominals", "obliques"]),
    _ex("dead-bug", "Dead Bug", "Core", "core", None, primary_muscles=["abdominals"]),
    _ex("hip-flexor-stretch", "Hip Flexor Stretch", "Mobility", "mobility", None, exercise_type="stretching"),
    _ex("power-clean", "Power Clean", "Full Body", "hinge", "barbell", "advanced", mechanic="compound", primary_muscles=["hamstrings", "traps"]),
]

SERVICES = [
    {"name": "30min PT Session", "duration": 30, "type": ServiceType.ONE_TO_ONE, "max_capacity": 1, "credits_required": 1, "color": "#12229D"},
    {"name": "60min PT Session", "duration": 60, "type": ServiceType.ONE_TO_ONE, "max_capacity": 1, "credits_required": 2, "color": "#F4B324"},
    {"name": "30min Duet Session", "duration": 30, "type": ServiceType.DUET, "max_capacity": 2, "credits_required": 0.75, "color": "#AB1D79"},
    {"name": "45min Group Session", "duration": 45, "type": ServiceType.GROUP, "max_capacity": 5, "credits_required": 0.5, "color": "#12229D"},
]


def _te(slug, group, position, **extra) -> dict:
    return {"exercise_id": slug, "muscle_group": group, "position": position, **extra}


TEMPLATES = [
    {
        "name": "Full Body Circuit",
        "description": "Three cardio-led blocks for general conditioning",
        "type": TemplateType.STANDARD,
        "default_sign_off_mode": SignOffMode.PER_BLOCK,
        "alert_interval_minutes": 10,
        "is_default": True,
        "blocks": [
            ("Block 1", [
                _te("rowing-machine", MuscleGroup.CARDIO, 0, cardio_duration=300, cardio_intensity=6, resistance_type=ResistanceType.BODYWEIGHT),
                _te("goblet-squat", MuscleGroup.LEGS, 1, resistance_value=16, reps_min=10, reps_max=12, sets=3),
                _te("push-up", MuscleGroup.CHEST, 2, resistance_type=ResistanceType.BODYWEIGHT, reps_min=8, reps_max=12, sets=3),
            ]),
            ("Block 2", [
                _te("assault-bike", MuscleGroup.CARDIO, 0, cardio_duration=240, cardio_intensity=7, resistance_type=ResistanceType.BODYWEIGHT),
                _te("dumbbell-row", MuscleGroup.BACK, 1, resistance_value=14, reps_min=10, reps_max=12, sets=3),
                _te("kettlebell-swing", MuscleGroup.LEGS, 2, resistance_value=16, reps_min=15, reps_max=15, sets=3),
            ]),
            ("Block 3", [
                _te("treadmill-run", MuscleGroup.CARDIO, 0, cardio_duration=300, cardio_intensity=6, resistance_type=ResistanceType.BODYWEIGHT),
                _te("plank", MuscleGroup.CORE, 1, resistance_type=ResistanceType.BODYWEIGHT, cardio_duration=45, sets=3),
            ]),
        ],
    },
    {
        "name": "Upper Body Strength",
        "description": "Resistance-only push and pull",
        "type": TemplateType.RESISTANCE_ONLY,
        "default_sign_off_mode": SignOffMode.PER_EXERCISE,
        "blocks": [
            ("Push", [
                _te("barbell-bench-press", MuscleGroup.CHEST, 0, resistance_value=60, reps_min=5, reps_max=6, sets=4),
                _te("dumbbell-lateral-raise", MuscleGroup.SHOULDERS, 1, resistance_value=8, reps_min=12, reps_max=15, sets=3),
            ]),
            ("Pull", [
                _te("lat-pulldown", MuscleGroup.BACK, 0, resistance_value=50, reps_min=8, reps_max=10, sets=4),
                _te("bicep-curl", MuscleGroup.BICEPS, 1, resistance_value=12, reps_min=10, reps_max=12, sets=3),
            ]),
        ],
    },
]


def build_template(data: dict, created_by: uuid.UUID | None = None) -> WorkoutTemplate:
    fields = {k: v for k, v in data.items() if k != "blocks"}
    template = WorkoutTemplate(**fields, created_by=created_by)
    template.blocks = [
        TemplateBlock(block_number=i, name=name, exercises=[TemplateExercise(**ex) for ex in exercises])
        for i, (name, exercises) in enumerate(data["blocks"], start=1)
    ]
    return template


async def seed_demo_data(db: AsyncSession) -> dict[str, int]:
    """Insert anything missing; safe to run repeatedly. Returns rows added per kind."""
    added = {"users": 0, "client_profiles": 0, "exercises": 0, "templates": 0, "services": 0, "availability_blocks": 0}

    existing_emails = set((await db.execute(select(User.email))).scalars().all())
    for data in USERS:
        if data["email"] not in existing_emails:
            db.add(User(**data))
            added["users"] += 1
    await db.flush()

    existing_clients = set((await db.execute(select(ClientProfile.email))).scalars().all())
    for data in CLIENT_PROFILES:
        if data["email"] not in existing_clients:
            db.add(ClientProfile(**data))
            added["client_profiles"] += 1

    existing_slugs = set((await db.execute(select(Exercise.slug))).scalars().all())
    for data in EXERCISES:
        if data["slug"] not in existing_slugs:
            db.add(Exercise(**data))
            added["exercises"] += 1

    existing_templates = set((await db.execute(select(WorkoutTemplate.name))).scalars().all())
    for data in TEMPLATES:
        if data["name"] not in existing_templates:
            db.add(build_template(data, created_by=STUDIO_OWNER_ID))
            added["templates"] += 1

    existing_services = set((await db.execute(select(Service.name))).scalars().all())
    for data in SERVICES:
        if data["name"] not in existing_services:
            db.add(Service(**data, created_by=STUDIO_OWNER_ID))
            added["services"] += 1

    for trainer_id in (TRAINER_ID, SOLO_ID):
        has_blocks = (
            await db.execute(select(AvailabilityBlock.id).where(AvailabilityBlock.trainer_id == trainer_id).limit(1))
        ).first()
        if not has_blocks:
            blocks = default_blocks(trainer_id)
            db.add_all(blocks)
            added["availability_blocks"] += len(blocks)

    await db.flush()
    logger.info("Seeded demo data: %s", added)
    return added
