"""Prompts for multi-week program generation."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from trainer_aide.core.constants import CONTEXT_WEEKS, MAX_PROMPT_EXERCISES
from trainer_aide.models.exercise import Exercise
from trainer_aide.schemas.ai_program import ProgramGenerationInput

OUTPUT_EXAMPLE = {
    "program_name": "12-Week Muscle Gain Program",
    "description": "Hypertrophy-focused program with progressive overload",
    "total_weeks": 12,
    "sessions_per_week": 4,
    "ai_rationale": "This program emphasizes...",
    "movement_balance_summary": {
        "push_horizontal": 8,
        "push_vertical": 4,
        "pull_horizontal": 8,
        "pull_vertical": 4,
        "squat": 4,
        "hinge": 4,
        "lunge": 2,
        "core": 8,
        "mobility": 4,
    },
    "weekly_structure": [
        {
            "week_number": 1,
            "workouts": [
                {
                    "day_number": 1,
                    "workout_name": "Upper Push A",
                    "workout_focus": "Chest, Shoulders, Triceps",
                    "session_type": "hypertrophy",
                    "movement_patterns_covered": ["push_horizontal", "push_vertical", "core"],
                    "planes_of_motion_covered": ["sagittal", "frontal"],
                    "ai_rationale": "Starting with push focus to build upper body strength...",
                    "exercises": [
                        {
                            "exercise_id": "uuid-from-exercise-library",
                            "exercise_order": 1,
                            "block_label": "A",
                            "sets": 4,
                            "reps_target": "8-10",
                            "target_rpe": 7.5,
                            "tempo": "3-1-1-0",
                            "rest_seconds": 90,
                            "coaching_cues": ["Keep core braced", "Control the eccentric"],
                            "modifications": ["Incline if flat is too difficult"],
                        }
                    ],
                }
            ],
        }
    ],
}

ERROR_EXAMPLE = {
    "error": "Cannot create program: insufficient exercise options for a balanced program.",
    "suggestions": ["Add resistance bands to equipment", "Consult a physical therapist before programming"],
}

SYSTEM_PROMPT = f"""You are an elite Strength & Conditioning coach with 20+ years of experience programming for athletes and general population clients.

## YOUR TASK

Generate a complete, periodized workout program in valid JSON based on the client profile and the exercise library provided.

## CORE PRINCIPLES

1. MOVEMENT BALANCE: every week covers horizontal and vertical push, horizontal and vertical pull, squat, hinge and lunge patterns, anti-extension / anti-rotation core work and mobility.
2. PLANE OF MOTION VARIETY: distribute work across sagittal, frontal and transverse planes.
3. INJURY CONFLICTS: NEVER select an exercise that conflicts with a client restriction (e.g. "no overhead press" excludes all overhead pressing).
4. PROGRESSIVE OVERLOAD: beginners start conservative and focus on form; intermediates progress volume and intensity; advanced clients get periodized blocks with deloads.
5. RECOVERY: deload every 3-4 weeks for intermediate/advanced clients; account for sleep, stress and recovery capacity.
6. EXERCISE SELECTION: match experience level and ONLY use equipment the client has.

## PRESCRIPTION GUIDELINES

- Reps: strength 3-6, hypertrophy 8-12, endurance 15-20, power 1-5.
- Sets: beginners 2-3, intermediate 3-4, advanced 4-6.
- Rest: strength 2-4 min, hypertrophy 60-90 s, endurance 30-60 s.
- RPE: beginners 6-7, intermediate 7-8, advanced 8-9.
- Tempo (eccentric-pause-concentric-pause): hypertrophy "3-1-1-0", strength "2-0-1-0", power "1-0-X-0".

## JSON OUTPUT STRUCTURE

Respond with ONLY this JSON structure:

{json.dumps(OUTPUT_EXAMPLE, indent=2)}

## VALIDATION RULES

Before answering, check that every exercise_id exists in the provided library, no injury restriction is violated, equipment matches, movement patterns are balanced each week, and every session fits the requested duration.

## ERROR HANDLING

If no suitable program is possible, answer with an "error" field instead:

{json.dumps(ERROR_EXAMPLE, indent=2)}

Safety first, movement quality over load, consistency over perfection."""


def get_system_prompt() -> str:
    return SYSTEM_PROMPT


def _join(values: Sequence[str], empty: str = "None") -> str:
    return ", ".join(values) if values else empty


def format_exercise_library(exercises: Sequence[Exercise], limit: int = MAX_PROMPT_EXERCISES) -> str:
    """Library section of the user prompt; lists at most `limit` exercises."""
    lines = [f"## AVAILABLE EXERCISES ({len(exercises)} total)", ""]
    for ex in exercises[:limit]:
        level = getattr(ex.level, "value", ex.level)
        lines.extend(
            [
                f"- ID: {ex.id}",
                f"  Name: {ex.name}",
                f"  Movement: {ex.movement_pattern or 'N/A'}",
                f"  Plane: {ex.plane_of_motion or 'N/A'}",
                f"  Category: {ex.anatomical_category}",
                f"  Equipment: {ex.equipment or 'bodyweight'}",
                f"  Level: {level}",
                f"  Unilateral: {'Yes' if ex.is_unilateral else 'No'}",
                f"  Bodyweight: {'Yes' if ex.is_bodyweight else 'No'}",
                f"  Tempo: {ex.tempo_default or 'N/A'}",
                f"  Primary Muscles: {_join(ex.primary_muscles or [], 'N/A')}",
            ]
        )
    if len(exercises) > limit:
        lines.extend(["", f"... and {len(exercises) - limit} more exercises available."])
    lines.extend(
        [
            "",
            f"**NOTE**: The full exercise library contains {len(exercises)} exercises. "
            "Select from these based on client constraints.",
        ]
    )
    return "\n".join(lines)


def get_user_prompt(request: ProgramGenerationInput, exercises: Sequence[Exercise]) -> str:
    equipment = _join(request.available_equipment, "Bodyweight only")
    injuries = (
        "\n".join(f"- {inj.body_part}: {', '.join(inj.restrictions)}" for inj in request.injuries)
        if request.injuries
        else "None"
    )

    sections = [
        "# CLIENT PROFILE & PROGRAM REQUIREMENTS",
        "",
        "## CLIENT INFORMATION",
        "",
        f"**Primary Goal**: {request.primary_goal}",
    ]
    if request.secondary_goals:
        sections.append(f"**Secondary Goals**: {', '.join(request.secondary_goals)}")
    sections.extend(
        [
            f"**Experience Level**: {request.experience_level}",
            f"**Training Location**: {request.training_location}",
            "",
            "## PROGRAM PARAMETERS",
            "",
            f"**Program Duration**: {request.total_weeks} weeks",
            f"**Sessions Per Week**: {request.sessions_per_week}",
            f"**Session Duration**: {request.session_duration_minutes} minutes per session",
            "",
            "## EQUIPMENT AVAILABLE",
            "",
            equipment,
            "",
            "## HEALTH & LIMITATIONS",
            "",
            "**Injuries & Restrictions**:",
            injuries,
        ]
    )
    if request.physical_limitations:
        sections.append(f"**Physical Limitations**: {', '.join(request.physical_limitations)}")
    sections.append(f"**Exercise Aversions**: {_join(request.exercise_aversions)}")
    sections.extend(["", "## PREFERENCES", ""])
    if request.preferred_exercise_types:
        sections.append(f"**Preferred Exercise Types**: {', '.join(request.preferred_exercise_types)}")
    if request.preferred_movement_patterns:
        sections.append(f"**Preferred Movement Patterns**: {', '.join(request.preferred_movement_patterns)}")
    sections.extend(
        [
            "",
            "---",
            "",
            format_exercise_library(exercises),
            "",
            "---",
            "",
            "# YOUR TASK",
            "",
            f"Generate a complete {request.total_weeks}-week workout program with "
            f"{request.sessions_per_week} sessions per week, {request.session_duration_minutes} minutes each.",
            "",
            "**CRITICAL REQUIREMENTS**:",
            "1. ONLY use exercises from the provided exercise library (match exercise_id exactly)",
            "2. RESPECT all injury restrictions - NEVER select exercises that conflict",
            f"3. FILTER by available equipment - client can ONLY use: {equipment}",
            "4. BALANCE movement patterns across each week",
            "5. MATCH experience level with appropriate exercises and intensity",
            f"6. FIT all workouts within {request.session_duration_minutes} minutes",
            "",
            "Output ONLY valid JSON following the exact structure specified in the system prompt.",
        ]
    )
    return "\n".join(sections)


def generate_workout_prompt(request: ProgramGenerationInput, exercises: Sequence[Exercise]) -> tuple[str, str]:
    """(system, user) prompt pair."""
    return get_system_prompt(), get_user_prompt(request, exercises)


def summarize_previous_weeks(weekly_structure: list[dict[str, Any]], weeks: int = CONTEXT_WEEKS) -> list[dict]:
    """Compact view of the last generated weeks, fed to the next chunk."""
    summary = []
    for week in weekly_structure[-weeks:]:
        summary.append(
            {
                "week_number": week.get("week_number"),
                "workouts": [
                    {
                        "workout_name": w.get("workout_name"),
                        "workout_focus": w.get("workout_focus"),
                        "exercise_count": len(w.get("exercises") or []),
                        "sample_exercises": [ex.get("exercise_id") for ex in (w.get("exercises") or [])[:3]],
                    }
                    for w in week.get("workouts") or []
                ],
            }
        )
    return summary


def build_chunk_prompt(
    user_prompt: str,
    start_week: int,
    end_week: int,
    total_weeks: int,
    sessions_per_week: int,
    previous_weeks: list[dict[str, Any]] | None = None,
) -> str:
    """User prompt for one chunk of weeks; later chunks carry progression context."""
    if previous_weeks:
        context = json.dumps(summarize_previous_weeks(previous_weeks), indent=2)
        return (
            f"{user_prompt}\n\nPREVIOUS WEEKS CONTEXT:\n{context}\n\n"
            f"IMPORTANT: Generate weeks {start_week} through {end_week} as the NEXT progression phase "
            "after the weeks above.\n"
            "- Progress from previous weeks (increase intensity, volume, or complexity)\n"
            "- Vary exercises to avoid repetition - do NOT use the exact same exercises in the same order\n"
            "- Maintain movement pattern balance but introduce variety\n"
            "- Ensure clear progression from previous phase"
        )
    return (
        f"{user_prompt}\n\nIMPORTANT: Generate weeks {start_week} through {end_week} of the "
        f"{total_weeks}-week program as the FOUNDATION phase. Include {sessions_per_week} sessions per week."
    )
