from __future__ import annotations

import json
import os
import re

os.environ.setdefault("DATABASE_DSN", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from trainer_aide.core.seed_data import seed_demo_data
from trainer_aide.db.base import Base
from trainer_aide.db.session import get_db, get_session_factory
from trainer_aide.main import app
from trainer_aide.models.exercise import Exercise
from trainer_aide.models.user import ClientProfile
from trainer_aide.services.anthropic_client import ClaudeResponse, ClaudeUsage, get_claude_client

# Bodyweight, beginner: pass every equipment and level filter.
CANNED_SLUGS = ["push-up", "glute-bridge", "walking-lunge", "plank"]


def canned_program(exercise_ids, start_week, end_week, sessions_per_week):
    return {
        "program_name": "Foundation Strength",
        "description": "Progressive full-body program",
        "total_weeks": end_week,
        "ai_rationale": "Balanced push, hinge, lunge and core work",
        "movement_balance_summary": {"push_horizontal": 1, "hinge": 1, "lunge": 1, "core": 1},
        "weekly_structure": [
            {
                "week_number": week,
                "workouts": [
                    {
                        "day_number": day,
                        "workout_name": f"Week {week} Day {day}",
                        "workout_focus": "Full body",
                        "session_type": "strength",
                        "exercises": [
                            {
                                "exercise_id": ex_id,
                                "exercise_order": order,
                                "block_label": "A1" if order <= 2 else "B1",
                                "sets": 3,
                                "reps_target": "8-10",
                                "target_rpe": 7,
                                "tempo": "3-1-1-0",
                                "rest_seconds": 90,
                                "coaching_cues": ["Brace core"],
                            }
                            for order, ex_id in enumerate(exercise_ids, start=1)
                        ],
                    }
                    for day in range(1, sessions_per_week + 1)
                ],
            }
            for week in range(start_week, end_week + 1)
        ],
    }


class FakeClaude:
    """Stands in for ClaudeClient; answers each chunk prompt with a canned program."""

    model = "claude-sonnet-4-5-20250929"

    def __init__(self):
        self.exercise_ids: list[str] = []
        self.calls: list[dict] = []
        self.error: Exception | None = None
        self.override: dict | None = None

    async def call_claude_json(self, system_prompt, user_prompt, json_schema=None, **kwargs):
        self.calls.append({"system": system_prompt, "user": user_prompt, **kwargs})
        if self.error is not None:
            raise self.error
        if self.override is not None:
            data = self.override
        else:
            start, end = (int(x) for x in re.search(r"Generate weeks (\d+) through (\d+)", user_prompt).groups())
            sessions = int(re.search(r"\*\*Sessions Per Week\*\*: (\d+)", user_prompt).group(1))
            data = canned_program(self.exercise_ids, start, end, sessions)
        response = ClaudeResponse(
            content=json.dumps(data),
            stop_reason="end_turn",
            usage=ClaudeUsage(input_tokens=1200, output_tokens=3400),
            model=self.model,
            latency_ms=5,
        )
        return data, response


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with factory() as session:
        await seed_demo_data(session)
        await session.commit()
    return factory


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def exercise_ids(db) -> dict[str, str]:
    result = await db.execute(select(Exercise.slug, Exercise.id))
    return {slug: str(ex_id) for slug, ex_id in result.all()}


@pytest.fixture
def fake_claude(exercise_ids) -> FakeClaude:
    fake = FakeClaude()
    fake.exercise_ids = [exercise_ids[slug] for slug in CANNED_SLUGS]
    return fake


@pytest_asyncio.fixture
async def client(session_factory, fake_claude):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_claude_client] = lambda: fake_claude
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client_ids(db) -> dict[str, str]:
    """Seeded client profile ids by first name."""
    result = await db.execute(select(ClientProfile.first_name, ClientProfile.id))
    return {name: str(profile_id) for name, profile_id in result.all()}
