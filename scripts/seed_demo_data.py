"""Insert demo users, clients, exercises, templates, services and availability.

Safe to run repeatedly; rows that already exist are skipped.
"""

import asyncio
import os
import sys

# Add parent directory to path so we can import trainer_aide
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from trainer_aide.core.config import get_settings
from trainer_aide.core.logging_config import configure_logging
from trainer_aide.core.seed_data import seed_demo_data
from trainer_aide.db.session import async_session_maker, engine


async def main():
    configure_logging(get_settings().log_level)
    async with async_session_maker() as session:
        added = await seed_demo_data(session)
        await session.commit()
    for kind, count in added.items():
        print(f"{kind}: {count} added")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
