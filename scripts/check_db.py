import asyncio
import os
import sys

# Add parent directory to path so we can import trainer_aide
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import func, select

from trainer_aide.db.base import Base
from trainer_aide.db.session import async_session_maker, engine
from trainer_aide.models import *  # noqa: F401, F403


async def check_data():
    async with async_session_maker() as session:
        tables = sorted(Base.metadata.tables.values(), key=lambda t: t.name)
        print(f"Checking {len(tables)} tables")
        for table in tables:
            count = (await session.execute(select(func.count()).select_from(table))).scalar()
            print(f"Table '{table.name}' row count: {count}")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
