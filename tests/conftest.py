"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Ensure the src/ directory is on sys.path so `import mentormatch` works without installation.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))

from mentormatch.config import reset_settings  # noqa: E402
from mentormatch.database import queries  # noqa: E402
from mentormatch.database.models import Base  # noqa: E402
from mentormatch.domain import User  # noqa: E402
from people import profile_draft  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest.fixture
def add_user(session):
    """Persist a named test person and return the stored :class:`User`."""

    async def _add(person: str, **overrides) -> User:
        record = await queries.insert_user(session, profile_draft(person, **overrides))
        await session.commit()
        return queries.user_from_record(record)

    return _add
