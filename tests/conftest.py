import pytest
from datetime import datetime
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base
from app.api.deps import get_db  # Import from where routes actually use it
from app.models import Tournament, Game


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# Note: Using pytest-asyncio's built-in event_loop fixture (asyncio_mode = auto)


@pytest.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture(scope="function")
async def client(test_session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden database dependency."""

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# --- Data Fixtures ---

@pytest.fixture
async def sample_tournament(test_session) -> Tournament:
    """Tournament running 2025-01-15 10:00 to 2025-04-15 10:00."""
    tournament = Tournament(title="Winter Cup", start_date=datetime(2025, 1, 15, 10, 0))
    test_session.add(tournament)
    await test_session.commit()
    return tournament


@pytest.fixture
async def other_tournament(test_session) -> Tournament:
    tournament = Tournament(title="Spring Open", start_date=datetime(2025, 3, 1, 9, 0))
    test_session.add(tournament)
    await test_session.commit()
    return tournament


@pytest.fixture
async def sample_games(test_session, sample_tournament) -> list[Game]:
    """Two games inside the sample tournament window."""
    games = [
        Game(title="Final", time=datetime(2025, 3, 20, 18, 0), tournament_id=sample_tournament.id),
        Game(title="Opening Match", time=datetime(2025, 1, 20, 18, 0), tournament_id=sample_tournament.id),
    ]
    test_session.add_all(games)
    await test_session.commit()
    return games


@pytest.fixture
async def many_tournaments(test_session) -> list[Tournament]:
    tournaments = [
        Tournament(title=f"League {i:02d}", start_date=datetime(2025, 1, i + 1))
        for i in range(25)
    ]
    test_session.add_all(tournaments)
    await test_session.commit()
    return tournaments
