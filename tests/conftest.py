"""Pytest configuration and fixtures."""

from collections.abc import AsyncIterator, Callable
from datetime import UTC, date, datetime
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from swimtimes.db.turso import TursoClient
from swimtimes.main import app
from swimtimes.models.swim_time import PoolLength, Stroke, SwimTime
from swimtimes.repositories.snapshot_repo import SnapshotRepository
from swimtimes.services.swim_service import SwimDataService


@pytest.fixture
def make_swim_time() -> Callable[..., SwimTime]:
    """Factory for swim times with sensible defaults."""

    def _make(athlete_name: str, **overrides) -> SwimTime:
        fields = {
            "athlete_name": athlete_name,
            "event_name": "Spring Invitational",
            "swim_date": date(2024, 3, 1),
            "measured_time": "1:02.50",
            "stroke": Stroke.FREESTYLE,
            "distance": 100,
            "pool_length": PoolLength.SCM,
            "last_modified": datetime(2024, 3, 1, 12, 0, tzinfo=UTC),
        }
        fields.update(overrides)
        return SwimTime(**fields)

    return _make


@pytest.fixture
async def db_client(tmp_path: Path) -> AsyncIterator[TursoClient]:
    """Create a temp file database client for testing."""
    db_path = tmp_path / "test_swimtimes.db"
    client = TursoClient(url=f"file:{db_path}")
    await client.connect()
    yield client
    await client.close()


@pytest.fixture
async def snapshot_repo(db_client: TursoClient) -> SnapshotRepository:
    """Create SnapshotRepository with initialized tables."""
    repo = SnapshotRepository(db_client)
    await repo.initialize()
    return repo


@pytest.fixture
def swim_service(snapshot_repo: SnapshotRepository) -> SwimDataService:
    """SwimDataService backed by the temp database."""
    return SwimDataService(snapshot_repo)


@pytest.fixture
async def client(
    db_client: TursoClient, swim_service: SwimDataService
) -> AsyncIterator[AsyncClient]:
    """Create async test client for FastAPI app with database."""
    app.state.db = db_client
    app.state.swim_service = swim_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up app state
    del app.state.db
    del app.state.swim_service
