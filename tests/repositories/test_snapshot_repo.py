"""Tests for SnapshotRepository."""

from collections.abc import Callable
from datetime import UTC, date, datetime

import pytest

from swimtimes.db.turso import TursoClient
from swimtimes.models.athlete import Athlete, AthleteMetadata
from swimtimes.models.snapshot import Snapshot
from swimtimes.models.swim_time import PoolLength, Stroke, SwimTime
from swimtimes.repositories.snapshot_repo import SnapshotRepository


@pytest.fixture
def snapshot(make_swim_time: Callable[..., SwimTime]) -> Snapshot:
    return Snapshot(
        athletes=[
            Athlete(
                id="a-1",
                canonical_name="Ann Lee",
                aliases=["A.Lee", "Annie L"],
                metadata=AthleteMetadata(team="Sharks", birth_year=2010),
            ),
            Athlete(id="a-2", canonical_name="Bob Stone"),
        ],
        swim_times=[
            make_swim_time("Ann Lee", id="t-1", splits="30.10, 32.40"),
            make_swim_time(
                "Bob Stone",
                id="t-2",
                swim_date=date(2024, 5, 4),
                measured_time="2:31.90",
                stroke=Stroke.BREASTSTROKE,
                distance=200,
                pool_length=PoolLength.LCM,
                last_modified=None,
            ),
        ],
    )


@pytest.mark.asyncio
async def test_initialize_creates_tables(db_client: TursoClient):
    """Initialize should create athletes and swim_times tables."""
    repo = SnapshotRepository(db_client)
    await repo.initialize()

    result = await db_client.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
    )
    tables = [row[0] for row in result.rows]
    assert "athletes" in tables
    assert "swim_times" in tables


@pytest.mark.asyncio
async def test_initialize_is_idempotent(snapshot_repo: SnapshotRepository):
    """Running initialize twice should not fail."""
    await snapshot_repo.initialize()


@pytest.mark.asyncio
async def test_load_empty(snapshot_repo: SnapshotRepository):
    """A fresh database loads as an empty snapshot."""
    loaded = await snapshot_repo.load()

    assert loaded.athletes == []
    assert loaded.swim_times == []


@pytest.mark.asyncio
async def test_save_and_load(snapshot_repo: SnapshotRepository, snapshot: Snapshot):
    """Saved snapshot should load back unchanged."""
    await snapshot_repo.save(snapshot)

    loaded = await snapshot_repo.load()

    assert [a.canonical_name for a in loaded.athletes] == ["Ann Lee", "Bob Stone"]
    ann = loaded.athletes[0]
    assert ann.id == "a-1"
    assert ann.aliases == ["A.Lee", "Annie L"]
    assert ann.metadata.team == "Sharks"
    assert ann.metadata.birth_year == 2010
    assert ann.created_at == snapshot.athletes[0].created_at
    assert loaded.athletes[1].metadata is None

    assert [t.id for t in loaded.swim_times] == ["t-1", "t-2"]
    first, second = loaded.swim_times
    assert first.splits == "30.10, 32.40"
    assert first.last_modified == datetime(2024, 3, 1, 12, 0, tzinfo=UTC)
    assert second.swim_date == date(2024, 5, 4)
    assert second.stroke == Stroke.BREASTSTROKE
    assert second.pool_length == PoolLength.LCM
    assert second.distance == 200
    assert second.last_modified is None


@pytest.mark.asyncio
async def test_save_replaces_previous(
    snapshot_repo: SnapshotRepository, snapshot: Snapshot
):
    """A save overwrites everything stored before."""
    await snapshot_repo.save(snapshot)

    await snapshot_repo.save(
        Snapshot(athletes=[Athlete(canonical_name="Cara Diaz")], swim_times=[])
    )
    loaded = await snapshot_repo.load()

    assert [a.canonical_name for a in loaded.athletes] == ["Cara Diaz"]
    assert loaded.swim_times == []


@pytest.mark.asyncio
async def test_save_keeps_order(
    snapshot_repo: SnapshotRepository, snapshot: Snapshot
):
    """List order survives a round trip through the database."""
    snapshot.athletes.reverse()
    snapshot.swim_times.reverse()

    await snapshot_repo.save(snapshot)
    loaded = await snapshot_repo.load()

    assert [a.id for a in loaded.athletes] == ["a-2", "a-1"]
    assert [t.id for t in loaded.swim_times] == ["t-2", "t-1"]


@pytest.mark.asyncio
async def test_clear(snapshot_repo: SnapshotRepository, snapshot: Snapshot):
    """Clear removes all athletes and swim times."""
    await snapshot_repo.save(snapshot)

    await snapshot_repo.clear()
    loaded = await snapshot_repo.load()

    assert loaded.athletes == []
    assert loaded.swim_times == []
