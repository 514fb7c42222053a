"""Tests for event API endpoints."""

from collections.abc import Callable
from datetime import UTC, date, datetime

import pytest
from httpx import AsyncClient

from swimtimes.models.athlete import Athlete
from swimtimes.models.snapshot import Snapshot
from swimtimes.models.swim_time import SwimTime
from swimtimes.repositories.snapshot_repo import SnapshotRepository


@pytest.fixture
async def seeded(
    snapshot_repo: SnapshotRepository, make_swim_time: Callable[..., SwimTime]
) -> None:
    """Two events: County Champs (two athletes) and Winter Open (one)."""
    await snapshot_repo.save(
        Snapshot(
            athletes=[
                Athlete(canonical_name="Ann Lee"),
                Athlete(canonical_name="Bob Stone"),
            ],
            swim_times=[
                make_swim_time(
                    "Ann Lee",
                    id="t-1",
                    event_name="County Champs",
                    swim_date=date(2024, 3, 1),
                ),
                make_swim_time(
                    "Bob Stone",
                    id="t-2",
                    event_name="County Champs",
                    swim_date=date(2024, 3, 2),
                ),
                make_swim_time(
                    "Ann Lee",
                    id="t-3",
                    event_name="County Champs",
                    swim_date=date(2024, 3, 2),
                    distance=200,
                ),
                make_swim_time(
                    "Ann Lee",
                    id="t-4",
                    event_name="Winter Open",
                    swim_date=date(2024, 1, 20),
                ),
            ],
        )
    )


@pytest.mark.asyncio
async def test_list_events(client: AsyncClient, seeded: None) -> None:
    """Events are listed most recent first with counts."""
    response = await client.get("/events")

    assert response.status_code == 200
    assert response.json() == [
        {
            "name": "County Champs",
            "latest_date": "2024-03-02",
            "times_count": 3,
            "athletes_count": 2,
        },
        {
            "name": "Winter Open",
            "latest_date": "2024-01-20",
            "times_count": 1,
            "athletes_count": 1,
        },
    ]


@pytest.mark.asyncio
async def test_list_events_empty(client: AsyncClient) -> None:
    response = await client.get("/events")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_get_event(client: AsyncClient, seeded: None) -> None:
    """Event detail carries its athletes and swim times."""
    response = await client.get("/events/County Champs")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "County Champs"
    assert data["athletes"] == ["Ann Lee", "Bob Stone"]
    assert {t["id"] for t in data["swim_times"]} == {"t-1", "t-2", "t-3"}
    assert data["swim_times"][0]["eventName"] == "County Champs"


@pytest.mark.asyncio
async def test_get_event_with_slash_in_name(
    client: AsyncClient,
    snapshot_repo: SnapshotRepository,
    make_swim_time: Callable[..., SwimTime],
) -> None:
    await snapshot_repo.save(
        Snapshot(
            athletes=[Athlete(canonical_name="Ann Lee")],
            swim_times=[make_swim_time("Ann Lee", event_name="Senior/Junior Meet")],
        )
    )

    response = await client.get("/events/Senior/Junior Meet")

    assert response.status_code == 200
    assert response.json()["times_count"] == 1


@pytest.mark.asyncio
async def test_get_event_not_found(client: AsyncClient, seeded: None) -> None:
    response = await client.get("/events/Nowhere Meet")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_rename_event(client: AsyncClient, seeded: None) -> None:
    """Renaming rewrites every swim time and bumps last_modified."""
    response = await client.post(
        "/events/rename",
        json={"current_name": "Winter Open", "new_name": "Winter Open 2024"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Winter Open 2024"
    assert [t["id"] for t in data["swim_times"]] == ["t-4"]
    last_modified = datetime.fromisoformat(data["swim_times"][0]["last_modified"])
    assert last_modified > datetime(2024, 3, 1, 12, 0, tzinfo=UTC)

    old = await client.get("/events/Winter Open")
    assert old.status_code == 404


@pytest.mark.asyncio
async def test_rename_event_merges_into_existing(
    client: AsyncClient, seeded: None
) -> None:
    """Renaming onto an existing event name merges the two events."""
    response = await client.post(
        "/events/rename",
        json={"current_name": "Winter Open", "new_name": "County Champs"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["times_count"] == 4
    assert data["latest_date"] == "2024-03-02"

    events = await client.get("/events")
    assert [e["name"] for e in events.json()] == ["County Champs"]


@pytest.mark.asyncio
async def test_rename_event_blank_name(client: AsyncClient, seeded: None) -> None:
    response = await client.post(
        "/events/rename", json={"current_name": "Winter Open", "new_name": ""}
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_rename_event_whitespace_name(
    client: AsyncClient, seeded: None
) -> None:
    response = await client.post(
        "/events/rename", json={"current_name": "Winter Open", "new_name": "   "}
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_rename_unknown_event(client: AsyncClient, seeded: None) -> None:
    response = await client.post(
        "/events/rename", json={"current_name": "Nowhere Meet", "new_name": "X"}
    )

    assert response.status_code == 404
