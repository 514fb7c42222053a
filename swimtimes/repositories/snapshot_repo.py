"""Repository for persisting the athlete/swim time snapshot.

The whole snapshot is read in one go and written back in a single batch,
so a save is atomic from the caller's point of view.
Uses SQLite (via TursoClient) for persistence.
"""

import json

from libsql_client import Statement

from swimtimes.db.turso import TursoClient
from swimtimes.models.athlete import Athlete
from swimtimes.models.snapshot import Snapshot
from swimtimes.models.swim_time import SwimTime


class SnapshotRepository:
    """Loads and saves the full snapshot.

    Athletes and swim times live in their own tables; list order is kept in
    a position column so a load returns the snapshot exactly as saved.
    """

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create snapshot tables if not exist."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS athletes (
                id TEXT PRIMARY KEY,
                canonical_name TEXT NOT NULL UNIQUE,
                aliases TEXT NOT NULL DEFAULT '[]',
                metadata TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                position INTEGER NOT NULL
            )
            """,
                """
            CREATE TABLE IF NOT EXISTS swim_times (
                id TEXT PRIMARY KEY,
                athlete_name TEXT NOT NULL,
                event_name TEXT NOT NULL,
                swim_date TEXT NOT NULL,
                measured_time TEXT NOT NULL,
                stroke TEXT NOT NULL,
                distance INTEGER NOT NULL,
                pool_length TEXT NOT NULL,
                splits TEXT,
                last_modified TEXT,
                position INTEGER NOT NULL
            )
            """,
                """
            CREATE INDEX IF NOT EXISTS idx_swim_times_athlete
            ON swim_times(athlete_name)
            """,
            ]
        )

    async def load(self) -> Snapshot:
        """Load the stored snapshot (empty if nothing saved yet).

        Returns:
            Snapshot with athletes and swim times in saved order
        """
        athlete_rows = await self._db.execute(
            """
            SELECT id, canonical_name, aliases, metadata, created_at, updated_at
            FROM athletes
            ORDER BY position
            """
        )
        swim_time_rows = await self._db.execute(
            """
            SELECT id, athlete_name, event_name, swim_date, measured_time,
                   stroke, distance, pool_length, splits, last_modified
            FROM swim_times
            ORDER BY position
            """
        )

        athletes = [
            Athlete(
                id=row[0],
                canonical_name=row[1],
                aliases=json.loads(row[2]),
                metadata=json.loads(row[3]) if row[3] else None,
                created_at=row[4],
                updated_at=row[5],
            )
            for row in athlete_rows.rows
        ]
        swim_times = [
            SwimTime(
                id=row[0],
                athlete_name=row[1],
                event_name=row[2],
                swim_date=row[3],
                measured_time=row[4],
                stroke=row[5],
                distance=row[6],
                pool_length=row[7],
                splits=row[8],
                last_modified=row[9],
            )
            for row in swim_time_rows.rows
        ]
        return Snapshot(athletes=athletes, swim_times=swim_times)

    async def save(self, snapshot: Snapshot) -> None:
        """Replace the stored snapshot.

        Args:
            snapshot: Snapshot to persist
        """
        statements: list[str | Statement] = [
            "DELETE FROM swim_times",
            "DELETE FROM athletes",
        ]

        for position, athlete in enumerate(snapshot.athletes):
            metadata = (
                athlete.metadata.model_dump_json(by_alias=True)
                if athlete.metadata
                else None
            )
            statements.append(
                Statement(
                    """
                    INSERT INTO athletes
                        (id, canonical_name, aliases, metadata,
                         created_at, updated_at, position)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        athlete.id,
                        athlete.canonical_name,
                        json.dumps(athlete.aliases),
                        metadata,
                        athlete.created_at.isoformat(),
                        athlete.updated_at.isoformat(),
                        position,
                    ],
                )
            )

        for position, swim_time in enumerate(snapshot.swim_times):
            statements.append(
                Statement(
                    """
                    INSERT INTO swim_times
                        (id, athlete_name, event_name, swim_date, measured_time,
                         stroke, distance, pool_length, splits, last_modified,
                         position)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        swim_time.id,
                        swim_time.athlete_name,
                        swim_time.event_name,
                        swim_time.swim_date.isoformat(),
                        swim_time.measured_time,
                        swim_time.stroke.value,
                        swim_time.distance,
                        swim_time.pool_length.value,
                        swim_time.splits,
                        swim_time.last_modified.isoformat()
                        if swim_time.last_modified
                        else None,
                        position,
                    ],
                )
            )

        await self._db.execute_batch(statements)

    async def clear(self) -> None:
        """Delete all athletes and swim times."""
        await self._db.execute_batch(["DELETE FROM swim_times", "DELETE FROM athletes"])
