"""Swim data service: load snapshot, run one identity operation, save.

Each call works against a freshly loaded snapshot and writes the result back
only if the operation succeeds. There is no locking: two processes writing
the same database race, and the last save wins.
"""

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

import structlog

from swimtimes.identity.duplicates import DuplicateDetector
from swimtimes.identity.reconciliation import Reconciler
from swimtimes.identity.schemas import DuplicateCandidate, ReconciliationResult
from swimtimes.identity.store import IdentityStore
from swimtimes.models.athlete import Athlete
from swimtimes.models.event import EventSummary
from swimtimes.models.swim_time import SwimTime, SwimTimeCreate, SwimTimeUpdate
from swimtimes.repositories.snapshot_repo import SnapshotRepository
from swimtimes.services.stats import (
    AthleteStats,
    EventDetail,
    athlete_stats,
    event_detail,
    personal_bests,
)

logger = structlog.get_logger()

T = TypeVar("T")


class SwimDataService:
    """Entry point for every read and write of athletes and swim times."""

    def __init__(
        self,
        repo: SnapshotRepository,
        detector: DuplicateDetector | None = None,
        reconciler: Reconciler | None = None,
    ):
        """Initialize the service.

        Args:
            repo: Snapshot persistence
            detector: Duplicate detector (default threshold 0.85)
            reconciler: Import reconciler; shares the detector by default
        """
        self._repo = repo
        self._detector = detector or DuplicateDetector()
        self._reconciler = reconciler or Reconciler(self._detector)

    async def load_store(self) -> IdentityStore:
        """Load the current snapshot into an IdentityStore."""
        return IdentityStore(await self._repo.load())

    async def _mutate(self, operation: Callable[[IdentityStore], T]) -> T:
        store = await self.load_store()
        result = operation(store)
        await self._repo.save(store.snapshot)
        return result

    # Athletes

    async def list_athletes(self, name: str | None = None) -> list[AthleteStats]:
        """Statistics for all athletes, or only the one a name resolves to."""
        store = await self.load_store()
        stats = athlete_stats(store)
        if name is None:
            return stats
        canonical = store.resolve(name)
        return [s for s in stats if s.name == canonical]

    async def get_athlete(self, name: str) -> Athlete | None:
        """Get athlete by canonical name or alias."""
        store = await self.load_store()
        return store.get_athlete(store.resolve(name))

    async def resolve(self, name: str) -> str:
        store = await self.load_store()
        return store.resolve(name)

    async def find_duplicates(
        self, threshold: float | None = None
    ) -> list[DuplicateCandidate]:
        store = await self.load_store()
        return self._detector.find_duplicates(store, threshold)

    async def merge(
        self,
        from_name: str,
        to_name: str,
        final_name: str | None = None,
    ) -> Athlete:
        """Merge two athletes, optionally choosing the final canonical name.

        Raises:
            IdentityError: If the merge is invalid (nothing is saved)
        """
        if final_name is None:
            return await self._mutate(lambda store: store.merge(from_name, to_name))
        return await self._mutate(
            lambda store: store.merge_with_final_name(from_name, to_name, final_name)
        )

    async def rename(self, current_name: str, new_name: str) -> Athlete:
        return await self._mutate(
            lambda store: store.rename_canonical(current_name, new_name)
        )

    async def unmerge(self, alias: str) -> Athlete:
        return await self._mutate(lambda store: store.unmerge_alias(alias))

    # Swim times

    async def list_swim_times(self, athlete: str | None = None) -> list[SwimTime]:
        store = await self.load_store()
        if athlete is not None:
            return store.swim_times_for(athlete)
        return store.list_swim_times()

    async def get_swim_time(self, swim_time_id: str) -> SwimTime | None:
        store = await self.load_store()
        return store.get_swim_time(swim_time_id)

    async def create_swim_time(self, entry: SwimTimeCreate) -> SwimTime:
        return await self._mutate(lambda store: store.create_swim_time(entry))

    async def update_swim_time(
        self, swim_time_id: str, changes: SwimTimeUpdate
    ) -> SwimTime | None:
        return await self._mutate(
            lambda store: store.update_swim_time(swim_time_id, changes)
        )

    async def delete_swim_time(self, swim_time_id: str) -> bool:
        return await self._mutate(lambda store: store.delete_swim_time(swim_time_id))

    async def personal_bests(self, athlete: str | None = None) -> list[SwimTime]:
        return personal_bests(await self.list_swim_times(athlete))

    # Events

    async def list_events(self) -> list[EventSummary]:
        store = await self.load_store()
        return store.list_events()

    async def get_event(self, event_name: str) -> EventDetail | None:
        return event_detail(await self.load_store(), event_name)

    async def rename_event(self, current_name: str, new_name: str) -> EventDetail:
        """Rename an event, or merge it into an existing one of that name.

        Raises:
            EventNotFoundError: If the event does not exist (nothing is saved)
        """

        def rename(store: IdentityStore) -> EventDetail:
            renamed = store.rename_event(current_name, new_name)
            return event_detail(store, renamed[0].event_name)

        return await self._mutate(rename)

    # Import / export

    async def export_data(self) -> dict[str, Any]:
        """Serialize everything in the format import_data() accepts."""
        snapshot = await self._repo.load()
        return snapshot.to_export()

    async def import_data(
        self,
        payload: str | bytes | Mapping[str, Any] | list[Any],
    ) -> ReconciliationResult:
        """Reconcile an exported data file into the local data.

        Raises:
            MalformedPayloadError: If the payload shape is invalid (nothing
                is saved)
        """
        return await self._mutate(
            lambda store: self._reconciler.reconcile(store, payload)
        )

    async def clear(self) -> None:
        """Delete all athletes and swim times."""
        await self._repo.clear()
        logger.warning("all swim data cleared")
