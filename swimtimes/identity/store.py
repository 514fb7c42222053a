"""IdentityStore: athletes, their aliases, and the swim times they own.

Swim times reference athletes by canonical name string rather than by id.
Operations that change a canonical name (merge, rename) therefore rewrite
every affected swim time, at a cost proportional to the number of records.

Every mutating operation checks all of its preconditions before changing
anything, so a raised IdentityError leaves the store untouched. Composite
work (reconciliation) runs inside transaction() for the same guarantee.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from swimtimes.models.athlete import Athlete, AthleteMetadata
from swimtimes.models.base import new_id, utc_now
from swimtimes.models.event import EventSummary
from swimtimes.models.snapshot import Snapshot
from swimtimes.models.swim_time import SwimTime, SwimTimeCreate, SwimTimeUpdate

logger = structlog.get_logger()


class IdentityError(Exception):
    """Raised when an identity operation is invalid."""


class AthleteNotFoundError(IdentityError):
    """Raised when a named athlete or alias does not exist."""


class EventNotFoundError(IdentityError):
    """Raised when no swim time carries the given event name."""


class IdentityStore:
    """In-memory view of one snapshot with identity operations.

    Exact lookups compare raw names: "Ann Lee" and "ann lee" are different
    athletes until someone merges them.
    """

    def __init__(self, snapshot: Snapshot | None = None):
        """Initialize store over a snapshot.

        Args:
            snapshot: Loaded snapshot; an empty one if omitted
        """
        self._snapshot = snapshot if snapshot is not None else Snapshot()

    @property
    def snapshot(self) -> Snapshot:
        """Current snapshot (for persistence)."""
        return self._snapshot

    @property
    def athletes(self) -> list[Athlete]:
        return self._snapshot.athletes

    @property
    def swim_times(self) -> list[SwimTime]:
        return self._snapshot.swim_times

    @contextmanager
    def transaction(self) -> Iterator["IdentityStore"]:
        """Roll the snapshot back if the enclosed block raises."""
        backup = self._snapshot.model_copy(deep=True)
        try:
            yield self
        except BaseException:
            self._snapshot = backup
            raise

    # Lookups

    def get_athlete(self, name: str) -> Athlete | None:
        """Find athlete by exact canonical name."""
        return next((a for a in self.athletes if a.canonical_name == name), None)

    def owner_of(self, name: str) -> Athlete | None:
        """Find athlete whose canonical name or alias is exactly name."""
        return self.get_athlete(name) or self._alias_owner(name)

    def list_athletes(self) -> list[Athlete]:
        """All athletes sorted by canonical name."""
        return sorted(self.athletes, key=lambda a: a.canonical_name.casefold())

    def record_count(self, name: str) -> int:
        """Number of swim times labelled with this canonical name."""
        return sum(1 for t in self.swim_times if t.athlete_name == name)

    def resolve(self, name: str) -> str:
        """Resolve any name (canonical or alias) to its canonical form.

        Unknown names are returned unchanged; nothing is created.
        """
        if self.get_athlete(name) is not None:
            return name
        owner = self._alias_owner(name)
        if owner is not None:
            return owner.canonical_name
        return name

    # Athlete lifecycle

    def ensure_exists(self, name: str) -> Athlete:
        """Return the athlete with this canonical name, creating it if needed.

        Raises:
            IdentityError: If name is already another athlete's alias
        """
        existing = self.get_athlete(name)
        if existing is not None:
            return existing

        owner = self._alias_owner(name)
        if owner is not None:
            msg = f'"{name}" is an alias of {owner.canonical_name}'
            raise IdentityError(msg)

        athlete = Athlete(canonical_name=name)
        self.athletes.append(athlete)
        logger.debug("athlete created", name=name)
        return athlete

    def add_athlete(
        self,
        canonical_name: str,
        aliases: list[str] | None = None,
        metadata: AthleteMetadata | None = None,
    ) -> Athlete:
        """Insert a new athlete with fresh id and timestamps.

        Raises:
            IdentityError: If any of the names is already owned
        """
        names = [canonical_name, *(aliases or [])]
        for name in names:
            owner = self.owner_of(name)
            if owner is not None:
                msg = f'"{name}" already belongs to {owner.canonical_name}'
                raise IdentityError(msg)

        athlete = Athlete(
            canonical_name=canonical_name,
            aliases=[a for a in (aliases or []) if a != canonical_name],
            metadata=metadata,
        )
        self.athletes.append(athlete)
        return athlete

    def merge(self, from_name: str, to_name: str) -> Athlete:
        """Merge one athlete into another.

        The target keeps its canonical name. The source's canonical name and
        aliases become target aliases, and its swim times move to the target.

        Args:
            from_name: Name (canonical or alias) of the athlete to absorb
            to_name: Name (canonical or alias) of the surviving athlete

        Returns:
            The surviving athlete

        Raises:
            IdentityError: On self-merge
            AthleteNotFoundError: If either side does not exist
        """
        resolved_from = self.resolve(from_name)
        resolved_to = self.resolve(to_name)
        source, target = self._merge_pair(resolved_from, resolved_to)

        self._rename_swim_times(resolved_from, resolved_to)

        for alias in [resolved_from, *source.aliases]:
            if alias != resolved_to and alias not in target.aliases:
                target.aliases.append(alias)

        # Never leave an alias pointing at a canonical name that is going away
        for athlete in self.athletes:
            if athlete is not target and athlete is not source:
                athlete.aliases = [
                    resolved_to if alias == resolved_from else alias
                    for alias in athlete.aliases
                ]

        self._snapshot.athletes = [a for a in self.athletes if a is not source]
        target.touch()

        logger.info("athletes merged", source=resolved_from, target=resolved_to)
        return target

    def rename_canonical(self, current_name: str, new_name: str) -> Athlete:
        """Swap an athlete's canonical name with one of its aliases.

        Renaming to an unrelated name is not allowed here; merge first and
        then rename with merge_with_final_name().

        Raises:
            AthleteNotFoundError: If no athlete has current_name as canonical
            IdentityError: If new_name is not one of the athlete's aliases
        """
        athlete = self.get_athlete(current_name)
        if athlete is None:
            msg = f"Athlete not found: {current_name}"
            raise AthleteNotFoundError(msg)

        if new_name == current_name:
            return athlete

        if new_name not in athlete.aliases:
            msg = f'"{new_name}" is not a known name or alias for this athlete'
            raise IdentityError(msg)

        self._rename_swim_times(current_name, new_name)
        athlete.aliases = [a for a in athlete.aliases if a != new_name]
        athlete.aliases.append(current_name)
        athlete.canonical_name = new_name
        athlete.touch()

        logger.info("athlete renamed", old_name=current_name, new_name=new_name)
        return athlete

    def merge_with_final_name(
        self,
        from_name: str,
        to_name: str,
        final_name: str,
    ) -> Athlete:
        """Merge two athletes and pick the surviving canonical name.

        final_name may be any canonical name or alias of either athlete
        before the merge.

        Raises:
            IdentityError: If the merge is invalid or final_name is not
                one of the two athletes' names
        """
        resolved_from = self.resolve(from_name)
        resolved_to = self.resolve(to_name)
        source, target = self._merge_pair(resolved_from, resolved_to)

        if not (source.owns(final_name) or target.owns(final_name)):
            msg = f'"{final_name}" is not a known name or alias for these athletes'
            raise IdentityError(msg)

        merged = self.merge(resolved_from, resolved_to)
        if merged.canonical_name != final_name:
            return self.rename_canonical(merged.canonical_name, final_name)
        return merged

    def unmerge_alias(self, alias: str) -> Athlete:
        """Detach an alias into a new, independent athlete.

        Swim times are not touched: which records originally belonged to the
        alias is not tracked, so the new athlete starts with none. This
        cannot be undone except by merging again.

        Raises:
            AthleteNotFoundError: If no athlete owns the alias
        """
        owner = self._alias_owner(alias)
        if owner is None:
            msg = f"Alias not found: {alias}"
            raise AthleteNotFoundError(msg)

        owner.aliases = [a for a in owner.aliases if a != alias]
        owner.touch()

        athlete = Athlete(canonical_name=alias)
        self.athletes.append(athlete)

        logger.warning("alias unmerged", alias=alias, former_owner=owner.canonical_name)
        return athlete

    # Swim times

    def get_swim_time(self, swim_time_id: str) -> SwimTime | None:
        return next((t for t in self.swim_times if t.id == swim_time_id), None)

    def list_swim_times(self) -> list[SwimTime]:
        """All swim times, most recent swim date first."""
        return sorted(self.swim_times, key=lambda t: t.swim_date, reverse=True)

    def swim_times_for(self, name: str) -> list[SwimTime]:
        """Swim times of the athlete a name resolves to, most recent first."""
        canonical = self.resolve(name)
        return [t for t in self.list_swim_times() if t.athlete_name == canonical]

    def create_swim_time(self, entry: SwimTimeCreate) -> SwimTime:
        """Record a swim time, creating its athlete on first use."""
        athlete = self.ensure_exists(self.resolve(entry.athlete_name))
        swim_time = SwimTime(
            **entry.model_dump(exclude={"athlete_name"}),
            athlete_name=athlete.canonical_name,
            id=new_id(),
            last_modified=utc_now(),
        )
        self.swim_times.append(swim_time)
        return swim_time

    def update_swim_time(
        self,
        swim_time_id: str,
        changes: SwimTimeUpdate,
    ) -> SwimTime | None:
        """Apply a partial update and bump last_modified.

        Returns:
            Updated swim time, or None if the id is unknown
        """
        index = next(
            (i for i, t in enumerate(self.swim_times) if t.id == swim_time_id),
            None,
        )
        if index is None:
            return None

        updates = {
            key: value
            for key, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or key == "splits"
        }
        if "athlete_name" in updates:
            athlete = self.ensure_exists(self.resolve(updates["athlete_name"]))
            updates["athlete_name"] = athlete.canonical_name
        updates["last_modified"] = utc_now()

        swim_time = self.swim_times[index].model_copy(update=updates)
        self.swim_times[index] = swim_time
        return swim_time

    def delete_swim_time(self, swim_time_id: str) -> bool:
        """Delete a swim time by id; False if it did not exist."""
        remaining = [t for t in self.swim_times if t.id != swim_time_id]
        if len(remaining) == len(self.swim_times):
            return False
        self._snapshot.swim_times = remaining
        return True

    def replace_swim_times(self, swim_times: list[SwimTime]) -> None:
        self._snapshot.swim_times = swim_times

    def clear(self) -> None:
        """Remove all athletes and swim times."""
        self._snapshot = Snapshot()

    # Events

    def list_events(self) -> list[EventSummary]:
        """Events derived from swim times, most recent first."""
        by_event: dict[str, list[SwimTime]] = {}
        for swim_time in self.swim_times:
            by_event.setdefault(swim_time.event_name, []).append(swim_time)

        events = [
            EventSummary(
                name=name,
                latest_date=max(t.swim_date for t in swim_times),
                times_count=len(swim_times),
                athletes_count=len({t.athlete_name for t in swim_times}),
            )
            for name, swim_times in by_event.items()
        ]
        events.sort(key=lambda e: e.name.casefold())
        events.sort(key=lambda e: e.latest_date, reverse=True)
        return events

    def swim_times_for_event(self, event_name: str) -> list[SwimTime]:
        """Swim times of one event, most recent first."""
        return [t for t in self.list_swim_times() if t.event_name == event_name]

    def athletes_for_event(self, event_name: str) -> list[str]:
        """Canonical names of athletes who swam in an event, sorted."""
        names = {t.athlete_name for t in self.swim_times if t.event_name == event_name}
        return sorted(names, key=str.casefold)

    def rename_event(self, current_name: str, new_name: str) -> list[SwimTime]:
        """Rename an event, merging it into new_name if that event exists.

        Every rewritten swim time gets a fresh last_modified, so the rename
        wins over older copies during reconciliation.

        Returns:
            The swim times that now carry new_name

        Raises:
            EventNotFoundError: If no swim time has current_name
            IdentityError: If new_name is blank
        """
        if not any(t.event_name == current_name for t in self.swim_times):
            msg = f"Event not found: {current_name}"
            raise EventNotFoundError(msg)

        new_name = new_name.strip()
        if not new_name:
            msg = "Event name must not be empty"
            raise IdentityError(msg)

        if new_name == current_name:
            return self.swim_times_for_event(current_name)

        merged = any(t.event_name == new_name for t in self.swim_times)
        now = utc_now()
        self._snapshot.swim_times = [
            t.model_copy(update={"event_name": new_name, "last_modified": now})
            if t.event_name == current_name
            else t
            for t in self.swim_times
        ]

        logger.info(
            "event renamed",
            old_name=current_name,
            new_name=new_name,
            merged=merged,
        )
        return self.swim_times_for_event(new_name)

    # Internals

    def _alias_owner(self, name: str) -> Athlete | None:
        return next((a for a in self.athletes if name in a.aliases), None)

    def _merge_pair(
        self,
        resolved_from: str,
        resolved_to: str,
    ) -> tuple[Athlete, Athlete]:
        if resolved_from == resolved_to:
            msg = "Cannot merge athlete with itself"
            raise IdentityError(msg)

        source = self.get_athlete(resolved_from)
        if source is None:
            msg = f"Source athlete not found: {resolved_from}"
            raise AthleteNotFoundError(msg)

        target = self.get_athlete(resolved_to)
        if target is None:
            msg = f"Target athlete not found: {resolved_to}"
            raise AthleteNotFoundError(msg)

        return source, target

    def _rename_swim_times(self, old_name: str, new_name: str) -> None:
        self._snapshot.swim_times = [
            t.model_copy(update={"athlete_name": new_name})
            if t.athlete_name == old_name
            else t
            for t in self.swim_times
        ]
