"""Personal bests, per-athlete statistics and event views."""

from pydantic import BaseModel, Field

from swimtimes.identity.store import IdentityStore
from swimtimes.models.event import EventSummary
from swimtimes.models.swim_time import SwimTime

RECENT_TIMES_LIMIT = 10


class AthleteStats(BaseModel):
    """Summary of one athlete for roster views."""

    name: str = Field(description="Canonical name")
    aliases: list[str] = Field(default_factory=list)
    total_times: int = Field(default=0, description="Number of recorded swim times")
    personal_bests: list[SwimTime] = Field(default_factory=list)
    recent_times: list[SwimTime] = Field(
        default_factory=list, description="Most recent swim times"
    )


def personal_bests(swim_times: list[SwimTime]) -> list[SwimTime]:
    """Fastest swim per athlete and event (stroke, distance, pool length).

    Args:
        swim_times: Swim times to search

    Returns:
        One swim time per athlete and event, in first-seen order
    """
    bests: dict[tuple, SwimTime] = {}
    for swim_time in swim_times:
        key = (
            swim_time.athlete_name,
            swim_time.stroke,
            swim_time.distance,
            swim_time.pool_length,
        )
        existing = bests.get(key)
        if existing is None or swim_time.seconds < existing.seconds:
            bests[key] = swim_time
    return list(bests.values())


def athlete_stats(store: IdentityStore) -> list[AthleteStats]:
    """Statistics for every athlete, sorted by canonical name."""
    stats = []
    for athlete in store.list_athletes():
        swim_times = store.swim_times_for(athlete.canonical_name)
        stats.append(
            AthleteStats(
                name=athlete.canonical_name,
                aliases=list(athlete.aliases),
                total_times=len(swim_times),
                personal_bests=personal_bests(swim_times),
                recent_times=swim_times[:RECENT_TIMES_LIMIT],
            )
        )
    return stats


class EventDetail(EventSummary):
    """One event with its athletes and swim times."""

    athletes: list[str] = Field(default_factory=list)
    swim_times: list[SwimTime] = Field(default_factory=list)


def event_detail(store: IdentityStore, event_name: str) -> EventDetail | None:
    """Summary, athletes and swim times of one event; None if unknown."""
    summary = next((e for e in store.list_events() if e.name == event_name), None)
    if summary is None:
        return None
    return EventDetail(
        **summary.model_dump(),
        athletes=store.athletes_for_event(event_name),
        swim_times=store.swim_times_for_event(event_name),
    )
