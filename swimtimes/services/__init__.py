"""Application services built on the identity engine."""

from swimtimes.services.stats import (
    AthleteStats,
    EventDetail,
    athlete_stats,
    event_detail,
    personal_bests,
)
from swimtimes.services.swim_service import SwimDataService

__all__ = [
    "AthleteStats",
    "EventDetail",
    "SwimDataService",
    "athlete_stats",
    "event_detail",
    "personal_bests",
]
