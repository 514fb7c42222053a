"""Domain models for SwimTimes.

- BaseEntity: Base class with id, timestamps
- Athlete: Identity with canonical name and aliases
- SwimTime: A recorded performance of an athlete
- EventSummary: Swim times grouped by event name
- Snapshot: All athletes and swim times, persisted as a unit
"""

from swimtimes.models.athlete import Athlete, AthleteMetadata
from swimtimes.models.base import BaseEntity
from swimtimes.models.event import EventSummary
from swimtimes.models.snapshot import Snapshot
from swimtimes.models.swim_time import (
    PoolLength,
    Stroke,
    SwimTime,
    SwimTimeCreate,
    SwimTimeUpdate,
    time_to_seconds,
)

__all__ = [
    "Athlete",
    "AthleteMetadata",
    "BaseEntity",
    "EventSummary",
    "PoolLength",
    "Snapshot",
    "Stroke",
    "SwimTime",
    "SwimTimeCreate",
    "SwimTimeUpdate",
    "time_to_seconds",
]
