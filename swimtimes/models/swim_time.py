"""Swim time (performance record) models."""

from datetime import UTC, date, datetime, time
from enum import Enum

from pydantic import Field, field_validator

from swimtimes.models.base import WireModel, new_id

MEASURED_TIME_PATTERN = r"^\s*(\d+:)?\d+(\.\d+)?\s*$"


class Stroke(str, Enum):
    """Swimming stroke of an event."""

    FREESTYLE = "Freestyle"
    BACKSTROKE = "Backstroke"
    BREASTSTROKE = "Breaststroke"
    BUTTERFLY = "Butterfly"
    IM = "IM"


class PoolLength(str, Enum):
    """Pool course: short/long course, metres/yards."""

    SCM = "SCM"
    SCY = "SCY"
    LCM = "LCM"
    LCY = "LCY"


def time_to_seconds(measured_time: str) -> float:
    """Convert a formatted swim time (SS.ss or MM:SS.ss) to seconds."""
    parts = measured_time.strip().split(":")
    if len(parts) == 2:
        return float(parts[0]) * 60 + float(parts[1])
    return float(parts[0])


class SwimTimeFields(WireModel):
    """Event attributes shared by stored and submitted swim times."""

    athlete_name: str = Field(min_length=1, description="Canonical athlete name")
    event_name: str = Field(min_length=1, description="Meet or session name")
    swim_date: date = Field(alias="date", description="Day the time was swum")
    measured_time: str = Field(
        pattern=MEASURED_TIME_PATTERN,
        description="Formatted duration (SS.ss or MM:SS.ss)",
    )
    stroke: Stroke
    distance: int = Field(gt=0, description="Race distance in pool units")
    pool_length: PoolLength
    splits: str | None = Field(default=None, description="Optional split times")

    @property
    def seconds(self) -> float:
        """Measured time in seconds, for comparisons."""
        return time_to_seconds(self.measured_time)


class SwimTimeCreate(SwimTimeFields):
    """A swim time submitted for recording."""


class SwimTime(SwimTimeFields):
    """A stored swim time.

    athlete_name always equals the canonical name of an existing athlete.
    last_modified orders competing versions of the same record during
    reconciliation.
    """

    id: str = Field(default_factory=new_id)
    last_modified: datetime | None = Field(
        default=None,
        alias="last_modified",
        description="When the record was last edited",
    )

    @field_validator("id", mode="before")
    @classmethod
    def default_missing_id(cls, v: object) -> object:
        """Imported entries may carry a null, empty or numeric id."""
        if not v:
            return new_id()
        if isinstance(v, int | float):
            return str(v)
        return v

    def effective_last_modified(self) -> datetime:
        """Recency timestamp, falling back to the swim date at midnight UTC."""
        if self.last_modified is None:
            return datetime.combine(self.swim_date, time.min, tzinfo=UTC)
        if self.last_modified.tzinfo is None:
            return self.last_modified.replace(tzinfo=UTC)
        return self.last_modified


class SwimTimeUpdate(WireModel):
    """Partial update of a swim time; unset fields are left unchanged."""

    athlete_name: str | None = Field(default=None, min_length=1)
    event_name: str | None = Field(default=None, min_length=1)
    swim_date: date | None = Field(default=None, alias="date")
    measured_time: str | None = Field(default=None, pattern=MEASURED_TIME_PATTERN)
    stroke: Stroke | None = None
    distance: int | None = Field(default=None, gt=0)
    pool_length: PoolLength | None = None
    splits: str | None = None
