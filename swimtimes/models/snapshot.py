"""Snapshot: the full set of athletes and swim times, persisted as a unit."""

from typing import Any

from pydantic import BaseModel, Field

from swimtimes.models.athlete import Athlete
from swimtimes.models.base import utc_now
from swimtimes.models.swim_time import SwimTime

SNAPSHOT_VERSION = 2


class Snapshot(BaseModel):
    """All athletes and swim times of one roster."""

    athletes: list[Athlete] = Field(default_factory=list)
    swim_times: list[SwimTime] = Field(default_factory=list)
    version: int = Field(default=SNAPSHOT_VERSION)

    def to_export(self) -> dict[str, Any]:
        """Serialize to the data file format accepted by reconciliation."""
        return {
            "version": self.version,
            "exportedAt": utc_now().isoformat(),
            "athletes": [
                athlete.model_dump(mode="json", by_alias=True)
                for athlete in self.athletes
            ],
            "time_entries": [
                swim_time.model_dump(mode="json", by_alias=True)
                for swim_time in self.swim_times
            ],
        }
