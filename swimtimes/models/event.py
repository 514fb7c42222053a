"""Event (meet or session) summaries derived from swim times.

Events are not stored on their own: an event is the set of swim times that
share an event name.
"""

from datetime import date

from pydantic import BaseModel, Field


class EventSummary(BaseModel):
    """One event as listed in the event overview."""

    name: str = Field(description="Event name shared by its swim times")
    latest_date: date = Field(description="Most recent swim date in the event")
    times_count: int = Field(description="Number of swim times")
    athletes_count: int = Field(description="Number of distinct athletes")
