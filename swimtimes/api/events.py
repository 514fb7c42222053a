"""Event API endpoints.

Events are the meets and sessions named on swim times. Renaming one onto
an existing event name merges the two.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from swimtimes.api.deps import get_swim_service, http_error
from swimtimes.identity.store import IdentityError
from swimtimes.models.event import EventSummary
from swimtimes.services.stats import EventDetail
from swimtimes.services.swim_service import SwimDataService

router = APIRouter(prefix="/events", tags=["events"])


class EventRenameRequest(BaseModel):
    """Request to rename an event or merge it into another."""

    current_name: str = Field(description="Event name to change")
    new_name: str = Field(
        min_length=1,
        description="New name; an existing event name merges the two events",
    )


@router.get("", response_model=list[EventSummary])
async def list_events(
    service: SwimDataService = Depends(get_swim_service),
) -> list[EventSummary]:
    """List events with swim time and athlete counts, most recent first."""
    return await service.list_events()


@router.post("/rename", response_model=EventDetail)
async def rename_event(
    request: EventRenameRequest,
    service: SwimDataService = Depends(get_swim_service),
) -> EventDetail:
    """Rename an event on all of its swim times."""
    try:
        return await service.rename_event(request.current_name, request.new_name)
    except IdentityError as e:
        raise http_error(e) from e


@router.get("/{name:path}", response_model=EventDetail)
async def get_event(
    name: str,
    service: SwimDataService = Depends(get_swim_service),
) -> EventDetail:
    """Get one event with its athletes and swim times."""
    event = await service.get_event(name)
    if event is None:
        raise HTTPException(status_code=404, detail=f"Event not found: {name}")
    return event
