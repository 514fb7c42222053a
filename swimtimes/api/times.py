"""Swim time API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from swimtimes.api.deps import get_swim_service
from swimtimes.models.swim_time import SwimTime, SwimTimeCreate, SwimTimeUpdate
from swimtimes.services.swim_service import SwimDataService

router = APIRouter(prefix="/times", tags=["times"])


@router.get("", response_model=list[SwimTime])
async def list_swim_times(
    athlete: str | None = Query(
        default=None, description="Only this athlete (name or alias)"
    ),
    service: SwimDataService = Depends(get_swim_service),
) -> list[SwimTime]:
    """List swim times, most recent first."""
    return await service.list_swim_times(athlete)


@router.get("/personal-bests", response_model=list[SwimTime])
async def get_personal_bests(
    athlete: str | None = Query(
        default=None, description="Only this athlete (name or alias)"
    ),
    service: SwimDataService = Depends(get_swim_service),
) -> list[SwimTime]:
    """Fastest swim per athlete, stroke, distance and pool length."""
    return await service.personal_bests(athlete)


@router.post("", response_model=SwimTime, status_code=201)
async def create_swim_time(
    entry: SwimTimeCreate,
    service: SwimDataService = Depends(get_swim_service),
) -> SwimTime:
    """Record a swim time.

    The athlete name is resolved through known aliases; an unknown name
    creates a new athlete.
    """
    return await service.create_swim_time(entry)


@router.get("/{swim_time_id}", response_model=SwimTime)
async def get_swim_time(
    swim_time_id: str,
    service: SwimDataService = Depends(get_swim_service),
) -> SwimTime:
    """Get a single swim time."""
    swim_time = await service.get_swim_time(swim_time_id)
    if swim_time is None:
        raise HTTPException(
            status_code=404, detail=f"Swim time {swim_time_id} not found"
        )
    return swim_time


@router.patch("/{swim_time_id}", response_model=SwimTime)
async def update_swim_time(
    swim_time_id: str,
    changes: SwimTimeUpdate,
    service: SwimDataService = Depends(get_swim_service),
) -> SwimTime:
    """Edit a swim time; only the given fields change."""
    swim_time = await service.update_swim_time(swim_time_id, changes)
    if swim_time is None:
        raise HTTPException(
            status_code=404, detail=f"Swim time {swim_time_id} not found"
        )
    return swim_time


@router.delete("/{swim_time_id}", status_code=204)
async def delete_swim_time(
    swim_time_id: str,
    service: SwimDataService = Depends(get_swim_service),
) -> None:
    """Delete a swim time."""
    if not await service.delete_swim_time(swim_time_id):
        raise HTTPException(
            status_code=404, detail=f"Swim time {swim_time_id} not found"
        )
