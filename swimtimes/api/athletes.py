"""Athlete identity API endpoints.

Provides endpoints for listing athletes, resolving names, reviewing likely
duplicates, and the merge / rename / unmerge workflow a human uses to act
on them.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from swimtimes.api.deps import get_swim_service, http_error
from swimtimes.identity.schemas import DuplicateCandidate
from swimtimes.identity.store import IdentityError
from swimtimes.models.athlete import Athlete
from swimtimes.services.stats import AthleteStats
from swimtimes.services.swim_service import SwimDataService

router = APIRouter(prefix="/athletes", tags=["athletes"])


class ResolveResponse(BaseModel):
    """Canonical form of a name."""

    name: str = Field(description="Name as given")
    canonical_name: str = Field(description="Canonical name it resolves to")
    known: bool = Field(description="False if no athlete uses this name")


class MergeRequest(BaseModel):
    """Request to merge one athlete into another."""

    from_name: str = Field(description="Athlete to absorb (name or alias)")
    to_name: str = Field(description="Surviving athlete (name or alias)")
    final_name: str | None = Field(
        default=None,
        description="Canonical name after the merge; any name of either athlete",
    )


class RenameRequest(BaseModel):
    """Request to promote one of an athlete's aliases to canonical name."""

    current_name: str = Field(description="Current canonical name")
    new_name: str = Field(description="Existing alias to promote")


class UnmergeRequest(BaseModel):
    """Request to split an alias off into its own athlete."""

    alias: str = Field(description="Alias to detach")


@router.get("", response_model=list[AthleteStats])
async def list_athletes(
    name: str | None = Query(
        default=None, description="Only the athlete this name or alias resolves to"
    ),
    service: SwimDataService = Depends(get_swim_service),
) -> list[AthleteStats]:
    """List athletes with aliases, personal bests and recent times.

    The name filter reaches any athlete, including one whose name collides
    with a fixed route such as "duplicates".
    """
    return await service.list_athletes(name)


@router.get("/duplicates", response_model=list[DuplicateCandidate])
async def find_duplicates(
    threshold: float | None = Query(
        default=None, ge=0.0, le=1.0, description="Minimum similarity"
    ),
    service: SwimDataService = Depends(get_swim_service),
) -> list[DuplicateCandidate]:
    """Suggest pairs of athletes that may be the same person.

    Suggestions only; nothing is merged until a merge is requested.
    """
    return await service.find_duplicates(threshold)


@router.get("/resolve/{name:path}", response_model=ResolveResponse)
async def resolve_name(
    name: str,
    service: SwimDataService = Depends(get_swim_service),
) -> ResolveResponse:
    """Resolve a name or alias to its canonical athlete name."""
    athlete = await service.get_athlete(name)
    return ResolveResponse(
        name=name,
        canonical_name=athlete.canonical_name if athlete else name,
        known=athlete is not None,
    )


@router.post("/merge", response_model=Athlete)
async def merge_athletes(
    request: MergeRequest,
    service: SwimDataService = Depends(get_swim_service),
) -> Athlete:
    """Merge two athletes; their swim times and aliases are combined."""
    try:
        return await service.merge(
            request.from_name, request.to_name, request.final_name
        )
    except IdentityError as e:
        raise http_error(e) from e


@router.post("/rename", response_model=Athlete)
async def rename_athlete(
    request: RenameRequest,
    service: SwimDataService = Depends(get_swim_service),
) -> Athlete:
    """Swap an athlete's canonical name with one of its aliases."""
    try:
        return await service.rename(request.current_name, request.new_name)
    except IdentityError as e:
        raise http_error(e) from e


@router.post("/unmerge", response_model=Athlete)
async def unmerge_alias(
    request: UnmergeRequest,
    service: SwimDataService = Depends(get_swim_service),
) -> Athlete:
    """Detach an alias into a new athlete.

    Destructive: existing swim times stay with the former owner and cannot
    be reassigned automatically.
    """
    try:
        return await service.unmerge(request.alias)
    except IdentityError as e:
        raise http_error(e) from e


@router.get("/{name:path}", response_model=Athlete)
async def get_athlete(
    name: str,
    service: SwimDataService = Depends(get_swim_service),
) -> Athlete:
    """Get an athlete by canonical name or alias."""
    athlete = await service.get_athlete(name)
    if athlete is None:
        raise HTTPException(status_code=404, detail=f"Athlete not found: {name}")
    return athlete
