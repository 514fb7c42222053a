"""Import/export endpoints for the swim data file."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from swimtimes.api.deps import get_swim_service
from swimtimes.identity.reconciliation import MalformedPayloadError
from swimtimes.identity.schemas import ReconciliationResult
from swimtimes.services.swim_service import SwimDataService

router = APIRouter(prefix="/data", tags=["data"])


@router.get("/export")
async def export_data(
    service: SwimDataService = Depends(get_swim_service),
) -> dict[str, Any]:
    """Export all athletes and swim times as a data file."""
    return await service.export_data()


@router.post("/import", response_model=ReconciliationResult)
async def import_data(
    payload: Any = Body(..., description="Exported data file or array of times"),
    service: SwimDataService = Depends(get_swim_service),
) -> ReconciliationResult:
    """Reconcile a data file into the local data.

    Newer versions of known swim times replace local ones; conflicting
    aliases stay with their local owner and are reported for review.
    """
    try:
        return await service.import_data(payload)
    except MalformedPayloadError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.delete("", status_code=204)
async def clear_data(
    service: SwimDataService = Depends(get_swim_service),
) -> None:
    """Delete all athletes and swim times."""
    await service.clear()
