"""Shared FastAPI dependencies."""

from fastapi import HTTPException, Request

from swimtimes.identity.store import (
    AthleteNotFoundError,
    EventNotFoundError,
    IdentityError,
)
from swimtimes.services.swim_service import SwimDataService


def get_swim_service(request: Request) -> SwimDataService:
    """Get SwimDataService from app state."""
    if not hasattr(request.app.state, "swim_service"):
        raise HTTPException(status_code=500, detail="SwimDataService not initialized")
    return request.app.state.swim_service


def http_error(error: IdentityError) -> HTTPException:
    """Map an identity error to 404 (unknown name) or 409 (invalid change)."""
    not_found = isinstance(error, AthleteNotFoundError | EventNotFoundError)
    return HTTPException(status_code=404 if not_found else 409, detail=str(error))
