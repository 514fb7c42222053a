"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from swimtimes.api.router import api_router
from swimtimes.config import settings
from swimtimes.db.turso import TursoClient
from swimtimes.identity.duplicates import DuplicateDetector
from swimtimes.repositories.snapshot_repo import SnapshotRepository
from swimtimes.services.swim_service import SwimDataService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Initialize database connection
    - Create snapshot tables
    - Wire the swim data service

    Shutdown:
    - Close database connection
    """
    logger.info(f"Starting {settings.app_name}...")

    db = TursoClient()
    await db.connect()
    app.state.db = db
    logger.info(f"Database connected: {db.url}")

    snapshot_repo = SnapshotRepository(db)
    await snapshot_repo.initialize()
    logger.info("Snapshot repository initialized")

    detector = DuplicateDetector(threshold=settings.duplicate_threshold)
    app.state.swim_service = SwimDataService(snapshot_repo, detector=detector)
    logger.info(
        f"Swim data service initialized (duplicate threshold "
        f"{settings.duplicate_threshold})"
    )

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    await db.close()


app = FastAPI(
    title=settings.app_name,
    description="Swim time tracking with athlete identity resolution",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "swimtimes.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
