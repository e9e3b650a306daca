"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from events.presentation import router as events_router
from iam.presentation import router as iam_router
from infrastructure.database.dependencies import close_database_connections
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def arby_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration at startup
    - Database engine disposal on shutdown (the engine is created lazily)
    """
    configure_logging(debug=get_settings().debug)

    yield

    await close_database_connections()


app = FastAPI(
    title="Arby Events API",
    description="Groups, events and attendee lists for volunteer organizations",
    version=__version__,
    lifespan=arby_lifespan,
)

# Include bounded context routes
app.include_router(iam_router)
app.include_router(events_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok", "version": __version__}
