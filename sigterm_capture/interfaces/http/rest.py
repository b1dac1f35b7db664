"""
REST API Interface

Minimal FastAPI host the termination hook is attached to. Uvicorn
owns SIGTERM/SIGINT and runs the lifespan shutdown phase, which drives
the shutdown coordinator before the process is allowed to exit.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from sigterm_capture import __version__
from sigterm_capture.application.services import ShutdownCoordinator
from sigterm_capture.infrastructure.config import Settings, get_settings
from sigterm_capture.infrastructure.dependencies import build_coordinator
from sigterm_capture.infrastructure.http import MetadataClient
from sigterm_capture.infrastructure.logging import get_logger


logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str = __version__
    state: str = "running"
    uptime_seconds: Optional[float] = None


def create_app(
    settings: Optional[Settings] = None,
    coordinator: Optional[ShutdownCoordinator] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (default: environment)
        coordinator: Pre-built coordinator (default: built from settings)

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        On startup: wire the shutdown coordinator.
        On shutdown: run the termination pipeline within the grace period.
        """
        metadata_client = None
        if coordinator is None:
            metadata_client = MetadataClient(settings.metadata_uri, timeout=settings.metadata_timeout)
            app.state.coordinator = build_coordinator(settings, metadata_port=metadata_client)
        else:
            app.state.coordinator = coordinator
        app.state.started_at = time.time()

        logger.info(
            "Service starting",
            version=__version__,
            host_id=settings.host_id,
            metadata_configured=bool(settings.metadata_uri),
            artifact_dir=settings.artifact_dir,
        )

        yield

        logger.info("Service shutting down")
        try:
            await app.state.coordinator.run_with_grace_period()
        finally:
            if metadata_client is not None:
                await metadata_client.close()

        logger.info("Service shutdown complete")

    app = FastAPI(
        title="SIGTERM Capture",
        description="Termination hook that captures diagnostics on task failure",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/", tags=["root"])
    async def root() -> dict:
        return {"service": "sigterm-capture", "version": __version__}

    @app.get(
        "/health",
        response_model=HealthResponse,
        responses={
            200: {"description": "Service is healthy"},
            503: {"description": "Shutdown in progress"},
        },
        summary="Health check",
        description="Reports 503 once shutdown handling has begun",
        tags=["health"],
    )
    async def health_check(request: Request):
        current: ShutdownCoordinator = request.app.state.coordinator
        started_at = getattr(request.app.state, "started_at", None)
        uptime = time.time() - started_at if started_at else None

        if current.is_shutting_down():
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=HealthResponse(
                    status="shutting_down",
                    state=current.state.value,
                    uptime_seconds=uptime,
                ).model_dump(),
            )

        return HealthResponse(state=current.state.value, uptime_seconds=uptime)

    return app
