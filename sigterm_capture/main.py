"""
Service entry point.

Starts the FastAPI host under uvicorn with the termination hook attached.
"""

import uvicorn

from sigterm_capture.infrastructure.config import get_settings
from sigterm_capture.infrastructure.logging import configure_logging
from sigterm_capture.interfaces.http import create_app


def entry_point() -> None:
    """Console script entry point."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    entry_point()
