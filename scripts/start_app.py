#!/usr/bin/env python3
"""Start the Threadline API with Logfire error tracking for startup errors."""

import sys
import logfire
import uvicorn

from threadline.config import Settings
from threadline.util.logging import setup_logging
from threadline.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure logging and Logfire early to catch startup errors
    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting Threadline API",
            environment=settings.environment,
            git_sha=settings.git_sha,
        )

        # Single worker: the WebSocket hub lives in this process
        uvicorn.run(
            "threadline.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            workers=1,
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
