#!/usr/bin/env python3
"""Start the totem ledger API, reporting startup failures to Logfire."""

import sys

import logfire
import uvicorn

from totem.config import Settings
from totem.util.logging import setup_logging
from totem.util.observability import configure_logfire


def main() -> int:
    """Configure logging, then serve the API with uvicorn."""
    settings = Settings()

    # Logfire first so that import-time failures of the app are captured
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting totem ledger API",
            host=settings.host,
            port=settings.port,
            decay_model=settings.decay.model.value,
        )
        uvicorn.run(
            "totem.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
        return 0

    except Exception as e:
        logfire.error(
            "API startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
