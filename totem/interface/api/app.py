"""FastAPI application."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from totem.adapter.error import ConcurrentModificationError
from totem.interface.api.routes import health, totems, users
from totem.util.di.container import create_container, setup_di
from totem.util.observability import instrument_fastapi


async def _concurrent_modification_handler(
    request: Request, exc: ConcurrentModificationError
) -> JSONResponse:
    """Serve exhausted transaction retries as a retryable 503."""
    logfire.error(
        "Request failed after transaction retries",
        path=request.url.path,
        attempts=exc.attempts,
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"success": False, "error": exc.code, "message": str(exc)},
    )


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    app_instance = FastAPI(
        title="Totem Ledger API",
        description="Label endorsements with time-decaying crispness and paid refreshes",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    app_instance.add_exception_handler(
        ConcurrentModificationError,
        _concurrent_modification_handler,  # type: ignore[arg-type]
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    container = create_container()
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(totems.router)
    app_instance.include_router(users.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
