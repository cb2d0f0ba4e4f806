"""Logfire setup and instrumentation.

Services log through ``logfire`` directly and wrap each ledger
transaction in a span:

    with logfire.span("toggle_label", item_id=item_id, direction="like"):
        ...

Domain outcomes (unlike without a like, exhausted quota) are logged at
info or warn. Storage failures such as transaction conflicts that outlive
their retries and session rollbacks are logged at error.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from totem.config import ObservabilitySettings, Settings

SERVICE_NAME = "totem-ledger"
SERVICE_VERSION = "0.1.0"

# Path parameters worth lifting onto request spans
_SPAN_PATH_PARAMS = ("item_id", "label_name")


def _should_send(observability: ObservabilitySettings) -> bool:
    """Explicit setting wins; otherwise send only when a token is present."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once per process, before the app is imported.

    Set ``OBSERVABILITY__LOGFIRE_TOKEN`` to ship telemetry to Logfire;
    without it everything goes to the console only.
    """
    send_to_logfire = _should_send(settings.observability)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        decay_model=settings.decay.model.value,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, tagging spans with the targeted item and label."""

    def _request_attributes(request, attributes):
        result = {**attributes}
        path_params = getattr(request, "path_params", None) or {}
        for name in _SPAN_PATH_PARAMS:
            if name in path_params:
                result[name] = path_params[name]
        if hasattr(request, "method"):
            result["method"] = request.method
        return result

    logfire.instrument_fastapi(app, request_attributes_mapper=_request_attributes)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL issued through the engine.

    Args:
        engine: Async engine; Logfire hooks its sync core
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
