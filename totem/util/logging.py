"""Standard library logging setup.

Our own code logs through ``logfire``. Libraries (uvicorn, SQLAlchemy,
asyncpg, alembic) use ``logging``; their records are printed to stdout and
forwarded to Logfire so that both streams end up in one place.
"""

import logging
import sys

import logfire

from totem.config import Settings

LEVELS = {
    "production": logging.WARNING,
    "staging": logging.INFO,
    "development": logging.INFO,
    "test": logging.WARNING,
}

# Loggers that are noisy below WARNING whatever the environment
QUIET_LOGGERS = ("sqlalchemy.engine", "asyncpg", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the current environment.

    Call after ``configure_logfire`` so the forwarding handler has a
    configured Logfire instance to write to.
    """
    level = logging.DEBUG if settings.debug else LEVELS[settings.environment]

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logging.basicConfig(
        level=level,
        handlers=[console, logfire.LogfireLoggingHandler()],
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
