# jadwal/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from jadwal.config.settings import get_settings

# Libraries that log per query or per connection
NOISY_LOGGERS = [
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "sqlalchemy.orm",
    "alembic",
    "redis",
    "multipart",
    "watchfiles",
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
]


def setup_logging(verbose=True):
    """
    Configure application logging.

    `LOG_LEVEL` applies to the `jadwal` package. In quiet mode everything
    else is held to warnings and the noisy libraries to errors.
    """
    settings = get_settings()
    app_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=app_level if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)]
    )
    logging.getLogger("jadwal").setLevel(app_level)

    if not verbose:
        for name in NOISY_LOGGERS:
            logger = logging.getLogger(name)
            logger.setLevel(logging.ERROR)
            logger.propagate = False
