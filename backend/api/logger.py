"""
Graph API Backend — Logging Configuration
==========================================

What:  Configures the root logger once and hands out namespaced loggers.
How:   `setup_logging()` calls `logging.basicConfig(force=True)` with a
       stdout handler. The format depends on NODE_ENV:

       development / unset   2024-01-15 12:00:00 [INFO] graph_api.db: message
       production            2024-01-15T12:00:00 pid=123 level=INFO name=graph_api.db msg=message

Levels:
    CRITICAL  The service is going to stop or become unusable.
    ERROR     Fatal for one operation; the service keeps serving requests.
    WARNING   Something an operator should probably look at.
    INFO      Regular operation.
    DEBUG     Everything too verbose for INFO.
"""

import logging
import sys
from typing import Optional

from api.config import Settings, settings as default_settings

ROOT_LOGGER_NAME = "graph_api"

DEV_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEV_DATEFMT = "%Y-%m-%d %H:%M:%S"

PROD_FORMAT = "%(asctime)s pid=%(process)d level=%(levelname)s name=%(name)s msg=%(message)s"
PROD_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure logging for the entire application.

    Called from the application lifespan before anything else is
    initialized, and from `main()` before uvicorn starts.
    """
    settings = settings or default_settings

    if settings.is_production:
        log_format, datefmt = PROD_FORMAT, PROD_DATEFMT
    else:
        log_format, datefmt = DEV_FORMAT, DEV_DATEFMT

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt=datefmt,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # The request logging middleware already writes an access line.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str = "") -> logging.Logger:
    """Returns a logger under the `graph_api` namespace."""
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
