"""Logging configuration handed to uvicorn.

Uvicorn's own loggers carry no handlers and propagate to the root logger,
which `catalog.server.logger.setup_logging` configures, so server and
application records share one output format.
"""

import logging
from typing import Any

from catalog.server.logger import ENV_LOG_LEVEL


_LEVEL = logging.getLevelName(ENV_LOG_LEVEL)

LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "loggers": {
        "uvicorn": {"handlers": [], "level": _LEVEL, "propagate": True},
        "uvicorn.error": {
            "handlers": [],
            "level": _LEVEL,
            "propagate": True,
        },
        # Requests are logged by RequestLoggingMiddleware
        "uvicorn.access": {"handlers": [], "level": "WARNING", "propagate": True},
    },
}
