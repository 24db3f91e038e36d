# src/buildbake/logs.py

import logging
from typing import cast

from apathetic_logging import (
    Logger,
    registerDefaultLogLevel,
    registerLogger,
    registerLogLevelEnvVars,
)

from .constants import DEFAULT_ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL
from .meta import PROGRAM_ENV, PROGRAM_PACKAGE


class AppLogger(Logger):
    """App-specific logger class."""


# --- Logger initialization ---------------------------------------------------

# Loggers created after this point are AppLogger instances.
logging.setLoggerClass(AppLogger)

# Registers TRACE and SILENT and gives the root logger its stream handler
AppLogger.extendLoggingModule()

# BUILDBAKE_LOG_LEVEL wins over LOG_LEVEL
registerLogLevelEnvVars(
    [f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}", DEFAULT_ENV_LOG_LEVEL]
)
registerDefaultLogLevel(DEFAULT_LOG_LEVEL)

registerLogger(PROGRAM_PACKAGE)

_APP_LOGGER = cast("AppLogger", logging.getLogger(PROGRAM_PACKAGE))


# --- Convenience utils ---------------------------------------------------------


def get_app_logger() -> AppLogger:
    """Return the configured app logger."""
    return _APP_LOGGER
