"""Settings and logging for constagg."""

from .logging import LOGGER_NAME, configure_logging, get_logger
from .settings import ConstaggSettings, get_settings

__all__ = [
    "ConstaggSettings",
    "get_settings",
    "LOGGER_NAME",
    "configure_logging",
    "get_logger",
]
