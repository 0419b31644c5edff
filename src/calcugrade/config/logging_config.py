"""
Logging configuration for the application.
"""
from __future__ import annotations

import logging
import sys


_HANDLER_NAME = "calcugrade"


def setup_logging(level: str = "INFO") -> None:
    """Configure application-wide logging. Safe to call more than once."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if any(handler.get_name() == _HANDLER_NAME for handler in root_logger.handlers):
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("urllib3").setLevel(logging.WARNING)
