"""Mannequin runtime modules."""

from mannequin.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from mannequin.runtime.logging import configure_logging, get_logger, setup_logging

__all__ = [
    "RECOVERABLE_RUNTIME_ERRORS",
    "configure_logging",
    "get_logger",
    "log_recoverable",
    "setup_logging",
]
