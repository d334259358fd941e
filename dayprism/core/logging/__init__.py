"""Logging utilities for monitoring and debugging."""

from dayprism.core.logging.config import LogConfig
from dayprism.core.logging.logger import configure_logging, log_context

__all__ = [
    "LogConfig",
    "configure_logging",
    "log_context",
]
