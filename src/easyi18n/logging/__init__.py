"""
Logging module - Structured logging system.

HUMAN level (25), HumanLogHandler and the HumanLog helper for build
traceability; structlog for everything technical.
"""

from .human import HumanLog, HumanLogHandler
from .levels import HUMAN
from .setup import bind_run_context, configure_logging

__all__ = [
    "bind_run_context",
    "configure_logging",
    "HUMAN",
    "HumanLog",
    "HumanLogHandler",
]
