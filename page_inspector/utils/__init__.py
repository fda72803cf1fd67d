"""
Utility modules for the page inspector.

Contains logging, URL handling utilities, and constants.
"""

from .log import setup_logger, get_logger
from .paths import resolve_url
from .constants import (
    DEFAULT_USER_AGENT,
    MAX_RESOURCES,
    MAIN_FETCH_TIMEOUT,
    STYLESHEET_TIMEOUT,
    PROBE_TIMEOUT,
    PROBE_CONCURRENCY,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "resolve_url",
    "DEFAULT_USER_AGENT",
    "MAX_RESOURCES",
    "MAIN_FETCH_TIMEOUT",
    "STYLESHEET_TIMEOUT",
    "PROBE_TIMEOUT",
    "PROBE_CONCURRENCY",
]
