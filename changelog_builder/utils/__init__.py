"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_EMPTY_TEMPLATE,
    DEFAULT_MAX_BACK_TRACK_TIME_DAYS,
    DEFAULT_MAX_PULL_REQUESTS,
    DEFAULT_MAX_TAGS_TO_FETCH,
    DEFAULT_PR_TEMPLATE,
    DEFAULT_TEMPLATE,
)
from .retry import retry_on_rate_limit

__all__ = [
    "DEFAULT_MAX_TAGS_TO_FETCH",
    "DEFAULT_MAX_PULL_REQUESTS",
    "DEFAULT_MAX_BACK_TRACK_TIME_DAYS",
    "DEFAULT_TEMPLATE",
    "DEFAULT_PR_TEMPLATE",
    "DEFAULT_EMPTY_TEMPLATE",
    "retry_on_rate_limit",
]
