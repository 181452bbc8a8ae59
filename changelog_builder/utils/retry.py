"""Retry decorator for GitHub API calls that hit rate limits.

Primary and secondary rate limits raised by githubkit are retried after the
delay GitHub asks for. Other 403/429 responses fall back to the ``retry-after``
or ``x-ratelimit-reset`` headers, and finally to exponential backoff. Every
other error propagates on the first attempt.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Awaitable, Callable, TypeVar

import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

RATE_LIMIT_STATUS_CODES = (403, 429)


def is_rate_limit_error(exc: Exception) -> bool:
    """Return whether an exception raised by githubkit signals a rate limit."""
    if isinstance(exc, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)):
        return True
    if isinstance(exc, RequestFailed):
        return exc.response.status_code in RATE_LIMIT_STATUS_CODES
    return False


def rate_limit_wait_seconds(exc: Exception, fallback: float) -> float:
    """Work out how long GitHub wants us to wait before the next attempt.

    Args:
        exc: The rate limit exception raised by githubkit.
        fallback: Delay used when neither the exception nor its headers say otherwise.

    Returns:
        Number of seconds to wait, not yet capped.
    """
    retry_after = getattr(exc, "retry_after", None)
    if retry_after:
        return float(retry_after.total_seconds())

    if not isinstance(exc, RequestFailed):
        return fallback

    headers = exc.response.headers
    header_retry_after = headers.get("retry-after")
    if header_retry_after:
        try:
            return float(header_retry_after)
        except ValueError:
            logger.warning("Ignoring invalid retry-after header", retry_after=header_retry_after)

    reset = headers.get("x-ratelimit-reset")
    if reset:
        try:
            seconds_until_reset = int(reset) - int(time.time())
        except ValueError:
            logger.warning("Ignoring invalid x-ratelimit-reset header", rate_limit_reset=reset)
        else:
            if seconds_until_reset > 0:
                return float(seconds_until_reset + 1)

    return fallback


def retry_on_rate_limit(
    max_retries: int = 100,
    initial_delay: float = 10.0,
    max_delay: float = 300.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator retrying an async GitHub call while it is rate limited.

    Args:
        max_retries: Maximum number of retry attempts (default: 100)
        initial_delay: Initial backoff delay in seconds (default: 10.0)
        max_delay: Upper bound for any single wait in seconds (default: 300.0)
        exponential_base: Growth factor applied to the backoff delay (default: 2.0)

    Returns:
        Decorated coroutine function with retry logic

    Raises:
        TypeError: If applied to a function that is not a coroutine function.
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"@retry_on_rate_limit only supports async functions, got {func.__name__}")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as exc:
                    if not is_rate_limit_error(exc):
                        raise
                    if attempt >= max_retries:
                        logger.error(
                            "Giving up after repeated GitHub rate limiting",
                            function=func.__name__,
                            attempts=attempt + 1,
                            error_type=type(exc).__name__,
                        )
                        raise
                    wait_time = min(rate_limit_wait_seconds(exc, delay), max_delay)
                    logger.warning(
                        f"GitHub rate limit hit, retrying in {wait_time} seconds",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        error_type=type(exc).__name__,
                    )
                    await asyncio.sleep(wait_time)
                    delay = min(delay * exponential_base, max_delay)
                    attempt += 1

        return wrapper  # type: ignore

    return decorator
