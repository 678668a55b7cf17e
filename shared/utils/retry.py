"""
Retry utilities for NewsWire services.
Upstream retries are bounded and use a fixed delay between attempts.
"""

from functools import wraps
from typing import Any, Callable, Optional, Tuple, Type

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)
from tenacity import RetryError as TenacityRetryError

from shared.app_logging.logger import get_logger
from shared.config.settings import get_settings

logger = get_logger("newswire.retry")


class RetryError(Exception):
    """Raised when all retry attempts are exhausted."""
    pass


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_retries: int = 1,
        delay: float = 1.0,
        retryable_exceptions: Tuple[Type[Exception], ...] = (Exception,)
    ):
        self.max_retries = max_retries
        self.delay = delay
        self.retryable_exceptions = retryable_exceptions

    @classmethod
    def from_settings(
        cls,
        max_retries: Optional[int] = None,
        delay: Optional[float] = None,
        retryable_exceptions: Tuple[Type[Exception], ...] = (Exception,),
    ) -> "RetryConfig":
        settings = get_settings()
        return cls(
            max_retries=settings.service.max_retries if max_retries is None else max_retries,
            delay=settings.service.retry_delay if delay is None else delay,
            retryable_exceptions=retryable_exceptions,
        )


def async_retry(
    max_retries: Optional[int] = None,
    delay: Optional[float] = None,
    retryable_exceptions: Tuple[Type[Exception], ...] = (Exception,),
    on_retry: Optional[Callable[[Exception, int], None]] = None
):
    """
    Decorator for retrying async function calls with a fixed delay.

    Args:
        max_retries: Maximum number of retry attempts (defaults to MAX_RETRIES)
        delay: Seconds to wait between attempts (defaults to RETRY_DELAY)
        retryable_exceptions: Tuple of exception types to retry on
        on_retry: Callback function called on each retry attempt

    Returns:
        Decorated async function
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            config = RetryConfig.from_settings(max_retries, delay, retryable_exceptions)

            def _before_sleep(state: RetryCallState) -> None:
                error = state.outcome.exception()
                logger.warning(
                    f"Async function {func.__name__} failed (attempt {state.attempt_number}/"
                    f"{config.max_retries + 1}): {error}. Retrying in {config.delay:.2f}s"
                )
                if on_retry:
                    on_retry(error, state.attempt_number)

            retrying = AsyncRetrying(
                stop=stop_after_attempt(config.max_retries + 1),
                wait=wait_fixed(config.delay),
                retry=retry_if_exception_type(config.retryable_exceptions),
                before_sleep=_before_sleep,
            )
            try:
                return await retrying(func, *args, **kwargs)
            except TenacityRetryError as e:
                last = e.last_attempt.exception()
                logger.error(f"Async function {func.__name__} failed after {config.max_retries} retries: {last}")
                raise RetryError(
                    f"Async function {func.__name__} failed after {config.max_retries} retries"
                ) from last

        return wrapper
    return decorator
