"""Tenacity integration for retrying Vault transport failures."""

from functools import wraps
from typing import Any, Callable, Optional
import logging

import tenacity
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)
from hvac.exceptions import BadGateway, InternalServerError, VaultDown
from requests.exceptions import ConnectionError, Timeout

from .config import RetryConfiguration
from .exceptions import RetryExhaustedException

logger = logging.getLogger(__name__)

# Failures where the request may not have reached Vault, or Vault could not
# serve it. 4xx responses (InvalidRequest, Forbidden, InvalidPath, ...) are
# answers, not transport problems, and are never retried.
TRANSPORT_RETRYABLE_EXCEPTIONS = (
    ConnectionError,
    Timeout,
    VaultDown,
    InternalServerError,
    BadGateway,
)


def is_transport_error(exception: BaseException) -> bool:
    """Check if an exception is a retryable transport failure.

    Args:
        exception: Exception raised by hvac or requests

    Returns:
        True if the call should be attempted again
    """
    return isinstance(exception, TRANSPORT_RETRYABLE_EXCEPTIONS)


def get_wait_strategy(config: RetryConfiguration):
    """Create exponential jitter wait strategy from configuration.

    Args:
        config: RetryConfiguration with wait parameters

    Returns:
        Configured wait_exponential_jitter strategy
    """
    return wait_exponential_jitter(
        initial=config.base_delay,
        max=config.max_delay,
        exp_base=config.exponential_base,
        jitter=config.jitter,
    )


def get_stop_strategy(config: RetryConfiguration):
    """Create stop strategy from configuration."""
    return stop_after_attempt(config.max_attempts)


def before_sleep_log(
    retry_state: tenacity.RetryCallState,
    logger: logging.Logger = logger,
) -> None:
    """Log before each retry attempt.

    Args:
        retry_state: Current retry state from tenacity
        logger: Logger instance to use
    """
    if retry_state.outcome is None:
        return

    exception = retry_state.outcome.exception()
    if exception:
        logger.warning(
            f"Retrying Vault request (attempt {retry_state.attempt_number}) "
            f"after exception: {type(exception).__name__}: {exception}"
        )


def get_tenacity_decorator(
    config: RetryConfiguration,
    retry_if: Optional[Callable[[BaseException], bool]] = None,
) -> Callable:
    """Create a complete tenacity decorator from configuration.

    Args:
        config: Complete RetryConfiguration
        retry_if: Predicate deciding whether an exception is retried,
            defaults to :func:`is_transport_error`

    Returns:
        Configured tenacity decorator
    """
    return retry(
        wait=get_wait_strategy(config),
        stop=get_stop_strategy(config),
        retry=retry_if_exception(retry_if or is_transport_error),
        before_sleep=before_sleep_log,
    )


def with_transport_retry(config: RetryConfiguration) -> Callable:
    """Decorator retrying a function on transport failures.

    Exceptions the predicate rejects propagate unchanged on the first
    attempt. When every attempt fails, RetryExhaustedException is raised
    carrying the last underlying exception.

    Example:
        @with_transport_retry(RetryConfiguration(max_attempts=3))
        def read(path):
            ...
    """
    def decorator(func: Callable) -> Callable:
        tenacity_decorator = get_tenacity_decorator(config)
        retrying = tenacity_decorator(func)

        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return retrying(*args, **kwargs)
            except tenacity.RetryError as e:
                last_exception = e.last_attempt.exception()
                raise RetryExhaustedException(
                    message=f"All {config.max_attempts} attempts exhausted",
                    attempts=config.max_attempts,
                    last_exception=last_exception,
                ) from last_exception

        return wrapper
    return decorator
