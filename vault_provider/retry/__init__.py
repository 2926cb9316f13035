"""Retry module for resilient Vault transport calls with exponential backoff."""

from .config import RetryConfiguration
from .exceptions import RetryExhaustedException
from .tenacity_base import (
    TRANSPORT_RETRYABLE_EXCEPTIONS,
    before_sleep_log,
    get_tenacity_decorator,
    is_transport_error,
    with_transport_retry,
)

__all__ = [
    "RetryConfiguration",
    "RetryExhaustedException",
    "TRANSPORT_RETRYABLE_EXCEPTIONS",
    "before_sleep_log",
    "get_tenacity_decorator",
    "is_transport_error",
    "with_transport_retry",
]
