"""Retry configuration settings."""

from dataclasses import dataclass


@dataclass
class RetryConfiguration:
    """Configuration for transport retries with exponential backoff.

    Attributes:
        max_attempts: Total number of attempts, first call included (default: 3)
        base_delay: Initial delay in seconds between attempts (default: 0.5)
        max_delay: Maximum delay cap in seconds (default: 10.0)
        exponential_base: Base for exponential backoff multiplier (default: 2.0)
        jitter: Random jitter added to delay in seconds (default: 0.1)
    """

    max_attempts: int = 3
    base_delay: float = 0.5
    max_delay: float = 10.0
    exponential_base: float = 2.0
    jitter: float = 0.1

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.base_delay <= 0:
            raise ValueError(f"base_delay must be > 0, got {self.base_delay}")
        if self.max_delay <= 0:
            raise ValueError(f"max_delay must be > 0, got {self.max_delay}")
        if self.exponential_base < 1:
            raise ValueError(f"exponential_base must be >= 1, got {self.exponential_base}")
        if self.jitter < 0:
            raise ValueError(f"jitter must be >= 0, got {self.jitter}")

    @classmethod
    def from_retries(cls, retries: int, **kwargs) -> "RetryConfiguration":
        """Build a configuration allowing ``retries`` attempts after the first."""
        return cls(max_attempts=retries + 1, **kwargs)
