"""Tests for transport retry configuration and tenacity integration."""

import logging

import pytest
from hvac.exceptions import Forbidden, InternalServerError, InvalidRequest, VaultDown
from requests.exceptions import ConnectionError, Timeout

from vault_provider.retry import (
    RetryConfiguration,
    RetryExhaustedException,
    is_transport_error,
    with_transport_retry,
)


class TestRetryConfiguration:
    """Test RetryConfiguration dataclass."""

    def test_default_values(self):
        config = RetryConfiguration()
        assert config.max_attempts == 3
        assert config.base_delay == 0.5
        assert config.max_delay == 10.0
        assert config.exponential_base == 2.0
        assert config.jitter == 0.1

    def test_from_retries(self):
        assert RetryConfiguration.from_retries(0).max_attempts == 1
        assert RetryConfiguration.from_retries(4).max_attempts == 5

    def test_validation_max_attempts(self):
        with pytest.raises(ValueError):
            RetryConfiguration(max_attempts=0)

    def test_validation_base_delay(self):
        with pytest.raises(ValueError):
            RetryConfiguration(base_delay=0)

    def test_validation_max_delay(self):
        with pytest.raises(ValueError):
            RetryConfiguration(max_delay=-1)

    def test_validation_jitter(self):
        with pytest.raises(ValueError):
            RetryConfiguration(jitter=-0.1)


class TestIsTransportError:
    """Test which failures are retried."""

    @pytest.mark.parametrize(
        "exception",
        [
            ConnectionError("refused"),
            Timeout("timed out"),
            VaultDown("sealed"),
            InternalServerError("boom"),
        ],
    )
    def test_retryable(self, exception):
        assert is_transport_error(exception)

    @pytest.mark.parametrize(
        "exception",
        [
            InvalidRequest("bad"),
            Forbidden("denied"),
            ValueError("not transport"),
        ],
    )
    def test_not_retryable(self, exception):
        assert not is_transport_error(exception)


class TestWithTransportRetry:
    """Test with_transport_retry decorator."""

    def test_successful_function(self):
        call_count = 0

        @with_transport_retry(RetryConfiguration(max_attempts=3))
        def call():
            nonlocal call_count
            call_count += 1
            return "ok"

        assert call() == "ok"
        assert call_count == 1

    def test_retry_on_connection_error(self):
        call_count = 0

        @with_transport_retry(RetryConfiguration(max_attempts=3, base_delay=0.01))
        def call():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ConnectionError("Connection refused")
            return "ok"

        assert call() == "ok"
        assert call_count == 3

    def test_exhausted_retries(self):
        @with_transport_retry(RetryConfiguration(max_attempts=2, base_delay=0.01))
        def call():
            raise VaultDown("Vault is sealed")

        with pytest.raises(RetryExhaustedException) as exc_info:
            call()

        assert exc_info.value.attempts == 2
        assert isinstance(exc_info.value.last_exception, VaultDown)

    def test_non_transport_error_raised_immediately(self):
        call_count = 0

        @with_transport_retry(RetryConfiguration(max_attempts=3))
        def call():
            nonlocal call_count
            call_count += 1
            raise Forbidden("permission denied")

        with pytest.raises(Forbidden):
            call()
        assert call_count == 1

    def test_retry_is_logged(self, caplog):
        attempts = iter([Timeout("slow"), "ok"])

        @with_transport_retry(RetryConfiguration(max_attempts=2, base_delay=0.01))
        def call():
            outcome = next(attempts)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        with caplog.at_level(logging.WARNING, logger="vault_provider.retry.tenacity_base"):
            assert call() == "ok"

        assert "Retrying Vault request (attempt 1)" in caplog.text
