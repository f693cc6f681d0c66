"""
Circuit breaker guarding optional remote backends.
"""

import asyncio
import time
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from notaire.domain.exceptions.backends import BackendUnavailableError
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.monitoring.metrics import circuit_breaker_state

logger = get_logger(__name__)

T = TypeVar("T")


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, reject requests
    HALF_OPEN = "half_open"  # Testing if service recovered


_STATE_GAUGE_VALUE = {
    CircuitState.CLOSED: 0,
    CircuitState.OPEN: 1,
    CircuitState.HALF_OPEN: 2,
}


class CircuitBreakerOpenError(BackendUnavailableError):
    """Raised when a call is refused because the circuit is open."""

    def __init__(self, name: str, retry_after: float):
        super().__init__(
            name,
            f"Circuit breaker '{name}' is OPEN. Retry after {retry_after:.0f}s.",
        )
        self.retry_after = retry_after


class CircuitBreaker:
    """
    Circuit breaker for external service calls.

    CLOSED counts consecutive failures and opens at failure_threshold.
    OPEN refuses calls until recovery_timeout has elapsed, then lets
    calls through as HALF_OPEN. HALF_OPEN closes again after
    success_threshold successes and reopens on any failure.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        success_threshold: int = 2,
        recovery_timeout: float = 60.0,
        expected_exception: type[BaseException] = Exception,
    ):
        """
        Initialize circuit breaker.

        Args:
            name: Service name used in errors and metrics
            failure_threshold: Number of failures before opening circuit
            success_threshold: Successes in HALF_OPEN before closing
            recovery_timeout: Seconds to wait before trying again
            expected_exception: Exception type that counts as failure
        """
        self.name = name
        self.failure_threshold = failure_threshold
        self.success_threshold = success_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exception = expected_exception

        self._failure_count = 0
        self._success_count = 0
        self._opened_at: Optional[float] = None
        self._state = CircuitState.CLOSED
        self._lock = asyncio.Lock()
        circuit_breaker_state.labels(service=name).set(0)

    @property
    def state(self) -> CircuitState:
        """Get current circuit state."""
        return self._state

    @property
    def failure_count(self) -> int:
        """Get current failure count."""
        return self._failure_count

    async def call(self, func: Callable[..., Awaitable[T]], *args, **kwargs) -> T:
        """
        Execute function with circuit breaker protection.

        Args:
            func: Async function to call
            *args: Positional arguments for function
            **kwargs: Keyword arguments for function

        Returns:
            Function result

        Raises:
            CircuitBreakerOpenError: If circuit is open
            Exception: Original exception from function
        """
        async with self._lock:
            if self._state == CircuitState.OPEN:
                remaining = self._remaining_open_time()
                if remaining > 0:
                    raise CircuitBreakerOpenError(self.name, remaining)
                self._transition(CircuitState.HALF_OPEN)

        try:
            result = await func(*args, **kwargs)
        except self.expected_exception:
            await self._on_failure()
            raise

        await self._on_success()
        return result

    async def _on_success(self) -> None:
        async with self._lock:
            self._failure_count = 0
            if self._state == CircuitState.HALF_OPEN:
                self._success_count += 1
                if self._success_count >= self.success_threshold:
                    self._transition(CircuitState.CLOSED)

    async def _on_failure(self) -> None:
        async with self._lock:
            self._failure_count += 1
            if (
                self._state == CircuitState.HALF_OPEN
                or self._failure_count >= self.failure_threshold
            ):
                self._opened_at = time.monotonic()
                self._transition(CircuitState.OPEN)

    def _remaining_open_time(self) -> float:
        if self._opened_at is None:
            return 0.0
        elapsed = time.monotonic() - self._opened_at
        return max(0.0, self.recovery_timeout - elapsed)

    def _transition(self, new_state: CircuitState) -> None:
        if new_state == self._state:
            return

        logger.warning(
            f"Circuit breaker '{self.name}': "
            f"{self._state.value} -> {new_state.value}"
        )
        self._state = new_state
        self._success_count = 0
        if new_state == CircuitState.CLOSED:
            self._failure_count = 0
            self._opened_at = None
        circuit_breaker_state.labels(service=self.name).set(
            _STATE_GAUGE_VALUE[new_state]
        )

    async def reset(self) -> None:
        """Manually reset circuit breaker to CLOSED state."""
        async with self._lock:
            self._transition(CircuitState.CLOSED)
            self._failure_count = 0

    def get_stats(self) -> dict:
        """
        Get circuit breaker statistics.

        Returns:
            Dict with state, failure_count and thresholds
        """
        return {
            "name": self.name,
            "state": self._state.value,
            "failure_count": self._failure_count,
            "failure_threshold": self.failure_threshold,
            "success_threshold": self.success_threshold,
            "recovery_timeout": self.recovery_timeout,
        }
