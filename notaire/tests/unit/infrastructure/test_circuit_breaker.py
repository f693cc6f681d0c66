"""
Unit tests for CircuitBreaker.

Usage:
    pytest notaire/tests/unit/infrastructure/test_circuit_breaker.py
"""

import asyncio

import pytest

from notaire.domain.exceptions import BackendUnavailableError
from notaire.infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
)


class Boom(Exception):
    pass


async def _fail():
    raise Boom("down")


async def _ok():
    return "ok"


class TestCircuitBreaker:
    """Unit tests for CircuitBreaker."""

    def _breaker(self, **overrides) -> CircuitBreaker:
        kwargs = {
            "name": "test",
            "failure_threshold": 2,
            "success_threshold": 2,
            "recovery_timeout": 0.05,
            "expected_exception": Boom,
        }
        kwargs.update(overrides)
        return CircuitBreaker(**kwargs)

    async def _trip(self, breaker: CircuitBreaker) -> None:
        for _ in range(breaker.failure_threshold):
            with pytest.raises(Boom):
                await breaker.call(_fail)

    async def test_passes_results_through(self):
        breaker = self._breaker()
        assert await breaker.call(_ok) == "ok"
        assert breaker.state == CircuitState.CLOSED

    async def test_opens_at_threshold(self):
        breaker = self._breaker()
        await self._trip(breaker)

        assert breaker.state == CircuitState.OPEN
        with pytest.raises(CircuitBreakerOpenError) as exc_info:
            await breaker.call(_ok)
        assert isinstance(exc_info.value, BackendUnavailableError)
        assert exc_info.value.backend == "test"

    async def test_success_resets_failure_count(self):
        breaker = self._breaker()
        with pytest.raises(Boom):
            await breaker.call(_fail)

        await breaker.call(_ok)

        assert breaker.failure_count == 0
        assert breaker.state == CircuitState.CLOSED

    async def test_unexpected_exceptions_not_counted(self):
        breaker = self._breaker()

        async def type_error():
            raise TypeError("bug")

        for _ in range(3):
            with pytest.raises(TypeError):
                await breaker.call(type_error)

        assert breaker.state == CircuitState.CLOSED
        assert breaker.failure_count == 0

    async def test_half_open_closes_after_successes(self):
        breaker = self._breaker()
        await self._trip(breaker)
        await asyncio.sleep(0.06)

        await breaker.call(_ok)
        assert breaker.state == CircuitState.HALF_OPEN
        await breaker.call(_ok)

        assert breaker.state == CircuitState.CLOSED

    async def test_half_open_failure_reopens(self):
        breaker = self._breaker()
        await self._trip(breaker)
        await asyncio.sleep(0.06)

        with pytest.raises(Boom):
            await breaker.call(_fail)

        assert breaker.state == CircuitState.OPEN

    async def test_reset(self):
        breaker = self._breaker(recovery_timeout=60.0)
        await self._trip(breaker)

        await breaker.reset()

        assert breaker.state == CircuitState.CLOSED
        assert await breaker.call(_ok) == "ok"

    def test_stats(self):
        stats = self._breaker().get_stats()

        assert stats["name"] == "test"
        assert stats["state"] == "closed"
        assert stats["failure_threshold"] == 2
