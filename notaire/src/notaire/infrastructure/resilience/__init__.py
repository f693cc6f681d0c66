"""
Resilience primitives.
"""

from notaire.infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
)

__all__ = ["CircuitBreaker", "CircuitBreakerOpenError", "CircuitState"]
