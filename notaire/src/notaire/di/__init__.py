"""
Dependency Injection for Notaire.
"""

from notaire.di.container import (
    DIContainer,
    get_container,
    initialize_container,
    reset_container,
    shutdown_container,
)

__all__ = [
    "DIContainer",
    "get_container",
    "initialize_container",
    "reset_container",
    "shutdown_container",
]
