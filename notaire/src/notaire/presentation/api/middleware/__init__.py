"""
API middleware for Notaire.
"""

from notaire.presentation.api.middleware.error_handler import (
    notaire_exception_handler,
)

__all__ = ["notaire_exception_handler"]
