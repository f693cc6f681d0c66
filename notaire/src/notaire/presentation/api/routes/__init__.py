"""
API routes for Notaire.
"""

from notaire.presentation.api.routes import assets, auth, users

__all__ = ["assets", "auth", "users"]
