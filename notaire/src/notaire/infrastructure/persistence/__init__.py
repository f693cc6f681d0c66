"""
Infrastructure persistence package.
"""

from notaire.infrastructure.persistence.database import Database
from notaire.infrastructure.persistence.models import (
    AssetModel,
    Base,
    ChainIdentityModel,
    TransferModel,
    UserModel,
)

__all__ = [
    "Database",
    "Base",
    "UserModel",
    "AssetModel",
    "TransferModel",
    "ChainIdentityModel",
]
