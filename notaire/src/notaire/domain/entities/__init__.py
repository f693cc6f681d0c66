"""
Domain entities for Notaire.
"""

from notaire.domain.entities.asset import Asset
from notaire.domain.entities.transfer_record import TransferRecord
from notaire.domain.entities.user import User, generate_owner_id

__all__ = [
    "Asset",
    "TransferRecord",
    "User",
    "generate_owner_id",
]
