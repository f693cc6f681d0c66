"""
Repository interfaces for Notaire domain.
"""

from notaire.domain.repositories.i_asset_repository import IAssetRepository
from notaire.domain.repositories.i_chain_identity_registry import (
    IChainIdentityRegistry,
)
from notaire.domain.repositories.i_transfer_repository import ITransferRepository
from notaire.domain.repositories.i_user_repository import IUserRepository

__all__ = [
    "IAssetRepository",
    "IChainIdentityRegistry",
    "ITransferRepository",
    "IUserRepository",
]
