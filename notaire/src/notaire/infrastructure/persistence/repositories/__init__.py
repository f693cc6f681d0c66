"""Repository implementations."""

from notaire.infrastructure.persistence.repositories.asset_repository import (
    AssetRepository,
)
from notaire.infrastructure.persistence.repositories.chain_identity_registry import (
    ChainIdentityRegistry,
)
from notaire.infrastructure.persistence.repositories.transfer_repository import (
    TransferRepository,
)
from notaire.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "AssetRepository",
    "ChainIdentityRegistry",
    "TransferRepository",
    "UserRepository",
]
