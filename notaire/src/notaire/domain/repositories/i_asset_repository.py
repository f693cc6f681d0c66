"""
Asset repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from notaire.domain.entities.asset import Asset


class IAssetRepository(ABC):
    """Interface for asset ledger reads and asset creation."""

    @abstractmethod
    async def create(self, asset: Asset) -> Asset:
        """
        Persist a newly minted asset.

        Args:
            asset: Asset entity to create

        Returns:
            Created asset entity

        Raises:
            LedgerWriteFailedError: If the write fails
        """

    @abstractmethod
    async def get_by_id(self, asset_id: str) -> Optional[Asset]:
        """
        Get asset by ID.

        Args:
            asset_id: Asset unique identifier

        Returns:
            Asset entity if found, None otherwise
        """

    @abstractmethod
    async def list_by_owner(
        self,
        owner_id: str,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Asset]:
        """
        List assets currently owned by a user, newest first.

        Args:
            owner_id: Owner user ID
            limit: Maximum number of assets to return
            offset: Number of assets to skip

        Returns:
            List of assets
        """
