"""
Get Transfer History use case.
"""

from typing import Optional

from notaire.domain.entities.transfer_record import TransferRecord
from notaire.domain.exceptions import (
    AssetNotFoundError,
    OwnerNotFoundError,
    ValidationError,
)
from notaire.domain.repositories.i_asset_repository import IAssetRepository
from notaire.domain.repositories.i_transfer_repository import ITransferRepository
from notaire.domain.repositories.i_user_repository import IUserRepository


class GetTransferHistory:
    """
    Read transfer history of one asset or one user.

    Records are ordered by transferred_at descending. For an asset,
    record i's to_owner_id equals record i-1's from_owner_id.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        asset_repository: IAssetRepository,
        transfer_repository: ITransferRepository,
    ):
        self.user_repository = user_repository
        self.asset_repository = asset_repository
        self.transfer_repository = transfer_repository

    async def execute(
        self,
        asset_id: Optional[str] = None,
        owner_id: Optional[str] = None,
    ) -> list[TransferRecord]:
        """
        Get history by asset or by owner (exactly one).

        Args:
            asset_id: Asset whose transfers to list
            owner_id: User whose sent and received transfers to list

        Returns:
            List of transfer records, newest first

        Raises:
            ValidationError: If both or neither filter is given
            AssetNotFoundError: If asset does not exist
            OwnerNotFoundError: If owner does not exist
        """
        if (asset_id is None) == (owner_id is None):
            raise ValidationError(
                field="asset_id/owner_id",
                reason="Exactly one of asset_id or owner_id is required",
            )

        if asset_id is not None:
            if await self.asset_repository.get_by_id(asset_id) is None:
                raise AssetNotFoundError(asset_id)
            return await self.transfer_repository.list_by_asset(asset_id)

        if not await self.user_repository.exists(owner_id):
            raise OwnerNotFoundError(owner_id)
        return await self.transfer_repository.list_by_owner(owner_id)
