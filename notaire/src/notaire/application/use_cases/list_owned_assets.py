"""
List Owned Assets use case.
"""

from notaire.domain.entities.asset import Asset
from notaire.domain.exceptions import OwnerNotFoundError, ValidationError
from notaire.domain.repositories.i_asset_repository import IAssetRepository
from notaire.domain.repositories.i_user_repository import IUserRepository

MAX_PAGE_SIZE = 100


class ListOwnedAssets:
    """
    List assets currently held by a user.

    Business rules:
    - Owner must exist
    - 1 <= limit <= 100, offset >= 0
    - Newest assets first
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        asset_repository: IAssetRepository,
    ):
        self.user_repository = user_repository
        self.asset_repository = asset_repository

    async def execute(
        self,
        owner_id: str,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Asset]:
        """
        Args:
            owner_id: Owner user ID
            limit: Page size
            offset: Number of assets to skip

        Returns:
            List of assets

        Raises:
            ValidationError: If paging parameters are out of range
            OwnerNotFoundError: If owner does not exist
        """
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(
                field="limit", reason=f"Must be between 1 and {MAX_PAGE_SIZE}"
            )
        if offset < 0:
            raise ValidationError(field="offset", reason="Must not be negative")

        if not await self.user_repository.exists(owner_id):
            raise OwnerNotFoundError(owner_id)

        return await self.asset_repository.list_by_owner(
            owner_id, limit=limit, offset=offset
        )
