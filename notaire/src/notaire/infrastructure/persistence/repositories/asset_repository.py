"""
Asset repository implementation using SQLAlchemy.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from notaire.domain.entities.asset import Asset
from notaire.domain.exceptions import LedgerWriteFailedError
from notaire.domain.repositories.i_asset_repository import IAssetRepository
from notaire.infrastructure.persistence.database import Database
from notaire.infrastructure.persistence.models import AssetModel


class AssetRepository(IAssetRepository):
    """
    SQLAlchemy implementation of asset ledger reads and creation.

    Ownership changes go through TransferRepository.apply_transfer.
    """

    def __init__(self, database: Database):
        self.database = database

    async def create(self, asset: Asset) -> Asset:
        """
        Persist a newly minted asset.

        Args:
            asset: Asset entity to persist

        Returns:
            Created asset entity

        Raises:
            LedgerWriteFailedError: If the insert fails
        """
        model = AssetModel(
            id=asset.id,
            name=asset.name,
            description=asset.description,
            media_ref=asset.media_ref,
            owner_id=asset.owner_id,
            created_at=asset.created_at,
            chain_token_id=asset.chain_token_id,
            media_cid=asset.media_cid,
            metadata_cid=asset.metadata_cid,
            mint_tx_hash=asset.mint_tx_hash,
        )

        try:
            async with self.database.session() as session:
                session.add(model)
                await session.flush()
        except SQLAlchemyError as e:
            raise LedgerWriteFailedError("create_asset", str(e)) from e

        return self._to_entity(model)

    async def get_by_id(self, asset_id: str) -> Optional[Asset]:
        """
        Retrieve asset by ID.

        Args:
            asset_id: Asset unique identifier

        Returns:
            Asset entity if found, None otherwise
        """
        async with self.database.session() as session:
            model = await session.get(AssetModel, asset_id)
            return self._to_entity(model) if model else None

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
        stmt = (
            select(AssetModel)
            .where(AssetModel.owner_id == owner_id)
            .order_by(AssetModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return [self._to_entity(model) for model in result.scalars().all()]

    @staticmethod
    def _to_entity(model: AssetModel) -> Asset:
        """Convert database model to domain entity."""
        return Asset(
            id=model.id,
            name=model.name,
            description=model.description,
            media_ref=model.media_ref,
            owner_id=model.owner_id,
            created_at=model.created_at,
            chain_token_id=model.chain_token_id,
            media_cid=model.media_cid,
            metadata_cid=model.metadata_cid,
            mint_tx_hash=model.mint_tx_hash,
        )
