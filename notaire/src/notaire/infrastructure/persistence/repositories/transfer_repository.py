"""
Transfer repository implementation using SQLAlchemy.
"""

from sqlalchemy import or_, select, update
from sqlalchemy.exc import SQLAlchemyError

from notaire.domain.entities.transfer_record import TransferRecord
from notaire.domain.exceptions import (
    LedgerWriteFailedError,
    OwnershipConflictError,
)
from notaire.domain.repositories.i_transfer_repository import ITransferRepository
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.persistence.database import Database
from notaire.infrastructure.persistence.models import AssetModel, TransferModel

logger = get_logger(__name__)


class _StaleOwner(Exception):
    """Compare-and-swap missed; raised inside the session to roll back."""


class TransferRepository(ITransferRepository):
    """
    SQLAlchemy implementation of transfer history.

    apply_transfer is the only place asset ownership changes. The
    owner update is a compare-and-swap on the expected previous
    owner, so two racing transfers planned against the same owner
    cannot both commit.
    """

    def __init__(self, database: Database):
        self.database = database

    async def apply_transfer(self, record: TransferRecord) -> TransferRecord:
        """
        Append a transfer record and move asset ownership atomically.

        Args:
            record: Transfer record to append

        Returns:
            Persisted transfer record

        Raises:
            OwnershipConflictError: If the asset owner is no longer
                record.from_owner_id (nothing is written)
            LedgerWriteFailedError: If the datastore write fails
        """
        swap = (
            update(AssetModel)
            .where(
                AssetModel.id == record.asset_id,
                AssetModel.owner_id == record.from_owner_id,
            )
            .values(owner_id=record.to_owner_id)
            .execution_options(synchronize_session=False)
        )

        try:
            async with self.database.session() as session:
                result = await session.execute(swap)
                if result.rowcount != 1:
                    raise _StaleOwner()

                session.add(
                    TransferModel(
                        id=record.id,
                        asset_id=record.asset_id,
                        from_owner_id=record.from_owner_id,
                        to_owner_id=record.to_owner_id,
                        transferred_at=record.transferred_at,
                        tx_hash=record.tx_hash,
                        asset_snapshot=record.asset_snapshot,
                    )
                )
                await session.flush()
        except _StaleOwner:
            logger.warning(
                f"Ownership changed under transfer of asset {record.asset_id} "
                f"(expected owner {record.from_owner_id})"
            )
            raise OwnershipConflictError(
                record.asset_id, record.from_owner_id
            ) from None
        except SQLAlchemyError as e:
            raise LedgerWriteFailedError("apply_transfer", str(e)) from e

        return record

    async def list_by_asset(self, asset_id: str) -> list[TransferRecord]:
        """
        List transfers of one asset, newest first.

        Args:
            asset_id: Asset unique identifier

        Returns:
            List of transfer records
        """
        stmt = (
            select(TransferModel)
            .where(TransferModel.asset_id == asset_id)
            .order_by(TransferModel.transferred_at.desc())
        )
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return [self._to_entity(model) for model in result.scalars().all()]

    async def list_by_owner(self, owner_id: str) -> list[TransferRecord]:
        """
        List transfers where the user was sender or receiver, newest first.

        Args:
            owner_id: User unique identifier

        Returns:
            List of transfer records
        """
        stmt = (
            select(TransferModel)
            .where(
                or_(
                    TransferModel.from_owner_id == owner_id,
                    TransferModel.to_owner_id == owner_id,
                )
            )
            .order_by(TransferModel.transferred_at.desc())
        )
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return [self._to_entity(model) for model in result.scalars().all()]

    @staticmethod
    def _to_entity(model: TransferModel) -> TransferRecord:
        """Convert database model to domain entity."""
        return TransferRecord(
            id=model.id,
            asset_id=model.asset_id,
            from_owner_id=model.from_owner_id,
            to_owner_id=model.to_owner_id,
            transferred_at=model.transferred_at,
            tx_hash=model.tx_hash,
            asset_snapshot=model.asset_snapshot,
        )
