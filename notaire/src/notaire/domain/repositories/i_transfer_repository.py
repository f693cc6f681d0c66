"""
Transfer repository interface.

The ownership change and its audit record are written together, so
the transfer write lives here rather than on the asset repository.
"""

from abc import ABC, abstractmethod

from notaire.domain.entities.transfer_record import TransferRecord


class ITransferRepository(ABC):
    """Interface for transfer history and atomic ownership changes."""

    @abstractmethod
    async def apply_transfer(self, record: TransferRecord) -> TransferRecord:
        """
        Append a transfer record and move asset ownership atomically.

        The asset owner is updated only if it still equals
        record.from_owner_id. Both writes commit in one transaction
        or neither does.

        Args:
            record: Transfer record to append

        Returns:
            Persisted transfer record

        Raises:
            OwnershipConflictError: If the asset owner changed meanwhile
            LedgerWriteFailedError: If the datastore write fails
        """

    @abstractmethod
    async def list_by_asset(self, asset_id: str) -> list[TransferRecord]:
        """
        List transfers of one asset, newest first.

        Args:
            asset_id: Asset unique identifier

        Returns:
            List of transfer records ordered by transferred_at descending
        """

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> list[TransferRecord]:
        """
        List transfers where the user was sender or receiver, newest first.

        Args:
            owner_id: User unique identifier

        Returns:
            List of transfer records ordered by transferred_at descending
        """
