"""
Transfer Asset use case.

Moves ownership of an asset. The ledger change is mandatory and
atomic; the on-chain transfer is advisory.
"""

from typing import Optional

from notaire.application.anchoring import run_optional_step, skip
from notaire.application.dto.transfer_dto import TransferResult
from notaire.domain.entities.asset import Asset
from notaire.domain.entities.transfer_record import TransferRecord
from notaire.domain.exceptions import (
    AssetNotFoundError,
    LedgerWriteFailedError,
    OwnerNotFoundError,
    OwnershipConflictError,
    ValidationError,
)
from notaire.domain.repositories.i_asset_repository import IAssetRepository
from notaire.domain.repositories.i_chain_identity_registry import (
    IChainIdentityRegistry,
)
from notaire.domain.repositories.i_transfer_repository import ITransferRepository
from notaire.domain.repositories.i_user_repository import IUserRepository
from notaire.domain.services.i_chain_client import IChainClient
from notaire.domain.value_objects.anchor_outcome import AnchorOutcome, SkipReason
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.monitoring.metrics import transfers_total

logger = get_logger(__name__)


class TransferAsset:
    """
    Transfer an asset to another user.

    Business rules:
    - Asset and destination owner must exist
    - The record is planned against the owner read in step 1; if the
      ledger owner changed before the write, the transfer is rejected
      with OwnershipConflictError and nothing is written
    - Chain transfer requires a configured client, a minted token and
      resolvable addresses for both owners; its failure never fails
      the transfer
    - The record keeps a snapshot of the asset before the change
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        asset_repository: IAssetRepository,
        transfer_repository: ITransferRepository,
        chain_identities: IChainIdentityRegistry,
        chain_client: Optional[IChainClient] = None,
        chain_timeout: float = 90.0,
    ):
        """
        Initialize use case with dependencies.

        Args:
            user_repository: Identity store
            asset_repository: Asset ledger reads
            transfer_repository: Transfer history and ownership writes
            chain_identities: User to chain address registry
            chain_client: Chain client (None if disabled)
            chain_timeout: Bound for the transfer transaction in seconds
        """
        self.user_repository = user_repository
        self.asset_repository = asset_repository
        self.transfer_repository = transfer_repository
        self.chain_identities = chain_identities
        self.chain_client = chain_client
        self.chain_timeout = chain_timeout

    async def execute(self, asset_id: str, to_owner_id: str) -> TransferResult:
        """
        Execute transfer.

        Args:
            asset_id: Asset to transfer
            to_owner_id: Destination user

        Returns:
            TransferResult with the appended record and chain outcome

        Raises:
            ValidationError: If destination is empty
            AssetNotFoundError: If asset does not exist
            OwnerNotFoundError: If destination user does not exist
            OwnershipConflictError: If a concurrent transfer won
            LedgerWriteFailedError: If the ledger write fails
        """
        if not to_owner_id:
            raise ValidationError(field="to_owner_id", reason="Destination required")

        # 1. Resolve current owner
        asset = await self.asset_repository.get_by_id(asset_id)
        if asset is None:
            raise AssetNotFoundError(asset_id)

        # 2. Destination must exist
        if not await self.user_repository.exists(to_owner_id):
            raise OwnerNotFoundError(to_owner_id)

        # 3. Snapshot before the change
        snapshot = asset.to_dict()

        # 4. Optional chain transfer
        chain_outcome = await self._transfer_on_chain(asset, to_owner_id)

        # 5. Append record and move ownership atomically (mandatory)
        record = TransferRecord(
            asset_id=asset.id,
            from_owner_id=asset.owner_id,
            to_owner_id=to_owner_id,
            tx_hash=chain_outcome.value_or_none(),
            asset_snapshot=snapshot,
        )

        try:
            record = await self.transfer_repository.apply_transfer(record)
        except OwnershipConflictError:
            transfers_total.labels(status="conflict").inc()
            if record.tx_hash:
                logger.warning(
                    f"Chain transfer {record.tx_hash} of asset {asset.id} has no "
                    f"ledger counterpart after ownership conflict"
                )
            raise
        except LedgerWriteFailedError:
            transfers_total.labels(status="failed").inc()
            raise

        transfers_total.labels(status="success").inc()
        logger.info(
            f"Transferred asset {asset.id}: {record.from_owner_id} -> "
            f"{record.to_owner_id} (tx={record.tx_hash})"
        )

        # 6. Result
        return TransferResult(record=record, chain=chain_outcome)

    async def _transfer_on_chain(self, asset: Asset, to_owner_id: str) -> AnchorOutcome:
        if self.chain_client is None:
            return skip("chain_transfer", SkipReason.NOT_CONFIGURED)
        if asset.chain_token_id is None:
            return skip("chain_transfer", SkipReason.NO_TOKEN)

        from_address = await self.chain_identities.resolve(asset.owner_id)
        to_address = await self.chain_identities.resolve(to_owner_id)
        if from_address is None or to_address is None:
            missing = asset.owner_id if from_address is None else to_owner_id
            return skip(
                "chain_transfer",
                SkipReason.IDENTITY_UNRESOLVED,
                f"no chain address for {missing}",
            )

        client = self.chain_client
        token_id = asset.chain_token_id
        return await run_optional_step(
            "chain_transfer",
            lambda: client.transfer(from_address, to_address, token_id),
            self.chain_timeout,
        )
