"""
Unit tests for TransferAsset use case.

Usage:
    pytest notaire/tests/unit/application/test_transfer_asset.py
"""

from unittest.mock import AsyncMock

import pytest

from helpers.fakes import (
    ALICE_ADDRESS,
    BOB_ADDRESS,
    FakeChainClient,
    StaticIdentityRegistry,
)
from notaire.application.use_cases.transfer_asset import TransferAsset
from notaire.domain.entities.asset import Asset
from notaire.domain.exceptions import (
    AssetNotFoundError,
    OwnerNotFoundError,
    OwnershipConflictError,
    RpcError,
    ValidationError,
)
from notaire.domain.value_objects import ChainAddress, SkipReason


class TestTransferAsset:
    """Unit tests for TransferAsset use case."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _asset(self, **overrides) -> Asset:
        fields = {
            "id": "a1",
            "name": "Deed",
            "owner_id": "u1",
            "media_ref": "/media/a1.jpg",
        }
        fields.update(overrides)
        return Asset(**fields)

    def _build(self, asset=None, chain_client=None, identities=None):
        user_repo = AsyncMock()
        user_repo.exists.return_value = True

        asset_repo = AsyncMock()
        asset_repo.get_by_id.return_value = asset or self._asset()

        transfer_repo = AsyncMock()
        transfer_repo.apply_transfer.side_effect = lambda record: record

        use_case = TransferAsset(
            user_repository=user_repo,
            asset_repository=asset_repo,
            transfer_repository=transfer_repo,
            chain_identities=identities
            or StaticIdentityRegistry({"u1": ALICE_ADDRESS, "u2": BOB_ADDRESS}),
            chain_client=chain_client,
            chain_timeout=0.5,
        )
        return use_case, user_repo, transfer_repo

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_transfer_without_chain(self):
        """Test ledger transfer with no chain client configured."""
        use_case, _, transfer_repo = self._build()

        result = await use_case.execute("a1", "u2")

        record = result.record
        assert record.asset_id == "a1"
        assert record.from_owner_id == "u1"
        assert record.to_owner_id == "u2"
        assert record.tx_hash is None
        assert record.asset_snapshot["owner_id"] == "u1"
        assert result.chain.reason == SkipReason.NOT_CONFIGURED
        transfer_repo.apply_transfer.assert_awaited_once_with(record)

    async def test_transfer_on_chain(self):
        """Test on-chain transfer hash lands on the record."""
        chain = FakeChainClient()
        use_case, _, _ = self._build(
            asset=self._asset(chain_token_id="7"), chain_client=chain
        )

        result = await use_case.execute("a1", "u2")

        assert result.tx_hash == "0xtransfer1"
        assert result.chain.is_anchored
        assert chain.transfers == [
            (ChainAddress(ALICE_ADDRESS), ChainAddress(BOB_ADDRESS), "7")
        ]

    async def test_asset_without_token_skips_chain(self):
        """Test off-chain asset is never sent to the chain."""
        chain = FakeChainClient()
        use_case, _, _ = self._build(chain_client=chain)

        result = await use_case.execute("a1", "u2")

        assert result.chain.reason == SkipReason.NO_TOKEN
        assert chain.transfers == []

    async def test_unresolved_identity_skips_chain(self):
        """Test destination without chain address skips chain step."""
        chain = FakeChainClient()
        use_case, _, _ = self._build(
            asset=self._asset(chain_token_id="7"),
            chain_client=chain,
            identities=StaticIdentityRegistry({"u1": ALICE_ADDRESS}),
        )

        result = await use_case.execute("a1", "u2")

        assert result.chain.reason == SkipReason.IDENTITY_UNRESOLVED
        assert result.record.to_owner_id == "u2"

    async def test_chain_failure_still_transfers(self):
        """Test ownership moves even when the chain call fails."""
        chain = FakeChainClient()
        chain.error = RpcError("nonce too low", rpc_code=-32000)
        use_case, _, transfer_repo = self._build(
            asset=self._asset(chain_token_id="7"), chain_client=chain
        )

        result = await use_case.execute("a1", "u2")

        assert result.chain.reason == SkipReason.UNAVAILABLE
        assert result.record.tx_hash is None
        transfer_repo.apply_transfer.assert_awaited_once()

    async def test_asset_not_found(self):
        """Test unknown asset raises NotFound and writes nothing."""
        use_case, _, transfer_repo = self._build()
        use_case.asset_repository.get_by_id.return_value = None

        with pytest.raises(AssetNotFoundError):
            await use_case.execute("missing", "u2")

        transfer_repo.apply_transfer.assert_not_awaited()

    async def test_destination_not_found(self):
        """Test unknown destination raises NotFound and writes nothing."""
        use_case, user_repo, transfer_repo = self._build()
        user_repo.exists.return_value = False

        with pytest.raises(OwnerNotFoundError):
            await use_case.execute("a1", "u9")

        transfer_repo.apply_transfer.assert_not_awaited()

    async def test_empty_destination(self):
        use_case, _, _ = self._build()

        with pytest.raises(ValidationError):
            await use_case.execute("a1", "")

    async def test_ownership_conflict_propagates(self):
        """Test losing a concurrent transfer surfaces the conflict."""
        use_case, _, transfer_repo = self._build()
        transfer_repo.apply_transfer.side_effect = OwnershipConflictError("a1", "u1")

        with pytest.raises(OwnershipConflictError):
            await use_case.execute("a1", "u2")
