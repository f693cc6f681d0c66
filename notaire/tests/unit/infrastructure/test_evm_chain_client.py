"""
Unit tests for EvmChainClient.

The JSON-RPC transport (_post) is patched; everything above it runs
for real: calldata encoding, receipt polling, error mapping and the
circuit breaker.

Usage:
    pytest notaire/tests/unit/infrastructure/test_evm_chain_client.py
"""

from unittest.mock import AsyncMock, patch

import aiohttp
import pytest
from eth_utils import function_signature_to_4byte_selector, to_hex

from helpers.fakes import ALICE_ADDRESS, BOB_ADDRESS
from notaire.domain.exceptions import (
    BackendUnavailableError,
    ChainTimeoutError,
    RpcError,
    TransactionRevertedError,
)
from notaire.domain.value_objects import ChainAddress
from notaire.infrastructure.blockchain.abi import (
    MINT_SIGNATURE,
    TRANSFER_EVENT_TOPIC,
    encode_transfer_from,
    extract_minted_token_id,
)
from notaire.infrastructure.blockchain.evm_chain_client import EvmChainClient
from notaire.infrastructure.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerOpenError,
    CircuitState,
)

CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
OPERATOR = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


def _rpc_result(result):
    return {"jsonrpc": "2.0", "id": 1, "result": result}


def _topic_address(address: str) -> str:
    return "0x" + "0" * 24 + address[2:].lower()


def _mint_receipt(token_id: int, status: str = "0x1") -> dict:
    return {
        "status": status,
        "logs": [
            {
                "address": CONTRACT.lower(),
                "topics": [
                    TRANSFER_EVENT_TOPIC,
                    "0x" + "0" * 64,
                    _topic_address(ALICE_ADDRESS),
                    "0x" + format(token_id, "064x"),
                ],
            }
        ],
    }


class TestEvmChainClient:
    """Unit tests for EvmChainClient."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _client(self, **overrides) -> EvmChainClient:
        kwargs = {
            "rpc_url": "http://chain.test",
            "contract_address": ChainAddress(CONTRACT),
            "operator_address": ChainAddress(OPERATOR),
            "receipt_timeout": 1.0,
            "poll_interval": 0.01,
        }
        kwargs.update(overrides)
        return EvmChainClient(**kwargs)

    # ================================================================
    # Mint
    # ================================================================

    async def test_mint_returns_token_id(self):
        """Test mint sends calldata and reads token id from the receipt."""
        client = self._client()
        post = AsyncMock(
            side_effect=[
                _rpc_result("0xtx1"),
                _rpc_result(None),
                _rpc_result(_mint_receipt(42)),
            ]
        )

        with patch.object(client, "_post", post):
            receipt = await client.mint(ChainAddress(ALICE_ADDRESS), "ipfs://QmMeta")

        assert receipt.token_id == "42"
        assert receipt.tx_hash == "0xtx1"

        send = post.await_args_list[0].args[0]
        assert send["method"] == "eth_sendTransaction"
        tx = send["params"][0]
        assert tx["from"] == ChainAddress(OPERATOR).value
        assert tx["to"] == ChainAddress(CONTRACT).value
        assert tx["data"].startswith(
            to_hex(function_signature_to_4byte_selector(MINT_SIGNATURE))
        )
        assert post.await_args_list[1].args[0]["method"] == "eth_getTransactionReceipt"

    async def test_mint_reverted_receipt(self):
        client = self._client()
        post = AsyncMock(
            side_effect=[_rpc_result("0xtx1"), _rpc_result(_mint_receipt(1, "0x0"))]
        )

        with patch.object(client, "_post", post):
            with pytest.raises(TransactionRevertedError):
                await client.mint(ChainAddress(ALICE_ADDRESS), "ipfs://QmMeta")

    async def test_mint_rejected_by_node_as_revert(self):
        """Test node-side revert on submission maps to reverted."""
        client = self._client()
        post = AsyncMock(
            return_value={
                "jsonrpc": "2.0",
                "id": 1,
                "error": {"code": 3, "message": "execution reverted: not owner"},
            }
        )

        with patch.object(client, "_post", post):
            with pytest.raises(TransactionRevertedError) as exc_info:
                await client.mint(ChainAddress(ALICE_ADDRESS), "ipfs://QmMeta")

        assert "not owner" in exc_info.value.message

    async def test_mint_without_transfer_event(self):
        client = self._client()
        post = AsyncMock(
            side_effect=[
                _rpc_result("0xtx1"),
                _rpc_result({"status": "0x1", "logs": []}),
            ]
        )

        with patch.object(client, "_post", post):
            with pytest.raises(RpcError):
                await client.mint(ChainAddress(ALICE_ADDRESS), "ipfs://QmMeta")

    async def test_receipt_timeout(self):
        """Test missing receipt raises ChainTimeoutError after deadline."""
        client = self._client(receipt_timeout=0.05)

        async def post(payload):
            if payload["method"] == "eth_sendTransaction":
                return _rpc_result("0xtx1")
            return _rpc_result(None)

        with patch.object(client, "_post", side_effect=post):
            with pytest.raises(ChainTimeoutError):
                await client.mint(ChainAddress(ALICE_ADDRESS), "ipfs://QmMeta")

    # ================================================================
    # Transfer
    # ================================================================

    async def test_transfer_returns_tx_hash(self):
        client = self._client()
        post = AsyncMock(
            side_effect=[
                _rpc_result("0xtx2"),
                _rpc_result({"status": "0x1", "logs": []}),
            ]
        )

        with patch.object(client, "_post", post):
            tx_hash = await client.transfer(
                ChainAddress(ALICE_ADDRESS), ChainAddress(BOB_ADDRESS), "7"
            )

        assert tx_hash == "0xtx2"
        tx = post.await_args_list[0].args[0]["params"][0]
        assert tx["data"] == encode_transfer_from(
            ChainAddress(ALICE_ADDRESS).value, ChainAddress(BOB_ADDRESS).value, 7
        )

    # ================================================================
    # Transport and breaker
    # ================================================================

    async def test_transport_error_maps_to_rpc_error(self):
        client = self._client()
        post = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))

        with patch.object(client, "_post", post):
            with pytest.raises(RpcError):
                await client.chain_id()

    async def test_chain_id(self):
        client = self._client()

        with patch.object(client, "_post", AsyncMock(return_value=_rpc_result("0x89"))):
            assert await client.chain_id() == 137

    async def test_breaker_opens_after_failures(self):
        """Test open circuit stops calling the endpoint."""
        breaker = CircuitBreaker(
            "chain-test",
            failure_threshold=2,
            recovery_timeout=60.0,
            expected_exception=RpcError,
        )
        client = self._client(circuit_breaker=breaker)
        post = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))

        with patch.object(client, "_post", post):
            for _ in range(2):
                with pytest.raises(RpcError):
                    await client.chain_id()

            with pytest.raises(CircuitBreakerOpenError) as exc_info:
                await client.chain_id()

        assert breaker.state == CircuitState.OPEN
        assert isinstance(exc_info.value, BackendUnavailableError)
        assert post.await_count == 2


class TestAbi:
    """Unit tests for ABI helpers."""

    def test_transfer_from_selector(self):
        data = encode_transfer_from(
            ChainAddress(ALICE_ADDRESS).value, ChainAddress(BOB_ADDRESS).value, 1
        )
        assert data.startswith("0x23b872dd")

    def test_transfer_topic(self):
        assert TRANSFER_EVENT_TOPIC == (
            "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
        )

    def test_extract_ignores_other_contracts(self):
        receipt = _mint_receipt(5)
        receipt["logs"][0]["address"] = BOB_ADDRESS

        assert extract_minted_token_id(receipt, CONTRACT) is None
        assert extract_minted_token_id(_mint_receipt(5), CONTRACT) == 5
