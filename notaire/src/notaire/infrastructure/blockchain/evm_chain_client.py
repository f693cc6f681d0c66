"""
EVM chain client.

Sends mint and transfer transactions for an ERC-721 contract over
Ethereum JSON-RPC and waits for the receipt. Transactions are sent
with eth_sendTransaction from an operator account the node holds
unlocked; no key material lives in this process.
"""

import asyncio
import itertools
import time
from typing import Any, Optional

import aiohttp

from notaire.domain.exceptions import (
    ChainTimeoutError,
    RpcError,
    TransactionRevertedError,
)
from notaire.domain.services.i_chain_client import IChainClient, MintReceipt
from notaire.domain.value_objects.chain_address import ChainAddress
from notaire.infrastructure.blockchain.abi import (
    encode_mint,
    encode_transfer_from,
    extract_minted_token_id,
)
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.monitoring.metrics import (
    backend_errors_total,
    backend_request_duration_seconds,
    backend_requests_total,
)
from notaire.infrastructure.resilience.circuit_breaker import CircuitBreaker

logger = get_logger(__name__)

SERVICE = "chain"


class EvmChainClient(IChainClient):
    """
    JSON-RPC client for an ERC-721 contract.

    Calls are synchronous from the caller's point of view: mint and
    transfer return only once the transaction is mined.
    """

    def __init__(
        self,
        rpc_url: str,
        contract_address: ChainAddress,
        operator_address: ChainAddress,
        rpc_timeout: float = 15.0,
        receipt_timeout: float = 60.0,
        poll_interval: float = 1.0,
        gas_limit: int = 500_000,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ):
        """
        Initialize chain client.

        Args:
            rpc_url: JSON-RPC endpoint URL
            contract_address: ERC-721 contract address
            operator_address: Unlocked account sending transactions
            rpc_timeout: Timeout for a single RPC request in seconds
            receipt_timeout: Maximum wait for a receipt in seconds
            poll_interval: Delay between receipt polls in seconds
            gas_limit: Gas limit attached to each transaction
            circuit_breaker: Optional breaker guarding the endpoint
        """
        self.rpc_url = rpc_url
        self.contract_address = contract_address
        self.operator_address = operator_address
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval
        self.gas_limit = gas_limit
        self.timeout = aiohttp.ClientTimeout(total=rpc_timeout)
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            SERVICE,
            expected_exception=RpcError,
        )
        self._ids = itertools.count(1)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=aiohttp.TCPConnector(limit=20, ttl_dns_cache=300),
            )
        return self._session

    # ================================================================
    # Contract operations
    # ================================================================

    async def mint(self, recipient: ChainAddress, token_uri: str) -> MintReceipt:
        """
        Mint a token via mintNFT(address,string).

        Args:
            recipient: Address receiving the token
            token_uri: Metadata reference

        Returns:
            MintReceipt with decimal token id and transaction hash

        Raises:
            RpcError: If the endpoint fails or the receipt has no
                Transfer event
            TransactionRevertedError: If the transaction reverts
            ChainTimeoutError: If the transaction is not mined in time
        """
        tx_hash = await self._send_transaction(
            encode_mint(recipient.value, token_uri), operation="mint"
        )
        receipt = await self._wait_for_receipt(tx_hash)

        token_id = extract_minted_token_id(receipt, self.contract_address.value)
        if token_id is None:
            raise RpcError(f"Mint receipt {tx_hash} has no Transfer event")

        logger.info(f"Minted token {token_id} to {recipient} in {tx_hash}")
        return MintReceipt(token_id=str(token_id), tx_hash=tx_hash)

    async def transfer(
        self,
        from_address: ChainAddress,
        to_address: ChainAddress,
        token_id: str,
    ) -> str:
        """
        Move a token via transferFrom(address,address,uint256).

        Args:
            from_address: Current token holder
            to_address: New token holder
            token_id: Decimal token id

        Returns:
            Transaction hash

        Raises:
            RpcError: If the endpoint fails
            TransactionRevertedError: If the transaction reverts
            ChainTimeoutError: If the transaction is not mined in time
        """
        tx_hash = await self._send_transaction(
            encode_transfer_from(from_address.value, to_address.value, int(token_id)),
            operation="transfer",
        )
        await self._wait_for_receipt(tx_hash)

        logger.info(
            f"Transferred token {token_id} {from_address} -> {to_address} "
            f"in {tx_hash}"
        )
        return tx_hash

    async def chain_id(self) -> int:
        """Return the chain id reported by the node."""
        return int(await self._rpc("eth_chainId", []), 16)

    # ================================================================
    # Transaction plumbing
    # ================================================================

    async def _send_transaction(self, data: str, operation: str) -> str:
        tx = {
            "from": self.operator_address.value,
            "to": self.contract_address.value,
            "data": data,
            "gas": hex(self.gas_limit),
        }
        try:
            return await self._rpc("eth_sendTransaction", [tx])
        except RpcError as e:
            # Nodes reject a call that would revert before mining it.
            if "revert" in e.message.lower():
                raise TransactionRevertedError(reason=e.message) from e
            raise

    async def _wait_for_receipt(self, tx_hash: str) -> dict:
        """
        Poll for a transaction receipt.

        Raises:
            TransactionRevertedError: If the receipt status is 0
            ChainTimeoutError: If no receipt arrives within receipt_timeout
        """
        start = time.monotonic()
        deadline = start + self.receipt_timeout

        while True:
            receipt = await self._rpc("eth_getTransactionReceipt", [tx_hash])
            if receipt:
                status = receipt.get("status")
                if status is not None and int(status, 16) == 0:
                    raise TransactionRevertedError(tx_hash)
                return receipt

            if time.monotonic() >= deadline:
                raise ChainTimeoutError(tx_hash, time.monotonic() - start)

            await asyncio.sleep(self.poll_interval)

    async def _rpc(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call through the circuit breaker.

        Raises:
            RpcError: On transport failure or a JSON-RPC error object
            CircuitBreakerOpenError: If the circuit is open
        """
        backend_requests_total.labels(service=SERVICE, operation=method).inc()
        start = time.perf_counter()
        try:
            return await self.circuit_breaker.call(self._rpc_once, method, params)
        except RpcError as e:
            backend_errors_total.labels(
                service=SERVICE, error_type=type(e).__name__
            ).inc()
            raise
        finally:
            backend_request_duration_seconds.labels(
                service=SERVICE, operation=method
            ).observe(time.perf_counter() - start)

    async def _rpc_once(self, method: str, params: list) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        try:
            data = await self._post(payload)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise RpcError(f"{method} failed: {e}") from e

        if not isinstance(data, dict):
            raise RpcError(f"{method} returned malformed response")

        if data.get("error"):
            error = data["error"]
            raise RpcError(
                f"{method} error: {error.get('message', error)}",
                rpc_code=error.get("code"),
            )

        return data.get("result")

    async def _post(self, payload: dict) -> Any:
        """POST a JSON-RPC payload and return the decoded body."""
        session = await self._get_session()
        async with session.post(self.rpc_url, json=payload) as response:
            if response.status >= 500:
                text = await response.text()
                raise aiohttp.ClientResponseError(
                    response.request_info,
                    response.history,
                    status=response.status,
                    message=text[:200],
                )
            return await response.json(content_type=None)

    async def close(self) -> None:
        """Close HTTP session and cleanup resources."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
