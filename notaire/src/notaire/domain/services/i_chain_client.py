"""
Chain client interface.

Submits mint and transfer transactions to an ERC-721 contract and
waits for them to be mined before returning.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from notaire.domain.value_objects.chain_address import ChainAddress


@dataclass(frozen=True)
class MintReceipt:
    """Outcome of a mined mint transaction."""

    token_id: str
    tx_hash: str


class IChainClient(ABC):
    """Abstract interface for the blockchain ledger."""

    @abstractmethod
    async def mint(self, recipient: ChainAddress, token_uri: str) -> MintReceipt:
        """
        Mint a token to recipient with the given metadata URI.

        Args:
            recipient: Address receiving the token
            token_uri: Metadata reference (ipfs://...)

        Returns:
            MintReceipt with decimal token id and transaction hash

        Raises:
            RpcError: If the RPC endpoint fails
            TransactionRevertedError: If the transaction reverts
            ChainTimeoutError: If the transaction is not mined in time
        """

    @abstractmethod
    async def transfer(
        self,
        from_address: ChainAddress,
        to_address: ChainAddress,
        token_id: str,
    ) -> str:
        """
        Transfer a token between addresses.

        Args:
            from_address: Current token holder
            to_address: New token holder
            token_id: Decimal token id

        Returns:
            Transaction hash

        Raises:
            RpcError: If the RPC endpoint fails
            TransactionRevertedError: If the transaction reverts
            ChainTimeoutError: If the transaction is not mined in time
        """

    async def close(self) -> None:
        """Release network resources."""
