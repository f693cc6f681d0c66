"""
Chain identity registry interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from notaire.domain.value_objects.chain_address import ChainAddress


class IChainIdentityRegistry(ABC):
    """Maps application users to their chain-facing addresses."""

    @abstractmethod
    async def resolve(self, user_id: str) -> Optional[ChainAddress]:
        """
        Resolve the chain address for a user.

        Args:
            user_id: User unique identifier

        Returns:
            Chain address if known, None otherwise
        """

    @abstractmethod
    async def link(self, user_id: str, address: ChainAddress) -> None:
        """
        Register or replace the chain address of a user.

        Args:
            user_id: User unique identifier
            address: Chain address to associate
        """
