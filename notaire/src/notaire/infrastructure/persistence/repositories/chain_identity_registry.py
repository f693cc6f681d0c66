"""
Chain identity registry backed by the chain_identities table.
"""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from notaire.domain.exceptions import LedgerWriteFailedError
from notaire.domain.repositories.i_chain_identity_registry import (
    IChainIdentityRegistry,
)
from notaire.domain.value_objects.chain_address import ChainAddress
from notaire.infrastructure.persistence.database import Database
from notaire.infrastructure.persistence.models import ChainIdentityModel


class ChainIdentityRegistry(IChainIdentityRegistry):
    """
    Resolves users to chain addresses.

    When fallback_address is set, users without a registered address
    resolve to it (a single custodial operator account).
    """

    def __init__(
        self,
        database: Database,
        fallback_address: Optional[ChainAddress] = None,
    ):
        self.database = database
        self.fallback_address = fallback_address

    async def resolve(self, user_id: str) -> Optional[ChainAddress]:
        async with self.database.session() as session:
            model = await session.get(ChainIdentityModel, user_id)

        if model is not None:
            return ChainAddress(model.address)
        return self.fallback_address

    async def link(self, user_id: str, address: ChainAddress) -> None:
        """
        Register or replace the chain address of a user.

        Raises:
            LedgerWriteFailedError: If the write fails
        """
        try:
            async with self.database.session() as session:
                model = await session.get(ChainIdentityModel, user_id)
                if model is None:
                    session.add(
                        ChainIdentityModel(user_id=user_id, address=address.value)
                    )
                else:
                    model.address = address.value
        except SQLAlchemyError as e:
            raise LedgerWriteFailedError("link_chain_identity", str(e)) from e
