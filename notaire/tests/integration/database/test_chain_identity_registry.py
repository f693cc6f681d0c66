"""
Integration tests for ChainIdentityRegistry.

Usage:
    pytest notaire/tests/integration/database/test_chain_identity_registry.py
"""

from helpers.fakes import ALICE_ADDRESS, BOB_ADDRESS
from notaire.domain.value_objects.chain_address import ChainAddress
from notaire.infrastructure.persistence.repositories.chain_identity_registry import (  # noqa: E501
    ChainIdentityRegistry,
)


class TestChainIdentityRegistry:
    """Integration tests for ChainIdentityRegistry."""

    async def test_unlinked_user_resolves_to_none(self, chain_identities, make_user):
        user = await make_user()
        assert await chain_identities.resolve(user.id) is None

    async def test_link_and_resolve(self, chain_identities, make_user):
        user = await make_user()

        await chain_identities.link(user.id, ChainAddress(ALICE_ADDRESS))

        assert await chain_identities.resolve(user.id) == ChainAddress(ALICE_ADDRESS)

    async def test_relink_replaces_address(self, chain_identities, make_user):
        user = await make_user()
        await chain_identities.link(user.id, ChainAddress(ALICE_ADDRESS))

        await chain_identities.link(user.id, ChainAddress(BOB_ADDRESS))

        assert await chain_identities.resolve(user.id) == ChainAddress(BOB_ADDRESS)

    async def test_fallback_address(self, database, make_user):
        operator = ChainAddress(BOB_ADDRESS)
        registry = ChainIdentityRegistry(database, fallback_address=operator)
        linked = await make_user()
        unlinked = await make_user()
        await registry.link(linked.id, ChainAddress(ALICE_ADDRESS))

        assert await registry.resolve(linked.id) == ChainAddress(ALICE_ADDRESS)
        assert await registry.resolve(unlinked.id) == operator
