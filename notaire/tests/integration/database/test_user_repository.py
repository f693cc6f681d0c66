"""
Integration tests for UserRepository against SQLite.

Usage:
    pytest notaire/tests/integration/database/test_user_repository.py
"""

import pytest

from notaire.domain.entities.user import User, generate_owner_id
from notaire.domain.exceptions import DuplicateIdentityError


class TestUserRepository:
    """Integration tests for UserRepository."""

    async def test_create_and_get(self, user_repository):
        user = User(
            name="Asha",
            verification_id="123456789012",
            phone="9876543210",
            email="asha@example.com",
            owner_id=generate_owner_id(),
        )

        await user_repository.create(user)
        loaded = await user_repository.get_by_id(user.id)

        assert loaded is not None
        assert loaded.name == "Asha"
        assert loaded.owner_id == user.owner_id
        assert loaded.email == "asha@example.com"

    async def test_get_by_verification_id(self, user_repository, make_user):
        user = await make_user()

        loaded = await user_repository.get_by_verification_id(user.verification_id)

        assert loaded is not None
        assert loaded.id == user.id

    async def test_unknown_user(self, user_repository):
        assert await user_repository.get_by_id("missing") is None
        assert await user_repository.get_by_verification_id("000000000000") is None
        assert await user_repository.exists("missing") is False

    async def test_duplicate_verification_id(self, user_repository):
        await user_repository.create(User(name="First", verification_id="111122223333"))

        with pytest.raises(DuplicateIdentityError):
            await user_repository.create(
                User(name="Second", verification_id="111122223333")
            )

    async def test_users_without_verification_id(self, user_repository):
        """Test several users may be registered without a verification number."""
        first = await user_repository.create(User(name="First"))
        second = await user_repository.create(User(name="Second"))

        assert await user_repository.exists(first.id)
        assert await user_repository.exists(second.id)

    async def test_dropped_schema_starts_empty(
        self, database, user_repository, make_user
    ):
        user = await make_user()

        await database.drop_schema()
        await database.create_schema()

        assert await user_repository.get_by_id(user.id) is None
