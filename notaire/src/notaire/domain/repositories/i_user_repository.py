"""
User repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from notaire.domain.entities.user import User


class IUserRepository(ABC):
    """Interface for identity store operations."""

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create new user.

        Args:
            user: User entity to create

        Returns:
            Created user entity

        Raises:
            DuplicateIdentityError: If verification_id is already taken
            LedgerWriteFailedError: If the write fails
        """

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User unique identifier

        Returns:
            User entity if found, None otherwise
        """

    @abstractmethod
    async def get_by_verification_id(self, verification_id: str) -> Optional[User]:
        """
        Get user by verification number.

        Args:
            verification_id: National verification number

        Returns:
            User entity if found, None otherwise
        """

    @abstractmethod
    async def exists(self, user_id: str) -> bool:
        """Check whether a user with this ID exists."""
