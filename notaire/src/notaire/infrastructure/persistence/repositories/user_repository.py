"""
User repository implementation using SQLAlchemy.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from notaire.domain.entities.user import User
from notaire.domain.exceptions import DuplicateIdentityError, LedgerWriteFailedError
from notaire.domain.repositories.i_user_repository import IUserRepository
from notaire.infrastructure.persistence.database import Database
from notaire.infrastructure.persistence.models import UserModel


class UserRepository(IUserRepository):
    """
    SQLAlchemy implementation of the identity store.

    Each call runs in its own session and commits on return.
    """

    def __init__(self, database: Database):
        """
        Initialize repository with database.

        Args:
            database: Connected database manager
        """
        self.database = database

    async def create(self, user: User) -> User:
        """
        Create a new user in the database.

        Args:
            user: User entity to persist

        Returns:
            Created user entity

        Raises:
            DuplicateIdentityError: If verification_id is already taken
            LedgerWriteFailedError: On any other datastore failure
        """
        model = UserModel(
            id=user.id,
            name=user.name,
            verification_id=user.verification_id,
            phone=user.phone,
            email=user.email,
            owner_id=user.owner_id,
            created_at=user.created_at,
        )

        try:
            async with self.database.session() as session:
                session.add(model)
                await session.flush()
        except IntegrityError as e:
            if user.verification_id and "verification_id" in str(e.orig).lower():
                raise DuplicateIdentityError(user.verification_id) from e
            raise LedgerWriteFailedError("create_user", str(e.orig)) from e
        except SQLAlchemyError as e:
            raise LedgerWriteFailedError("create_user", str(e)) from e

        return self._to_entity(model)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Retrieve user by ID.

        Args:
            user_id: User unique identifier

        Returns:
            User entity if found, None otherwise
        """
        async with self.database.session() as session:
            model = await session.get(UserModel, user_id)
            return self._to_entity(model) if model else None

    async def get_by_verification_id(self, verification_id: str) -> Optional[User]:
        """
        Retrieve user by verification number.

        Args:
            verification_id: National verification number

        Returns:
            User entity if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.verification_id == verification_id)
        async with self.database.session() as session:
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

    async def exists(self, user_id: str) -> bool:
        stmt = select(UserModel.id).where(UserModel.id == user_id)
        async with self.database.session() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none() is not None

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=model.id,
            name=model.name,
            verification_id=model.verification_id,
            phone=model.phone,
            email=model.email,
            owner_id=model.owner_id,
            created_at=model.created_at,
        )
