"""
Get User use case.
"""

from notaire.domain.entities.user import User
from notaire.domain.exceptions import OwnerNotFoundError
from notaire.domain.repositories.i_user_repository import IUserRepository


class GetUser:
    """Load a user by ID."""

    def __init__(self, user_repository: IUserRepository):
        self.user_repository = user_repository

    async def execute(self, user_id: str) -> User:
        """
        Raises:
            OwnerNotFoundError: If user does not exist
        """
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise OwnerNotFoundError(user_id)
        return user
