"""
Register User use case.
"""

from typing import Optional

from notaire.domain.entities.user import User, generate_owner_id
from notaire.domain.exceptions import DuplicateIdentityError, ValidationError
from notaire.domain.repositories.i_chain_identity_registry import (
    IChainIdentityRegistry,
)
from notaire.domain.repositories.i_user_repository import IUserRepository
from notaire.domain.value_objects.chain_address import ChainAddress
from notaire.domain.value_objects.phone_number import PhoneNumber
from notaire.domain.value_objects.verification_number import VerificationNumber
from notaire.infrastructure.monitoring.logger import get_logger

logger = get_logger(__name__)


class RegisterUser:
    """
    Register a new owner.

    Business rules:
    - Name is required
    - Verification number must be 12 digits and unique
    - Phone must be 10 digits or +<country code><number>
    - Owner id (OWN-XXXXXXXX) is generated
    - An optional chain address is linked in the identity registry
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        chain_identities: IChainIdentityRegistry,
    ):
        self.user_repository = user_repository
        self.chain_identities = chain_identities

    async def execute(
        self,
        name: str,
        verification_id: str,
        phone: str,
        email: Optional[str] = None,
        chain_address: Optional[str] = None,
    ) -> User:
        """
        Execute registration.

        Args:
            name: Display name
            verification_id: 12 digit national verification number
            phone: Mobile number
            email: Optional email
            chain_address: Optional 0x address for on-chain anchoring

        Returns:
            Created User entity

        Raises:
            ValidationError: If any field is malformed
            DuplicateIdentityError: If verification number is taken
            LedgerWriteFailedError: If the write fails
        """
        # 1. Validate input before touching the store
        if not name or not name.strip():
            raise ValidationError(field="name", reason="Name is required")
        try:
            verification = VerificationNumber(verification_id)
        except ValueError as e:
            raise ValidationError(field="verification_id", reason=str(e))
        try:
            phone_number = PhoneNumber(phone)
        except ValueError as e:
            raise ValidationError(field="phone", reason=str(e))
        address = None
        if chain_address:
            try:
                address = ChainAddress(chain_address)
            except ValueError as e:
                raise ValidationError(field="chain_address", reason=str(e))

        # 2. Reject duplicates early (unique constraint still guards races)
        if await self.user_repository.get_by_verification_id(verification.value):
            raise DuplicateIdentityError(verification.value)

        # 3. Create user
        user = await self.user_repository.create(
            User(
                name=name.strip(),
                verification_id=verification.value,
                phone=phone_number.value,
                email=email or None,
                owner_id=generate_owner_id(),
            )
        )

        # 4. Link chain address
        if address is not None:
            await self.chain_identities.link(user.id, address)

        logger.info(f"Registered user {user.id} ({user.owner_id})")
        return user
