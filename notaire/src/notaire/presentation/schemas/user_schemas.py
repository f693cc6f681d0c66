"""
User API schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from notaire.domain.entities.user import User
from notaire.domain.value_objects.phone_number import mask_phone


class CreateUserRequest(BaseModel):
    """Request to register a new owner."""

    name: str = Field(..., min_length=1, max_length=255)
    verification_id: str = Field(
        ...,
        description="12-digit national verification number",
    )
    phone: str = Field(..., description="10-digit local or +E.164 number")
    email: Optional[str] = Field(None, max_length=255)
    chain_address: Optional[str] = Field(
        None,
        description="0x-prefixed chain account receiving minted tokens",
    )


class UserResponse(BaseModel):
    """
    User response.

    Verification number and phone are masked; only the last four
    digits are ever returned.
    """

    id: str
    name: str
    owner_id: Optional[str] = None
    email: Optional[str] = None
    masked_phone: Optional[str] = None
    masked_verification_id: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            owner_id=user.owner_id,
            email=user.email,
            masked_phone=mask_phone(user.phone) if user.phone else None,
            masked_verification_id=(
                f"********{user.verification_id[-4:]}"
                if user.verification_id
                else None
            ),
            created_at=user.created_at,
        )


class LinkChainIdentityRequest(BaseModel):
    """Request to bind a chain account to an owner."""

    address: str = Field(..., description="0x-prefixed chain account")


class ChainIdentityResponse(BaseModel):
    """Chain account bound to an owner."""

    user_id: str
    address: str
