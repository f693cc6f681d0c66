"""
User entity - Domain model for registered owners.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


def generate_user_id() -> str:
    return str(uuid4())


def generate_owner_id() -> str:
    """Generate human-facing owner id, e.g. OWN-1A2B3C4D."""
    return f"OWN-{uuid4().hex[:8].upper()}"


@dataclass
class User:
    """
    User entity - a registered asset owner.

    User is created once at registration. Only the verification
    fields (verification_id, phone) may be backfilled later.
    """

    name: str = field(default="")
    id: str = field(default_factory=generate_user_id)
    verification_id: Optional[str] = field(default=None)
    phone: Optional[str] = field(default=None)
    email: Optional[str] = field(default=None)
    owner_id: Optional[str] = field(default=None)
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def __post_init__(self):
        """Validate user data after initialization."""
        if not self.id:
            raise ValueError("User id is required")

        if not self.name or not self.name.strip():
            raise ValueError("User name is required")

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "verification_id": self.verification_id,
            "phone": self.phone,
            "email": self.email,
            "owner_id": self.owner_id,
            "created_at": self.created_at.isoformat(),
        }
