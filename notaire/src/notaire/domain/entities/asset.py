"""
Asset entity - Domain model for an owned digital item.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


def generate_asset_id() -> str:
    return str(uuid4())


@dataclass
class Asset:
    """
    Asset entity representing a minted digital item.

    Business rules:
    - Created exactly once by the mint flow
    - owner_id is the only field changed after creation, and only
      through a recorded transfer
    - Provenance fields (chain_token_id, media_cid, metadata_cid,
      mint_tx_hash) are each independently optional
    - chain_token_id is a uint256 kept as a decimal string
    """

    name: str = field(default="")
    owner_id: str = field(default="")
    media_ref: str = field(default="")
    id: str = field(default_factory=generate_asset_id)
    description: Optional[str] = field(default=None)
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    chain_token_id: Optional[str] = field(default=None)
    media_cid: Optional[str] = field(default=None)
    metadata_cid: Optional[str] = field(default=None)
    mint_tx_hash: Optional[str] = field(default=None)

    def __post_init__(self):
        """Validate asset data after initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("Asset name is required")

        if not self.owner_id:
            raise ValueError("Asset owner is required")

        if not self.media_ref:
            raise ValueError("Asset media reference is required")

    @property
    def is_on_chain(self) -> bool:
        """Check if asset was minted on chain."""
        return self.chain_token_id is not None

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "media_ref": self.media_ref,
            "owner_id": self.owner_id,
            "created_at": self.created_at.isoformat(),
            "chain_token_id": self.chain_token_id,
            "media_cid": self.media_cid,
            "metadata_cid": self.metadata_cid,
            "mint_tx_hash": self.mint_tx_hash,
        }
