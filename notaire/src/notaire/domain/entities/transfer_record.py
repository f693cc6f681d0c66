"""
TransferRecord entity - Append-only audit entry for an ownership change.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


@dataclass
class TransferRecord:
    """
    TransferRecord entity.

    Business rules:
    - One record per completed transfer
    - Never mutated or deleted once written
    - asset_snapshot holds the asset exactly as it was before the
      ownership change
    """

    asset_id: str = field(default="")
    from_owner_id: str = field(default="")
    to_owner_id: str = field(default="")
    id: str = field(default_factory=lambda: str(uuid4()))
    transferred_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    tx_hash: Optional[str] = field(default=None)
    asset_snapshot: Optional[dict] = field(default=None)

    def __post_init__(self):
        """Validate record data after initialization."""
        if not self.asset_id:
            raise ValueError("Asset id is required")

        if not self.from_owner_id or not self.to_owner_id:
            raise ValueError("Both source and destination owners are required")

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": self.id,
            "asset_id": self.asset_id,
            "from_owner_id": self.from_owner_id,
            "to_owner_id": self.to_owner_id,
            "transferred_at": self.transferred_at.isoformat(),
            "tx_hash": self.tx_hash,
            "asset_snapshot": self.asset_snapshot,
        }
