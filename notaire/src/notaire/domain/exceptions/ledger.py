"""
Ledger exceptions.

Failures of the mandatory persistence steps. These always propagate
to the caller unchanged.
"""

from notaire.domain.exceptions.base import NotaireException


class LedgerWriteFailedError(NotaireException):
    """Raised when a mandatory datastore write fails."""

    def __init__(self, operation: str, reason: str):
        """
        Initialize ledger write error.

        Args:
            operation: Ledger operation that failed (e.g. "create_asset")
            reason: Underlying error description
        """
        super().__init__(
            f"Ledger write failed during {operation}: {reason}",
            code="LEDGER_WRITE_FAILED",
        )
        self.operation = operation
        self.reason = reason


class OwnershipConflictError(NotaireException):
    """
    Raised when an ownership change lost a race.

    The asset owner in the ledger no longer matches the owner the
    transfer was planned against. Nothing was written.
    """

    def __init__(self, asset_id: str, expected_owner_id: str):
        super().__init__(
            f"Asset {asset_id} is no longer owned by {expected_owner_id}",
            code="OWNERSHIP_CONFLICT",
        )
        self.asset_id = asset_id
        self.expected_owner_id = expected_owner_id


class StorageWriteFailedError(NotaireException):
    """Raised when raw media cannot be written to primary storage."""

    def __init__(self, media_ref: str, reason: str):
        super().__init__(
            f"Failed to store media at {media_ref}: {reason}",
            code="STORAGE_WRITE_FAILED",
        )
        self.media_ref = media_ref
        self.reason = reason
