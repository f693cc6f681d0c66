"""
Domain exceptions package.
"""

# Auth exceptions
from notaire.domain.exceptions.auth import (
    AuthenticationError,
    ExpiredTokenError,
    InvalidTokenError,
)

# Optional backend exceptions
from notaire.domain.exceptions.backends import (
    BackendUnavailableError,
    ChainError,
    ChainTimeoutError,
    ContentStorageError,
    ContentStorageUnavailableError,
    NotificationError,
    RpcError,
    TransactionRevertedError,
    UploadRejectedError,
)

# Base exceptions
from notaire.domain.exceptions.base import (
    AssetNotFoundError,
    DuplicateIdentityError,
    EntityNotFoundError,
    NotaireException,
    OwnerNotFoundError,
    ValidationError,
)

# Ledger exceptions
from notaire.domain.exceptions.ledger import (
    LedgerWriteFailedError,
    OwnershipConflictError,
    StorageWriteFailedError,
)

__all__ = [
    # Base
    "NotaireException",
    "EntityNotFoundError",
    "OwnerNotFoundError",
    "AssetNotFoundError",
    "DuplicateIdentityError",
    "ValidationError",
    # Ledger
    "LedgerWriteFailedError",
    "OwnershipConflictError",
    "StorageWriteFailedError",
    # Backends
    "BackendUnavailableError",
    "ContentStorageError",
    "ContentStorageUnavailableError",
    "UploadRejectedError",
    "ChainError",
    "RpcError",
    "TransactionRevertedError",
    "ChainTimeoutError",
    "NotificationError",
    # Auth
    "AuthenticationError",
    "InvalidTokenError",
    "ExpiredTokenError",
]
