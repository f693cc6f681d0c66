"""
Optional backend exceptions.

Raised by the content storage, chain and notification adapters.
Orchestrators absorb every BackendUnavailableError and record the
step as skipped instead of failing the operation.
"""

from notaire.domain.exceptions.base import NotaireException


class BackendUnavailableError(NotaireException):
    """Base exception for optional backend failures."""

    def __init__(self, backend: str, message: str):
        super().__init__(message, code="BACKEND_UNAVAILABLE")
        self.backend = backend


# Content storage


class ContentStorageError(BackendUnavailableError):
    """Base exception for content storage failures."""

    def __init__(self, message: str):
        super().__init__("content_storage", message)


class ContentStorageUnavailableError(ContentStorageError):
    """Raised when the storage daemon cannot be reached."""


class UploadRejectedError(ContentStorageError):
    """Raised when the storage daemon refuses an upload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


# Chain


class ChainError(BackendUnavailableError):
    """Base exception for chain adapter failures."""

    def __init__(self, message: str):
        super().__init__("chain", message)


class RpcError(ChainError):
    """Raised when the JSON-RPC endpoint fails or returns an error."""

    def __init__(self, message: str, rpc_code: int | None = None):
        super().__init__(message)
        self.rpc_code = rpc_code


class TransactionRevertedError(ChainError):
    """Raised when a mined transaction has a failed status."""

    def __init__(self, tx_hash: str = "", reason: str = ""):
        target = tx_hash or "(not mined)"
        detail = f": {reason}" if reason else ""
        super().__init__(f"Transaction {target} reverted{detail}")
        self.tx_hash = tx_hash
        self.reason = reason


class ChainTimeoutError(ChainError):
    """Raised when a transaction is not mined in time."""

    def __init__(self, tx_hash: str, waited_seconds: float):
        super().__init__(
            f"Transaction {tx_hash} not mined after {waited_seconds:.1f}s"
        )
        self.tx_hash = tx_hash
        self.waited_seconds = waited_seconds


# Notification


class NotificationError(BackendUnavailableError):
    """Raised when the SMS gateway cannot be reached."""

    def __init__(self, message: str):
        super().__init__("notification", message)
