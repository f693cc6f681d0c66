"""
Base domain exceptions.
"""


class NotaireException(Exception):
    """Base exception for all Notaire domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class EntityNotFoundError(NotaireException):
    """Raised when entity is not found in repository."""

    def __init__(self, entity_type: str, entity_id: str):
        message = f"{entity_type} with ID {entity_id} not found"
        super().__init__(message, code="ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class OwnerNotFoundError(EntityNotFoundError):
    """Raised when a referenced owner (user) does not exist."""

    def __init__(self, owner_id: str):
        super().__init__("User", owner_id)


class AssetNotFoundError(EntityNotFoundError):
    """Raised when a referenced asset does not exist."""

    def __init__(self, asset_id: str):
        super().__init__("Asset", asset_id)


class DuplicateIdentityError(NotaireException):
    """Raised when a verification id is already registered."""

    def __init__(self, verification_id: str):
        # Only the tail is echoed back, the rest is personal data.
        tail = verification_id[-4:] if verification_id else ""
        super().__init__(
            f"A user with verification number ending in {tail} already exists",
            code="DUPLICATE_IDENTITY",
        )


class ValidationError(NotaireException):
    """Raised when input validation fails."""

    def __init__(self, field: str, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.reason = reason
