"""
VerificationNumber value object - National identity number.
"""

from dataclasses import dataclass

VERIFICATION_NUMBER_LENGTH = 12


@dataclass(frozen=True)
class VerificationNumber:
    """
    Value object for a national verification number (Aadhaar style).

    Business rules:
    - Exactly 12 ASCII digits
    - Surrounding whitespace is stripped
    """

    value: str

    def __post_init__(self):
        """Validate verification number on creation."""
        normalized = (self.value or "").strip()
        object.__setattr__(self, "value", normalized)

        if len(normalized) != VERIFICATION_NUMBER_LENGTH:
            raise ValueError(
                f"Verification number must be {VERIFICATION_NUMBER_LENGTH} digits"
            )

        if not (normalized.isascii() and normalized.isdigit()):
            raise ValueError("Verification number must contain only digits")

    def __str__(self) -> str:
        return self.value
