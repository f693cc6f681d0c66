"""
PhoneNumber value object - Validated mobile number.
"""

import re
from dataclasses import dataclass

_LOCAL_PATTERN = re.compile(r"^\d{10}$")
_INTERNATIONAL_PATTERN = re.compile(r"^\+\d{11,15}$")

_MASK = "XXXXXXXX"


def mask_phone(phone: str) -> str:
    """
    Mask a phone number for display, keeping the last four digits.

    Numbers of four characters or fewer are fully masked.
    """
    if len(phone) <= 4:
        return _MASK + "XXXX"
    return _MASK + phone[-4:]


@dataclass(frozen=True)
class PhoneNumber:
    """
    Value object for a user's mobile number.

    Business rules:
    - Either 10 local digits or "+" followed by country code and number
    - Spaces and dashes are stripped before validation
    """

    value: str

    def __post_init__(self):
        """Validate phone number on creation."""
        normalized = re.sub(r"[\s-]", "", self.value or "")
        object.__setattr__(self, "value", normalized)

        if not (
            _LOCAL_PATTERN.match(normalized)
            or _INTERNATIONAL_PATTERN.match(normalized)
        ):
            raise ValueError(
                "Phone number must be 10 digits or +<country code><number>"
            )

    def masked(self) -> str:
        """Return masked representation for display."""
        return mask_phone(self.value)

    def __str__(self) -> str:
        return self.value


def to_e164(phone: str, default_country_code: str = "+91") -> str:
    """
    Normalize a stored phone number to E.164.

    Numbers already carrying a leading "+" are returned unchanged.
    Bare 10 digit numbers get the default country code prepended.
    """
    phone = re.sub(r"[\s-]", "", phone)
    if phone.startswith("+"):
        return phone
    if _LOCAL_PATTERN.match(phone):
        return f"{default_country_code}{phone}"
    return f"+{phone}"
