"""
Value objects for Notaire domain.
"""

from notaire.domain.value_objects.anchor_outcome import (
    AnchorOutcome,
    Anchored,
    Skipped,
    SkipReason,
)
from notaire.domain.value_objects.chain_address import ChainAddress
from notaire.domain.value_objects.phone_number import (
    PhoneNumber,
    mask_phone,
    to_e164,
)
from notaire.domain.value_objects.verification_number import VerificationNumber

__all__ = [
    "AnchorOutcome",
    "Anchored",
    "Skipped",
    "SkipReason",
    "ChainAddress",
    "PhoneNumber",
    "mask_phone",
    "to_e164",
    "VerificationNumber",
]
