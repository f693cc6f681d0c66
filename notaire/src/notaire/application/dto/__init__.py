"""
Application DTOs.
"""

from notaire.application.dto.mint_dto import (
    MetadataAttribute,
    MintProvenance,
    MintResult,
)
from notaire.application.dto.otp_dto import IssuedOtp, OtpVerificationResult
from notaire.application.dto.transfer_dto import TransferResult

__all__ = [
    "MetadataAttribute",
    "MintProvenance",
    "MintResult",
    "IssuedOtp",
    "OtpVerificationResult",
    "TransferResult",
]
