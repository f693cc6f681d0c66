"""
OTP Data Transfer Objects.
"""

from dataclasses import dataclass
from typing import Optional

from notaire.domain.entities.user import User
from notaire.domain.services.i_otp_store import OtpVerificationStatus


@dataclass(frozen=True)
class IssuedOtp:
    """
    Result of issuing a code.

    The code itself is for operational fallback only and must never
    be returned to the requesting client.
    """

    code: str
    masked_phone: str
    user_id: str
    delivered: bool
    failure_reason: Optional[str] = None


@dataclass(frozen=True)
class OtpVerificationResult:
    """Result of verifying a code."""

    status: OtpVerificationStatus
    user: Optional[User] = None
    access_token: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.status == OtpVerificationStatus.ACCEPTED
