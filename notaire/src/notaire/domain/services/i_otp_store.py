"""
OTP store interface.
"""

from abc import ABC, abstractmethod
from enum import Enum


class OtpVerificationStatus(str, Enum):
    """Outcome of an OTP verification attempt."""

    ACCEPTED = "accepted"
    REJECTED_INVALID_CODE = "rejected_invalid_code"
    REJECTED_NO_PENDING_REQUEST = "rejected_no_pending_request"


class IOtpStore(ABC):
    """
    Single-use one-time code store keyed by identity claim.

    issue and verify on the same claim are mutually exclusive;
    different claims proceed concurrently.
    """

    @abstractmethod
    async def issue(self, claim: str) -> str:
        """
        Generate and store a fresh code for claim.

        Any pending code for the same claim is replaced.

        Args:
            claim: Identity claim (e.g. verification number)

        Returns:
            Generated numeric code
        """

    @abstractmethod
    async def verify(self, claim: str, code: str) -> OtpVerificationStatus:
        """
        Check a submitted code.

        ACCEPTED removes the pending code. Rejections leave it as is,
        except that an expired code is purged.

        Args:
            claim: Identity claim
            code: Submitted code

        Returns:
            Verification status
        """
