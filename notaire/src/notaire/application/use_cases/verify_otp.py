"""
Verify OTP use case.
"""

from typing import Callable, Optional

from notaire.application.dto.otp_dto import OtpVerificationResult
from notaire.domain.exceptions import EntityNotFoundError
from notaire.domain.repositories.i_user_repository import IUserRepository
from notaire.domain.services.i_otp_store import IOtpStore, OtpVerificationStatus
from notaire.infrastructure.auth.jwt_handler import create_access_token
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.monitoring.metrics import otp_verifications_total

logger = get_logger(__name__)


class VerifyOtp:
    """
    Verify a submitted code and issue an access token.

    Business rules:
    - A code is accepted once; the second attempt finds no pending code
    - Wrong codes leave the pending code in place (no lockout)
    - Acceptance yields a signed access token for the claim's user
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        otp_store: IOtpStore,
        token_issuer: Callable[[str, Optional[str]], str] = create_access_token,
    ):
        self.user_repository = user_repository
        self.otp_store = otp_store
        self.token_issuer = token_issuer

    async def execute(self, claim: str, code: str) -> OtpVerificationResult:
        """
        Verify code for claim.

        Args:
            claim: Verification number
            code: Submitted code

        Returns:
            OtpVerificationResult; user and access_token only on acceptance

        Raises:
            EntityNotFoundError: If the code was accepted but the user
                no longer exists
        """
        status = await self.otp_store.verify(claim, code)
        otp_verifications_total.labels(status=status.value).inc()

        if status != OtpVerificationStatus.ACCEPTED:
            logger.info(f"OTP rejected for ****{claim[-4:]}: {status.value}")
            return OtpVerificationResult(status=status)

        user = await self.user_repository.get_by_verification_id(claim)
        if user is None:
            raise EntityNotFoundError("User", f"****{claim[-4:]}")

        logger.info(f"OTP accepted for user {user.id}")
        return OtpVerificationResult(
            status=status,
            user=user,
            access_token=self.token_issuer(user.id, user.owner_id),
        )
