"""
Issue OTP use case.

Generates a one-time code for a registered verification number and
sends it to the phone on file. Delivery is best-effort.
"""

import asyncio
from typing import Optional

from notaire.application.dto.otp_dto import IssuedOtp
from notaire.domain.exceptions import (
    BackendUnavailableError,
    EntityNotFoundError,
    ValidationError,
)
from notaire.domain.repositories.i_user_repository import IUserRepository
from notaire.domain.services.i_notifier import INotifier
from notaire.domain.services.i_otp_store import IOtpStore
from notaire.domain.value_objects.phone_number import mask_phone
from notaire.infrastructure.monitoring.logger import get_logger
from notaire.infrastructure.monitoring.metrics import otp_issued_total

logger = get_logger(__name__)


def _claim_hint(claim: str) -> str:
    return f"****{claim[-4:]}"


class IssueOtp:
    """
    Issue a one-time code for an identity claim.

    Business rules:
    - Claim must belong to a registered user with a phone number
    - A new code replaces any pending code for the claim
    - Failed or slow delivery does not fail issuance
    - No store lock is held while the message is sent
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        otp_store: IOtpStore,
        notifier: INotifier,
        app_name: str = "Notaire",
        ttl_seconds: Optional[int] = None,
        notification_timeout: float = 15.0,
        log_code_on_failure: bool = True,
    ):
        """
        Initialize use case with dependencies.

        Args:
            user_repository: Identity store
            otp_store: Pending code store
            notifier: SMS delivery
            app_name: Product name used in the message
            ttl_seconds: Code validity shown in the message, if any
            notification_timeout: Bound for the send in seconds
            log_code_on_failure: Log the code when delivery fails
        """
        self.user_repository = user_repository
        self.otp_store = otp_store
        self.notifier = notifier
        self.app_name = app_name
        self.ttl_seconds = ttl_seconds
        self.notification_timeout = notification_timeout
        self.log_code_on_failure = log_code_on_failure

    async def execute(self, claim: str) -> IssuedOtp:
        """
        Issue and deliver a code.

        Args:
            claim: Verification number of the user

        Returns:
            IssuedOtp with code, masked phone and delivery flag

        Raises:
            EntityNotFoundError: If no user has this verification number
            ValidationError: If the user has no phone number
        """
        # 1. Resolve user
        user = await self.user_repository.get_by_verification_id(claim)
        if user is None:
            raise EntityNotFoundError("User", _claim_hint(claim))
        if not user.phone:
            raise ValidationError(field="phone", reason="No phone number on file")

        # 2. Store code
        code = await self.otp_store.issue(claim)

        # 3. Deliver (best-effort)
        delivered, reason = await self._deliver(user.phone, code)

        if not delivered:
            if self.log_code_on_failure:
                logger.warning(
                    f"OTP delivery for {_claim_hint(claim)} failed ({reason}); "
                    f"code: {code}"
                )
            else:
                logger.warning(
                    f"OTP delivery for {_claim_hint(claim)} failed ({reason})"
                )

        otp_issued_total.labels(delivered=str(delivered).lower()).inc()

        return IssuedOtp(
            code=code,
            masked_phone=mask_phone(user.phone),
            user_id=user.id,
            delivered=delivered,
            failure_reason=reason,
        )

    async def _deliver(self, phone: str, code: str) -> tuple[bool, Optional[str]]:
        try:
            report = await asyncio.wait_for(
                self.notifier.send(phone, self._compose_message(code)),
                timeout=self.notification_timeout,
            )
        except asyncio.TimeoutError:
            return False, "timeout"
        except BackendUnavailableError as e:
            return False, e.message
        except Exception as e:
            logger.exception("Unexpected failure while sending OTP")
            return False, type(e).__name__

        return report.delivered, report.reason

    def _compose_message(self, code: str) -> str:
        message = f"Your {self.app_name} verification OTP is: {code}."
        if self.ttl_seconds:
            minutes = max(1, self.ttl_seconds // 60)
            message += f" Valid for {minutes} minutes."
        return message
