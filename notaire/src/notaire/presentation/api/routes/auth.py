"""
Authentication API routes.

OTP gate keyed by verification number:
- POST /auth/send-otp - Issue code and text it to the registered phone
- POST /auth/verify-otp - Exchange code for an access token
- GET /auth/me - Current authenticated owner
"""

from fastapi import APIRouter, Depends

from notaire.application.use_cases.issue_otp import IssueOtp
from notaire.application.use_cases.verify_otp import VerifyOtp
from notaire.di.dependencies import get_issue_otp, get_verify_otp
from notaire.domain.entities.user import User
from notaire.domain.exceptions import AuthenticationError
from notaire.domain.services.i_otp_store import OtpVerificationStatus
from notaire.presentation.api.middleware.auth import get_current_user
from notaire.presentation.schemas.auth_schemas import (
    SendOtpRequest,
    SendOtpResponse,
    VerifyOtpRequest,
    VerifyOtpResponse,
)
from notaire.presentation.schemas.user_schemas import UserResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/send-otp", response_model=SendOtpResponse, summary="Send OTP")
async def send_otp(
    request: SendOtpRequest,
    use_case: IssueOtp = Depends(get_issue_otp),
) -> SendOtpResponse:
    """
    Issue a code for the owner holding this verification number.

    The code is stored even when SMS delivery fails; the code itself is
    never part of the response.

    Raises:
        404 if no owner holds the verification number
        422 if the owner has no phone on record
    """
    issued = await use_case.execute(request.verification_id)

    message = (
        "OTP sent to registered mobile number"
        if issued.delivered
        else "OTP issued but SMS delivery failed"
    )
    return SendOtpResponse(
        message=message,
        masked_phone=issued.masked_phone,
        delivered=issued.delivered,
    )


@router.post("/verify-otp", response_model=VerifyOtpResponse, summary="Verify OTP")
async def verify_otp(
    request: VerifyOtpRequest,
    use_case: VerifyOtp = Depends(get_verify_otp),
) -> VerifyOtpResponse:
    """
    Verify a code and issue an access token.

    Raises:
        401 if the code is wrong or no code is pending
    """
    result = await use_case.execute(request.verification_id, request.otp)

    if result.status == OtpVerificationStatus.REJECTED_NO_PENDING_REQUEST:
        raise AuthenticationError("No OTP request found for this verification number")
    if not result.accepted:
        raise AuthenticationError("Invalid OTP")

    return VerifyOtpResponse(
        access_token=result.access_token,
        user_id=result.user.id,
        owner_id=result.user.owner_id,
    )


@router.get("/me", response_model=UserResponse, summary="Current owner")
async def me(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_entity(current_user)
