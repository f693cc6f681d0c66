"""
Authentication API schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field


class SendOtpRequest(BaseModel):
    """Request an OTP for a verification number."""

    verification_id: str = Field(..., description="12-digit verification number")


class SendOtpResponse(BaseModel):
    """
    Response to an OTP request.

    Never carries the code itself.
    """

    message: str
    masked_phone: str
    delivered: bool


class VerifyOtpRequest(BaseModel):
    """Submit a received OTP."""

    verification_id: str
    otp: str = Field(..., min_length=1, max_length=10, pattern=r"^[0-9]+$")


class VerifyOtpResponse(BaseModel):
    """Successful OTP verification."""

    message: str = "OTP verified successfully"
    access_token: str
    token_type: str = "bearer"
    user_id: str
    owner_id: Optional[str] = None
