"""
OTP storage.
"""

from notaire.infrastructure.otp.in_memory_otp_store import InMemoryOtpStore

__all__ = ["InMemoryOtpStore"]
