"""
In-memory OTP store with per-claim locking.
"""

import asyncio
import secrets
import string
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Optional

from notaire.domain.services.i_otp_store import IOtpStore, OtpVerificationStatus


@dataclass(frozen=True)
class _PendingCode:
    code: str
    issued_at: float


class InMemoryOtpStore(IOtpStore):
    """
    Process-local OTP store.

    Codes do not survive a restart. Each claim has its own lock, so
    issue/verify on one claim are serialized while other claims are
    unaffected. Locks are dropped once nobody holds or awaits them.
    """

    def __init__(
        self,
        code_length: int = 6,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize OTP store.

        Args:
            code_length: Number of digits per code
            ttl_seconds: Validity window, None for no expiry
            clock: Monotonic time source
        """
        self.code_length = code_length
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._pending: dict[str, _PendingCode] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @asynccontextmanager
    async def _claim_lock(self, claim: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(claim, asyncio.Lock())
        self._lock_users[claim] = self._lock_users.get(claim, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[claim] -= 1
            if self._lock_users[claim] == 0:
                del self._lock_users[claim]
                del self._locks[claim]

    def _generate_code(self) -> str:
        return "".join(secrets.choice(string.digits) for _ in range(self.code_length))

    def _is_expired(self, entry: _PendingCode) -> bool:
        if self.ttl_seconds is None:
            return False
        return self._clock() - entry.issued_at >= self.ttl_seconds

    async def issue(self, claim: str) -> str:
        code = self._generate_code()
        async with self._claim_lock(claim):
            self._pending[claim] = _PendingCode(code=code, issued_at=self._clock())
        return code

    async def verify(self, claim: str, code: str) -> OtpVerificationStatus:
        async with self._claim_lock(claim):
            entry = self._pending.get(claim)
            if entry is None:
                return OtpVerificationStatus.REJECTED_NO_PENDING_REQUEST

            if self._is_expired(entry):
                del self._pending[claim]
                return OtpVerificationStatus.REJECTED_NO_PENDING_REQUEST

            if not secrets.compare_digest(entry.code.encode(), str(code).encode()):
                return OtpVerificationStatus.REJECTED_INVALID_CODE

            del self._pending[claim]
            return OtpVerificationStatus.ACCEPTED

    def has_pending(self, claim: str) -> bool:
        """Check if a code is waiting for claim (expired codes count)."""
        return claim in self._pending

    def __len__(self) -> int:
        return len(self._pending)
