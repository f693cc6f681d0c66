"""
Unit tests for InMemoryOtpStore.

Usage:
    pytest notaire/tests/unit/infrastructure/test_in_memory_otp_store.py
"""

import asyncio

from notaire.domain.services.i_otp_store import OtpVerificationStatus
from notaire.infrastructure.otp.in_memory_otp_store import InMemoryOtpStore


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestInMemoryOtpStore:
    """Unit tests for InMemoryOtpStore."""

    async def test_issue_generates_digits(self):
        store = InMemoryOtpStore(code_length=6)

        code = await store.issue("123456789012")

        assert len(code) == 6
        assert code.isdigit()
        assert store.has_pending("123456789012")

    async def test_accepts_once(self):
        store = InMemoryOtpStore()
        code = await store.issue("claim")

        assert await store.verify("claim", code) == OtpVerificationStatus.ACCEPTED
        assert (
            await store.verify("claim", code)
            == OtpVerificationStatus.REJECTED_NO_PENDING_REQUEST
        )

    async def test_wrong_code_keeps_pending(self):
        store = InMemoryOtpStore()
        code = await store.issue("claim")
        wrong = "000000" if code != "000000" else "111111"

        status = await store.verify("claim", wrong)

        assert status == OtpVerificationStatus.REJECTED_INVALID_CODE
        assert await store.verify("claim", code) == OtpVerificationStatus.ACCEPTED

    async def test_non_ascii_code_is_invalid(self):
        store = InMemoryOtpStore()
        code = await store.issue("AAA111")

        for submitted in ("١٢٣٤٥٦", "é12345"):
            status = await store.verify("AAA111", submitted)
            assert status == OtpVerificationStatus.REJECTED_INVALID_CODE

        assert await store.verify("AAA111", code) == OtpVerificationStatus.ACCEPTED

    async def test_reissue_replaces_code(self):
        store = InMemoryOtpStore()
        first = await store.issue("claim")
        second = await store.issue("claim")

        if first != second:
            assert (
                await store.verify("claim", first)
                == OtpVerificationStatus.REJECTED_INVALID_CODE
            )
        assert await store.verify("claim", second) == OtpVerificationStatus.ACCEPTED
        assert len(store) == 0

    async def test_expiry(self):
        clock = FakeClock()
        store = InMemoryOtpStore(ttl_seconds=300, clock=clock)
        code = await store.issue("claim")

        clock.now += 300

        status = await store.verify("claim", code)
        assert status == OtpVerificationStatus.REJECTED_NO_PENDING_REQUEST
        assert not store.has_pending("claim")

    async def test_no_ttl_never_expires(self):
        clock = FakeClock()
        store = InMemoryOtpStore(ttl_seconds=None, clock=clock)
        code = await store.issue("claim")

        clock.now += 10**9

        assert await store.verify("claim", code) == OtpVerificationStatus.ACCEPTED

    async def test_claims_are_independent(self):
        store = InMemoryOtpStore()
        claims = [f"claim-{i}" for i in range(20)]

        codes = await asyncio.gather(*(store.issue(c) for c in claims))
        results = await asyncio.gather(
            *(store.verify(c, code) for c, code in zip(claims, codes))
        )

        assert all(r == OtpVerificationStatus.ACCEPTED for r in results)
        assert len(store) == 0

    async def test_concurrent_verify_accepts_exactly_once(self):
        store = InMemoryOtpStore()
        code = await store.issue("claim")

        results = await asyncio.gather(
            *(store.verify("claim", code) for _ in range(10))
        )

        assert results.count(OtpVerificationStatus.ACCEPTED) == 1

    async def test_locks_are_released(self):
        store = InMemoryOtpStore()
        code = await store.issue("claim")
        await store.verify("claim", code)

        assert store._locks == {}
        assert store._lock_users == {}
