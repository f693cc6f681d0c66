"""
Unit tests for domain value objects.

Usage:
    pytest notaire/tests/unit/domain/test_value_objects.py
"""

import pytest

from notaire.domain.value_objects import (
    Anchored,
    ChainAddress,
    PhoneNumber,
    Skipped,
    SkipReason,
    VerificationNumber,
    mask_phone,
    to_e164,
)


class TestVerificationNumber:
    """Unit tests for VerificationNumber."""

    def test_accepts_twelve_digits(self):
        assert VerificationNumber("123456789012").value == "123456789012"

    def test_strips_whitespace(self):
        assert VerificationNumber("  123456789012 ").value == "123456789012"

    @pytest.mark.parametrize(
        "raw",
        ["", "12345678901", "1234567890123", "12345678901a", "١٢٣٤٥٦٧٨٩٠١٢"],
    )
    def test_rejects_malformed(self, raw):
        with pytest.raises(ValueError):
            VerificationNumber(raw)


class TestPhoneNumber:
    """Unit tests for PhoneNumber and helpers."""

    def test_accepts_local_number(self):
        assert PhoneNumber("98765 43210").value == "9876543210"

    def test_accepts_international_number(self):
        assert PhoneNumber("+1-415-555-0100").value == "+14155550100"

    @pytest.mark.parametrize("raw", ["", "12345", "+123", "98765432ab"])
    def test_rejects_malformed(self, raw):
        with pytest.raises(ValueError):
            PhoneNumber(raw)

    def test_to_e164_prefixes_local_numbers(self):
        assert to_e164("9876543210") == "+919876543210"
        assert to_e164("9876543210", "+44") == "+449876543210"

    def test_to_e164_keeps_plus_numbers(self):
        assert to_e164("+14155550100") == "+14155550100"

    def test_to_e164_adds_plus_to_other_digits(self):
        assert to_e164("919876543210") == "+919876543210"

    def test_mask_keeps_last_four_digits(self):
        assert mask_phone("9876543210") == "XXXXXXXX3210"
        assert PhoneNumber("9876543210").masked() == "XXXXXXXX3210"

    def test_mask_hides_short_numbers_entirely(self):
        assert mask_phone("123") == "XXXXXXXXXXXX"


class TestChainAddress:
    """Unit tests for ChainAddress."""

    def test_checksums_address(self):
        address = ChainAddress("0x52908400098527886e0f7030069857d2e4169ee7")
        assert address.value == "0x52908400098527886E0F7030069857D2E4169EE7"

    def test_equal_regardless_of_case(self):
        lower = ChainAddress("0x52908400098527886e0f7030069857d2e4169ee7")
        upper = ChainAddress("0x52908400098527886E0F7030069857D2E4169EE7")
        assert lower == upper

    @pytest.mark.parametrize("raw", ["", "0x1234", "not-an-address"])
    def test_rejects_invalid(self, raw):
        with pytest.raises(ValueError):
            ChainAddress(raw)


class TestAnchorOutcome:
    """Unit tests for Anchored / Skipped."""

    def test_anchored_exposes_value(self):
        outcome = Anchored("QmCid")
        assert outcome.is_anchored
        assert outcome.value_or_none() == "QmCid"
        assert outcome.to_dict() == {"status": "anchored", "value": "QmCid"}

    def test_skipped_has_no_value(self):
        outcome = Skipped(SkipReason.TIMEOUT, "no answer")
        assert not outcome.is_anchored
        assert outcome.value_or_none() is None
        assert outcome.to_dict() == {
            "status": "skipped",
            "reason": "timeout",
            "detail": "no answer",
        }
