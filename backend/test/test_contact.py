"""
Tests for Contact Normalization
"""

import pytest

from golfcapture.utils.contact import is_valid_email, mask_email, mask_phone, normalize_email, normalize_phone


class TestNormalizeEmail:
    """Email normalization"""

    def test_lowercases_and_trims(self):
        assert normalize_email("  John.Doe@Example.COM ") == "john.doe@example.com"

    def test_blank_becomes_none(self):
        assert normalize_email("   ") is None
        assert normalize_email(None) is None

    def test_idempotent(self):
        once = normalize_email(" Mixed@Case.Org")
        assert normalize_email(once) == once


class TestNormalizePhone:
    """Phone normalization to 10 US digits"""

    @pytest.mark.parametrize(
        "raw",
        ["(843) 555-1234", "843.555.1234", "843-555-1234", "+1 843 555 1234", "18435551234"],
    )
    def test_formats_reduce_to_ten_digits(self, raw):
        assert normalize_phone(raw) == "8435551234"

    @pytest.mark.parametrize("raw", ["555-1234", "28435551234", "843555123456", "", None, "call me"])
    def test_invalid_numbers_return_none(self, raw):
        assert normalize_phone(raw) is None

    def test_idempotent(self):
        once = normalize_phone("+1 (843) 555-1234")
        assert normalize_phone(once) == once


class TestEmailShape:
    def test_valid(self):
        assert is_valid_email("golfer@crescentpointe.com") is True

    @pytest.mark.parametrize("raw", ["golfer", "golfer@", "golfer@course", "two words@course.com", ""])
    def test_invalid(self, raw):
        assert is_valid_email(raw) is False


class TestMasking:
    def test_mask_email(self):
        assert mask_email("john.doe@example.com") == "j***@example.com"

    def test_mask_phone(self):
        assert mask_phone("8435551234") == "(***) ***-1234"

    def test_mask_missing(self):
        assert mask_email(None) is None
        assert mask_phone(None) is None
