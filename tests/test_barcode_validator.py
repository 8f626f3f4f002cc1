"""
Tests for barcode validation functions.
"""

import pytest

from ean_scanner.barcode.validator import (
    calculate_ean8_checksum,
    calculate_ean13_checksum,
    detect_symbology,
    is_valid_barcode,
    is_valid_candidate,
    validate_ean8_checksum,
    validate_ean13_checksum,
)
from ean_scanner.models.detection import BarcodeSymbology


class TestEAN13Checksum:
    """Tests for EAN-13 checksum validation."""

    def test_calculate_ean13_checksum(self):
        """Test checksum calculation for known EAN-13 codes."""
        # 4006381333931 - known valid EAN-13
        assert calculate_ean13_checksum("400638133393") == 1

        # 5901234123457 - known valid EAN-13
        assert calculate_ean13_checksum("590123412345") == 7

        # 0012345678905 - known valid EAN-13
        assert calculate_ean13_checksum("001234567890") == 5

    def test_validate_ean13_valid(self):
        """Test validation of valid EAN-13 codes."""
        valid_codes = [
            "4006381333931",
            "5901234123457",
            "0012345678905",
            "4012345678901",
            "9780201379624",  # ISBN
        ]
        for code in valid_codes:
            assert validate_ean13_checksum(code), f"Expected {code} to be valid"

    def test_validate_ean13_invalid(self):
        """Test validation of invalid EAN-13 codes."""
        invalid_codes = [
            "4006381333932",  # Wrong checksum
            "5901234123450",  # Wrong checksum
            "1234567890123",  # Invalid structure
            "123456789012",  # Too short
            "12345678901234",  # Too long
            "400638133393A",  # Non-numeric
        ]
        for code in invalid_codes:
            assert not validate_ean13_checksum(code), f"Expected {code} to be invalid"

    def test_single_digit_mutations_rejected(self):
        """Every single-digit change of a valid code breaks the checksum."""
        code = "4006381333931"
        for position in range(13):
            for replacement in "0123456789":
                if replacement == code[position]:
                    continue
                mutated = code[:position] + replacement + code[position + 1:]
                assert not validate_ean13_checksum(mutated), mutated


class TestEAN8Checksum:
    """Tests for EAN-8 checksum validation."""

    def test_calculate_ean8_checksum(self):
        """Test checksum calculation for known EAN-8 codes."""
        # 96385074 - known valid EAN-8
        assert calculate_ean8_checksum("9638507") == 4

        # 55123457 - known valid EAN-8
        assert calculate_ean8_checksum("5512345") == 7

    def test_calculate_rejects_bad_input(self):
        """Short or non-numeric payloads raise instead of yielding a digit."""
        with pytest.raises(ValueError, match="at least 7"):
            calculate_ean8_checksum("963850")
        with pytest.raises(ValueError, match="Invalid character"):
            calculate_ean8_checksum("96385A7")
        with pytest.raises(ValueError, match="Invalid character"):
            calculate_ean13_checksum("40063813339X1")

    def test_validate_ean8_valid(self):
        """Test validation of valid EAN-8 codes."""
        for code in ["96385074", "55123457", "50123452"]:
            assert validate_ean8_checksum(code), f"Expected {code} to be valid"

    def test_validate_ean8_invalid(self):
        """Test validation of invalid EAN-8 codes."""
        invalid_codes = [
            "96385075",  # Wrong checksum
            "1234567",  # Too short
            "123456789",  # Too long
            "9638507A",  # Non-numeric
        ]
        for code in invalid_codes:
            assert not validate_ean8_checksum(code), f"Expected {code} to be invalid"


class TestSymbologyDetection:
    """Tests for symbology detection."""

    def test_detect_ean13(self):
        assert detect_symbology("4006381333931") == BarcodeSymbology.EAN_13

    def test_detect_ean8(self):
        assert detect_symbology("96385074") == BarcodeSymbology.EAN_8

    def test_detect_unknown(self):
        """UPC lengths and non-numeric codes are not scanned symbologies."""
        assert detect_symbology("012345678905") == BarcodeSymbology.UNKNOWN
        assert detect_symbology("12345") == BarcodeSymbology.UNKNOWN
        assert detect_symbology("abc123") == BarcodeSymbology.UNKNOWN


class TestBarcodeValidation:
    """Tests for the candidate gate."""

    def test_valid_ean13(self):
        is_valid, symbology, error = is_valid_barcode("4006381333931")
        assert is_valid
        assert symbology == BarcodeSymbology.EAN_13
        assert error == ""

    def test_invalid_checksum(self):
        is_valid, _, error = is_valid_barcode("4006381333932")
        assert not is_valid
        assert "checksum" in error.lower()

    def test_ean8_checksum_not_enforced(self):
        """EAN-8 candidates pass on length and digits even with a bad check digit."""
        is_valid, symbology, error = is_valid_barcode("96385075")
        assert is_valid
        assert symbology == BarcodeSymbology.EAN_8
        assert error == ""

    def test_non_numeric(self):
        is_valid, _, error = is_valid_barcode("400638133393A")
        assert not is_valid
        assert "non-numeric" in error.lower()

    def test_unsupported_length(self):
        is_valid, _, error = is_valid_barcode("012345678905")
        assert not is_valid
        assert "length" in error.lower()

    def test_is_valid_candidate(self):
        assert is_valid_candidate("4006381333931")
        assert is_valid_candidate("96385074")
        assert not is_valid_candidate("4006381333932")
        assert not is_valid_candidate("")
        assert not is_valid_candidate(None)
