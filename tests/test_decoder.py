"""
Tests for the EAN pattern decoder and encoder.
"""

import pytest

from ean_scanner.barcode.decoder import PatternDecoder, decode_ean8, decode_ean13
from ean_scanner.barcode.encoder import encode, encode_ean8, encode_ean13
from ean_scanner.barcode.patterns import (
    EAN8_MODULES,
    EAN13_MODULES,
    FIRST_DIGIT_PARITY,
    G_PATTERNS,
    L_PATTERNS,
    R_PATTERNS,
)
from ean_scanner.barcode.validator import calculate_ean13_checksum
from ean_scanner.errors import ChecksumFailed, StructuralMismatch
from ean_scanner.models.detection import BarcodeSymbology


def ean13_with_first_digit(first: int) -> str:
    body = f"{first}12345678901"
    return body + str(calculate_ean13_checksum(body))


class TestPatternTables:
    """Sanity checks for the GS1 tables."""

    def test_table_sizes(self):
        for table in (L_PATTERNS, G_PATTERNS, R_PATTERNS, FIRST_DIGIT_PARITY):
            assert len(table) == 10
            assert len(set(table)) == 10

    def test_right_is_complement_of_left(self):
        for left, right in zip(L_PATTERNS, R_PATTERNS):
            assert right == "".join("1" if m == "0" else "0" for m in left)

    def test_symbol_widths(self):
        assert EAN13_MODULES == 95
        assert EAN8_MODULES == 67


class TestEncoder:
    """Tests for module stream encoding."""

    def test_concrete_ean13_layout(self):
        """4006381333931 is laid out as guard, L/G digits, middle, R digits, guard."""
        parity = FIRST_DIGIT_PARITY[4]
        tables = {"L": L_PATTERNS, "G": G_PATTERNS}
        expected = (
            "101"
            + "".join(tables[p][int(d)] for p, d in zip(parity, "006381"))
            + "01010"
            + "".join(R_PATTERNS[int(d)] for d in "333931")
            + "101"
        )
        assert encode_ean13("4006381333931") == expected
        assert len(expected) == 95

    def test_encode_rejects_bad_input(self):
        with pytest.raises(ValueError):
            encode_ean13("40063813339")
        with pytest.raises(ValueError):
            encode_ean8("9638507A")
        with pytest.raises(ValueError):
            encode("12345")


class TestEAN13Decoding:
    """Tests for EAN-13 decoding."""

    def test_concrete_scenario(self):
        assert decode_ean13(encode_ean13("4006381333931")) == "4006381333931"

    def test_round_trip_every_first_digit(self):
        """Each first-digit parity pattern decodes back to its digit."""
        for first in range(10):
            code = ean13_with_first_digit(first)
            assert decode_ean13(encode_ean13(code)) == code

    def test_round_trip_known_codes(self):
        for code in ["5901234123457", "0012345678905", "9780201379624"]:
            assert decode_ean13(encode_ean13(code)) == code

    def test_trailing_modules_ignored(self):
        modules = encode_ean13("5901234123457") + "0000111"
        assert decode_ean13(modules) == "5901234123457"

    def test_checksum_mismatch(self):
        with pytest.raises(ChecksumFailed):
            decode_ean13(encode_ean13("4006381333932"))

    def test_single_digit_mutations_rejected(self):
        """No mutated code survives decoding."""
        code = "4006381333931"
        for position in range(13):
            for replacement in "0123456789":
                if replacement == code[position]:
                    continue
                mutated = code[:position] + replacement + code[position + 1:]
                with pytest.raises(ChecksumFailed):
                    decode_ean13(encode_ean13(mutated))

    def test_too_short(self):
        with pytest.raises(StructuralMismatch):
            decode_ean13("101" * 10)

    def test_no_start_guard(self):
        with pytest.raises(StructuralMismatch):
            decode_ean13("0" * 60 + "1" * 40)

    def test_broken_middle_guard(self):
        modules = encode_ean13("4006381333931")
        broken = modules[:45] + "00000" + modules[50:]
        with pytest.raises(StructuralMismatch, match="middle"):
            decode_ean13(broken)

    def test_broken_end_guard(self):
        modules = encode_ean13("4006381333931")
        with pytest.raises(StructuralMismatch, match="end"):
            decode_ean13(modules[:92] + "100")

    def test_unknown_digit_pattern(self):
        modules = encode_ean13("4006381333931")
        broken = modules[:3] + "1111111" + modules[10:]
        with pytest.raises(StructuralMismatch, match="unrecognized"):
            decode_ean13(broken)


class TestEAN8Decoding:
    """Tests for EAN-8 decoding."""

    def test_round_trip(self):
        for code in ["96385074", "55123457", "50123452"]:
            assert decode_ean8(encode_ean8(code)) == code

    def test_checksum_not_enforced(self):
        assert decode_ean8(encode_ean8("96385075")) == "96385075"

    def test_right_digit_in_left_half(self):
        modules = encode_ean8("96385074")
        broken = modules[:3] + R_PATTERNS[9] + modules[10:]
        with pytest.raises(StructuralMismatch):
            decode_ean8(broken)


class TestPatternDecoder:
    """Tests for symbology selection."""

    def test_prefers_ean13(self):
        decoded = PatternDecoder().decode(encode_ean13("4006381333931"))
        assert decoded.code == "4006381333931"
        assert decoded.symbology == BarcodeSymbology.EAN_13
        assert decoded.ean8_checksum_valid is None

    def test_falls_back_to_ean8(self):
        decoded = PatternDecoder().decode(encode_ean8("96385074"))
        assert decoded.code == "96385074"
        assert decoded.symbology == BarcodeSymbology.EAN_8
        assert decoded.ean8_checksum_valid is True

    def test_reports_ean8_checksum_mismatch(self):
        decoded = PatternDecoder().decode(encode_ean8("96385075"))
        assert decoded.code == "96385075"
        assert decoded.ean8_checksum_valid is False

    def test_reraises_ean13_failure(self):
        with pytest.raises(ChecksumFailed):
            PatternDecoder().decode(encode_ean13("4006381333932"))

    def test_try_decode(self):
        decoder = PatternDecoder()
        assert decoder.try_decode(encode_ean13("4006381333931")) == "4006381333931"
        assert decoder.try_decode("10" * 40) is None
