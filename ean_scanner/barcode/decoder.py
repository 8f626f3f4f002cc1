"""
EAN-13 / EAN-8 decoder for normalized module streams.
"""

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from ean_scanner.barcode.patterns import (
    DIGIT_LOOKUP,
    DIGIT_WIDTH,
    EAN8_MIN_MODULES,
    EAN13_MIN_MODULES,
    END_GUARD,
    FIRST_DIGIT_LOOKUP,
    MIDDLE_GUARD,
    START_GUARD,
)
from ean_scanner.barcode.validator import validate_ean8_checksum, validate_ean13_checksum
from ean_scanner.errors import ChecksumFailed, ScanRejected, StructuralMismatch
from ean_scanner.models.detection import BarcodeSymbology

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DecodedBarcode:
    """A code recovered from a module stream."""

    code: str
    symbology: BarcodeSymbology
    # Only set for EAN-8, where the check digit is reported but not enforced
    ean8_checksum_valid: bool | None = None


def find_start_guard(modules: str, min_length: int) -> int:
    """
    Return the index of the first start guard that leaves room for a symbol.

    Raises:
        StructuralMismatch: If the stream is too short or has no guard
    """
    if len(modules) < min_length:
        raise StructuralMismatch(f"module stream too short: {len(modules)} < {min_length}")
    index = modules.find(START_GUARD, 0, len(modules) - min_length + len(START_GUARD))
    if index == -1:
        raise StructuralMismatch("start guard not found")
    return index


def read_digit(modules: str, pos: int, parities: Iterable[str]) -> tuple[int, str]:
    """
    Match the 7-module group at ``pos`` against the given parity tables.

    Returns:
        Tuple of (digit, parity letter)

    Raises:
        StructuralMismatch: If the group is truncated or matches no table
    """
    group = modules[pos:pos + DIGIT_WIDTH]
    if len(group) < DIGIT_WIDTH:
        raise StructuralMismatch(f"truncated digit group at module {pos}")
    for parity in parities:
        digit = DIGIT_LOOKUP[parity].get(group)
        if digit is not None:
            return digit, parity
    raise StructuralMismatch(f"unrecognized digit pattern {group} at module {pos}")


def expect_guard(modules: str, pos: int, guard: str, name: str) -> int:
    """Check ``guard`` at ``pos`` and return the position after it."""
    found = modules[pos:pos + len(guard)]
    if found != guard:
        raise StructuralMismatch(f"invalid {name} guard {found!r} at module {pos}")
    return pos + len(guard)


def decode_ean13(modules: str) -> str:
    """
    Decode an EAN-13 symbol from a module stream.

    Args:
        modules: Module stream, ``1`` = bar

    Returns:
        13-digit code with a valid check digit

    Raises:
        StructuralMismatch: On any guard, digit or parity mismatch
        ChecksumFailed: If the check digit does not match
    """
    pos = find_start_guard(modules, EAN13_MIN_MODULES) + len(START_GUARD)

    left_digits: list[int] = []
    parity_pattern = ""
    for _ in range(6):
        digit, parity = read_digit(modules, pos, ("L", "G"))
        left_digits.append(digit)
        parity_pattern += parity
        pos += DIGIT_WIDTH

    pos = expect_guard(modules, pos, MIDDLE_GUARD, "middle")

    right_digits: list[int] = []
    for _ in range(6):
        digit, _ = read_digit(modules, pos, ("R",))
        right_digits.append(digit)
        pos += DIGIT_WIDTH

    expect_guard(modules, pos, END_GUARD, "end")

    first_digit = FIRST_DIGIT_LOOKUP.get(parity_pattern)
    if first_digit is None:
        raise StructuralMismatch(f"invalid L/G parity pattern {parity_pattern}")

    code = str(first_digit) + "".join(map(str, left_digits)) + "".join(map(str, right_digits))
    if not validate_ean13_checksum(code):
        raise ChecksumFailed(f"invalid EAN-13 checksum: {code}")
    return code


def decode_ean8(modules: str) -> str:
    """
    Decode an EAN-8 symbol from a module stream.

    The check digit is not enforced; see ``DecodedBarcode.ean8_checksum_valid``.

    Raises:
        StructuralMismatch: On any guard or digit mismatch
    """
    pos = find_start_guard(modules, EAN8_MIN_MODULES) + len(START_GUARD)

    digits: list[int] = []
    for _ in range(4):
        digit, _ = read_digit(modules, pos, ("L",))
        digits.append(digit)
        pos += DIGIT_WIDTH

    pos = expect_guard(modules, pos, MIDDLE_GUARD, "middle")

    for _ in range(4):
        digit, _ = read_digit(modules, pos, ("R",))
        digits.append(digit)
        pos += DIGIT_WIDTH

    expect_guard(modules, pos, END_GUARD, "end")

    code = "".join(map(str, digits))
    if len(code) != 8 or not code.isdigit():
        raise StructuralMismatch(f"malformed EAN-8 code {code!r}")
    return code


class PatternDecoder:
    """
    Decodes EAN module streams.

    Supports:
    - EAN-13 (tried first)
    - EAN-8
    """

    def decode(self, modules: str) -> DecodedBarcode:
        """
        Decode a module stream, trying EAN-13 before EAN-8.

        Raises:
            ScanRejected: The EAN-13 failure if neither symbology decodes
        """
        try:
            return DecodedBarcode(decode_ean13(modules), BarcodeSymbology.EAN_13)
        except ScanRejected as ean13_error:
            try:
                code = decode_ean8(modules)
            except ScanRejected:
                raise ean13_error from None

        checksum_valid = validate_ean8_checksum(code)
        if not checksum_valid:
            logger.warning("ean8_checksum_mismatch", code=code)
        return DecodedBarcode(code, BarcodeSymbology.EAN_8, ean8_checksum_valid=checksum_valid)

    def try_decode(self, modules: str) -> str | None:
        """Decode a module stream, returning None instead of raising."""
        try:
            return self.decode(modules).code
        except ScanRejected:
            return None
