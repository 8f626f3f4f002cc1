"""
Barcode validation utilities for EAN codes.
"""

from ean_scanner.models.detection import BarcodeSymbology

SYMBOLOGY_BY_LENGTH = {
    13: BarcodeSymbology.EAN_13,
    8: BarcodeSymbology.EAN_8,
}


def _check_digit(payload: str) -> int:
    """GS1 check digit: weights 3, 1, 3, ... counted from the rightmost payload digit."""
    total = 0
    for i, digit in enumerate(reversed(payload)):
        if not digit.isdigit():
            raise ValueError(f"Invalid character in code: {digit}")
        total += int(digit) * (3 if i % 2 == 0 else 1)
    return (10 - total % 10) % 10


def calculate_ean13_checksum(code: str) -> int:
    """
    Calculate EAN-13 checksum digit.

    Algorithm:
    1. Multiply digits at odd positions (1, 3, 5, ...) by 1
    2. Multiply digits at even positions (2, 4, 6, ...) by 3
    3. Sum all results
    4. Checksum = (10 - (sum mod 10)) mod 10
    """
    if len(code) < 12:
        raise ValueError("Code must have at least 12 digits for EAN-13")
    return _check_digit(code[:12])


def validate_ean13_checksum(code: str) -> bool:
    """
    Validate EAN-13 checksum.

    Args:
        code: 13-digit EAN code

    Returns:
        True if checksum is valid
    """
    if len(code) != 13:
        return False
    if not code.isdigit():
        return False

    return calculate_ean13_checksum(code) == int(code[-1])


def calculate_ean8_checksum(code: str) -> int:
    """Calculate EAN-8 checksum digit over the first seven digits."""
    if len(code) < 7:
        raise ValueError("Code must have at least 7 digits for EAN-8")
    return _check_digit(code[:7])


def validate_ean8_checksum(code: str) -> bool:
    """
    Validate EAN-8 checksum.

    Informational only: scanned EAN-8 candidates are accepted on length
    and format, see ``is_valid_barcode``.
    """
    if len(code) != 8:
        return False
    if not code.isdigit():
        return False

    return calculate_ean8_checksum(code) == int(code[-1])


def detect_symbology(code: str) -> BarcodeSymbology:
    """Symbology implied by an all-digit code's length, UNKNOWN otherwise."""
    if not code.isdigit():
        return BarcodeSymbology.UNKNOWN
    return SYMBOLOGY_BY_LENGTH.get(len(code), BarcodeSymbology.UNKNOWN)


def is_valid_barcode(code: str) -> tuple[bool, BarcodeSymbology, str]:
    """
    Validate a scanned candidate.

    EAN-13 candidates must pass the checksum. EAN-8 candidates are accepted
    on length and digits alone; the EAN-8 check digit is deliberately not
    enforced so acceptance rates match existing deployments.

    Args:
        code: Barcode string

    Returns:
        Tuple of (is_valid, symbology, error_message)
    """
    if not code.isdigit():
        return False, BarcodeSymbology.UNKNOWN, "Code contains non-numeric characters"

    symbology = detect_symbology(code)

    if symbology == BarcodeSymbology.UNKNOWN:
        return False, symbology, f"Unsupported code length: {len(code)}"

    if symbology == BarcodeSymbology.EAN_13:
        if validate_ean13_checksum(code):
            return True, symbology, ""
        else:
            return False, symbology, "Invalid EAN-13 checksum"

    # EAN-8
    return True, symbology, ""


def is_valid_candidate(code: str | None) -> bool:
    """Authoritative accept/reject gate applied before confirmation."""
    if not code:
        return False
    is_valid, _, _ = is_valid_barcode(code)
    return is_valid
