"""
EAN barcode decoding utilities.
"""

from ean_scanner.barcode.decoder import (
    DecodedBarcode,
    PatternDecoder,
    decode_ean8,
    decode_ean13,
)
from ean_scanner.barcode.encoder import encode, encode_ean8, encode_ean13, render_barcode
from ean_scanner.barcode.runs import detect_runs, normalize_modules
from ean_scanner.barcode.validator import (
    calculate_ean13_checksum,
    is_valid_barcode,
    is_valid_candidate,
    validate_ean8_checksum,
    validate_ean13_checksum,
)

__all__ = [
    "DecodedBarcode",
    "PatternDecoder",
    "decode_ean8",
    "decode_ean13",
    "encode",
    "encode_ean8",
    "encode_ean13",
    "render_barcode",
    "detect_runs",
    "normalize_modules",
    "calculate_ean13_checksum",
    "is_valid_barcode",
    "is_valid_candidate",
    "validate_ean8_checksum",
    "validate_ean13_checksum",
]
