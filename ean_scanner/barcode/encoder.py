"""
EAN module encoder and synthetic frame renderer.

Produces clean frames for tests and for the ``render_barcode`` tool.
"""

import numpy as np

from ean_scanner.barcode.patterns import (
    END_GUARD,
    FIRST_DIGIT_PARITY,
    L_PATTERNS,
    MIDDLE_GUARD,
    PARITY_TABLES,
    R_PATTERNS,
    START_GUARD,
)
from ean_scanner.models.frame import Frame

# Minimum GS1 quiet zone is 7 modules (EAN-8) / 11 modules (EAN-13 left side)
DEFAULT_QUIET_ZONE = 12


def _require_digits(code: str, length: int) -> None:
    if len(code) != length or not code.isdigit():
        raise ValueError(f"Expected {length} digits, got {code!r}")


def encode_ean13(code: str) -> str:
    """
    Encode a 13-digit code as a module stream.

    The check digit is encoded as given, so invalid codes can be produced
    on purpose.
    """
    _require_digits(code, 13)
    parity = FIRST_DIGIT_PARITY[int(code[0])]
    left = "".join(PARITY_TABLES[p][int(d)] for p, d in zip(parity, code[1:7]))
    right = "".join(R_PATTERNS[int(d)] for d in code[7:])
    return START_GUARD + left + MIDDLE_GUARD + right + END_GUARD


def encode_ean8(code: str) -> str:
    """Encode an 8-digit code as a module stream."""
    _require_digits(code, 8)
    left = "".join(L_PATTERNS[int(d)] for d in code[:4])
    right = "".join(R_PATTERNS[int(d)] for d in code[4:])
    return START_GUARD + left + MIDDLE_GUARD + right + END_GUARD


def encode(code: str) -> str:
    """Encode an 8- or 13-digit code."""
    if len(code) == 13:
        return encode_ean13(code)
    if len(code) == 8:
        return encode_ean8(code)
    raise ValueError(f"Unsupported code length: {len(code)}")


def render_modules(
    modules: str,
    module_width: int = 4,
    height: int = 40,
    quiet_zone: int = DEFAULT_QUIET_ZONE,
    dark: int = 0,
    light: int = 255,
) -> Frame:
    """
    Rasterize a module stream into an RGBA frame.

    Args:
        modules: Module stream, ``1`` = bar
        module_width: Pixels per module
        height: Frame height in pixels; bars span the full height
        quiet_zone: Light modules added on each side
        dark: Gray level of bars
        light: Gray level of spaces and quiet zones

    Returns:
        Opaque RGBA frame
    """
    if module_width < 1 or height < 1:
        raise ValueError("module_width and height must be positive")
    padded = "0" * quiet_zone + modules + "0" * quiet_zone
    bits = np.frombuffer(padded.encode("ascii"), dtype=np.uint8) - ord("0")
    row = np.where(bits == 1, dark, light).astype(np.uint8).repeat(module_width)

    pixels = np.empty((height, row.size, 4), dtype=np.uint8)
    pixels[..., :3] = row[np.newaxis, :, np.newaxis]
    pixels[..., 3] = 255
    return Frame(width=row.size, height=height, rgba=pixels.tobytes())


def render_barcode(code: str, **kwargs) -> Frame:
    """Encode ``code`` and render it; see ``render_modules`` for options."""
    return render_modules(encode(code), **kwargs)
