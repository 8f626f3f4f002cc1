"""
Adaptive scanline binarization.

Output convention: 0 marks a dark pixel (bar), 1 a light pixel (space).
"""

import numpy as np

FALLBACK_THRESHOLD = 128

# Threshold is kept at least this far inside the interquartile range
QUARTILE_MARGIN = 10
IQR_WEIGHT = 0.1


def extract_scanline(luminance: np.ndarray, row_fraction: float = 0.5) -> np.ndarray:
    """Return the row at ``floor(height * row_fraction)``."""
    height = luminance.shape[0]
    if height == 0:
        raise ValueError("Cannot extract a scanline from an empty frame")
    row = min(int(height * row_fraction), height - 1)
    return luminance[row]


def compute_threshold(row: np.ndarray) -> int:
    """
    Compute the threshold for one scanline.

    ``median + 0.1 * IQR`` clamped to ``[Q1 + 10, Q3 - 10]``. Falls back to
    128 when the row is empty or the clamp window is empty.
    """
    n = len(row)
    if n == 0:
        return FALLBACK_THRESHOLD

    ordered = np.sort(row).astype(np.int64)
    median = int(ordered[n // 2])
    q1 = int(ordered[int(n * 0.25)])
    q3 = int(ordered[int(n * 0.75)])

    low = q1 + QUARTILE_MARGIN
    high = q3 - QUARTILE_MARGIN
    if low > high:
        return FALLBACK_THRESHOLD

    threshold = int(np.floor(median + IQR_WEIGHT * (q3 - q1)))
    return max(low, min(high, threshold))


def binarize_row(row: np.ndarray, threshold: int | None = None) -> np.ndarray:
    """
    Threshold a scanline into a 0/1 uint8 array.

    Args:
        row: Luminance values of the scanline
        threshold: Explicit threshold (default: adaptive)

    Returns:
        0 where luminance < threshold, else 1
    """
    if threshold is None:
        threshold = compute_threshold(row)
    return (np.asarray(row) >= threshold).astype(np.uint8)
