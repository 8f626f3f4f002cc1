"""
Frame imaging stages: downscaling, grayscale, quality gate and binarization.
"""

from ean_scanner.imaging.binarizer import (
    FALLBACK_THRESHOLD,
    binarize_row,
    compute_threshold,
    extract_scanline,
)
from ean_scanner.imaging.grayscale import downscale_frame, to_luminance
from ean_scanner.imaging.quality import QualityStats, check_quality, measure_quality

__all__ = [
    "FALLBACK_THRESHOLD",
    "binarize_row",
    "compute_threshold",
    "extract_scanline",
    "downscale_frame",
    "to_luminance",
    "QualityStats",
    "check_quality",
    "measure_quality",
]
