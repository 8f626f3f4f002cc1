"""
Frame quality gate.

Cheap global statistics that decide whether a frame is worth binarizing.
"""

from dataclasses import dataclass

import numpy as np

from ean_scanner.errors import QualityRejected


@dataclass(frozen=True)
class QualityStats:
    """Global luminance statistics of a frame."""

    contrast: int
    variance: float

    def passes(self, min_contrast: float, min_variance: float) -> bool:
        """Both bounds are strict."""
        return self.contrast > min_contrast and self.variance > min_variance


def measure_quality(luminance: np.ndarray) -> QualityStats:
    """
    Compute contrast (max - min) and population variance.

    Args:
        luminance: Luminance array of any shape

    Returns:
        Quality statistics; an empty array has zero contrast and variance
    """
    if luminance.size == 0:
        return QualityStats(contrast=0, variance=0.0)
    contrast = int(luminance.max()) - int(luminance.min())
    variance = float(np.var(luminance, dtype=np.float64))
    return QualityStats(contrast=contrast, variance=variance)


def check_quality(
    luminance: np.ndarray,
    min_contrast: float = 50,
    min_variance: float = 100,
) -> QualityStats:
    """
    Measure a frame and raise if it is below the quality bar.

    Raises:
        QualityRejected: If contrast or variance is too low
    """
    stats = measure_quality(luminance)
    if not stats.passes(min_contrast, min_variance):
        raise QualityRejected(
            f"contrast={stats.contrast} variance={stats.variance:.1f} "
            f"(need >{min_contrast} and >{min_variance})"
        )
    return stats
