"""
Tests for grayscale conversion, the quality gate and binarization.
"""

import numpy as np
import pytest

from ean_scanner.barcode.encoder import render_modules
from ean_scanner.errors import QualityRejected
from ean_scanner.imaging import (
    FALLBACK_THRESHOLD,
    binarize_row,
    check_quality,
    compute_threshold,
    downscale_frame,
    extract_scanline,
    measure_quality,
    to_luminance,
)
from ean_scanner.models import Frame


def solid_frame(width: int, height: int, gray: int) -> Frame:
    return Frame(width=width, height=height, rgba=bytes([gray, gray, gray, 255]) * (width * height))


class TestGrayscale:
    """Tests for luminance conversion."""

    def test_bt601_weights(self):
        frame = Frame(
            width=3,
            height=1,
            rgba=bytes([255, 0, 0, 255, 0, 255, 0, 255, 0, 0, 255, 255]),
        )
        luminance = to_luminance(frame)
        assert luminance.shape == (1, 3)
        assert luminance.dtype == np.uint8
        assert luminance.tolist() == [[76, 150, 29]]

    def test_extremes(self):
        assert to_luminance(solid_frame(2, 2, 0)).tolist() == [[0, 0], [0, 0]]
        assert to_luminance(solid_frame(2, 2, 255)).tolist() == [[255, 255], [255, 255]]

    def test_alpha_ignored(self):
        frame = Frame(width=1, height=1, rgba=bytes([100, 100, 100, 0]))
        assert to_luminance(frame).tolist() == [[100]]


class TestDownscale:
    """Tests for frame downscaling."""

    def test_factor_one_is_identity(self):
        frame = solid_frame(4, 4, 128)
        assert downscale_frame(frame, 1.0) is frame

    def test_half_size(self):
        scaled = downscale_frame(solid_frame(8, 6, 128), 0.5)
        assert (scaled.width, scaled.height) == (4, 3)

    def test_box_keeps_aligned_modules(self):
        frame = render_modules("1010", module_width=2, height=2, quiet_zone=0)
        scaled = downscale_frame(frame, 0.5)
        assert to_luminance(scaled).tolist() == [[0, 255, 0, 255]]

    def test_invalid_factor(self):
        with pytest.raises(ValueError):
            downscale_frame(solid_frame(2, 2, 0), 0)


class TestQualityGate:
    """Tests for contrast/variance gating."""

    def test_zero_variance_rejected(self):
        luminance = np.full((10, 10), 128, dtype=np.uint8)
        stats = measure_quality(luminance)
        assert stats.contrast == 0
        assert stats.variance == 0.0
        with pytest.raises(QualityRejected):
            check_quality(luminance)

    def test_high_contrast_passes(self):
        luminance = np.array([[0, 255] * 5] * 4, dtype=np.uint8)
        stats = check_quality(luminance)
        assert stats.contrast == 255
        assert stats.variance == pytest.approx(127.5**2)

    def test_contrast_bound_is_strict(self):
        luminance = np.array([[0, 50] * 5], dtype=np.uint8)
        assert measure_quality(luminance).variance > 100
        with pytest.raises(QualityRejected, match="contrast=50"):
            check_quality(luminance, min_contrast=50, min_variance=100)

    def test_variance_bound(self):
        # One outlier: large contrast, tiny variance
        luminance = np.zeros(1000, dtype=np.uint8)
        luminance[0] = 255
        with pytest.raises(QualityRejected):
            check_quality(luminance)

    def test_empty(self):
        stats = measure_quality(np.zeros((0,), dtype=np.uint8))
        assert not stats.passes(50, 100)


class TestBinarizer:
    """Tests for adaptive thresholding."""

    def test_threshold_from_quartiles(self):
        row = np.arange(200, dtype=np.uint8)
        # median 100, Q1 50, Q3 150 -> 100 + 0.1 * 100
        assert compute_threshold(row) == 110

    def test_threshold_clamped_below_q3(self):
        row = np.array([0] * 40 + [255] * 60, dtype=np.uint8)
        assert compute_threshold(row) == 245

    def test_degenerate_quartiles_fall_back(self):
        assert compute_threshold(np.full(50, 200, dtype=np.uint8)) == FALLBACK_THRESHOLD
        assert compute_threshold(np.array([], dtype=np.uint8)) == FALLBACK_THRESHOLD

    def test_dark_is_zero(self):
        row = np.array([10, 200, 120, 119], dtype=np.uint8)
        assert binarize_row(row, threshold=120).tolist() == [0, 1, 1, 0]

    def test_adaptive_binarization(self):
        row = np.array([0] * 40 + [255] * 60, dtype=np.uint8)
        binary = binarize_row(row)
        assert binary[:40].sum() == 0
        assert binary[40:].sum() == 60

    def test_extract_scanline(self):
        luminance = np.arange(50, dtype=np.uint8).reshape(10, 5)
        assert extract_scanline(luminance, 0.5).tolist() == [25, 26, 27, 28, 29]
        assert extract_scanline(luminance, 0.0).tolist() == [0, 1, 2, 3, 4]
