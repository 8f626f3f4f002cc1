"""
Shared fixtures for scanner tests.
"""

import pytest

from ean_scanner.barcode.encoder import render_barcode
from ean_scanner.config import Settings
from ean_scanner.models import Frame

EAN13_CODE = "4006381333931"


@pytest.fixture
def scan_settings() -> Settings:
    """
    Settings for clean synthetic frames.

    A rendered EAN-13 row has 61 runs including both quiet zones, below the
    default lower bound of 70 that targets noisy camera rows.
    """
    return Settings(min_runs=40, tick_interval_ms=10)


@pytest.fixture
def ean13_frame() -> Frame:
    return render_barcode(EAN13_CODE)


@pytest.fixture
def blank_frame() -> Frame:
    width, height = 64, 32
    return Frame(width=width, height=height, rgba=bytes([128, 128, 128, 255]) * (width * height))
