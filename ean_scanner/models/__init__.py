"""
Data models for frames, per-frame results and diagnostic events.
"""

from ean_scanner.models.detection import (
    BarcodeSymbology,
    FrameResult,
    RejectReason,
    ScanEvent,
    ScanEventKind,
)
from ean_scanner.models.frame import Frame

__all__ = [
    # Frame
    "Frame",
    # Detection
    "BarcodeSymbology",
    "FrameResult",
    "RejectReason",
    "ScanEvent",
    "ScanEventKind",
]
