"""
Scanner sessions: frame pipeline, confirmation state and frame sources.
"""

from ean_scanner.scanner.pipeline import BarcodePipeline
from ean_scanner.scanner.session import ScannerSession
from ean_scanner.scanner.sources import (
    CallableFrameSource,
    FrameSource,
    ImageSequenceSource,
    SourceExhausted,
)
from ean_scanner.scanner.state import (
    ConfirmationStateMachine,
    DetectionState,
    Outcome,
    Phase,
    Transition,
    transition,
)

__all__ = [
    "BarcodePipeline",
    "ScannerSession",
    "CallableFrameSource",
    "FrameSource",
    "ImageSequenceSource",
    "SourceExhausted",
    "ConfirmationStateMachine",
    "DetectionState",
    "Outcome",
    "Phase",
    "Transition",
    "transition",
]
