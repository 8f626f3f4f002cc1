"""
Scanner exceptions.

Only ``AcquisitionError`` ever reaches callers of a scanner session. The
``ScanRejected`` family is raised inside the decoding pipeline and turned
into a ``FrameResult`` before it leaves ``BarcodePipeline.process``.
"""

from ean_scanner.models.detection import RejectReason


class ScannerError(Exception):
    """Base class for scanner errors."""


class AcquisitionError(ScannerError):
    """The frame source is unavailable or access was denied."""


class ScanRejected(ScannerError):
    """A frame was discarded without producing a candidate."""

    reason: RejectReason = RejectReason.STRUCTURAL_MISMATCH

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(detail or self.reason.value)


class QualityRejected(ScanRejected):
    """Frame contrast or variance is below the quality bar."""

    reason = RejectReason.QUALITY_REJECTED


class StructuralMismatch(ScanRejected):
    """Run count, module count, guard or parity pattern did not match."""

    reason = RejectReason.STRUCTURAL_MISMATCH


class ChecksumFailed(ScanRejected):
    """Decoded digits failed the check digit."""

    reason = RejectReason.CHECKSUM_FAILED
