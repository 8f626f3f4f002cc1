"""
Detection models for per-frame outcomes and diagnostic events.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BarcodeSymbology(str, Enum):
    """Supported barcode symbologies."""

    EAN_13 = "EAN-13"
    EAN_8 = "EAN-8"
    UNKNOWN = "UNKNOWN"


class RejectReason(str, Enum):
    """Why a frame produced no candidate."""

    QUALITY_REJECTED = "quality_rejected"
    STRUCTURAL_MISMATCH = "structural_mismatch"
    CHECKSUM_FAILED = "checksum_failed"
    INTERNAL_ERROR = "internal_error"


class ScanEventKind(str, Enum):
    """Kinds of diagnostic events emitted by a scanner session."""

    SKIPPED = "skipped"
    REJECTED = "rejected"
    CANDIDATE = "candidate"
    ACCEPTED = "accepted"
    SUPPRESSED = "suppressed"
    COOLDOWN = "cooldown"
    ERROR = "error"


@dataclass(frozen=True)
class FrameResult:
    """Outcome of running the decoding pipeline on a single frame."""

    code: str | None
    symbology: BarcodeSymbology = BarcodeSymbology.UNKNOWN
    reason: RejectReason | None = None
    detail: str = ""
    # Informational only; EAN-8 acceptance does not depend on it
    ean8_checksum_valid: bool | None = None

    @property
    def is_candidate(self) -> bool:
        """Whether the frame yielded a decoded code."""
        return self.code is not None

    @classmethod
    def rejected(cls, reason: RejectReason, detail: str = "") -> "FrameResult":
        return cls(code=None, reason=reason, detail=detail)


class ScanEvent(BaseModel):
    """
    Diagnostic event describing what a tick did.

    Delivered to the optional diagnostics sink; never required for scanning.
    """

    model_config = ConfigDict(frozen=True)

    kind: ScanEventKind
    at_ms: float = Field(..., description="Monotonic timestamp of the tick in milliseconds")
    code: str | None = Field(None, description="Candidate or accepted code")
    reason: RejectReason | None = None
    detail: str = ""
    hits: int = Field(0, ge=0, description="Confirmation count after the tick")
