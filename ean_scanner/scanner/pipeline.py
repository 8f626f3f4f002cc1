"""
Single-frame decoding pipeline.

Frame -> downscale -> luminance -> quality gate -> scanline threshold ->
runs -> modules -> EAN decode -> validation.
"""

import structlog

from ean_scanner.barcode.decoder import PatternDecoder
from ean_scanner.barcode.patterns import EAN8_MIN_MODULES
from ean_scanner.barcode.runs import detect_runs, normalize_modules
from ean_scanner.barcode.validator import is_valid_barcode
from ean_scanner.config import Settings, get_settings
from ean_scanner.errors import ChecksumFailed, ScanRejected, StructuralMismatch
from ean_scanner.imaging.binarizer import binarize_row, extract_scanline
from ean_scanner.imaging.grayscale import downscale_frame, to_luminance
from ean_scanner.imaging.quality import check_quality
from ean_scanner.models.detection import BarcodeSymbology, FrameResult
from ean_scanner.models.frame import Frame

logger = structlog.get_logger(__name__)


class BarcodePipeline:
    """
    Stateless frame-to-code decoder.

    Rejections come back as a ``FrameResult`` with a reason. Unexpected
    exceptions propagate to the caller.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        decoder: PatternDecoder | None = None,
    ):
        self.settings = settings or get_settings()
        self.decoder = decoder or PatternDecoder()

    def process(self, frame: Frame) -> FrameResult:
        """
        Decode a barcode from one frame.

        Args:
            frame: RGBA frame

        Returns:
            Result with the decoded code, or the reason it was rejected
        """
        try:
            return self._process(frame)
        except ScanRejected as e:
            return FrameResult.rejected(e.reason, e.detail)

    def decode_modules(self, frame: Frame) -> str:
        """Run the imaging stages and return the module stream of the scanline."""
        settings = self.settings

        scaled = downscale_frame(frame, settings.frame_downscale)
        luminance = to_luminance(scaled)
        check_quality(luminance, settings.min_contrast, settings.min_variance)

        row = extract_scanline(luminance, settings.scan_row_fraction)
        binary = binarize_row(row)

        runs = detect_runs(
            binary,
            min_runs=settings.min_runs,
            max_runs=settings.max_runs,
            min_distinct_widths=settings.min_distinct_widths,
        )
        if runs is None:
            raise StructuralMismatch("scanline has no barcode-like run structure")

        modules = normalize_modules(runs, min_length=EAN8_MIN_MODULES)
        if modules is None:
            raise StructuralMismatch("module normalization failed")
        return modules

    def _process(self, frame: Frame) -> FrameResult:
        modules = self.decode_modules(frame)
        decoded = self.decoder.decode(modules)

        is_valid, symbology, error = is_valid_barcode(decoded.code)
        if not is_valid:
            if symbology == BarcodeSymbology.EAN_13:
                raise ChecksumFailed(error)
            raise StructuralMismatch(error)

        logger.debug("Frame decoded", code=decoded.code, symbology=symbology.value)
        return FrameResult(
            code=decoded.code,
            symbology=symbology,
            ean8_checksum_valid=decoded.ean8_checksum_valid,
        )
