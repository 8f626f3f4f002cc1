"""
Scanner session: drives the decoding pipeline on a fixed tick.

A session owns one frame source, one pipeline and one confirmation state
machine. Ticks never overlap: the next tick is scheduled only after the
current one has finished.
"""

import threading
import time
from collections.abc import Callable

import structlog

from ean_scanner.barcode.validator import is_valid_candidate
from ean_scanner.config import Settings, get_settings
from ean_scanner.errors import AcquisitionError
from ean_scanner.models.detection import (
    FrameResult,
    RejectReason,
    ScanEvent,
    ScanEventKind,
)
from ean_scanner.models.frame import Frame
from ean_scanner.scanner.pipeline import BarcodePipeline
from ean_scanner.scanner.sources import FrameSource
from ean_scanner.scanner.state import ConfirmationStateMachine, DetectionState, Outcome, Transition

logger = structlog.get_logger(__name__)


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000


class ScannerSession:
    """
    Runs the barcode pipeline against a frame source.

    Args:
        source: Frame source, opened on start and closed on stop
        on_scan: Called once per accepted code
        settings: Scanner settings (default: cached settings)
        diagnostics: Optional sink for ``ScanEvent`` objects
        on_error: Called with the ``AcquisitionError`` that ended a
            background session
        clock: Millisecond clock (default: monotonic)
        pipeline: Frame decoder (default: ``BarcodePipeline(settings)``)
    """

    def __init__(
        self,
        source: FrameSource,
        on_scan: Callable[[str], None],
        settings: Settings | None = None,
        diagnostics: Callable[[ScanEvent], None] | None = None,
        on_error: Callable[[AcquisitionError], None] | None = None,
        clock: Callable[[], float] = monotonic_ms,
        pipeline: BarcodePipeline | None = None,
    ):
        self.source = source
        self.settings = settings or get_settings()
        self.pipeline = pipeline or BarcodePipeline(self.settings)
        self.error: AcquisitionError | None = None
        self._on_scan = on_scan
        self._diagnostics = diagnostics
        self._on_error = on_error
        self._clock = clock
        self._machine = ConfirmationStateMachine(self.settings)
        self._stop_event = threading.Event()
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._acquired = False
        self._loop_active = False

    @property
    def state(self) -> DetectionState:
        """Current confirmation state."""
        return self._machine.state

    @property
    def is_running(self) -> bool:
        return self._acquired and not self._stop_event.is_set()

    def start(self) -> None:
        """
        Acquire the frame source and start ticking on a background thread.

        Raises:
            AcquisitionError: If the frame source cannot be opened
            RuntimeError: If the session is already running
        """
        if self.is_running:
            raise RuntimeError("Scanner session already running")
        self._acquire()
        self._thread = threading.Thread(
            target=self._run_in_background,
            name="scanner-session",
            daemon=True,
        )
        self._thread.start()
        logger.info("Scanner session started", tick_interval_ms=self.settings.tick_interval_ms)

    def run(self) -> None:
        """
        Acquire the frame source and tick in the calling thread until stopped.

        Raises:
            AcquisitionError: If the frame source fails; the source is
                released first
            RuntimeError: If the session is already running
        """
        if self.is_running:
            raise RuntimeError("Scanner session already running")
        self._acquire()
        try:
            self._run_ticks()
        finally:
            self._release()

    def stop(self) -> None:
        """
        Stop ticking, release the frame source and discard state.

        Safe to call from ``on_scan`` or a signal handler; the tick in
        progress then finishes and the loop releases the source.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
            self._thread = None
        if not self._loop_active:
            self._release()
        logger.info("Scanner session stopped")

    def tick(self) -> Transition | None:
        """
        Run exactly one tick.

        Returns:
            The state machine transition, or None if no frame was available

        Raises:
            AcquisitionError: If the frame source fails
        """
        try:
            raw = self.source.get_frame()
        except AcquisitionError:
            raise
        except Exception as e:
            now = self._clock()
            logger.error("Frame read failed", error=str(e), error_type=type(e).__name__)
            result = self._machine.observe(None, now)
            self._emit(
                ScanEventKind.ERROR, now, reason=RejectReason.INTERNAL_ERROR, detail=str(e)
            )
            return result

        now = self._clock()
        if raw is None:
            self._emit(ScanEventKind.SKIPPED, now, detail="no frame available")
            return None

        if self._machine.in_cooldown(now):
            result = self._machine.observe(None, now)
            self._emit(ScanEventKind.COOLDOWN, now)
            return result

        try:
            frame_result = self.pipeline.process(Frame.from_tuple(raw))
        except Exception as e:
            logger.error("Frame processing failed", error=str(e), error_type=type(e).__name__)
            result = self._machine.observe(None, now)
            self._emit(
                ScanEventKind.ERROR, now, reason=RejectReason.INTERNAL_ERROR, detail=str(e)
            )
            return result

        candidate = frame_result.code if is_valid_candidate(frame_result.code) else None
        result = self._machine.observe(candidate, now)
        self._report(frame_result, result, now)

        if result.accepted is not None:
            self._deliver(result.accepted)
        return result

    def __enter__(self) -> "ScannerSession":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _acquire(self) -> None:
        with self._lock:
            self._stop_event.clear()
            self.error = None
            self._machine.reset()
            try:
                self.source.open()
            except AcquisitionError:
                raise
            except Exception as e:
                raise AcquisitionError(f"Failed to open frame source: {e}") from e
            self._acquired = True

    def _release(self) -> None:
        with self._lock:
            if not self._acquired:
                return
            self._acquired = False
            self._stop_event.set()
            self._machine.reset()
            try:
                self.source.close()
            except Exception as e:
                logger.warning("Failed to close frame source", error=str(e))

    def _run_ticks(self) -> None:
        interval = self.settings.tick_interval_seconds
        self._loop_active = True
        try:
            while not self._stop_event.is_set():
                self.tick()
                self._stop_event.wait(interval)
        finally:
            self._loop_active = False

    def _run_in_background(self) -> None:
        try:
            self._run_ticks()
        except AcquisitionError as e:
            self.error = e
            logger.error("Frame acquisition failed, stopping session", error=str(e))
        finally:
            self._release()

        if self.error is not None and self._on_error:
            self._on_error(self.error)

    def _report(self, frame_result: FrameResult, result: Transition, now: float) -> None:
        if frame_result.code is None:
            kind = (
                ScanEventKind.SKIPPED
                if frame_result.reason == RejectReason.QUALITY_REJECTED
                else ScanEventKind.REJECTED
            )
            logger.debug("Frame rejected", reason=frame_result.reason, detail=frame_result.detail)
            self._emit(kind, now, reason=frame_result.reason, detail=frame_result.detail)
            return

        code = frame_result.code
        if result.outcome == Outcome.ACCEPTED:
            logger.info("Code accepted", code=code, symbology=frame_result.symbology.value)
            self._emit(ScanEventKind.ACCEPTED, now, code=code)
        elif result.outcome == Outcome.SUPPRESSED:
            logger.info("Duplicate code suppressed", code=code)
            self._emit(ScanEventKind.SUPPRESSED, now, code=code, detail="duplicate")
        elif result.outcome == Outcome.COUNTING:
            self._emit(ScanEventKind.CANDIDATE, now, code=code, hits=result.state.hits)
        else:
            self._emit(ScanEventKind.REJECTED, now, code=code, detail="candidate failed validation")

    def _deliver(self, code: str) -> None:
        try:
            self._on_scan(code)
        except Exception as e:
            logger.error("on_scan callback failed", code=code, error=str(e))

    def _emit(self, kind: ScanEventKind, now: float, **fields) -> None:
        if self._diagnostics is None:
            return
        try:
            self._diagnostics(ScanEvent(kind=kind, at_ms=now, **fields))
        except Exception as e:
            logger.warning("Diagnostics sink failed", kind=kind.value, error=str(e))
