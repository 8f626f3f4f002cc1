"""
Scan session worker.

Runs a scanner session against a directory of frames, printing each
accepted code. Useful for replaying recorded camera frames.
"""

import json
import signal
import sys

import structlog

from ean_scanner.config import configure_logging, get_settings
from ean_scanner.errors import AcquisitionError
from ean_scanner.models import ScanEvent
from ean_scanner.scanner import ImageSequenceSource, ScannerSession, SourceExhausted

logger = structlog.get_logger(__name__)


def log_event(event: ScanEvent) -> None:
    """Diagnostics sink that forwards scan events to the log."""
    logger.debug("Scan event", **event.model_dump(mode="json"))


def run_session(frames_dir: str, loop: bool = False) -> list[str]:
    """
    Scan frames from a directory until stopped or, without ``loop``, until
    every frame has been served.

    Returns:
        Accepted codes, in order
    """
    settings = get_settings()
    accepted: list[str] = []

    def on_scan(code: str) -> None:
        accepted.append(code)
        print(json.dumps({"code": code}), flush=True)

    session = ScannerSession(
        ImageSequenceSource(frames_dir, loop=loop),
        on_scan=on_scan,
        settings=settings,
        diagnostics=log_event,
    )

    def handle_signal(signum, _frame) -> None:
        logger.info("Received signal, stopping session", signal=signum)
        session.stop()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    logger.info("Starting scan session", frames_dir=frames_dir, loop=loop)
    try:
        session.run()
    except SourceExhausted:
        logger.info("All frames scanned", accepted=len(accepted))

    return accepted


def main():
    """Main entry point for the scan session worker."""
    import argparse

    parser = argparse.ArgumentParser(description="Scan Session Worker")
    parser.add_argument("frames_dir", help="Directory of frame images")
    parser.add_argument(
        "--loop", action="store_true", help="Replay frames forever (daemon mode)"
    )
    args = parser.parse_args()

    configure_logging(get_settings())

    try:
        run_session(args.frames_dir, loop=args.loop)
    except AcquisitionError as e:
        logger.error("Frame source unavailable", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
