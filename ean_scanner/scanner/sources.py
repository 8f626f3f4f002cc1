"""
Frame sources.

A frame source is opened when a session starts, polled once per tick and
closed when the session stops.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

import structlog
from PIL import Image

from ean_scanner.errors import AcquisitionError

logger = structlog.get_logger(__name__)

RawFrame = tuple[int, int, bytes]

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp")


class FrameSource(Protocol):
    """Supplies RGBA frames to a scanner session."""

    def open(self) -> None:
        """Acquire the source; raise ``AcquisitionError`` if unavailable."""

    def get_frame(self) -> RawFrame | None:
        """Return ``(width, height, rgba_bytes)``, or None if no frame is ready."""

    def close(self) -> None:
        """Release the source. Must be safe to call more than once."""


class SourceExhausted(AcquisitionError):
    """A finite frame source has no frames left."""


class CallableFrameSource:
    """Adapts a plain ``get_frame`` callable to the frame source protocol."""

    def __init__(
        self,
        get_frame: Callable[[], RawFrame | None],
        on_open: Callable[[], None] | None = None,
        on_close: Callable[[], None] | None = None,
    ):
        self._get_frame = get_frame
        self._on_open = on_open
        self._on_close = on_close

    def open(self) -> None:
        if self._on_open:
            self._on_open()

    def get_frame(self) -> RawFrame | None:
        return self._get_frame()

    def close(self) -> None:
        if self._on_close:
            self._on_close()


class ImageSequenceSource:
    """
    Serves image files from a directory as frames, in name order.

    Args:
        directory: Directory containing the images
        loop: Start over after the last image instead of raising
            ``SourceExhausted``
    """

    def __init__(self, directory: str | Path, loop: bool = True):
        self.directory = Path(directory)
        self.loop = loop
        self._paths: list[Path] = []
        self._index = 0

    def open(self) -> None:
        if not self.directory.is_dir():
            raise AcquisitionError(f"Frame directory not found: {self.directory}")
        self._paths = sorted(
            p for p in self.directory.iterdir()
            if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
        )
        if not self._paths:
            raise AcquisitionError(f"No images in frame directory: {self.directory}")
        self._index = 0
        logger.info("Opened image sequence", directory=str(self.directory), frames=len(self._paths))

    def get_frame(self) -> RawFrame | None:
        if not self._paths:
            raise AcquisitionError("Frame source is not open")
        if self._index >= len(self._paths):
            if not self.loop:
                raise SourceExhausted(f"All {len(self._paths)} frames served")
            self._index = 0

        path = self._paths[self._index]
        self._index += 1
        with Image.open(path) as image:
            rgba = image.convert("RGBA")
            return rgba.width, rgba.height, rgba.tobytes()

    @property
    def current_path(self) -> Path | None:
        """Path of the most recently served frame."""
        if self._index == 0:
            return None
        return self._paths[self._index - 1]

    def close(self) -> None:
        self._paths = []
        self._index = 0
