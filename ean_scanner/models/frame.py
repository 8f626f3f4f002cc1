"""
Frame model for raw RGBA camera frames.
"""

from dataclasses import dataclass

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class Frame:
    """
    One RGBA frame as handed over by a frame source.

    Frames are created per tick and discarded after processing.
    """

    width: int
    height: int
    rgba: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid frame size: {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.rgba) != expected:
            raise ValueError(
                f"RGBA buffer has {len(self.rgba)} bytes, expected {expected} "
                f"for {self.width}x{self.height}"
            )

    def to_array(self) -> np.ndarray:
        """Return the pixels as a read-only (height, width, 4) uint8 array."""
        return np.frombuffer(self.rgba, dtype=np.uint8).reshape(self.height, self.width, 4)

    def to_image(self) -> Image.Image:
        """Return the frame as a PIL RGBA image."""
        return Image.frombytes("RGBA", (self.width, self.height), self.rgba)

    @classmethod
    def from_image(cls, image: Image.Image) -> "Frame":
        """Create a frame from any PIL image."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(width=image.width, height=image.height, rgba=image.tobytes())

    @classmethod
    def from_tuple(cls, raw: tuple[int, int, bytes]) -> "Frame":
        """Create a frame from a ``(width, height, rgba_bytes)`` tuple."""
        width, height, rgba = raw
        return cls(width=width, height=height, rgba=bytes(rgba))
