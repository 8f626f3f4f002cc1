"""
Frame downscaling and grayscale conversion.
"""

import numpy as np
from PIL import Image

from ean_scanner.models.frame import Frame

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def downscale_frame(frame: Frame, factor: float) -> Frame:
    """
    Resize a frame by ``factor`` using box resampling.

    Args:
        frame: Source frame
        factor: Scale factor in (0, 1]; 1.0 returns the frame unchanged

    Returns:
        Downscaled frame
    """
    if not 0 < factor <= 1:
        raise ValueError(f"Downscale factor must be in (0, 1], got {factor}")
    if factor == 1:
        return frame

    new_width = max(1, int(frame.width * factor))
    new_height = max(1, int(frame.height * factor))
    resized = frame.to_image().resize((new_width, new_height), Image.Resampling.BOX)
    return Frame.from_image(resized)


def to_luminance(frame: Frame) -> np.ndarray:
    """
    Convert an RGBA frame to a (height, width) uint8 luminance array.

    Luminance is ``round(0.299R + 0.587G + 0.114B)`` with halves rounded up.
    Alpha is ignored.
    """
    pixels = frame.to_array().astype(np.float64)
    r_weight, g_weight, b_weight = LUMA_WEIGHTS
    luma = r_weight * pixels[..., 0] + g_weight * pixels[..., 1] + b_weight * pixels[..., 2]
    return np.clip(np.floor(luma + 0.5), 0, 255).astype(np.uint8)
