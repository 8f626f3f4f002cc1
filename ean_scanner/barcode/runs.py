"""
Bar/space run detection and module normalization.

Polarity rule, shared by every stage after the binarizer: binary pixel
value 0 is dark, run lists start with a bar, and in a module stream
``1`` is a bar and ``0`` is a space.
"""

from collections.abc import Sequence

import numpy as np
import structlog

logger = structlog.get_logger(__name__)

MIN_NORMALIZE_RUNS = 10


def run_lengths(binary: np.ndarray) -> tuple[list[int], list[int]]:
    """
    Split a binary row into runs.

    Returns:
        Tuple of (run lengths in pixels, binary value of each run)
    """
    binary = np.asarray(binary)
    if binary.size == 0:
        return [], []
    starts = np.concatenate(([0], np.flatnonzero(np.diff(binary)) + 1))
    ends = np.concatenate((starts[1:], [binary.size]))
    return (ends - starts).tolist(), binary[starts].tolist()


def detect_runs(
    binary: np.ndarray,
    min_runs: int = 70,
    max_runs: int = 120,
    min_distinct_widths: int = 3,
) -> list[int] | None:
    """
    Extract the bar/space runs of a binarized scanline.

    The raw run count must lie in ``[min_runs, max_runs]`` and the row must
    contain at least ``min_distinct_widths`` different run widths. Light runs
    before the first bar and after the last bar (quiet zones) are dropped, so
    the result starts and ends with a bar.

    Args:
        binary: Binarized scanline (0 = dark)
        min_runs: Fewest runs accepted
        max_runs: Most runs accepted
        min_distinct_widths: Fewest distinct run widths accepted

    Returns:
        Alternating run lengths starting with a bar, or None if rejected
    """
    lengths, values = run_lengths(binary)

    if not min_runs <= len(lengths) <= max_runs:
        logger.debug("Run count out of bounds", runs=len(lengths))
        return None

    if len(set(lengths)) < min_distinct_widths:
        logger.debug("Too few distinct run widths", distinct=len(set(lengths)))
        return None

    first = 1 if values[0] == 1 else 0
    last = len(lengths) - 1 if values[-1] == 1 else len(lengths)
    trimmed = lengths[first:last]
    return trimmed or None


def normalize_modules(runs: Sequence[int], min_length: int = 0) -> str | None:
    """
    Expand pixel runs into a module stream.

    Each run becomes ``round(width / min_width)`` modules (halves round up),
    alternating ``1`` (bar) and ``0`` (space) starting with a bar.

    Args:
        runs: Run lengths in pixels, starting with a bar
        min_length: Shortest acceptable module stream

    Returns:
        Module stream such as ``"101..."``, or None
    """
    if len(runs) < MIN_NORMALIZE_RUNS:
        return None

    min_width = min(runs)
    if min_width <= 0:
        return None

    widths = np.floor(np.asarray(runs, dtype=np.float64) / min_width + 0.5).astype(int)
    modules = "".join(
        ("1" if index % 2 == 0 else "0") * int(width) for index, width in enumerate(widths)
    )

    if len(modules) < min_length:
        return None
    return modules
