"""
CLI tool to decode barcodes from still images with the scanline pipeline.

Usage:
    python -m tools.decode_frame.main shelf.png
    python -m tools.decode_frame.main frames/*.png --format json --min-runs 40
"""

import argparse
import json
import sys

from PIL import Image, UnidentifiedImageError

from ean_scanner.config import configure_logging, get_settings
from ean_scanner.models import Frame, FrameResult
from ean_scanner.scanner import BarcodePipeline


def decode_files(paths: list[str], pipeline: BarcodePipeline) -> list[tuple[str, FrameResult]]:
    """Decode each image file; unreadable files yield an internal-error result."""
    results: list[tuple[str, FrameResult]] = []
    for path in paths:
        try:
            with Image.open(path) as image:
                frame = Frame.from_image(image)
        except (OSError, UnidentifiedImageError) as e:
            results.append((path, FrameResult(code=None, detail=f"cannot read image: {e}")))
            continue
        results.append((path, pipeline.process(frame)))
    return results


def print_results(results: list[tuple[str, FrameResult]], output_format: str = "table") -> None:
    """Print decode results as a table or JSON."""
    if output_format == "json":
        rows = []
        for path, r in results:
            rows.append({
                "file": path,
                "code": r.code,
                "symbology": r.symbology.value,
                "reason": r.reason.value if r.reason else None,
                "detail": r.detail,
                "ean8_checksum_valid": r.ean8_checksum_valid,
            })
        print(json.dumps(rows, indent=2))
        return

    print("-" * 80)
    print(f"{'File':<30} {'Code':<15} {'Symbology':<10} {'Result':<20}")
    print("-" * 80)
    for path, r in results:
        outcome = "✓" if r.code else (r.reason.value if r.reason else "error")
        print(f"{path[-30:]:<30} {r.code or '-':<15} {r.symbology.value:<10} {outcome:<20}")
    print("-" * 80)
    decoded = sum(1 for _, r in results if r.code)
    print(f"Decoded: {decoded}/{len(results)}")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Decode EAN barcodes from image files")
    parser.add_argument("images", nargs="+", help="Image files to decode")
    parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    parser.add_argument("--downscale", type=float, help="Override the frame downscale factor")
    parser.add_argument("--row", type=float, help="Override the scan row fraction")
    parser.add_argument("--min-runs", type=int, help="Override the minimum run count")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)

    overrides = {
        "frame_downscale": args.downscale,
        "scan_row_fraction": args.row,
        "min_runs": args.min_runs,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        settings = settings.model_validate({**settings.model_dump(), **overrides})

    results = decode_files(args.images, BarcodePipeline(settings))
    print_results(results, args.format)

    if not any(r.code for _, r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
