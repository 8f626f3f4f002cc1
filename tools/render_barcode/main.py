"""
CLI tool to render synthetic EAN barcodes as images.

Usage:
    python -m tools.render_barcode.main --code 4006381333931 --output ean13.png
    python -m tools.render_barcode.main -c 96385074 -o ean8.png --module-width 6
"""

import sys

import click # type: ignore

from ean_scanner.barcode import encode, validate_ean13_checksum
from ean_scanner.barcode.encoder import render_modules


@click.command()
@click.option(
    "--code", "-c",
    required=True,
    help="8- or 13-digit code to render",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output image path (format from extension)",
)
@click.option(
    "--module-width",
    type=click.IntRange(min=1),
    default=4,
    help="Pixels per module (default: 4)",
)
@click.option(
    "--height",
    type=click.IntRange(min=1),
    default=120,
    help="Image height in pixels (default: 120)",
)
@click.option(
    "--quiet-zone",
    type=click.IntRange(min=0),
    default=12,
    help="Light modules on each side (default: 12)",
)
def main(code: str, output: str, module_width: int, height: int, quiet_zone: int) -> None:
    """Render a barcode image that the scanner pipeline can decode."""
    try:
        modules = encode(code)
    except ValueError as e:
        click.echo(str(e), err=True)
        sys.exit(1)

    if len(code) == 13 and not validate_ean13_checksum(code):
        click.echo(f"Warning: {code} has an invalid EAN-13 checksum", err=True)

    frame = render_modules(
        modules,
        module_width=module_width,
        height=height,
        quiet_zone=quiet_zone,
    )
    frame.to_image().save(output)
    click.echo(f"Barcode written to: {output} ({frame.width}x{frame.height})")


if __name__ == "__main__":
    main()
