#!/usr/bin/env python3
"""Report header fields and color statistics for a TGA image."""

import argparse
import os

from tgakit.lib import tga
from tgakit.lib.cli_utils import fail
from tgakit.lib.console import console, Table, Panel
from tgakit.lib.errors import TgaKitError


def format_size(bytes_val):
    """Format bytes as human-readable size."""
    for unit in ["B", "KB", "MB", "GB"]:
        if bytes_val < 1024:
            return f"{bytes_val:.1f} {unit}"
        bytes_val /= 1024
    return f"{bytes_val:.1f} TB"


def channel_stats(buffer):
    """Return {channel: (min, mean, max)} in red, green, blue order."""
    stats = {}
    for name, idx in (("red", 2), ("green", 1), ("blue", 0)):
        plane = buffer.data[:, :, idx]
        if plane.size == 0:
            stats[name] = (0, 0.0, 0)
        else:
            stats[name] = (int(plane.min()), float(plane.mean()), int(plane.max()))
    return stats


def main():
    parser = argparse.ArgumentParser(
        description="Show TGA header fields and per-channel statistics."
    )
    parser.add_argument("input", help="Path to the input TGA")

    args = parser.parse_args()

    try:
        hdr = tga.read_header(args.input)
        buffer = tga.load(args.input)
    except TgaKitError as exc:
        fail(exc)

    row_order = "top-to-bottom" if hdr.image_descriptor & tga.TOP_TO_BOTTOM else "bottom-to-top"
    info_lines = [
        f"Dimensions: [cyan]{buffer.width}×{buffer.height}[/cyan]",
        f"Type: {hdr.data_type_code} ({hdr.bits_per_pixel}-bit truecolor)",
        f"Row order: {row_order} (descriptor 0x{hdr.image_descriptor:02x})",
        f"Image ID: {hdr.id_length} byte(s)",
        f"File size: {format_size(os.path.getsize(args.input))}",
    ]
    console.print(Panel("\n".join(info_lines), title=f"[bold]{os.path.basename(args.input)}[/bold]", expand=False))

    table = Table(box=None, padding=(0, 2))
    table.add_column("Channel")
    table.add_column("Min", justify="right")
    table.add_column("Mean", justify="right")
    table.add_column("Max", justify="right")
    for name, (lo, mean, hi) in channel_stats(buffer).items():
        table.add_row(name, str(lo), f"{mean:.1f}", str(hi))
    console.print(table)


if __name__ == "__main__":
    main()
