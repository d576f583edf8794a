#!/usr/bin/env python3
"""Offset or scale individual color channels of a TGA image."""

import argparse

from tgakit.lib import tga
from tgakit.lib.cli_utils import ensure_parent_dir, fail
from tgakit.lib.errors import TgaKitError
from tgakit.lib.operators import CHANNELS, add_channel, scale_channel


def channel_name(value):
    value = value.lower()
    if value not in CHANNELS:
        raise argparse.ArgumentTypeError(
            f"invalid channel '{value}' (choose from {', '.join(CHANNELS)})"
        )
    return value


def adjust(input_path, output_path, adds=(), scales=()):
    """Apply every add, then every scale, and save the result."""
    buffer = tga.load(input_path)
    for channel, delta in adds:
        add_channel(buffer, channel, delta)
    for channel, factor in scales:
        scale_channel(buffer, channel, factor)
    ensure_parent_dir(output_path)
    tga.save(buffer, output_path)
    return buffer


def _pairs(raw, convert):
    pairs = []
    for channel, value in raw or []:
        pairs.append((channel_name(channel), convert(value)))
    return pairs


def main():
    parser = argparse.ArgumentParser(
        description="Add to or scale color channels of a TGA image."
    )
    parser.add_argument("input", help="Path to the input TGA")
    parser.add_argument("output", help="Path to the output TGA")
    parser.add_argument(
        "--add", nargs=2, action="append", metavar=("CHANNEL", "DELTA"),
        help="Add an integer to a channel (red, green, blue); repeatable",
    )
    parser.add_argument(
        "--scale", nargs=2, action="append", metavar=("CHANNEL", "FACTOR"),
        help="Multiply a channel by a factor; repeatable",
    )

    args = parser.parse_args()

    try:
        adds = _pairs(args.add, int)
        scales = _pairs(args.scale, float)
    except (argparse.ArgumentTypeError, ValueError) as exc:
        parser.error(str(exc))
    if not adds and not scales:
        parser.error("Provide at least one --add or --scale")

    try:
        adjust(args.input, args.output, adds, scales)
    except TgaKitError as exc:
        fail(exc)

    steps = [f"{c}{d:+d}" for c, d in adds] + [f"{c}x{f:g}" for c, f in scales]
    print(f"{args.input} -> {args.output} [{', '.join(steps)}]")


if __name__ == "__main__":
    main()
