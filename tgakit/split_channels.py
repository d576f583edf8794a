#!/usr/bin/env python3
"""Split a TGA image into red, green and blue grayscale images."""

import argparse
import os

from tgakit.lib import tga
from tgakit.lib.errors import TgaKitError
from tgakit.lib.cli_utils import fail
from tgakit.lib.operators import split_channels


def split_file(input_path, output_dir):
    """Write <stem>_red.tga, <stem>_green.tga and <stem>_blue.tga; return their paths."""
    buffer = tga.load(input_path)
    stem = os.path.splitext(os.path.basename(input_path))[0]
    os.makedirs(output_dir, exist_ok=True)

    paths = []
    for name, channel_buf in zip(("red", "green", "blue"), split_channels(buffer)):
        path = os.path.join(output_dir, f"{stem}_{name}.tga")
        tga.save(channel_buf, path)
        paths.append(path)
    return paths


def main():
    parser = argparse.ArgumentParser(
        description="Split a TGA image into one grayscale image per channel."
    )
    parser.add_argument("input", help="Path to the input TGA")
    parser.add_argument(
        "--output-dir", default=None,
        help="Output directory (default: same directory as input)",
    )

    args = parser.parse_args()

    output_dir = args.output_dir or os.path.dirname(args.input) or "."
    try:
        paths = split_file(args.input, output_dir)
    except TgaKitError as exc:
        fail(exc)

    for path in paths:
        print(f"  {path}")
    print(f"\nDone — {len(paths)} channel image(s) written to {output_dir}")


if __name__ == "__main__":
    main()
