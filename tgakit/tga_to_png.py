#!/usr/bin/env python3
"""Export a TGA image as a PNG preview."""

import argparse
import os
import sys

import cv2
import numpy as np

from tgakit.lib import tga
from tgakit.lib.cli_utils import ensure_parent_dir, fail
from tgakit.lib.errors import TgaKitError
from tgakit.lib.operators import to_grayscale


def export_png(buffer, output_path):
    """Write *buffer* as PNG; rows are flipped so the image displays upright."""
    ensure_parent_dir(output_path)
    return cv2.imwrite(output_path, np.ascontiguousarray(buffer.data[::-1]))


def main():
    parser = argparse.ArgumentParser(description="Convert a TGA image to a PNG preview.")
    parser.add_argument("input", help="Path to the input TGA")
    parser.add_argument("--output", help="Output PNG path (default: input path with .png)")
    parser.add_argument("--grayscale", action="store_true", help="Export luminance only")

    args = parser.parse_args()

    output = args.output or os.path.splitext(args.input)[0] + ".png"
    try:
        buffer = tga.load(args.input)
        if args.grayscale:
            buffer = to_grayscale(buffer)
    except TgaKitError as exc:
        fail(exc)

    if buffer.width == 0 or buffer.height == 0:
        print(f"Error: cannot export empty image '{args.input}'.", file=sys.stderr)
        sys.exit(1)
    if not export_png(buffer, output):
        print(f"Error: could not write '{output}'.", file=sys.stderr)
        sys.exit(2)

    print(f"{args.input} ({buffer.size}) -> {output}")


if __name__ == "__main__":
    main()
