#!/usr/bin/env python3
"""Rotate a TGA image by 180 degrees."""

import argparse

from tgakit.lib import tga
from tgakit.lib.cli_utils import ensure_parent_dir, fail
from tgakit.lib.errors import TgaKitError
from tgakit.lib.operators import rotate_180


def main():
    parser = argparse.ArgumentParser(description="Rotate a TGA image by 180 degrees.")
    parser.add_argument("input", help="Path to the input TGA")
    parser.add_argument("output", help="Path to the output TGA")

    args = parser.parse_args()

    try:
        result = rotate_180(tga.load(args.input))
        ensure_parent_dir(args.output)
        tga.save(result, args.output)
    except TgaKitError as exc:
        fail(exc)

    print(f"{args.input} -> {args.output} ({result.size}, rotated 180°)")


if __name__ == "__main__":
    main()
