#!/usr/bin/env python3
"""Combine three channel images into one color TGA."""

import argparse

from tgakit.lib import tga
from tgakit.lib.cli_utils import ensure_parent_dir, fail
from tgakit.lib.errors import TgaKitError
from tgakit.lib.operators import combine_channels


def main():
    parser = argparse.ArgumentParser(
        description="Take the red, green and blue channels from three TGAs and merge them."
    )
    parser.add_argument("red", help="TGA supplying the red channel")
    parser.add_argument("green", help="TGA supplying the green channel")
    parser.add_argument("blue", help="TGA supplying the blue channel")
    parser.add_argument("output", help="Path to the output TGA")

    args = parser.parse_args()

    try:
        result = combine_channels(tga.load(args.red), tga.load(args.green), tga.load(args.blue))
        ensure_parent_dir(args.output)
        tga.save(result, args.output)
    except TgaKitError as exc:
        fail(exc)

    print(f"{args.output} ({result.size})")


if __name__ == "__main__":
    main()
