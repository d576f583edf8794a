#!/usr/bin/env python3
"""Compare two TGA images pixel by pixel."""

import argparse
import sys

from tgakit.lib import tga
from tgakit.lib.cli_utils import fail
from tgakit.lib.console import console, Table
from tgakit.lib.errors import TgaKitError
from tgakit.lib.operators import count_diff


def main():
    parser = argparse.ArgumentParser(
        description="Report how many pixels differ between two TGA images."
    )
    parser.add_argument("first", help="First TGA")
    parser.add_argument("second", help="Second TGA")

    args = parser.parse_args()

    try:
        a = tga.load(args.first)
        b = tga.load(args.second)
        count, first = count_diff(a, b)
    except TgaKitError as exc:
        fail(exc)

    total = a.width * a.height
    if count == 0:
        console.print(f"Identical ({a.size}, {total} pixels)")
        return

    x, y = first
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("Size:", a.size)
    table.add_row("Differing pixels:", f"{count} of {total} ({count / total * 100:.2f}%)")
    table.add_row("First difference:", f"({x}, {y}) {a.get(x, y)} vs {b.get(x, y)} (BGR)")
    console.print(table)
    sys.exit(1)


if __name__ == "__main__":
    main()
