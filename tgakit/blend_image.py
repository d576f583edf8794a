#!/usr/bin/env python3
"""Blend an overlay TGA onto a base TGA with a per-channel blend mode."""

import argparse
import os

from tgakit.lib import tga
from tgakit.lib.cli_utils import collect_files, ensure_parent_dir, fail
from tgakit.lib.errors import TgaKitError
from tgakit.lib.operators import BLEND_MODES, blend


def blend_files(mode, base_path, overlay_path, output_path):
    """Load two TGAs, blend them, and write the result."""
    base = tga.load(base_path)
    overlay = tga.load(overlay_path)
    result = blend(base, overlay, mode)
    ensure_parent_dir(output_path)
    tga.save(result, output_path)
    return result


def main():
    parser = argparse.ArgumentParser(
        description="Blend an overlay TGA onto a base TGA."
    )
    parser.add_argument("mode", choices=list(BLEND_MODES), help="Blend mode")
    parser.add_argument(
        "paths", nargs="*", metavar="PATH",
        help="BASE OVERLAY OUTPUT (single file mode)",
    )
    parser.add_argument("--input-dir", help="Directory of base images to blend (batch mode)")
    parser.add_argument("--prefix", default="", help="Filter images by filename prefix (only with --input-dir)")
    parser.add_argument("--overlay", help="Overlay image applied to every base (batch mode)")
    parser.add_argument("--output-dir", help="Where batch results are written")

    args = parser.parse_args()

    if args.input_dir:
        if args.paths:
            parser.error("Cannot use positional paths with --input-dir")
        if not args.overlay or not args.output_dir:
            parser.error("--input-dir requires --overlay and --output-dir")
        files = collect_files(None, args.input_dir, args.prefix)
        jobs = [
            (path, args.overlay, os.path.join(args.output_dir, os.path.basename(path)))
            for path in files
        ]
    else:
        if len(args.paths) != 3:
            parser.error("Expected BASE OVERLAY OUTPUT, or --input-dir for batch mode")
        jobs = [tuple(args.paths)]

    for i, (base_path, overlay_path, output_path) in enumerate(jobs, start=1):
        try:
            result = blend_files(args.mode, base_path, overlay_path, output_path)
        except TgaKitError as exc:
            fail(exc)
        print(f"[{i}/{len(jobs)}] {base_path} ({result.size}) -> {output_path} [{args.mode}]")

    print(f"\nDone — {len(jobs)} image(s) blended.")


if __name__ == "__main__":
    main()
