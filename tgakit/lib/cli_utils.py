"""Helpers shared by the command-line tools."""

import glob
import os
import sys

from tgakit.lib.errors import DimensionMismatch, FormatError, OutOfBounds, TgaIOError


# Process exit code for each error class; anything else exits 1.
EXIT_CODES = {
    TgaIOError: 2,
    FormatError: 3,
    DimensionMismatch: 4,
    OutOfBounds: 5,
}


def exit_code_for(exc):
    for cls, code in EXIT_CODES.items():
        if isinstance(exc, cls):
            return code
    return 1


def fail(exc):
    """Report an error on stderr and exit with the code for its class."""
    print(f"Error: {exc}", file=sys.stderr)
    sys.exit(exit_code_for(exc))


def ensure_parent_dir(path):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)


def collect_files(input_file, input_dir, prefix):
    """Collect the list of TGA files to process."""
    if input_file:
        if not os.path.isfile(input_file):
            print(f"Error: input file not found: {input_file}", file=sys.stderr)
            sys.exit(1)
        return [input_file]

    if not os.path.isdir(input_dir):
        print(f"Error: input directory not found: {input_dir}", file=sys.stderr)
        sys.exit(1)

    pattern = f"{prefix}*.tga" if prefix else "*.tga"
    files = sorted(glob.glob(os.path.join(input_dir, pattern)))
    if not files:
        print(f"Error: no matching TGAs found in {input_dir} (prefix: '{prefix or '*'}').", file=sys.stderr)
        sys.exit(1)
    return files
