"""Load and save uncompressed 24-bit truecolor TGA files.

Only image type 2 with 24 bits per pixel and no color map is supported.
Buffers always use a bottom-left origin; files are written top-to-bottom
(descriptor 0x20) and flipped back on load, so ``load(save(buf)) == buf``.
"""

import struct
from collections import namedtuple

import numpy as np

from tgakit.lib.errors import FormatError, TgaIOError
from tgakit.lib.pixel_buffer import PIXEL_SIZE, PixelBuffer


HEADER_FORMAT = "<BBBHHBHHHHBB"  # Little-endian, no padding.
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 18

TYPE_TRUECOLOR = 2
BITS_PER_PIXEL = 24
TOP_TO_BOTTOM = 0x20  # Descriptor bit 5.

TgaHeader = namedtuple("TgaHeader", [
    "id_length", "color_map_type", "data_type_code",
    "color_map_origin", "color_map_length", "color_map_depth",
    "x_origin", "y_origin", "width", "height",
    "bits_per_pixel", "image_descriptor",
])


def _open(path, mode):
    try:
        return open(path, mode)
    except OSError as exc:
        verb = "read" if "r" in mode else "write"
        raise TgaIOError(f"Can't {verb} TGA '{path}': {exc.strerror or exc}", path) from exc


def _read(f, count, path):
    try:
        return f.read(count)
    except OSError as exc:
        raise TgaIOError(f"Read failed for '{path}': {exc.strerror or exc}", path) from exc


def _parse_header(raw, path):
    if len(raw) < HEADER_SIZE:
        raise FormatError(
            f"{path}: truncated header ({len(raw)} of {HEADER_SIZE} bytes)", path
        )
    return TgaHeader(*struct.unpack(HEADER_FORMAT, raw))


def read_header(path):
    """Decode the 18-byte header of a TGA file without validating it."""
    with _open(path, "rb") as f:
        return _parse_header(_read(f, HEADER_SIZE, path), path)


def load(path):
    """Read a TGA file into a PixelBuffer."""
    with _open(path, "rb") as f:
        hdr = _parse_header(_read(f, HEADER_SIZE, path), path)

        if hdr.color_map_type != 0:
            raise FormatError(
                f"{path}: color-mapped TGA not supported (color map type {hdr.color_map_type})", path
            )
        if hdr.data_type_code != TYPE_TRUECOLOR:
            raise FormatError(
                f"{path}: need uncompressed RGB (type {TYPE_TRUECOLOR}), got type {hdr.data_type_code}", path
            )
        if hdr.bits_per_pixel != BITS_PER_PIXEL:
            raise FormatError(
                f"{path}: need {BITS_PER_PIXEL}-bit RGB, got {hdr.bits_per_pixel}-bit", path
            )

        if hdr.id_length:
            image_id = _read(f, hdr.id_length, path)
            if len(image_id) < hdr.id_length:
                raise FormatError(f"{path}: truncated image ID block", path)

        expected = hdr.width * hdr.height * PIXEL_SIZE
        raw = _read(f, expected, path)

    if len(raw) < expected:
        raise FormatError(
            f"{path}: truncated pixel data ({len(raw)} of {expected} bytes)", path
        )

    pixels = np.frombuffer(raw, dtype=np.uint8).reshape(hdr.height, hdr.width, PIXEL_SIZE)
    if hdr.image_descriptor & TOP_TO_BOTTOM:
        pixels = pixels[::-1]

    return PixelBuffer(hdr.width, hdr.height, pixels.copy())


def save(buffer, path):
    """Write a PixelBuffer as a top-to-bottom uncompressed 24-bit TGA."""
    header = struct.pack(
        HEADER_FORMAT,
        0,                  # id_length
        0,                  # color_map_type
        TYPE_TRUECOLOR,
        0, 0, 0,            # color map origin, length, depth
        0, 0,               # x/y origin
        buffer.width,
        buffer.height,
        BITS_PER_PIXEL,
        TOP_TO_BOTTOM,
    )
    payload = header + np.ascontiguousarray(buffer.data[::-1]).tobytes()

    with _open(path, "wb") as f:
        try:
            written = f.write(payload)
            f.flush()
        except OSError as exc:
            raise TgaIOError(f"Write failed: '{path}': {exc.strerror or exc}", path) from exc
    if written != len(payload):
        raise TgaIOError(f"Write failed: '{path}': wrote {written} of {len(payload)} bytes", path)
