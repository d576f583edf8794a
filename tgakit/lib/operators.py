"""Per-pixel operators over PixelBuffers: blends, channel math, split/combine, rotation."""

import cv2
import numpy as np

from tgakit.lib.errors import DimensionMismatch
from tgakit.lib.pixel_buffer import PixelBuffer


# Index of each channel inside a BGR triplet.
CHANNELS = {
    "blue": 0,
    "green": 1,
    "red": 2,
}


def _build_tables():
    """Precompute multiply, screen and overlay results for every (a, b) pair."""
    a = np.arange(256, dtype=np.int32).reshape(-1, 1)
    b = np.arange(256, dtype=np.int32).reshape(1, -1)
    inv_a, inv_b = 255 - a, 255 - b

    multiply = (a * b + 127) // 255
    screen = 255 - (inv_a * inv_b + 127) // 255
    overlay = np.where(
        a < 128,
        (2 * a * b + 127) // 255,
        255 - (2 * inv_a * inv_b + 127) // 255,
    )

    tables = {}
    for name, table in (("multiply", multiply), ("screen", screen), ("overlay", overlay)):
        table = table.astype(np.uint8)
        table.flags.writeable = False
        tables[name] = table
    return tables


# Built once at import; read-only afterwards.
LOOKUP_TABLES = _build_tables()


def blend_add(a, b):
    """Saturating add."""
    return np.minimum(a.astype(np.int16) + b, 255).astype(np.uint8)


def blend_subtract(a, b):
    """Subtract, floored at zero."""
    return np.maximum(a.astype(np.int16) - b, 0).astype(np.uint8)


def blend_multiply(a, b):
    return LOOKUP_TABLES["multiply"][a, b]


def blend_screen(a, b):
    return LOOKUP_TABLES["screen"][a, b]


def blend_overlay(a, b):
    """Multiply in the base's shadows, screen in its highlights."""
    return LOOKUP_TABLES["overlay"][a, b]


BLEND_MODES = {
    "add": blend_add,
    "subtract": blend_subtract,
    "multiply": blend_multiply,
    "screen": blend_screen,
    "overlay": blend_overlay,
}


def _channel_index(channel):
    try:
        return CHANNELS[channel]
    except KeyError:
        raise ValueError(
            f"Unknown channel '{channel}' (expected one of: {', '.join(CHANNELS)})"
        ) from None


def blend(base, overlay, mode):
    """Combine two same-sized buffers channel by channel using a named blend mode."""
    if mode not in BLEND_MODES:
        raise ValueError(
            f"Unknown blend mode '{mode}' (expected one of: {', '.join(BLEND_MODES)})"
        )
    if (base.width, base.height) != (overlay.width, overlay.height):
        raise DimensionMismatch(
            f"Blend '{mode}' failed: base={base.size} vs overlay={overlay.size}",
            sizes=(base.size, overlay.size),
        )

    out = BLEND_MODES[mode](base.data, overlay.data)
    return PixelBuffer(base.width, base.height, np.ascontiguousarray(out, dtype=np.uint8))


def add_channel(buffer, channel, delta):
    """Add *delta* to one channel of every pixel, in place, clamping to [0, 255]."""
    idx = _channel_index(channel)
    values = buffer.data[:, :, idx].astype(np.int64) + int(delta)
    buffer.data[:, :, idx] = np.clip(values, 0, 255)
    return buffer


def scale_channel(buffer, channel, factor):
    """Multiply one channel of every pixel by *factor*, in place, rounding half up."""
    idx = _channel_index(channel)
    values = np.floor(buffer.data[:, :, idx] * float(factor) + 0.5)
    buffer.data[:, :, idx] = np.clip(values, 0, 255)
    return buffer


def split_channels(buffer):
    """Return (red, green, blue) grayscale buffers, one per source channel."""
    if buffer.data.size == 0:
        return tuple(buffer.copy() for _ in range(3))

    blue, green, red = cv2.split(np.ascontiguousarray(buffer.data))
    return tuple(
        PixelBuffer(buffer.width, buffer.height, cv2.merge([plane, plane, plane]))
        for plane in (red, green, blue)
    )


def combine_channels(red, green, blue):
    """Build one buffer from the red of *red*, the green of *green* and the blue of *blue*."""
    dims = {(buf.width, buf.height) for buf in (red, green, blue)}
    if len(dims) != 1:
        raise DimensionMismatch(
            f"Combine failed: red={red.size} green={green.size} blue={blue.size}",
            sizes=(red.size, green.size, blue.size),
        )
    if red.data.size == 0:
        return PixelBuffer.create(red.width, red.height)

    planes = [
        np.ascontiguousarray(blue.data[:, :, CHANNELS["blue"]]),
        np.ascontiguousarray(green.data[:, :, CHANNELS["green"]]),
        np.ascontiguousarray(red.data[:, :, CHANNELS["red"]]),
    ]
    return PixelBuffer(red.width, red.height, cv2.merge(planes))


def rotate_180(buffer):
    """Reverse the pixel order, turning the image upside down and mirroring it."""
    if buffer.data.size == 0:
        return buffer.copy()
    rotated = cv2.rotate(np.ascontiguousarray(buffer.data), cv2.ROTATE_180)
    return PixelBuffer(buffer.width, buffer.height, rotated)


def to_grayscale(buffer):
    """Replace every pixel with its Rec. 601 luminance on all three channels."""
    weights = np.array([0.114, 0.587, 0.299])  # B, G, R
    lum = np.floor(buffer.data @ weights + 0.5)
    lum = np.clip(lum, 0, 255).astype(np.uint8)
    return PixelBuffer(buffer.width, buffer.height, np.repeat(lum[:, :, None], 3, axis=2))


def count_diff(a, b):
    """Count differing pixels and locate the first one.

    Returns ``(count, first)`` where *first* is the logical (x, y) of the
    first differing pixel scanning rows from the bottom, or None.
    """
    if (a.width, a.height) != (b.width, b.height):
        raise DimensionMismatch(
            f"Diff failed: {a.size} vs {b.size}", sizes=(a.size, b.size)
        )
    mask = np.any(a.data != b.data, axis=2)
    count = int(mask.sum())
    if count == 0:
        return 0, None
    y, x = np.argwhere(mask)[0]
    return count, (int(x), int(y))
