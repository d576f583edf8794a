#!/usr/bin/env python3
"""Tests for blend modes, channel operators, split/combine and rotation."""

import sys

import numpy as np

from tgakit.lib.errors import DimensionMismatch
from tgakit.lib.operators import (
    BLEND_MODES,
    LOOKUP_TABLES,
    add_channel,
    blend,
    combine_channels,
    count_diff,
    rotate_180,
    scale_channel,
    split_channels,
    to_grayscale,
)
from tgakit.lib.pixel_buffer import PixelBuffer


def solid(width, height, bgr):
    """Create a buffer filled with a single BGR color."""
    return PixelBuffer(width, height, np.full((height, width, 3), bgr, dtype=np.uint8))


def random_buffer(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return PixelBuffer(width, height, rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


def test_blend_add_and_subtract():
    """Known values for add and subtract."""
    base = solid(2, 2, (100, 150, 200))
    over = solid(2, 2, (50, 50, 50))
    assert blend(base, over, "add").get(1, 1) == (150, 200, 250)
    assert blend(base, over, "subtract").get(0, 1) == (50, 100, 150)


def test_blend_multiply_half_gray():
    """Multiplying by 50% gray halves each channel."""
    base = solid(1, 1, (100, 150, 200))
    gray = solid(1, 1, (128, 128, 128))
    assert blend(base, gray, "multiply").get(0, 0) == (50, 75, 100)
    assert blend(solid(1, 1, (255, 0, 128)), gray, "multiply").get(0, 0) == (128, 0, 64)


def test_blend_saturation():
    """Add clamps at 255 and subtract floors at 0."""
    assert blend(solid(1, 1, (200,) * 3), solid(1, 1, (100,) * 3), "add").get(0, 0) == (255, 255, 255)
    assert blend(solid(1, 1, (50,) * 3), solid(1, 1, (100,) * 3), "subtract").get(0, 0) == (0, 0, 0)


def test_blend_screen_and_overlay():
    """Screen and overlay on hand-computed values."""
    base = solid(1, 1, (0, 100, 200))
    over = solid(1, 1, (255, 50, 100))
    # screen: 255 - round((255-a)*(255-b)/255)
    assert blend(base, over, "screen").get(0, 0) == (255, 130, 222)
    # overlay: a<128 -> round(2ab/255); else 255 - round(2(255-a)(255-b)/255)
    assert blend(base, over, "overlay").get(0, 0) == (0, 39, 188)


def test_lookup_tables_match_formulas():
    """Every table entry equals the direct integer formula."""
    for a in range(256):
        for b in (0, 1, 64, 127, 128, 200, 254, 255):
            assert LOOKUP_TABLES["multiply"][a, b] == (a * b + 127) // 255
            assert LOOKUP_TABLES["screen"][a, b] == 255 - ((255 - a) * (255 - b) + 127) // 255
            if a < 128:
                expected = (2 * a * b + 127) // 255
            else:
                expected = 255 - (2 * (255 - a) * (255 - b) + 127) // 255
            assert LOOKUP_TABLES["overlay"][a, b] == expected, f"overlay({a}, {b})"


def test_lookup_tables_read_only():
    """Tables cannot be modified after import."""
    for name, table in LOOKUP_TABLES.items():
        assert not table.flags.writeable, f"{name} table is writeable"


def test_blend_does_not_mutate_inputs():
    """Inputs are left untouched and output has base's size."""
    base = random_buffer(4, 3, seed=1)
    over = random_buffer(4, 3, seed=2)
    base_before, over_before = base.copy(), over.copy()
    for mode in BLEND_MODES:
        out = blend(base, over, mode)
        assert (out.width, out.height) == (4, 3)
        assert out.data.dtype == np.uint8
    assert base == base_before and over == over_before


def test_blend_dimension_mismatch():
    """2x2 vs 3x3 fails and names both sizes."""
    try:
        blend(PixelBuffer.create(2, 2), PixelBuffer.create(3, 3), "add")
    except DimensionMismatch as exc:
        assert "2x2" in str(exc) and "3x3" in str(exc), f"Bad message: {exc}"
        assert exc.sizes == ("2x2", "3x3")
    else:
        raise AssertionError("Expected DimensionMismatch")


def test_blend_unknown_mode():
    try:
        blend(PixelBuffer.create(1, 1), PixelBuffer.create(1, 1), "dodge")
    except ValueError as exc:
        assert "dodge" in str(exc)
    else:
        raise AssertionError("Expected ValueError")


def test_add_channel_in_place():
    """add_channel mutates only the selected channel, clamping both ways."""
    buf = solid(2, 1, (10, 20, 250))
    result = add_channel(buf, "red", 10)
    assert result is buf
    assert buf.get(0, 0) == (10, 20, 255)
    add_channel(buf, "blue", -50)
    assert buf.get(1, 0) == (0, 20, 255)
    add_channel(buf, "green", 100)
    assert buf.get(1, 0) == (0, 120, 255)


def test_scale_channel_in_place():
    """scale_channel rounds half up and clamps."""
    buf = solid(1, 1, (100, 3, 5))
    assert scale_channel(buf, "blue", 3) is buf
    assert buf.get(0, 0) == (255, 3, 5)
    scale_channel(buf, "green", 0.5)    # 1.5 -> 2
    scale_channel(buf, "red", 0)
    assert buf.get(0, 0) == (255, 2, 0)
    scale_channel(buf, "green", -4)
    assert buf.get(0, 0) == (255, 0, 0)


def test_channel_ops_reject_unknown_channel():
    buf = PixelBuffer.create(1, 1)
    for op, arg in ((add_channel, 1), (scale_channel, 1.0)):
        try:
            op(buf, "alpha", arg)
        except ValueError:
            pass
        else:
            raise AssertionError(f"{op.__name__} should reject 'alpha'")


def test_split_channels():
    """Each split buffer carries one source channel on all three channels."""
    buf = solid(2, 2, (1, 2, 3))
    red, green, blue = split_channels(buf)
    assert red.get(0, 0) == (3, 3, 3)
    assert green.get(1, 1) == (2, 2, 2)
    assert blue.get(1, 0) == (1, 1, 1)
    assert buf.get(0, 0) == (1, 2, 3), "Source must not change"


def test_split_combine_inverse():
    """combine_channels(*split_channels(X)) == X."""
    buf = random_buffer(5, 4, seed=3)
    assert combine_channels(*split_channels(buf)) == buf


def test_combine_reads_one_channel_each():
    """Only the matching channel of each source is used."""
    red = solid(1, 1, (1, 2, 30))
    green = solid(1, 1, (4, 50, 6))
    blue = solid(1, 1, (70, 8, 9))
    assert combine_channels(red, green, blue).get(0, 0) == (70, 50, 30)


def test_combine_dimension_mismatch():
    try:
        combine_channels(PixelBuffer.create(2, 2), PixelBuffer.create(2, 2), PixelBuffer.create(2, 3))
    except DimensionMismatch as exc:
        assert "2x3" in str(exc)
    else:
        raise AssertionError("Expected DimensionMismatch")


def test_rotate_180():
    """Corners swap and rotating twice is the identity."""
    buf = random_buffer(3, 2, seed=4)
    rotated = rotate_180(buf)
    assert (rotated.width, rotated.height) == (3, 2)
    assert rotated.get(0, 0) == buf.get(2, 1)
    assert rotated.get(2, 1) == buf.get(0, 0)
    assert rotated.get(1, 0) == buf.get(1, 1)
    assert rotate_180(rotated) == buf


def test_rotate_reverses_pixel_sequence():
    """Rotation equals reversing the flat pixel sequence."""
    buf = random_buffer(4, 3, seed=5)
    flat = buf.data.reshape(-1, 3)
    assert np.array_equal(rotate_180(buf).data.reshape(-1, 3), flat[::-1])


def test_operators_on_empty_buffers():
    empty = PixelBuffer.create(0, 0)
    assert rotate_180(empty) == empty
    assert combine_channels(*split_channels(empty)) == empty
    assert blend(empty, empty, "multiply") == empty


def test_to_grayscale():
    """Luminance uses 0.114 B + 0.587 G + 0.299 R."""
    buf = solid(1, 1, (0, 0, 255))
    assert to_grayscale(buf).get(0, 0) == (76, 76, 76)
    assert to_grayscale(solid(1, 1, (255, 255, 255))).get(0, 0) == (255, 255, 255)


def test_count_diff():
    """Counts differing pixels and reports the first one from the bottom-left."""
    a = PixelBuffer.create(3, 3)
    b = a.copy()
    assert count_diff(a, b) == (0, None)
    b.set(2, 2, (1, 0, 0))
    b.set(1, 0, (0, 0, 9))
    assert count_diff(a, b) == (2, (1, 0))
    try:
        count_diff(a, PixelBuffer.create(3, 2))
    except DimensionMismatch:
        pass
    else:
        raise AssertionError("Expected DimensionMismatch")


if __name__ == "__main__":
    tests = [
        test_blend_add_and_subtract,
        test_blend_multiply_half_gray,
        test_blend_saturation,
        test_blend_screen_and_overlay,
        test_lookup_tables_match_formulas,
        test_lookup_tables_read_only,
        test_blend_does_not_mutate_inputs,
        test_blend_dimension_mismatch,
        test_blend_unknown_mode,
        test_add_channel_in_place,
        test_scale_channel_in_place,
        test_channel_ops_reject_unknown_channel,
        test_split_channels,
        test_split_combine_inverse,
        test_combine_reads_one_channel_each,
        test_combine_dimension_mismatch,
        test_rotate_180,
        test_rotate_reverses_pixel_sequence,
        test_operators_on_empty_buffers,
        test_to_grayscale,
        test_count_diff,
    ]
    failed = 0
    for test in tests:
        try:
            test()
            print(f"  ✓ {test.__name__}")
        except AssertionError as e:
            print(f"  ✗ {test.__name__}: {e}")
            failed += 1

    print(f"\n{len(tests) - failed}/{len(tests)} tests passed.")
    sys.exit(1 if failed else 0)
