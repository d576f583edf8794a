"""Error types raised by the TGA codec, pixel buffers and operators."""


class TgaKitError(Exception):
    """Base class for every error the core library raises."""


class TgaIOError(TgaKitError, OSError):
    """A file could not be opened, read or written."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class FormatError(TgaKitError, ValueError):
    """A file is not an uncompressed 24-bit truecolor TGA, or is truncated."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class DimensionMismatch(TgaKitError, ValueError):
    """Two or more buffers that must share dimensions do not."""

    def __init__(self, message, sizes=()):
        super().__init__(message)
        self.sizes = tuple(sizes)


class OutOfBounds(TgaKitError, IndexError):
    """A pixel coordinate lies outside the buffer."""
