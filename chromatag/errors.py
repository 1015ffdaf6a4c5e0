"""
chromatag Errors
Exception types raised by the analysis pipeline.
"""


class ChromatagError(Exception):
    """Base class for chromatag failures."""
    pass


class OutOfBoundsError(ChromatagError, IndexError):
    """A sample window or pixel lies outside the pixel buffer."""

    def __init__(self, message: str, x: int = None, y: int = None,
                 width: int = None, height: int = None):
        super().__init__(message)
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class DecodeError(ChromatagError, ValueError):
    """The image could not be decoded into a pixel buffer."""
    pass


class BufferReleasedError(ChromatagError, RuntimeError):
    """Pixel access after the scoped buffer was released."""
    pass
