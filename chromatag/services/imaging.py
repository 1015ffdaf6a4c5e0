"""
chromatag Imaging Utilities
Pixel buffer type and the Pillow-backed decode into the analyzer's byte layout.

The analyzer reads a raw, premultiplied, 8-bit, 4-bytes-per-pixel buffer in
row-major order with per-pixel byte offsets:

    [0] = alpha, [1] = red, [2] = green, [3] = blue

This is the "premultiplied alpha first" (ARGB) layout. `decode_argb` produces
it from any Pillow image by converting to RGBA, premultiplying (Pillow mode
"RGBa") and moving the alpha channel to the front.
"""
import io
from contextlib import contextmanager
from typing import Iterator, Tuple, Union

import numpy as np
from loguru import logger
from PIL import Image

from chromatag.errors import BufferReleasedError, DecodeError, OutOfBoundsError
from chromatag.services.colors.space import RGB

ImageSource = Union[Image.Image, bytes, bytearray]


class PixelBuffer:
    """
    Read-only, bounds-checked view over an ARGB pixel buffer.

    The caller owns the underlying memory; the buffer never copies or mutates
    it. After `release()` any pixel access raises BufferReleasedError.
    """

    BYTES_PER_PIXEL = 4
    ALPHA_OFFSET = 0
    RED_OFFSET = 1
    GREEN_OFFSET = 2
    BLUE_OFFSET = 3

    def __init__(self, data: Union[bytes, bytearray, memoryview, np.ndarray], width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid buffer dimensions: {width}×{height}")

        if isinstance(data, np.ndarray):
            flat = data.reshape(-1)
            if flat.dtype != np.uint8:
                raise ValueError(f"Pixel buffer must hold uint8 bytes, got {flat.dtype}")
        else:
            flat = np.frombuffer(data, dtype=np.uint8)

        expected = width * height * self.BYTES_PER_PIXEL
        if flat.size != expected:
            raise ValueError(
                f"Pixel buffer size mismatch: expected {expected} bytes "
                f"for {width}×{height}, got {flat.size}"
            )

        pixels = flat.reshape(height, width, self.BYTES_PER_PIXEL).view()
        pixels.flags.writeable = False

        self._pixels = pixels
        self.width = width
        self.height = height

    @property
    def released(self) -> bool:
        return self._pixels is None

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to sample."""
        return self.released or self.width == 0 or self.height == 0

    def release(self) -> None:
        """Drop the reference to the underlying memory."""
        self._pixels = None

    def _require_pixels(self) -> np.ndarray:
        if self._pixels is None:
            raise BufferReleasedError("Pixel buffer has been released")
        return self._pixels

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel(self, x: int, y: int) -> RGB:
        """Decode the opaque RGB color at (x, y)."""
        pixels = self._require_pixels()
        if not self.contains(x, y):
            raise OutOfBoundsError(
                f"Pixel ({x}, {y}) outside {self.width}×{self.height} buffer",
                x=x, y=y, width=self.width, height=self.height
            )
        px = pixels[y, x]
        return RGB(
            float(px[self.RED_OFFSET]),
            float(px[self.GREEN_OFFSET]),
            float(px[self.BLUE_OFFSET]),
        )

    def argb(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Raw bytes of the pixel at (x, y) in buffer order."""
        pixels = self._require_pixels()
        if not self.contains(x, y):
            raise OutOfBoundsError(
                f"Pixel ({x}, {y}) outside {self.width}×{self.height} buffer",
                x=x, y=y, width=self.width, height=self.height
            )
        a, r, g, b = (int(v) for v in pixels[y, x])
        return a, r, g, b

    def check_window(self, x: int, y: int, size: int) -> None:
        """
        Ensure the inclusive window [x, x+size] × [y, y+size] lies in the buffer.

        Raises:
            OutOfBoundsError: If any corner of the window is outside the buffer
        """
        if not (self.contains(x, y) and self.contains(x + size, y + size)):
            raise OutOfBoundsError(
                f"Sample window at ({x}, {y}) of size {size + 1}px "
                f"exceeds {self.width}×{self.height} buffer",
                x=x, y=y, width=self.width, height=self.height
            )

    def window_rgb(self, x: int, y: int, size: int) -> np.ndarray:
        """
        RGB channels of an inclusive window, ordered column by column.

        Returns:
            Float array (N, 3) where N = (size+1)², x varying slowest
        """
        pixels = self._require_pixels()
        self.check_window(x, y, size)

        window = pixels[y:y + size + 1, x:x + size + 1, self.RED_OFFSET:self.BLUE_OFFSET + 1]
        # (rows=y, cols=x) -> (x, y) so iteration runs x outer, y inner
        return window.transpose(1, 0, 2).reshape(-1, 3).astype(np.float64)

    def __repr__(self) -> str:
        state = "released" if self.released else "live"
        return f"PixelBuffer({self.width}×{self.height}, {state})"


def open_image(source: ImageSource) -> Image.Image:
    """Return a Pillow image for an image or its encoded bytes."""
    if isinstance(source, Image.Image):
        return source
    if isinstance(source, (bytes, bytearray)):
        try:
            image = Image.open(io.BytesIO(source))
            image.load()
        except (OSError, ValueError) as e:
            logger.error(f"Image decode failed: {e}")
            raise DecodeError(f"Failed to decode image: {e}") from e
        return image
    raise DecodeError(f"Unsupported image source: {type(source).__name__}")


def decode_argb(source: ImageSource) -> PixelBuffer:
    """
    Decode an image into a premultiplied ARGB pixel buffer.

    Args:
        source: Pillow image or encoded image bytes (PNG, JPEG, ...)

    Returns:
        PixelBuffer owning a freshly decoded byte array

    Raises:
        DecodeError: If the source cannot be decoded
    """
    try:
        image = open_image(source)
        premultiplied = image.convert("RGBA").convert("RGBa")
        rgba = np.asarray(premultiplied, dtype=np.uint8)
    except DecodeError:
        raise
    except (OSError, ValueError) as e:
        logger.error(f"Image decode failed: {e}")
        raise DecodeError(f"Failed to decode image: {e}") from e

    height, width = rgba.shape[:2]
    argb = np.ascontiguousarray(rgba[..., [3, 0, 1, 2]])

    logger.debug(f"Decoded {width}×{height} image into ARGB buffer")
    return PixelBuffer(argb, width, height)


@contextmanager
def decoded_pixels(source: ImageSource) -> Iterator[PixelBuffer]:
    """Decode an image and release the buffer on every exit path."""
    buffer = decode_argb(source)
    try:
        yield buffer
    finally:
        buffer.release()


def crop_image(image: Image.Image, box_xywh: Tuple[int, int, int, int]) -> Image.Image:
    """
    Crop an image to a bounding box.

    Args:
        image: Source image
        box_xywh: Box as (x, y, width, height)

    Returns:
        Cropped image

    Raises:
        ValueError: If the box is empty or not inside the image
    """
    x, y, w, h = box_xywh
    if w <= 0 or h <= 0:
        raise ValueError(f"Empty crop box: {box_xywh}")
    if x < 0 or y < 0 or x + w > image.width or y + h > image.height:
        raise ValueError(
            f"Crop box {box_xywh} outside {image.width}×{image.height} image"
        )
    return image.crop((x, y, x + w, y + h))


def scale_to_height(image: Image.Image, height: int) -> Image.Image:
    """
    Resize an image to a target height, preserving aspect ratio.

    Args:
        image: Source image
        height: Target height in pixels

    Returns:
        Resized image
    """
    if height <= 0:
        raise ValueError(f"Target height must be positive, got {height}")
    if image.height == 0:
        raise ValueError("Cannot scale an image with zero height")

    width = max(1, round(image.width * height / image.height))
    return image.resize((width, height), Image.LANCZOS)


def get_image_dimensions(buffer: PixelBuffer) -> Tuple[int, int]:
    """
    Get buffer width and height.

    Returns:
        Tuple of (width, height)
    """
    return buffer.width, buffer.height
