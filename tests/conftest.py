"""
Test configuration and fixtures for chromatag tests.
"""
import numpy as np
import pytest

from chromatag.services.colors.analyzer import DominantColorAnalyzer
from chromatag.services.imaging import PixelBuffer


def make_argb(width, height, rgb=(0, 0, 0), alpha=255):
    """Solid ARGB pixel array of shape (height, width, 4)."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :, 0] = alpha
    pixels[:, :, 1:] = rgb
    return pixels


def to_buffer(pixels):
    """Wrap an (H, W, 4) ARGB array in a PixelBuffer."""
    height, width = pixels.shape[:2]
    return PixelBuffer(pixels, width, height)


@pytest.fixture
def analyzer():
    """Analyzer with the documented default settings, independent of env."""
    return DominantColorAnalyzer(cluster_size=35, divergence_threshold=35.0, edge_offset=100)


@pytest.fixture
def solid_buffer():
    """400×400 solid navy buffer."""
    return to_buffer(make_argb(400, 400, (10, 42, 67)))


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from chromatag.services.observability import reset_metrics
    reset_metrics()
