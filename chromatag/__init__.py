"""
chromatag
Dominant color extraction and color classification for garment images.
"""

from chromatag.errors import BufferReleasedError, ChromatagError, DecodeError, OutOfBoundsError
from chromatag.services.colors.analyzer import (
    ColorCluster, DominantColorAnalyzer, analyze, analyze_image
)
from chromatag.services.colors.classification import (
    BrightnessCategory, ColorName, hue_to_color_name, luminance_to_brightness
)
from chromatag.services.colors.space import (
    HSL, RGB, correlated_color_temperature, divergence, standard_deviation, to_hsl
)
from chromatag.services.colors.tagging import TaggedCluster, tag_clusters
from chromatag.services.imaging import PixelBuffer, decode_argb, decoded_pixels

__version__ = "1.0.0"

__all__ = [
    'BrightnessCategory',
    'BufferReleasedError',
    'ChromatagError',
    'ColorCluster',
    'ColorName',
    'DecodeError',
    'DominantColorAnalyzer',
    'HSL',
    'OutOfBoundsError',
    'PixelBuffer',
    'RGB',
    'TaggedCluster',
    'analyze',
    'analyze_image',
    'correlated_color_temperature',
    'decode_argb',
    'decoded_pixels',
    'divergence',
    'hue_to_color_name',
    'luminance_to_brightness',
    'standard_deviation',
    'tag_clusters',
    'to_hsl'
]
