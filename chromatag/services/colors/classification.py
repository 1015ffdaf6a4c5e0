"""
Color classification: named hue buckets and brightness categories.
"""

import math
from enum import Enum
from typing import Dict, Optional, Tuple

from .space import RGB, to_hsl


class ColorName(str, Enum):
    """Named hue buckets."""
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"


class BrightnessCategory(str, Enum):
    """Perceived brightness of a color, derived from HSL luminance."""
    BRIGHT = "bright"
    LIGHT = "light"
    DARK = "dark"

    @property
    def rank(self) -> int:
        """1 for bright up to 3 for dark."""
        return _BRIGHTNESS_RANK[self]


_BRIGHTNESS_RANK = {
    BrightnessCategory.BRIGHT: 1,
    BrightnessCategory.LIGHT: 2,
    BrightnessCategory.DARK: 3,
}

# Inclusive degree bounds per bucket; red wraps through 0
HUE_RANGES: Dict[ColorName, Tuple[float, float]] = {
    ColorName.RED: (345.0, 15.0),
    ColorName.ORANGE: (16.0, 45.0),
    ColorName.YELLOW: (46.0, 75.0),
    ColorName.GREEN: (76.0, 165.0),
    ColorName.BLUE: (166.0, 255.0),
    ColorName.PURPLE: (256.0, 344.0),
}

DARK_LUMINANCE_MAX = 0.35
LIGHT_LUMINANCE_MAX = 0.55


def hue_to_color_name(hue: float) -> Optional[ColorName]:
    """
    Map a hue angle to its named bucket.

    Fractional hues between two buckets' integer bounds (e.g. 15.5) stay in
    the lower bucket, so every finite hue maps to exactly one name.

    Args:
        hue: Hue in degrees; wrapped into [0, 360)

    Returns:
        ColorName, or None for a non-finite hue
    """
    if hue is None or not math.isfinite(hue):
        return None

    h = hue % 360.0

    if h >= 345.0 or h < 16.0:
        return ColorName.RED
    elif h < 46.0:
        return ColorName.ORANGE
    elif h < 76.0:
        return ColorName.YELLOW
    elif h < 166.0:
        return ColorName.GREEN
    elif h < 256.0:
        return ColorName.BLUE
    else:
        return ColorName.PURPLE


def hue_range_for(name: ColorName) -> Tuple[float, float]:
    """Inclusive (min, max) hue bounds for a color name; red has min > max."""
    return HUE_RANGES[ColorName(name)]


def luminance_to_brightness(luminance: float) -> BrightnessCategory:
    """
    Map HSL luminance to a brightness category.

    dark [0, 0.35), light [0.35, 0.55), bright [0.55, 1.0]. Out-of-range or
    NaN input falls back to bright.
    """
    if 0.0 <= luminance < DARK_LUMINANCE_MAX:
        return BrightnessCategory.DARK
    elif DARK_LUMINANCE_MAX <= luminance < LIGHT_LUMINANCE_MAX:
        return BrightnessCategory.LIGHT
    return BrightnessCategory.BRIGHT


def classify(rgb: RGB) -> Tuple[Optional[ColorName], BrightnessCategory]:
    """Name and brightness category of a color."""
    hsl = to_hsl(rgb)
    return hue_to_color_name(hsl.hue), luminance_to_brightness(hsl.luminance)
