"""
Color-space math for dominant color analysis.

Pure functions over unnormalized RGB (channels in [0, 255]): HSL conversion,
the divergence score used for clustering, correlated color temperature and
standard deviation helpers.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class RGB:
    """RGB color with channels in [0, 255]."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 255.0


@dataclass(frozen=True)
class HSL:
    """Hue in degrees [0, 360), saturation and luminance in [0, 1]."""
    hue: float = 0.0
    saturation: float = 0.0
    luminance: float = 0.0


# RGB -> CIE XYZ, rows applied to (r, g, b)
XYZ_MATRIX = np.array([
    [-0.14282, 1.54924, -0.95641],
    [-0.32466, 1.57837, -0.73191],
    [-0.68202, 0.77073, 0.56332],
])

# McCamy's cubic approximation
MCCAMY_EPICENTER = (0.3320, 0.1858)
MCCAMY_COEFFICIENTS = (449.0, 3525.0, 6823.3, 5520.33)

_EPSILON = 1e-12


def to_hsl(rgb: RGB) -> HSL:
    """
    Convert an RGB color to HSL.

    Achromatic colors (min == max) short-circuit to hue 0 and saturation 0
    with the luminance still set.

    Args:
        rgb: Color with channels in [0, 255]

    Returns:
        HSL with hue in degrees [0, 360)
    """
    r = rgb.r / 255.0
    g = rgb.g / 255.0
    b = rgb.b / 255.0

    minimum = min(r, g, b)
    maximum = max(r, g, b)

    luminance = (maximum + minimum) / 2.0

    if minimum == maximum:
        return HSL(hue=0.0, saturation=0.0, luminance=luminance)

    delta = maximum - minimum

    if luminance < 0.5:
        saturation = delta / (maximum + minimum)
    else:
        saturation = delta / (2.0 - maximum - minimum)

    # Channel priority on ties: red, then green, then blue.
    # The sector offset is added after dividing by delta; dividing (2 + (b - r))
    # as a whole would push dark greens such as (0, 128, 0) to ~239° (blue).
    if r >= max(g, b):
        sector = (g - b) / delta
    elif g >= max(r, b):
        sector = 2.0 + (b - r) / delta
    else:
        sector = 4.0 + (r - g) / delta

    hue = sector * 60.0
    if hue < 0.0:
        hue += 360.0
    if hue >= 360.0:
        hue -= 360.0

    return HSL(hue=hue, saturation=saturation, luminance=luminance)


def divergence(c1: RGB, c2: RGB) -> float:
    """Mean absolute per-channel difference of r, g and b (alpha ignored)."""
    d_r = abs(c1.r - c2.r)
    d_g = abs(c1.g - c2.g)
    d_b = abs(c1.b - c2.b)
    return (d_r + d_g + d_b) / 3.0


def correlated_color_temperature(rgb: RGB) -> Optional[float]:
    """
    Estimate the correlated color temperature of a color.

    RGB is projected to XYZ with a fixed linear transform, normalized to
    (x, y) chromaticity and passed through McCamy's cubic approximation.

    Args:
        rgb: Color with channels in [0, 255]

    Returns:
        CCT in Kelvin-like units, or None when the temperature is unavailable
        (zero chromaticity sum, a zero McCamy denominator or a non-finite
        result)
    """
    big_x, big_y, big_z = XYZ_MATRIX @ np.array([rgb.r, rgb.g, rgb.b], dtype=np.float64)

    total = big_x + big_y + big_z
    if abs(total) < _EPSILON:
        return None

    x = big_x / total
    y = big_y / total

    x_e, y_e = MCCAMY_EPICENTER
    denominator = y_e - y
    if abs(denominator) < _EPSILON:
        return None

    n = (x - x_e) / denominator
    c3, c2, c1, c0 = MCCAMY_COEFFICIENTS
    cct = c3 * n ** 3 + c2 * n ** 2 + c1 * n + c0

    if not math.isfinite(cct):
        return None
    return float(cct)


def standard_deviation(values: Sequence[float], sample: bool = False) -> float:
    """
    Standard deviation of a sequence of values.

    Args:
        values: Numbers to summarize
        sample: Divide by N-1 (sample) instead of N (population)

    Returns:
        Standard deviation

    Raises:
        ValueError: If values is empty, or sample=True with fewer than 2 values
    """
    count = len(values)
    if count == 0:
        raise ValueError("Standard deviation of an empty sequence is undefined")
    if sample and count < 2:
        raise ValueError(f"Sample standard deviation needs at least 2 values, got {count}")

    return float(np.std(np.asarray(values, dtype=np.float64), ddof=1 if sample else 0))


def color_deviation(rgb: RGB) -> float:
    """Population standard deviation of a color's r, g and b channels."""
    return standard_deviation([rgb.r, rgb.g, rgb.b], sample=False)


def rgb_to_hex(rgb: RGB) -> str:
    """Convert an RGB color to a #RRGGBB string."""
    r, g, b = [max(0, min(255, int(round(c)))) for c in (rgb.r, rgb.g, rgb.b)]
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert a #RRGGBB string to an opaque RGB color."""
    hex_clean = hex_color.lstrip('#')
    if len(hex_clean) != 6:
        raise ValueError(f"Invalid hex color format: {hex_color}")

    try:
        r, g, b = (int(hex_clean[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        raise ValueError(f"Invalid hex color format: {hex_color}")

    return RGB(float(r), float(g), float(b))
