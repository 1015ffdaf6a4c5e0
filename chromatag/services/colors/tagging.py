"""
Cluster tagging: attaches names, brightness categories and temperatures to
ranked dominant color clusters.
"""

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from .analyzer import ColorCluster
from .classification import (
    BrightnessCategory, ColorName, hue_to_color_name, luminance_to_brightness
)
from .space import HSL, RGB, color_deviation, correlated_color_temperature, rgb_to_hex, to_hsl


@dataclass
class TaggedCluster:
    """A dominant color cluster with its classification tags."""
    color: RGB
    count: int
    ratio: float
    hex: str
    hsl: HSL
    name: Optional[ColorName]
    brightness: BrightnessCategory
    temperature: Optional[float]  # None when unavailable
    deviation: float


def tag_cluster(cluster: ColorCluster, total_count: int) -> TaggedCluster:
    """
    Tag one cluster.

    Args:
        cluster: Cluster from the analyzer
        total_count: Number of sampled pixels across all clusters

    Returns:
        TaggedCluster with ratio = count / total_count
    """
    hsl = to_hsl(cluster.color)
    return TaggedCluster(
        color=cluster.color,
        count=cluster.count,
        ratio=cluster.count / total_count if total_count else 0.0,
        hex=rgb_to_hex(cluster.color),
        hsl=hsl,
        name=hue_to_color_name(hsl.hue),
        brightness=luminance_to_brightness(hsl.luminance),
        temperature=correlated_color_temperature(cluster.color),
        deviation=color_deviation(cluster.color)
    )


def tag_clusters(clusters: List[ColorCluster], limit: Optional[int] = None) -> List[TaggedCluster]:
    """
    Tag ranked clusters, preserving their order.

    Ratios are computed over all clusters even when `limit` truncates the result.
    """
    total = sum(c.count for c in clusters)
    selected = clusters if limit is None else clusters[:limit]

    tagged = [tag_cluster(c, total) for c in selected]

    unavailable = sum(1 for t in tagged if t.temperature is None)
    if unavailable:
        logger.debug(f"Temperature unavailable for {unavailable}/{len(tagged)} clusters")

    return tagged


def dominant_color_name(clusters: List[ColorCluster]) -> Optional[ColorName]:
    """Name of the most frequent cluster, or None without clusters."""
    if not clusters:
        return None
    return hue_to_color_name(to_hsl(clusters[0].color).hue)
