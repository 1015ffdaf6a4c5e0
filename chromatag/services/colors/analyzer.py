"""
Dominant color analyzer.

Samples six fixed windows of a decoded pixel buffer and clusters their pixels
online: each pixel joins the first existing cluster whose representative color
is within the divergence threshold, or starts a new cluster. Clusters are
returned by pixel count, descending, with ties kept in discovery order.
"""

from dataclasses import dataclass
from functools import reduce
from typing import List, Optional

import numpy as np
from loguru import logger

from chromatag.config import config, Config
from chromatag.services.imaging import (
    ImageSource, PixelBuffer, decoded_pixels, open_image, scale_to_height
)
from chromatag.services.observability import performance_monitor
from chromatag.utils.ids import generate_analysis_id
from chromatag.utils.logging import get_logger

from .space import RGB


@dataclass
class ColorCluster:
    """A representative color and the number of sampled pixels merged into it."""
    color: RGB
    count: int = 1


@dataclass(frozen=True)
class SampleRegion:
    """Inclusive square window [x, x+size] × [y, y+size]."""
    name: str
    x: int
    y: int
    size: int

    @property
    def pixel_count(self) -> int:
        return (self.size + 1) ** 2


def sample_regions(width: int, height: int, cluster_size: int,
                   edge_offset: int = 100) -> List[SampleRegion]:
    """
    The six fixed sampling windows for an image, in sampling order.

    Anchors use floor division; the right and bottom anchors sit
    `edge_offset` pixels in from the image edge.
    """
    left, center, right = width // 4, width // 2, width - edge_offset
    top, bottom = height // 4, height - edge_offset

    return [
        SampleRegion("top_left", left, top, cluster_size),
        SampleRegion("top_center", center, top, cluster_size),
        SampleRegion("top_right", right, top, cluster_size),
        SampleRegion("bottom_left", left, bottom, cluster_size),
        SampleRegion("bottom_center", center, bottom, cluster_size),
        SampleRegion("bottom_right", right, bottom, cluster_size),
    ]


def sample_region(clusters: List[ColorCluster], pixels_rgb: np.ndarray,
                  divergence_threshold: float) -> List[ColorCluster]:
    """
    Fold one window's pixels into a cluster list.

    Args:
        clusters: Clusters discovered so far (left untouched)
        pixels_rgb: Float array (N, 3) in sampling order
        divergence_threshold: Merge when divergence is strictly below this

    Returns:
        New cluster list with updated counts and any new clusters appended
    """
    colors = [c.color for c in clusters]
    counts = [c.count for c in clusters]
    centers = np.array([[c.r, c.g, c.b] for c in colors], dtype=np.float64).reshape(-1, 3)

    for px in pixels_rgb:
        if counts:
            # Same arithmetic as space.divergence, evaluated against every cluster
            divergences = np.abs(centers - px).sum(axis=1) / 3.0
            matches = np.flatnonzero(divergences < divergence_threshold)
            if matches.size:
                counts[matches[0]] += 1
                continue

        centers = np.vstack([centers, px])
        colors.append(RGB(float(px[0]), float(px[1]), float(px[2])))
        counts.append(1)

    return [ColorCluster(color, count) for color, count in zip(colors, counts)]


def rank_clusters(clusters: List[ColorCluster]) -> List[ColorCluster]:
    """Sort by count descending; stable, so ties keep discovery order."""
    return sorted(clusters, key=lambda c: -c.count)


@dataclass(frozen=True)
class DominantColorAnalyzer:
    """
    Stateless dominant color analyzer.

    Args:
        cluster_size: Window side minus one; each window holds (cluster_size+1)² pixels
        divergence_threshold: Maximum (exclusive) divergence for merging into a cluster
        edge_offset: Distance of right/bottom anchors from the image edge
    """
    cluster_size: int = config.CLUSTER_SIZE
    divergence_threshold: float = config.DIVERGENCE_THRESHOLD
    edge_offset: int = config.EDGE_OFFSET

    def __post_init__(self):
        if not Config.validate_cluster_size(self.cluster_size):
            raise ValueError(f"Invalid cluster_size: {self.cluster_size}")
        if not Config.validate_divergence_threshold(self.divergence_threshold):
            raise ValueError(f"Invalid divergence_threshold: {self.divergence_threshold}")
        if not Config.validate_edge_offset(self.edge_offset):
            raise ValueError(f"Invalid edge_offset: {self.edge_offset}")

    @classmethod
    def from_config(cls, cfg: Config = config) -> "DominantColorAnalyzer":
        """Build an analyzer from environment-driven settings."""
        return cls(
            cluster_size=cfg.CLUSTER_SIZE,
            divergence_threshold=cfg.DIVERGENCE_THRESHOLD,
            edge_offset=cfg.EDGE_OFFSET
        )

    def regions(self, width: int, height: int) -> List[SampleRegion]:
        return sample_regions(width, height, self.cluster_size, self.edge_offset)

    def samples_per_analysis(self) -> int:
        """Total pixels sampled from a large enough image."""
        return 6 * (self.cluster_size + 1) ** 2

    def analyze(self, buffer: Optional[PixelBuffer]) -> List[ColorCluster]:
        """
        Extract dominant colors from a pixel buffer.

        Args:
            buffer: Decoded ARGB buffer, borrowed for the duration of the call

        Returns:
            Clusters sorted by count descending; empty when there is no image

        Raises:
            OutOfBoundsError: If any sampling window falls outside the buffer
        """
        if buffer is None or buffer.is_empty:
            logger.debug("No image to analyze, returning no clusters")
            return []

        log = get_logger()
        analysis_id = generate_analysis_id()
        regions = self.regions(buffer.width, buffer.height)

        log.info(f"Starting dominant color analysis {analysis_id}",
                 extra={"analysis_id": analysis_id,
                        "image": f"{buffer.width}×{buffer.height}",
                        "cluster_size": self.cluster_size,
                        "threshold": self.divergence_threshold})

        with performance_monitor("dominant_color_analysis",
                                 enabled=config.METRICS_ENABLED) as tracker:
            # Validate every window before reading any pixel
            for region in regions:
                buffer.check_window(region.x, region.y, region.size)

            clusters = reduce(
                lambda acc, region: sample_region(
                    acc,
                    buffer.window_rgb(region.x, region.y, region.size),
                    self.divergence_threshold
                ),
                regions,
                []
            )
            ranked = rank_clusters(clusters)

            tracker.pixel_count = sum(region.pixel_count for region in regions)
            tracker.cluster_count = len(ranked)

        log.info(f"Analysis {analysis_id} completed in {tracker.duration_ms:.1f}ms "
                 f"({len(ranked)} clusters from {tracker.pixel_count} pixels)",
                 extra={"analysis_id": analysis_id})
        return ranked


def analyze(buffer: Optional[PixelBuffer], cluster_size: int = None,
            divergence_threshold: float = None) -> List[ColorCluster]:
    """Analyze a buffer with configured defaults, optionally overridden."""
    analyzer = DominantColorAnalyzer(
        cluster_size=config.CLUSTER_SIZE if cluster_size is None else cluster_size,
        divergence_threshold=(config.DIVERGENCE_THRESHOLD if divergence_threshold is None
                              else divergence_threshold),
        edge_offset=config.EDGE_OFFSET
    )
    return analyzer.analyze(buffer)


def analyze_image(source: Optional[ImageSource],
                  analyzer: Optional[DominantColorAnalyzer] = None,
                  scale_height: Optional[int] = None) -> List[ColorCluster]:
    """
    Decode an image, analyze it and release the decoded buffer.

    Args:
        source: Pillow image or encoded image bytes; None yields no clusters
        analyzer: Analyzer to use (default: built from config)
        scale_height: Rescale to this height before decoding
            (default: config.SCALE_TO_HEIGHT, None disables)

    Raises:
        DecodeError: If the image cannot be decoded
        OutOfBoundsError: If the image is too small for the sampling windows
    """
    if source is None:
        return []

    analyzer = analyzer or DominantColorAnalyzer.from_config()
    if scale_height is None:
        scale_height = config.SCALE_TO_HEIGHT

    if scale_height and not Config.validate_scale_height(scale_height):
        raise ValueError(f"Invalid scale_height: {scale_height}")

    image = open_image(source)
    if scale_height:
        image = scale_to_height(image, scale_height)

    with decoded_pixels(image) as buffer:
        return analyzer.analyze(buffer)
