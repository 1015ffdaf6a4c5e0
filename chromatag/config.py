"""
chromatag Configuration
Manages environment variables and defaults for dominant color analysis.
"""
import os
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    value = os.environ.get(name)
    return int(value) if value else None


class Config:
    """Configuration class for chromatag services."""

    # Dominant color analyzer
    CLUSTER_SIZE: int = int(os.environ.get("CHROMATAG_CLUSTER_SIZE", "35"))
    DIVERGENCE_THRESHOLD: float = float(os.environ.get("CHROMATAG_DIVERGENCE_THRESHOLD", "35.0"))
    EDGE_OFFSET: int = int(os.environ.get("CHROMATAG_EDGE_OFFSET", "100"))

    # Image preparation
    SCALE_TO_HEIGHT: Optional[int] = _optional_int("CHROMATAG_SCALE_TO_HEIGHT")

    # Logging and metrics
    LOG_LEVEL: str = os.environ.get("CHROMATAG_LOG_LEVEL", "INFO")
    METRICS_ENABLED: bool = bool(int(os.environ.get("CHROMATAG_METRICS_ENABLED", "1")))

    @classmethod
    def validate_cluster_size(cls, cluster_size: int) -> bool:
        """Validate sampling window size."""
        return isinstance(cluster_size, int) and cluster_size >= 0

    @classmethod
    def validate_divergence_threshold(cls, threshold: float) -> bool:
        """Validate clustering threshold, expressed in 0-255 channel units."""
        return 0.0 < threshold <= 255.0

    @classmethod
    def validate_edge_offset(cls, offset: int) -> bool:
        """Validate distance of the right/bottom anchors from the image edge."""
        return isinstance(offset, int) and offset >= 0

    @classmethod
    def validate_scale_height(cls, height: int) -> bool:
        """Validate target height for pre-analysis rescaling."""
        return 1 <= height <= 8192


# Global config instance
config = Config()
