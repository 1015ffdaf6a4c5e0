"""
chromatag Schemas
Pydantic models for serializing dominant color analysis results.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from chromatag.services.colors.classification import BrightnessCategory, ColorName
from chromatag.services.colors.tagging import TaggedCluster


class HSLEntry(BaseModel):
    """HSL triple with hue in degrees."""
    hue: float = Field(..., ge=0.0, lt=360.0, description="Hue in degrees [0, 360)")
    saturation: float = Field(..., ge=0.0, le=1.0, description="Saturation [0, 1]")
    luminance: float = Field(..., ge=0.0, le=1.0, description="Luminance [0, 1]")


class ClusterReport(BaseModel):
    """Single dominant color cluster with classification tags."""
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex color code in format #RRGGBB"
    )
    rgb: List[float] = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Representative color as [R, G, B] in 0-255"
    )
    count: int = Field(..., ge=1, description="Sampled pixels merged into this cluster")
    ratio: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Share of all sampled pixels (0.0-1.0)"
    )
    hsl: HSLEntry = Field(..., description="HSL representation")
    color_name: Optional[ColorName] = Field(None, description="Named hue bucket")
    brightness: BrightnessCategory = Field(..., description="Brightness category")
    brightness_rank: int = Field(..., ge=1, le=3, description="1 = bright, 3 = dark")
    temperature_k: Optional[float] = Field(
        None,
        description="Correlated color temperature; null when unavailable"
    )
    deviation: float = Field(..., ge=0.0, description="Standard deviation of R, G, B")

    @classmethod
    def from_tagged(cls, tagged: TaggedCluster) -> "ClusterReport":
        return cls(
            hex=tagged.hex,
            rgb=[tagged.color.r, tagged.color.g, tagged.color.b],
            count=tagged.count,
            ratio=tagged.ratio,
            hsl=HSLEntry(
                hue=tagged.hsl.hue,
                saturation=tagged.hsl.saturation,
                luminance=tagged.hsl.luminance
            ),
            color_name=tagged.name,
            brightness=tagged.brightness,
            brightness_rank=tagged.brightness.rank,
            temperature_k=tagged.temperature,
            deviation=tagged.deviation
        )


class AnalysisSettings(BaseModel):
    """Parameters an analysis was run with."""
    cluster_size: int = Field(..., ge=0, description="Sampling window side minus one")
    divergence_threshold: float = Field(..., ge=0.0, description="Cluster merge threshold")


class AnalysisReport(BaseModel):
    """Ranked dominant colors of one image."""
    clusters: List[ClusterReport] = Field(
        default_factory=list,
        description="Clusters sorted by count, descending"
    )
    sampled_pixels: int = Field(..., ge=0, description="Pixels sampled across all regions")
    settings: AnalysisSettings = Field(..., description="Analyzer settings used")

    @classmethod
    def from_tagged(cls, tagged: List[TaggedCluster], cluster_size: int,
                    divergence_threshold: float) -> "AnalysisReport":
        return cls(
            clusters=[ClusterReport.from_tagged(t) for t in tagged],
            sampled_pixels=sum(t.count for t in tagged),
            settings=AnalysisSettings(
                cluster_size=cluster_size,
                divergence_threshold=divergence_threshold
            )
        )
