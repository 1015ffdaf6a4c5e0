"""
Tests for cluster tagging and report serialization.
"""
import pytest

from chromatag.schemas import AnalysisReport, ClusterReport
from chromatag.services.colors.analyzer import ColorCluster
from chromatag.services.colors.classification import BrightnessCategory, ColorName
from chromatag.services.colors.space import RGB
from chromatag.services.colors.tagging import dominant_color_name, tag_cluster, tag_clusters


@pytest.fixture
def ranked_clusters():
    return [
        ColorCluster(RGB(31.0, 78.0, 121.0), 6),
        ColorCluster(RGB(255.0, 0.0, 0.0), 3),
        ColorCluster(RGB(0.0, 0.0, 0.0), 1),
    ]


class TestTagClusters:
    """Test tagging ranked clusters"""

    def test_tags(self, ranked_clusters):
        """Test hex, name and brightness tags"""
        tagged = tag_clusters(ranked_clusters)

        assert [t.hex for t in tagged] == ["#1F4E79", "#FF0000", "#000000"]
        assert tagged[0].name == ColorName.BLUE
        assert tagged[0].brightness == BrightnessCategory.DARK
        assert tagged[1].name == ColorName.RED
        assert tagged[1].brightness == BrightnessCategory.LIGHT

    def test_ratios(self, ranked_clusters):
        """Test ratios are shares of the total count"""
        ratios = [t.ratio for t in tag_clusters(ranked_clusters)]
        assert ratios == pytest.approx([0.6, 0.3, 0.1])

    def test_limit_keeps_global_ratios(self, ranked_clusters):
        """Test limiting output keeps ratios over all clusters"""
        tagged = tag_clusters(ranked_clusters, limit=1)
        assert len(tagged) == 1
        assert tagged[0].ratio == pytest.approx(0.6)

    def test_unavailable_temperature(self, ranked_clusters):
        """Test undefined temperatures are None"""
        tagged = tag_clusters(ranked_clusters)
        assert tagged[2].temperature is None
        assert tagged[0].temperature is not None

    def test_zero_total(self):
        """Test zero total count gives zero ratio"""
        tagged = tag_cluster(ColorCluster(RGB(1.0, 2.0, 3.0), 1), total_count=0)
        assert tagged.ratio == 0.0

    def test_empty(self):
        """Test no clusters give no tags"""
        assert tag_clusters([]) == []

    def test_dominant_color_name(self, ranked_clusters):
        """Test name of the top ranked cluster"""
        assert dominant_color_name(ranked_clusters) == ColorName.BLUE
        assert dominant_color_name([]) is None


class TestReports:
    """Test pydantic report models"""

    def test_cluster_report(self, ranked_clusters):
        """Test cluster report fields from a tagged cluster"""
        report = ClusterReport.from_tagged(tag_clusters(ranked_clusters)[0])
        assert report.hex == "#1F4E79"
        assert report.rgb == [31.0, 78.0, 121.0]
        assert report.brightness_rank == 3
        assert report.color_name == ColorName.BLUE

    def test_analysis_report_serializes(self, ranked_clusters):
        """Test analysis report dumps to plain JSON types"""
        report = AnalysisReport.from_tagged(
            tag_clusters(ranked_clusters), cluster_size=35, divergence_threshold=35.0
        )
        data = report.model_dump(mode="json")

        assert data["sampled_pixels"] == 10
        assert data["settings"] == {"cluster_size": 35, "divergence_threshold": 35.0}
        assert data["clusters"][0]["color_name"] == "blue"
        assert data["clusters"][2]["temperature_k"] is None
        assert data["clusters"][1]["brightness"] == "light"
