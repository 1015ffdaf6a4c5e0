"""
chromatag Colors Module

Provides color-space math, hue/brightness classification and the dominant
color analyzer used to tag garment images by color.
"""

__version__ = "1.0.0"
