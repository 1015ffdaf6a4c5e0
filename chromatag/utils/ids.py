"""
chromatag Analysis ID Utilities
Generate unique analysis IDs for log correlation.
"""
import uuid
from datetime import datetime


def generate_analysis_id() -> str:
    """
    Generate a unique ID for one dominant color analysis.

    Returns:
        Unique analysis ID string
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M%S")
    short_uuid = str(uuid.uuid4())[:8]
    return f"dca-{timestamp}-{short_uuid}"
