"""Data models for hookclip."""

from hookclip.models.analysis import AnalysisResult
from hookclip.models.moment import Moment, format_timestamp
from hookclip.models.video import VideoReference, extract_youtube_id

__all__ = [
    "AnalysisResult",
    "Moment",
    "VideoReference",
    "extract_youtube_id",
    "format_timestamp",
]
