"""Analysis provider implementations."""

from hookclip.services.analysis.providers.fake import FakeAnalyzer
from hookclip.services.analysis.providers.http import HttpAnalyzer

__all__ = ["FakeAnalyzer", "HttpAnalyzer"]
