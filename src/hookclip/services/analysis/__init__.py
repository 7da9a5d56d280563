"""Video analysis collaborator and the service that fronts it."""

from hookclip.services.analysis.base import IAnalyzer
from hookclip.services.analysis.service import AnalysisService

__all__ = ["AnalysisService", "IAnalyzer"]
