"""Service layer for hookclip: external collaborators behind narrow interfaces."""

from hookclip.services.analysis.service import AnalysisService

__all__ = ["AnalysisService"]
