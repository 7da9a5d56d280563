"""Base interface for analysis providers."""

from typing import Protocol

from hookclip.models.analysis import AnalysisResult
from hookclip.models.video import VideoReference


class IAnalyzer(Protocol):
    """Protocol for the download + ML scoring collaborator.

    One call yields one complete ``AnalysisResult`` or raises; there are
    no partial results.
    """

    async def analyze(self, video: VideoReference) -> AnalysisResult:
        """Analyze a video and propose scored moments.

        Args:
            video: Resolved video reference.

        Returns:
            AnalysisResult whose id is bound to ``video``.

        Raises:
            AnalysisError: If the collaborator fails.
        """
        ...

    @property
    def name(self) -> str:
        """Provider name identifier."""
        ...
