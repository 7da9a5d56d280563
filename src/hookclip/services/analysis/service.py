"""Analysis orchestration service."""

import asyncio
import logging
from collections.abc import Sequence

from hookclip.errors import AnalysisError, NotFoundError
from hookclip.models.analysis import AnalysisResult
from hookclip.models.moment import Moment
from hookclip.models.video import VideoReference
from hookclip.search import search_moments
from hookclip.services.analysis.base import IAnalyzer

logger = logging.getLogger(__name__)


class AnalysisService:
    """Runs the analysis collaborator and keeps the latest result per video.

    Results are immutable; analyzing the same video again replaces the
    stored result as a whole.
    """

    def __init__(self, analyzer: IAnalyzer, timeout: float = 120.0) -> None:
        self._analyzer = analyzer
        self._timeout = timeout
        self._results: dict[str, AnalysisResult] = {}

    async def analyze(self, url: str) -> AnalysisResult:
        """Resolve ``url`` and analyze the video it points to.

        Raises:
            ValidationError: If ``url`` is not a recognizable video link.
            AnalysisError: If the collaborator fails or times out.
        """
        return await self.analyze_reference(VideoReference.from_url(url))

    async def analyze_reference(self, video: VideoReference) -> AnalysisResult:
        logger.info("Analyzing video %s with provider '%s'", video.id, self._analyzer.name)
        try:
            result = await asyncio.wait_for(self._analyzer.analyze(video), self._timeout)
        except asyncio.TimeoutError as e:
            logger.warning("Analysis of %s timed out after %.1fs", video.id, self._timeout)
            raise AnalysisError(
                f"Analysis of {video.id} timed out after {self._timeout:.1f}s"
            ) from e
        except AnalysisError:
            logger.warning("Analysis of %s failed", video.id)
            raise
        except Exception as e:
            logger.exception("Analysis provider crashed for %s", video.id)
            raise AnalysisError(f"Analysis of {video.id} failed: {e}") from e

        self._results[result.id] = result
        logger.info(
            "Analysis %s: score=%d, %d moment(s), %d hook(s)",
            result.id,
            result.overall_score,
            result.moment_count,
            len(result.hooks),
        )
        return result

    def get(self, analysis_id: str) -> AnalysisResult:
        """Return a stored analysis.

        Raises:
            NotFoundError: If no analysis exists for ``analysis_id``.
        """
        result = self._results.get(analysis_id)
        if result is None:
            raise NotFoundError(f"Analysis not found: {analysis_id}")
        return result

    def search_moments(self, analysis_id: str, query: str | None) -> list[Moment]:
        """Filter a stored analysis's moments by free text or tag."""
        moments: Sequence[Moment] = self.get(analysis_id).moments
        return search_moments(moments, query)
