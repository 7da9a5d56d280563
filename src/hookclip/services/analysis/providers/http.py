"""HTTP analysis provider."""

import logging
from typing import Any

import httpx
import pydantic

from hookclip.errors import AnalysisError, ValidationError
from hookclip.models.analysis import AnalysisResult
from hookclip.models.moment import Moment
from hookclip.models.video import VideoReference

logger = logging.getLogger(__name__)


class HttpAnalyzer:
    """Client for a network analysis service.

    Sends ``POST {base_url}/analyze`` with the video reference and expects
    a JSON body with ``title``, ``channel``, ``duration``, ``overall_score``
    (or ``score``), ``hooks`` and ``moments`` (or ``viral_moments``).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "http"

    async def analyze(self, video: VideoReference) -> AnalysisResult:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/analyze",
                    json={"id": video.id, "url": video.url},
                )
            except httpx.TimeoutException as e:
                raise AnalysisError(f"Analysis service timed out for {video.id}") from e
            except httpx.RequestError as e:
                raise AnalysisError(f"Failed to reach analysis service: {e}") from e

        if response.status_code != 200:
            raise AnalysisError(
                f"Analysis service returned {response.status_code}: {response.text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise AnalysisError("Analysis service returned invalid JSON") from e

        return parse_analysis(video, data)


def parse_analysis(video: VideoReference, data: Any) -> AnalysisResult:
    """Convert an analysis service payload into an ``AnalysisResult``.

    Raises:
        AnalysisError: If the payload is malformed or violates the model.
    """
    if not isinstance(data, dict):
        raise AnalysisError("Analysis payload must be a JSON object")

    raw_moments = data.get("moments", data.get("viral_moments", []))
    overall = data.get("overall_score", data.get("score"))
    try:
        moments = [
            Moment(
                label=m.get("label", ""),
                start=m["start"],
                end=m["end"],
                score=m["score"],
                tags=m.get("tags", []),
            )
            for m in raw_moments
        ]
        return AnalysisResult(
            id=video.id,
            video=video,
            title=str(data.get("title", "")),
            channel=str(data.get("channel", "")),
            duration=str(data.get("duration", "")),
            overall_score=overall,
            hooks=[str(h) for h in data.get("hooks", [])],
            moments=moments,
        )
    except (ValidationError, pydantic.ValidationError, KeyError, TypeError, AttributeError) as e:
        raise AnalysisError(f"Malformed analysis payload for {video.id}: {e}") from e
