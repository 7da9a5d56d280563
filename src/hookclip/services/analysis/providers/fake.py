"""Deterministic analysis provider for tests and local demos."""

import asyncio

from hookclip.errors import AnalysisError
from hookclip.models.analysis import AnalysisResult
from hookclip.models.moment import Moment
from hookclip.models.video import VideoReference

SAMPLE_HOOKS = (
    "Open with a surprising question",
    "Cut to an emotional reaction",
    "Show a short fact with strong visuals",
)

SAMPLE_MOMENTS = (
    Moment(label="Funny reaction", start=15, end=23, score=88, tags={"funny", "reaction"}),
    Moment(label="Shocking twist", start=75, end=85, score=82, tags={"twist", "surprise"}),
    Moment(label="Powerful quote", start=34, end=40, score=76, tags={"quote", "emotional"}),
    Moment(label="Sad scene", start=190, end=200, score=74, tags={"sad", "emotional"}),
)


class FakeAnalyzer:
    """Returns the same canned analysis for every video."""

    def __init__(
        self,
        overall_score: int = 78,
        moments: tuple[Moment, ...] = SAMPLE_MOMENTS,
        hooks: tuple[str, ...] = SAMPLE_HOOKS,
        delay_sec: float = 0.0,
        fail: bool = False,
    ) -> None:
        self.overall_score = overall_score
        self.moments = moments
        self.hooks = hooks
        self.delay_sec = delay_sec
        self.fail = fail
        self.calls: list[VideoReference] = []

    @property
    def name(self) -> str:
        return "fake"

    async def analyze(self, video: VideoReference) -> AnalysisResult:
        self.calls.append(video)
        if self.delay_sec:
            await asyncio.sleep(self.delay_sec)
        if self.fail:
            raise AnalysisError(f"Fake analyzer failed for {video.id}")
        return AnalysisResult(
            id=video.id,
            video=video,
            title="Sample video title (simulated)",
            channel="Sample Channel",
            duration="12:34",
            overall_score=self.overall_score,
            hooks=self.hooks,
            moments=self.moments,
        )
