"""Analysis result data model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hookclip.errors import ValidationError
from hookclip.models.moment import Moment
from hookclip.models.video import VideoReference
from hookclip.scoring import ScoreBand, score_band, validate_score


class AnalysisResult(BaseModel):
    """Immutable outcome of analyzing one video.

    ``moments`` keeps the ranking order produced by the analyzer and is
    never re-sorted. Both sequences are copied into tuples on
    construction, so later changes to the caller's lists have no effect.
    Re-running analysis produces a new result instead of mutating this one.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Analysis id, bound to the video reference")
    video: VideoReference = Field(..., description="Analyzed video")
    title: str = Field(default="", description="Video title (display only)")
    channel: str = Field(default="", description="Channel name (display only)")
    duration: str = Field(default="", description="Video duration (display only)")
    overall_score: int = Field(..., description="Whole-video hook score, 0-100")
    hooks: tuple[str, ...] = Field(default=(), description="Hook suggestions, by priority")
    moments: tuple[Moment, ...] = Field(default=(), description="Candidate moments, by rank")

    @field_validator("overall_score", mode="before")
    @classmethod
    def check_overall_score(cls, value: Any) -> int:
        return validate_score(value, field="overall_score")

    @model_validator(mode="after")
    def validate_id(self) -> "AnalysisResult":
        if not self.id.strip():
            raise ValidationError("analysis id must not be empty")
        return self

    @property
    def band(self) -> ScoreBand:
        return score_band(self.overall_score)

    @property
    def moment_count(self) -> int:
        return len(self.moments)
