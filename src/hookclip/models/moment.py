"""Moment data model."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from hookclip.errors import ValidationError
from hookclip.scoring import ScoreBand, normalize_tags, score_band, validate_score


class Moment(BaseModel):
    """A scored, tagged time range proposed as a shareable clip.

    ``score`` and ``tags`` are fixed at production time; the model is
    frozen so downstream consumers can only read them.
    """

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Short human-readable description")
    start: float = Field(..., description="Start offset in seconds")
    end: float = Field(..., description="End offset in seconds")
    score: int = Field(..., description="Hook strength, 0-100")
    tags: frozenset[str] = Field(default_factory=frozenset, description="Lowercase tags")

    @field_validator("score", mode="before")
    @classmethod
    def check_score(cls, value: Any) -> int:
        return validate_score(value)

    @field_validator("tags", mode="before")
    @classmethod
    def check_tags(cls, value: Any) -> frozenset[str]:
        return normalize_tags(value)

    @model_validator(mode="after")
    def validate_range(self) -> "Moment":
        """Ensure the range is finite, non-negative and end is after start."""
        if not (math.isfinite(self.start) and math.isfinite(self.end)):
            raise ValidationError(
                f"start and end must be finite (start={self.start}, end={self.end})"
            )
        if self.start < 0:
            raise ValidationError(f"start must be non-negative, got {self.start}")
        if self.end <= self.start:
            raise ValidationError(
                f"end must be greater than start (start={self.start}, end={self.end})"
            )
        return self

    @field_serializer("tags")
    def serialize_tags(self, tags: frozenset[str]) -> list[str]:
        return sorted(tags)

    @property
    def duration(self) -> float:
        """Length of the range in seconds."""
        return self.end - self.start

    @property
    def band(self) -> ScoreBand:
        return score_band(self.score)


def format_timestamp(seconds: float) -> str:
    """Format an offset as ``MM:SS`` (minutes are not wrapped into hours)."""
    total = int(seconds)
    return f"{total // 60:02d}:{total % 60:02d}"
