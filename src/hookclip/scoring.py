"""Hook score bands and tag normalization.

Scores are produced by the external analysis collaborator; this module only
enforces the contract on what it returns: integer percentages explained by a
fixed set of bands, and tags that are lowercase before they are stored or
compared.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from hookclip.errors import ValidationError

MIN_SCORE = 0
MAX_SCORE = 100


class ScoreLevel(str, Enum):
    """Named hook strength level."""

    VERY_HIGH = "very_high"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ScoreBand:
    """A score range with its user-facing explanation."""

    level: ScoreLevel
    min_score: int
    explanation: str


# Evaluated top to bottom, first match wins.
SCORE_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(ScoreLevel.VERY_HIGH, 85, "Very high: fits a hook and has viral potential."),
    ScoreBand(ScoreLevel.HIGH, 70, "High: can go viral with good distribution."),
    ScoreBand(ScoreLevel.MEDIUM, 50, "Medium: needs strong editing or a stronger hook."),
    ScoreBand(ScoreLevel.LOW, MIN_SCORE, "Low: needs more material or narration."),
)


def validate_score(score: int, field: str = "score") -> int:
    """Return ``score`` if it is an integer percentage, else raise.

    Raises:
        ValidationError: If the value is not an int in [0, 100].
    """
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError(f"{field} must be an integer, got {score!r}")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError(
            f"{field} must be between {MIN_SCORE} and {MAX_SCORE}, got {score}"
        )
    return score


def score_band(score: int) -> ScoreBand:
    """Return the band that explains ``score``."""
    validate_score(score)
    for band in SCORE_BANDS:
        if score >= band.min_score:
            return band
    raise AssertionError("unreachable: lowest band starts at MIN_SCORE")


def explain_score(score: int) -> str:
    """Return the user-facing explanation for ``score``."""
    return score_band(score).explanation


def normalize_tag(tag: str) -> str:
    return tag.strip().lower()


def normalize_tags(tags: Iterable[str] | None) -> frozenset[str]:
    """Lowercase, strip and deduplicate tags, dropping empty ones.

    Raises:
        ValidationError: If ``tags`` is a bare string or holds non-strings.
    """
    if tags is None:
        return frozenset()
    if isinstance(tags, str):
        raise ValidationError("tags must be a collection of strings, not a string")
    normalized: set[str] = set()
    for tag in tags:
        if not isinstance(tag, str):
            raise ValidationError(f"tag must be a string, got {tag!r}")
        value = normalize_tag(tag)
        if value:
            normalized.add(value)
    return frozenset(normalized)
