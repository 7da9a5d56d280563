"""Tests for score bands and tag normalization."""

import pytest

from hookclip.errors import ValidationError
from hookclip.scoring import (
    SCORE_BANDS,
    ScoreLevel,
    explain_score,
    normalize_tags,
    score_band,
)


class TestScoreBand:
    @pytest.mark.parametrize(
        "score, level",
        [
            (100, ScoreLevel.VERY_HIGH),
            (85, ScoreLevel.VERY_HIGH),
            (84, ScoreLevel.HIGH),
            (70, ScoreLevel.HIGH),
            (69, ScoreLevel.MEDIUM),
            (50, ScoreLevel.MEDIUM),
            (49, ScoreLevel.LOW),
            (0, ScoreLevel.LOW),
        ],
    )
    def test_boundaries_inclusive(self, score: int, level: ScoreLevel) -> None:
        assert score_band(score).level is level

    def test_exactly_one_band_per_score(self) -> None:
        for score in range(0, 101):
            hits = [b for b in SCORE_BANDS if score >= b.min_score]
            # first match wins; the chosen band is the highest one that applies
            assert score_band(score) is hits[0]

    def test_explain(self) -> None:
        assert explain_score(88).startswith("Very high")
        assert explain_score(10).startswith("Low")

    @pytest.mark.parametrize("score", [-1, 101])
    def test_out_of_range(self, score: int) -> None:
        with pytest.raises(ValidationError):
            score_band(score)


class TestNormalizeTags:
    def test_lowercases_and_dedupes(self) -> None:
        assert normalize_tags(["Sad", "sad ", "EMOTIONAL"]) == frozenset({"sad", "emotional"})

    def test_none(self) -> None:
        assert normalize_tags(None) == frozenset()

    def test_rejects_bare_string(self) -> None:
        with pytest.raises(ValidationError):
            normalize_tags("funny")

    def test_rejects_non_string_items(self) -> None:
        with pytest.raises(ValidationError):
            normalize_tags(["ok", 3])  # type: ignore[list-item]
