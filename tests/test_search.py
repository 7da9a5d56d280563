"""Tests for moment search."""

import pytest

from hookclip.models.moment import Moment
from hookclip.search import search_moments


def _sample_moments() -> list[Moment]:
    return [
        Moment(label="Funny reaction", start=15, end=23, score=88, tags=["funny", "reaction"]),
        Moment(label="Shocking twist", start=75, end=85, score=82, tags=["twist", "surprise"]),
        Moment(label="Powerful quote", start=34, end=40, score=76, tags=["quote", "emotional"]),
        Moment(label="Sad scene", start=190, end=200, score=74, tags=["sad", "emotional"]),
    ]


class TestSearchMoments:
    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query_returns_everything_in_order(self, query: str | None) -> None:
        moments = _sample_moments()
        result = search_moments(moments, query)
        assert result == moments
        assert result is not moments

    def test_matches_tag(self) -> None:
        moments = _sample_moments()[:2]
        assert search_moments(moments, "funny") == [moments[0]]

    def test_no_match(self) -> None:
        assert search_moments(_sample_moments()[:2], "SAD") == []

    def test_case_insensitive_label_match(self) -> None:
        moments = _sample_moments()
        assert [m.label for m in search_moments(moments, "  SHOCKING ")] == ["Shocking twist"]

    def test_tag_substring_match(self) -> None:
        moments = _sample_moments()
        assert [m.label for m in search_moments(moments, "emot")] == ["Powerful quote", "Sad scene"]

    def test_preserves_input_order(self) -> None:
        moments = list(reversed(_sample_moments()))
        result = search_moments(moments, "e")
        assert result == [m for m in moments if m in result]

    def test_every_result_matches(self) -> None:
        moments = _sample_moments()
        for query in ["a", "re", "twist", "xyz", "Q"]:
            q = query.strip().lower()
            result = search_moments(moments, query)
            for m in result:
                assert q in m.label.lower() or any(q in t for t in m.tags)
            for m in moments:
                if m not in result:
                    assert q not in m.label.lower() and not any(q in t for t in m.tags)

    def test_idempotent(self) -> None:
        moments = _sample_moments()
        once = search_moments(moments, "emotional")
        assert search_moments(once, "emotional") == once

    def test_does_not_alias_source(self) -> None:
        moments = _sample_moments()
        result = search_moments(moments, "")
        result.clear()
        assert len(moments) == 4

    def test_accepts_tuple(self) -> None:
        moments = tuple(_sample_moments())
        assert search_moments(moments, "sad") == [moments[3]]
