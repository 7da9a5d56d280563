"""Moment search."""

from __future__ import annotations

from collections.abc import Sequence

from hookclip.models.moment import Moment


def matches(moment: Moment, needle: str) -> bool:
    """Return True if ``needle`` (already lowercased) hits the label or a tag."""
    if needle in moment.label.lower():
        return True
    return any(needle in tag for tag in moment.tags)


def search_moments(moments: Sequence[Moment], query: str | None) -> list[Moment]:
    """Filter moments by a free-text or tag query.

    A blank query returns every moment. Otherwise the trimmed, lowercased
    query must be a substring of the label or of one of the tags. The
    result is always a new list in the input order; nothing is re-ranked.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(moments)
    return [m for m in moments if matches(m, needle)]
