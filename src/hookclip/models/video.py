"""Video reference model."""

from __future__ import annotations

from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hookclip.errors import ValidationError

_YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com", "music.youtube.com"}
_SHORT_HOSTS = {"youtu.be", "www.youtu.be"}
_PATH_PREFIXES = ("shorts", "embed", "live")


class VideoReference(BaseModel):
    """Opaque video identifier plus the URL it was resolved from."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Source video identifier")
    url: str = Field(..., description="Source URL")

    @model_validator(mode="after")
    def validate_reference(self) -> "VideoReference":
        if not self.id.strip():
            raise ValidationError("video id must not be empty")
        if not self.url.strip():
            raise ValidationError("video url must not be empty")
        return self

    @classmethod
    def from_url(cls, url: str) -> "VideoReference":
        """Resolve a YouTube watch, shorts or youtu.be link.

        Raises:
            ValidationError: If the link is not a recognizable YouTube URL.
        """
        video_id = extract_youtube_id(url)
        if not video_id:
            raise ValidationError(f"Not a valid YouTube link: {url!r}")
        return cls(id=video_id, url=url.strip())


def extract_youtube_id(url: str) -> str | None:
    """Return the video id embedded in ``url``, or None."""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https"):
        return None

    host = (parsed.hostname or "").lower()
    parts = [p for p in parsed.path.split("/") if p]

    if host in _SHORT_HOSTS:
        return parts[0] if parts else None

    if host in _YOUTUBE_HOSTS:
        if parts and parts[0] == "watch":
            values = parse_qs(parsed.query).get("v")
            return values[0] if values and values[0] else None
        if len(parts) >= 2 and parts[0] in _PATH_PREFIXES:
            return parts[1]
    return None
