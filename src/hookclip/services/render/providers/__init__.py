"""Render backend implementations."""

from hookclip.services.render.providers.fake import FakeRenderBackend
from hookclip.services.render.providers.http import HttpRenderBackend

__all__ = ["FakeRenderBackend", "HttpRenderBackend"]
