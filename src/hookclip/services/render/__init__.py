"""Render backend interface and adapters."""

from hookclip.services.render.base import EventKind, EventSink, IRenderBackend, RenderEvent

__all__ = ["EventKind", "EventSink", "IRenderBackend", "RenderEvent"]
