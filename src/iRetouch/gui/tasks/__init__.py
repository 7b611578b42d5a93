"""Background tasks used by the Qt front-end."""

from __future__ import annotations

from .preview_render_worker import PreviewJobTracker, PreviewRenderSignals, PreviewRenderWorker

__all__ = ["PreviewJobTracker", "PreviewRenderSignals", "PreviewRenderWorker"]
