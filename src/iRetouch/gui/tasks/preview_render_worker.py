"""Worker that executes preview renders on a background thread."""

from __future__ import annotations

import itertools
import threading

from PySide6.QtCore import QObject, QRunnable, Signal

from ...core.adjustments import AdjustmentState
from ...core.buffer import PixelBuffer
from ...core.filters import FilterPreset, run_pipeline
from ...errors import IRetouchError


class PreviewJobTracker:
    """Hand out increasing job ids so only the newest render is displayed.

    Slider drags queue renders faster than they finish; a result whose id is
    no longer the latest belongs to a superseded parameter set and is dropped.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def next_job(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, job_id: int) -> bool:
        with self._lock:
            return job_id == self._latest


class PreviewRenderSignals(QObject):
    """Signals emitted by :class:`PreviewRenderWorker`."""

    finished = Signal(object, int)
    """Emitted with the rendered :class:`PixelBuffer` and the job identifier."""

    failed = Signal(str, int)
    """Emitted with an error message and the job identifier."""


class PreviewRenderWorker(QRunnable):
    """Run :func:`run_pipeline` for one parameter set."""

    def __init__(
        self,
        source: PixelBuffer,
        state: AdjustmentState,
        active_filter: FilterPreset | str,
        job_id: int,
    ) -> None:
        super().__init__()
        self._source = source
        self._state = state
        self._active_filter = active_filter
        self._job_id = job_id
        self.signals = PreviewRenderSignals()

    @property
    def job_id(self) -> int:
        return self._job_id

    def run(self) -> None:  # type: ignore[override]
        """Render the derived buffer and notify listeners when done."""

        try:
            derived = run_pipeline(self._source, self._state, self._active_filter)
        except IRetouchError as exc:
            self.signals.failed.emit(str(exc), self._job_id)
            return
        self.signals.finished.emit(derived, self._job_id)


__all__ = ["PreviewJobTracker", "PreviewRenderSignals", "PreviewRenderWorker"]
