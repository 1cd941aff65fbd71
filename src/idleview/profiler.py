from __future__ import annotations
import time
from contextlib import contextmanager

from .logging import get_logger


class FrameProfiler:
    """
    Per-section timings (exponential moving average) plus a frame counter that
    reports FPS once every `log_interval` seconds.
    """

    def __init__(self, ema_alpha: float = 0.1, log_interval: float = 1.0):
        self.ema_alpha = ema_alpha
        self.log_interval = log_interval
        self._ema = {}
        self._frames = 0
        self._elapsed = 0.0
        self.logger = get_logger(__name__)

    @contextmanager
    def record(self, name: str):
        start_t = time.perf_counter()
        try:
            yield
        finally:
            dt = time.perf_counter() - start_t
            prev = self._ema.get(name)
            self._ema[name] = (
                dt if prev is None else self.ema_alpha * dt + (1.0 - self.ema_alpha) * prev
            )

    def get_timings(self) -> dict:
        return self._ema.copy()

    def end_frame(self, dt: float) -> float | None:
        """Count a frame; returns the FPS when a report was logged, else None."""
        self._frames += 1
        self._elapsed += dt
        if self._elapsed < self.log_interval:
            return None
        fps = self._frames / self._elapsed
        frame_ms = self._elapsed / self._frames * 1000.0
        sections = " | ".join(f"{k}: {v*1000:.2f}ms" for k, v in sorted(self._ema.items()))
        self.logger.info(f"FPS: {fps:.2f} | frame_t: {frame_ms:.2f}ms | {sections}")
        self._frames = 0
        self._elapsed = 0.0
        return fps
