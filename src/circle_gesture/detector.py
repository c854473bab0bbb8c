from __future__ import annotations
"""Circular gesture detector.

One instance owns all temporal state for a detection session: the previous
downsampled luma buffer, the gesture path with its miss counter, and the
diagnostics of the last successful fit. Calls must be serialised by the
caller; nothing here locks.

Per frame:
 1. Downsample the luma plane (unreadable frame -> miss).
 2. Difference against the previous buffer, keep the largest motion blob
    (no previous buffer, or no blob -> miss).
 3. Feed the blob centroid to the path (jump filter, decay on misses).
 4. With enough points, fit a circle and validate radius, residual and
    ordered sweep. Diagnostics are updated whenever a fit exists, even if
    the checks fail.
"""
from typing import Any, Dict, Optional, Tuple
import numpy as np
from .config import GestureConfig
from .fitting import evaluate_path
from .logging_utils import enabled, log
from .models import Blob, FitResult, LumaFrame, PathAccumulator
from .processing import FrameUnreadable, downsample_luma, largest_motion_blob


class CircleGestureDetector:
    def __init__(self, cfg: Optional[GestureConfig] = None):
        self.cfg = cfg or GestureConfig()
        self.path = PathAccumulator(self.cfg.path_buffer_size,
                                    max_jump_frac=self.cfg.max_jump_frac,
                                    max_miss_frames=self.cfg.max_miss_frames)
        self._prev: Optional[np.ndarray] = None
        self._reset_diagnostics()

    def _reset_diagnostics(self):
        self._center: Tuple[float, float] = (0.5, 0.5)
        self._radius = 0.0
        self._arc_degrees = 0.0
        self._residual_ratio = 0.0
        self._current_point: Optional[Tuple[float, float]] = None
        self._last_fit: Optional[FitResult] = None

    def reset(self):
        self.path.clear()
        self._prev = None
        self._reset_diagnostics()

    # ---------- diagnostics ----------
    @property
    def center(self) -> Tuple[float, float]:
        return self._center

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def arc_degrees(self) -> float:
        return self._arc_degrees

    @property
    def residual_ratio(self) -> float:
        return self._residual_ratio

    @property
    def path_length(self) -> int:
        return len(self.path)

    @property
    def current_point(self) -> Optional[Tuple[float, float]]:
        """Raw blob centroid of the latest frame, in downsampled pixels."""
        return self._current_point

    @property
    def last_fit(self) -> Optional[FitResult]:
        return self._last_fit

    def diagnostics(self) -> Dict[str, Any]:
        return {
            'center': self._center,
            'radius': self._radius,
            'arc_degrees': self._arc_degrees,
            'residual_ratio': self._residual_ratio,
            'path_length': len(self.path),
            'current_point': self._current_point,
        }

    # ---------- processing ----------
    def process_frame(self, frame: LumaFrame) -> bool:
        try:
            luma = downsample_luma(frame, self.cfg.downsample)
        except FrameUnreadable as e:
            log(f'Unreadable frame treated as miss: {e}', 'debug', cfg_level=self.cfg.log_level)
            return self.process_blob(None)
        prev = self._prev
        self._prev = luma
        if prev is None:
            return self.process_blob(None)
        if prev.shape != luma.shape:
            log(f'Resolution changed {prev.shape[1]}x{prev.shape[0]} -> {luma.shape[1]}x{luma.shape[0]}; resetting',
                'debug', cfg_level=self.cfg.log_level)
            self.reset()
            self._prev = luma
            return self.process_blob(None)
        blob = largest_motion_blob(prev, luma, self.cfg.motion_thresh, self.cfg.min_blob_px)
        return self.process_blob(blob, luma.shape)

    def process_blob(self, blob: Optional[Blob], shape: Optional[Tuple[int, int]] = None) -> bool:
        """Advance the path with one frame's blob (None = miss) and evaluate.

        ``shape`` is the (height, width) of the downsampled buffer the blob
        was found in; required when ``blob`` is given.
        """
        if blob is None:
            self._current_point = None
            if self.path.miss():
                log('Path decayed after sustained misses', 'debug', cfg_level=self.cfg.log_level)
        else:
            if shape is None:
                raise ValueError('shape is required with a blob')
            self._current_point = (blob.cx, blob.cy)
            short_side = min(shape)
            if not self.path.add(blob.cx, blob.cy, short_side) and enabled('debug', self.cfg.log_level):
                log(f'Tracking glitch: dropped jump to ({blob.cx:.1f}, {blob.cy:.1f})', 'debug', cfg_level=self.cfg.log_level)
        return self._evaluate()

    def _evaluate(self) -> bool:
        if len(self.path) < self.cfg.min_fit_points:
            return False
        fit = evaluate_path(self.path.points(), self.cfg)
        if fit is None:
            return False
        self._last_fit = fit
        self._center = (fit.cx, fit.cy)
        self._radius = fit.radius
        self._arc_degrees = fit.arc_degrees
        self._residual_ratio = fit.residual_ratio
        return fit.detected
