from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Tuple, Union
import numpy as np


@dataclass
class LumaFrame:
    """Single-channel frame: raw bytes plus the plane layout needed to read them."""
    data: Union[bytes, bytearray, memoryview, np.ndarray]
    width: int
    height: int
    row_stride: int
    pixel_stride: int = 1

    @classmethod
    def from_gray(cls, gray: np.ndarray) -> 'LumaFrame':
        if gray.ndim != 2:
            raise ValueError(f'expected a 2-D grayscale array, got shape {gray.shape}')
        gray = np.ascontiguousarray(gray, dtype=np.uint8)
        h, w = gray.shape
        return cls(gray.reshape(-1), w, h, w, 1)


@dataclass
class Blob:
    pixel_count: int
    cx: float
    cy: float


@dataclass
class FitResult:
    cx: float
    cy: float
    radius: float
    residual_ratio: float
    arc_degrees: float
    radius_ok: bool
    fit_ok: bool
    arc_ok: bool

    @property
    def detected(self) -> bool:
        return self.radius_ok and self.fit_ok and self.arc_ok


class PathAccumulator:
    """Bounded, time-ordered gesture path in square-normalised coordinates.

    Points are divided by the shorter side of the downsampled frame so a
    physical circle stays a circle whatever the aspect ratio. A point that
    jumps further than ``max_jump_frac`` from the last accepted one is dropped
    without touching the miss counter; ``max_miss_frames`` consecutive misses
    clear the path.
    """

    def __init__(self, size: int, *, max_jump_frac: float, max_miss_frames: int):
        self.size = size
        self.max_jump_frac = max_jump_frac
        self.max_miss_frames = max_miss_frames
        self._points: Deque[Tuple[float, float]] = deque(maxlen=size)
        self.miss_count = 0

    def __len__(self) -> int:
        return len(self._points)

    @property
    def last(self) -> Optional[Tuple[float, float]]:
        return self._points[-1] if self._points else None

    def points(self) -> np.ndarray:
        if not self._points:
            return np.empty((0, 2), dtype=np.float64)
        return np.array(self._points, dtype=np.float64)

    def add(self, x: float, y: float, short_side: float) -> bool:
        """Add a downsampled-pixel centroid; returns False if the jump filter drops it."""
        nx, ny = x / short_side, y / short_side
        if self._points:
            lx, ly = self._points[-1]
            if (nx - lx) ** 2 + (ny - ly) ** 2 > self.max_jump_frac ** 2:
                return False
        self._points.append((nx, ny))
        self.miss_count = 0
        return True

    def miss(self) -> bool:
        """Register a frame without a usable point; returns True if the path decayed."""
        self.miss_count += 1
        if self.miss_count >= self.max_miss_frames:
            self._points.clear()
            self.miss_count = 0
            return True
        return False

    def clear(self):
        self._points.clear()
        self.miss_count = 0
