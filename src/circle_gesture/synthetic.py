from __future__ import annotations
"""Synthetic luminance frames of a dot tracing a circle.

Frame differencing sees both where a moving object left and where it
arrived. To keep each difference down to the dot's new position, the dot
leaves a trail for the rest of its revolution; every revolution starts from
a blank canvas. Positions are given in square-normalised units (fractions
of the shorter frame side).
"""
import itertools
import math
from typing import Iterator, Optional, Tuple
import numpy as np


def draw_dot(canvas: np.ndarray, x: float, y: float, radius: float, value: int = 220) -> None:
    h, w = canvas.shape
    yy, xx = np.ogrid[:h, :w]
    canvas[(xx - x) ** 2 + (yy - y) ** 2 <= radius * radius] = value


def circle_trace_frames(width: int, height: int, *, center: Tuple[float, float] = (0.5, 0.5), radius: float = 0.25,
                        step_deg: float = 18.0, dot_radius_px: float = 20.0, revolutions: Optional[int] = 1,
                        background: int = 30, clockwise: bool = False,
                        max_frames: Optional[int] = None) -> Iterator[np.ndarray]:
    short = min(width, height)
    steps = max(1, int(round(360.0 / step_deg)))
    sign = -1.0 if clockwise else 1.0
    emitted = 0
    # revolutions=None runs forever
    for _ in (range(revolutions) if revolutions is not None else itertools.count()):
        canvas = np.full((height, width), background, dtype=np.uint8)
        for k in range(steps + 1):
            if max_frames is not None and emitted >= max_frames:
                return
            if k > 0:
                theta = math.radians(sign * (k - 1) * step_deg)
                x = (center[0] + radius * math.cos(theta)) * short
                y = (center[1] + radius * math.sin(theta)) * short
                draw_dot(canvas, x, y, dot_radius_px)
            yield canvas.copy()
            emitted += 1
