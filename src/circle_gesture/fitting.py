from __future__ import annotations
"""Circle fitting and arc validation for a gesture path.

The fit is the algebraic (Kasa) least-squares solution of
    x^2 + y^2 + D*x + E*y + F = 0
which reduces to a 3x3 linear system. A good fit alone is not enough: a cloud
of points scattered around a centre in random order fits a circle just as
well as a real trace. The ordered sweep check walks the path in time order
and accumulates the signed angle around the fitted centre; back-and-forth
motion cancels out while a one-way loop approaches 360 degrees.
"""
import math
from typing import Optional, Sequence, Tuple
import numpy as np
from .config import GestureConfig
from .models import FitResult

PIVOT_EPS = 1e-12


def solve_3x3(a: Sequence[Sequence[float]], b: Sequence[float], eps: float = PIVOT_EPS) -> Optional[np.ndarray]:
    """Gaussian elimination with partial pivoting. None if any pivot is below ``eps``."""
    aug = np.zeros((3, 4), dtype=np.float64)
    aug[:, :3] = np.asarray(a, dtype=np.float64)
    aug[:, 3] = np.asarray(b, dtype=np.float64)
    for col in range(3):
        pivot = col + int(np.argmax(np.abs(aug[col:, col])))
        if pivot != col:
            aug[[col, pivot]] = aug[[pivot, col]]
        if abs(aug[col, col]) < eps:
            return None
        for row in range(col + 1, 3):
            f = aug[row, col] / aug[col, col]
            aug[row, col:] -= f * aug[col, col:]
    sol = np.zeros(3, dtype=np.float64)
    for i in (2, 1, 0):
        sol[i] = (aug[i, 3] - aug[i, i + 1:3] @ sol[i + 1:]) / aug[i, i]
    return sol


def fit_circle(points: np.ndarray) -> Optional[Tuple[float, float, float]]:
    if len(points) < 3:
        return None
    x = points[:, 0]
    y = points[:, 1]
    z = x * x + y * y
    n = float(len(points))
    sx, sy = x.sum(), y.sum()
    sxy = (x * y).sum()
    a = [[(x * x).sum(), sxy, sx],
         [sxy, (y * y).sum(), sy],
         [sx, sy, n]]
    b = [-(z * x).sum(), -(z * y).sum(), -z.sum()]
    sol = solve_3x3(a, b)
    if sol is None:
        return None
    cx, cy = -sol[0] / 2.0, -sol[1] / 2.0
    r2 = cx * cx + cy * cy - sol[2]
    if r2 <= 0:
        return None
    return float(cx), float(cy), math.sqrt(r2)


def residual_ratio(points: np.ndarray, cx: float, cy: float, r: float) -> float:
    """RMS radial error relative to the radius."""
    d = np.hypot(points[:, 0] - cx, points[:, 1] - cy)
    rms = math.sqrt(float(np.mean((d - r) ** 2)))
    return rms / max(r, 1e-6)


def unwrapped_sweep_degrees(points: np.ndarray, cx: float, cy: float) -> float:
    if len(points) < 2:
        return 0.0
    angles = np.arctan2(points[:, 1] - cy, points[:, 0] - cx)
    # wrap each step into (-pi, pi]
    deltas = np.pi - np.mod(np.pi - np.diff(angles), 2 * np.pi)
    return min(math.degrees(abs(float(deltas.sum()))), 360.0)


def evaluate_path(points: np.ndarray, cfg: GestureConfig) -> Optional[FitResult]:
    """Fit and validate; None when the fit is degenerate."""
    fit = fit_circle(points)
    if fit is None:
        return None
    cx, cy, r = fit
    ratio = residual_ratio(points, cx, cy, r)
    arc = unwrapped_sweep_degrees(points, cx, cy)
    return FitResult(
        cx=cx,
        cy=cy,
        radius=r,
        residual_ratio=ratio,
        arc_degrees=arc,
        radius_ok=cfg.min_radius_frac <= r <= cfg.max_radius_frac,
        fit_ok=ratio <= cfg.max_residual_ratio,
        arc_ok=arc >= cfg.min_arc_degrees,
    )
