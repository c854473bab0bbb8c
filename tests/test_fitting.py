import math

import numpy as np
import pytest

from circle_gesture.config import GestureConfig
from circle_gesture.fitting import (evaluate_path, fit_circle, residual_ratio, solve_3x3,
                                    unwrapped_sweep_degrees)
from conftest import circle_points


def test_solve_3x3_known_system():
    a = [[2, 1, -1], [-3, -1, 2], [-2, 1, 2]]
    b = [8, -11, -3]
    sol = solve_3x3(a, b)
    assert sol == pytest.approx([2, 3, -1])


def test_solve_3x3_does_not_modify_inputs():
    a = np.array([[0.0, 1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 4.0]])
    b = np.array([1.0, 2.0, 8.0])
    sol = solve_3x3(a, b)
    assert sol == pytest.approx([2, 1, 2])
    assert a[0, 0] == 0.0 and b[0] == 1.0


def test_solve_3x3_singular_returns_none():
    assert solve_3x3([[1, 2, 3], [2, 4, 6], [1, 1, 1]], [1, 2, 3]) is None


def test_fit_recovers_known_circle():
    pts = circle_points(0.6, 0.45, 0.2, 24, 14.0)  # 322 degrees
    cx, cy, r = fit_circle(pts)
    assert cx == pytest.approx(0.6, abs=1e-4)
    assert cy == pytest.approx(0.45, abs=1e-4)
    assert r == pytest.approx(0.2, abs=1e-4)
    assert residual_ratio(pts, cx, cy, r) < 1e-6
    res = evaluate_path(pts, GestureConfig())
    assert res.arc_degrees == pytest.approx(322.0, abs=1e-6)
    assert res.radius_ok and res.fit_ok and res.arc_ok
    assert res.detected


def test_collinear_points_are_degenerate():
    x = np.linspace(0.1, 0.9, 20)
    pts = np.column_stack([x, np.full_like(x, 0.5)])
    assert fit_circle(pts) is None
    assert evaluate_path(pts, GestureConfig()) is None


def test_too_few_points_no_fit():
    assert fit_circle(np.array([[0.1, 0.2], [0.3, 0.4]])) is None


def test_sweep_wraps_across_pi():
    pts = np.array([[math.cos(math.radians(170)), math.sin(math.radians(170))],
                    [math.cos(math.radians(-170)), math.sin(math.radians(-170))]])
    assert unwrapped_sweep_degrees(pts, 0.0, 0.0) == pytest.approx(20.0)


def test_sweep_direction_independent():
    pts = circle_points(0.5, 0.5, 0.25, 16, -18.0)
    assert unwrapped_sweep_degrees(pts, 0.5, 0.5) == pytest.approx(270.0)


def test_sweep_capped_at_full_turn():
    pts = circle_points(0.5, 0.5, 0.25, 40, 18.0)  # two revolutions
    assert unwrapped_sweep_degrees(pts, 0.5, 0.5) == 360.0


def test_sweep_single_point_is_zero():
    assert unwrapped_sweep_degrees(np.array([[1.0, 0.0]]), 0.0, 0.0) == 0.0


def test_back_and_forth_trace_fails_only_the_sweep(ring):
    # evens forward, then odds backward: same points, scribbled order
    order = list(range(0, 18, 2)) + list(range(17, 0, -2))
    scribble = ring[order]
    res = evaluate_path(scribble, GestureConfig())
    assert res.radius_ok and res.fit_ok
    assert res.arc_degrees == pytest.approx(20.0, abs=1e-6)
    assert not res.arc_ok
    assert not res.detected


def test_radius_bounds():
    cfg = GestureConfig()
    tiny = evaluate_path(circle_points(0.5, 0.5, 0.03, 20, 18.0), cfg)
    huge = evaluate_path(circle_points(0.5, 0.5, 0.9, 20, 18.0), cfg)
    assert not tiny.radius_ok and not tiny.detected
    assert not huge.radius_ok and not huge.detected
