import numpy as np
import pytest

from circle_gesture.models import FitResult, LumaFrame, PathAccumulator


def make_path(size=90, max_jump_frac=0.2, max_miss_frames=10):
    return PathAccumulator(size, max_jump_frac=max_jump_frac, max_miss_frames=max_miss_frames)


def test_points_are_divided_by_short_side():
    p = make_path()
    assert p.add(60.0, 30.0, 120)
    assert p.last == (0.5, 0.25)
    assert p.points().shape == (1, 2)


def test_oldest_point_evicted_at_capacity():
    p = make_path(size=5)
    for i in range(12):
        p.add(10.0 + i, 10.0, 100)
    assert len(p) == 5
    assert p.points()[0, 0] == pytest.approx(0.17)
    assert p.last == pytest.approx((0.21, 0.1))


def test_jump_rejected_without_touching_miss_count():
    p = make_path()
    p.add(10.0, 10.0, 100)
    p.miss()
    p.miss()
    assert not p.add(60.0, 60.0, 100)
    assert len(p) == 1
    assert p.miss_count == 2
    assert p.add(12.0, 12.0, 100)
    assert p.miss_count == 0
    assert len(p) == 2


def test_jump_just_inside_limit_is_kept():
    p = make_path(max_jump_frac=0.2)
    p.add(0.0, 0.0, 100)
    assert p.add(19.0, 0.0, 100)


def test_misses_below_limit_keep_path():
    p = make_path(max_miss_frames=10)
    for i in range(5):
        p.add(10.0 + i, 10.0, 100)
    before = p.points().copy()
    for _ in range(9):
        assert not p.miss()
    assert p.add(15.0, 10.0, 100)
    assert len(p) == 6
    assert np.array_equal(p.points()[:5], before)


def test_sustained_misses_clear_path():
    p = make_path(max_miss_frames=10)
    for i in range(5):
        p.add(10.0 + i, 10.0, 100)
    decayed = [p.miss() for _ in range(10)]
    assert decayed == [False] * 9 + [True]
    assert len(p) == 0
    assert p.miss_count == 0
    assert p.points().shape == (0, 2)
    assert p.last is None


def test_after_decay_first_point_always_accepted():
    p = make_path(max_miss_frames=2)
    p.add(10.0, 10.0, 100)
    p.miss()
    p.miss()
    assert p.add(90.0, 90.0, 100)


def test_luma_frame_from_gray():
    gray = np.arange(12, dtype=np.uint8).reshape(3, 4)
    f = LumaFrame.from_gray(gray)
    assert (f.width, f.height, f.row_stride, f.pixel_stride) == (4, 3, 4, 1)
    assert f.data[5] == 5


def test_luma_frame_rejects_color():
    with pytest.raises(ValueError):
        LumaFrame.from_gray(np.zeros((4, 4, 3), dtype=np.uint8))


def test_fit_result_needs_all_checks():
    r = FitResult(0.5, 0.5, 0.25, 0.01, 300.0, True, True, False)
    assert not r.detected
    r.arc_ok = True
    assert r.detected
