import math

import numpy as np
import pytest


def circle_points(cx, cy, r, n, step_deg, start_deg=0.0):
    """n points on a circle, in increasing angular order."""
    return np.array([
        (cx + r * math.cos(math.radians(start_deg + i * step_deg)),
         cy + r * math.sin(math.radians(start_deg + i * step_deg)))
        for i in range(n)
    ])


@pytest.fixture
def ring():
    # 18 points, 20 degrees apart, covering 340 degrees
    return circle_points(0.5, 0.5, 0.25, 18, 20.0)
