from __future__ import annotations

from .config import LERP_EPS
from .datastructures import Coordinate
from .nvector import to_nvector, from_nvector


def lerp(t: float, c1: Coordinate, c2: Coordinate) -> Coordinate:
    """
    Linearly interpolate between two geographic coordinates in n-vector space.

    t=0 gives c1 and t=1 gives c2. Not an exact slerp: equal steps in t are
    not equal arc lengths. For antipodal inputs the blend collapses to ~0 and
    the result is finite but directionally arbitrary.
    """
    t = float(t)
    nv = (1.0 - t) * to_nvector(c1) + t * to_nvector(c2)
    return from_nvector(nv.normalized(LERP_EPS))
