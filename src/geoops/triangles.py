from __future__ import annotations

from typing import Sequence

import numpy as np

from .config import LERP_EPS
from .datastructures import Coordinate, Triangle
from .nvector import to_nvector, from_nvector


def triangle_areas(triangles: Sequence[Triangle]) -> np.ndarray:
    """Unsigned planar areas, shape (n,)."""
    return np.array([t.area() for t in triangles], dtype=np.float64)


def barycentric_weights(u1: float, u2: float):
    """
    Map two uniform draws to barycentric weights (wa, wb, wc).
    The sqrt makes the planar distribution area-uniform.
    """
    r1 = np.sqrt(u1)
    return float(1.0 - r1), float(r1 * (1.0 - u2)), float(u2 * r1)


def sample_point_in_triangle(triangle: Triangle, rng: np.random.Generator) -> Coordinate:
    """
    Draw a point inside a triangle given in lon/lat.

    The barycentric blend is done on the vertices' n-vectors, so the result is
    always a valid coordinate, but only approximately area-uniform on the
    sphere (exact for flat triangles, drifts as triangles get large).
    """
    u1, u2 = rng.random(2)
    wa, wb, wc = barycentric_weights(u1, u2)

    na, nb, nc = (to_nvector(v) for v in triangle)
    nv = wa * na + wb * nb + wc * nc
    return from_nvector(nv.normalized(LERP_EPS))
