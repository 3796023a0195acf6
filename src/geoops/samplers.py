from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np
from shapely.geometry.base import BaseGeometry

from .config import MAX_LAT, MAX_LNG, MIN_LAT, MIN_LNG
from .datastructures import BoundingBox, Coordinate, Triangle
from .errors import InvalidParameterError
from .geometry import as_polygon, triangulate
from .triangles import sample_point_in_triangle, triangle_areas
from .weighted import WeightedTable, build_weighted_table

logger = logging.getLogger(__name__)


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)


class GeoSampler(ABC):
    """Draws random geographic coordinates."""

    @abstractmethod
    def sample(self, rng: np.random.Generator) -> Coordinate:
        ...

    def sample_points(self, n: int, rng: np.random.Generator) -> np.ndarray:
        """
        n draws as an (n,2) array of (lon, lat) rows.
        Deterministic given rng seed.
        """
        n = int(n)
        if n < 0:
            raise InvalidParameterError("n must be >= 0")
        pts = np.empty((n, 2), dtype=np.float64)
        for i in range(n):
            pts[i] = self.sample(rng)
        return pts


class UniformSampler(GeoSampler):
    """
    Uniform in coordinate space, not in area: longitude in [-180, 180] and
    latitude in [-90, 90] are drawn independently, which over-weights the poles.
    """

    def sample(self, rng: np.random.Generator) -> Coordinate:
        return Coordinate(
            float(rng.uniform(MIN_LNG, MAX_LNG)),
            float(rng.uniform(MIN_LAT, MAX_LAT)),
        )


class PolygonSampler(GeoSampler):
    """
    Samples random coordinates within a polygon. Each instance is tied to one
    polygon and precomputes what repeated sampling needs:

    1. Triangulate the polygon.
    2. Select a random triangle with probability proportional to its area.
    3. Sample a random point within the triangle.

    Raises GeometryConversionError for invalid (e.g. self-intersecting)
    polygons and DegenerateWeightsError for empty ones.
    """

    def __init__(self, polygon: BaseGeometry):
        polygon = as_polygon(polygon)
        self._bbox = BoundingBox.from_geometry(polygon)
        self._triangles: List[Triangle] = triangulate(polygon)
        self._table: WeightedTable = build_weighted_table(triangle_areas(self._triangles))

        logger.debug("polygon sampler ready: %d triangles", len(self._triangles))

    @property
    def triangles(self) -> List[Triangle]:
        return list(self._triangles)

    @property
    def bbox(self) -> BoundingBox:
        return self._bbox

    @property
    def table(self) -> WeightedTable:
        return self._table

    def sample(self, rng: np.random.Generator) -> Coordinate:
        tri = self._triangles[self._table.sample(rng)]
        return sample_point_in_triangle(tri, rng)


def make_sampler(polygon: Optional[BaseGeometry] = None) -> GeoSampler:
    """Polygon-area sampler when a polygon is given, else the uniform fallback."""
    if polygon is None:
        return UniformSampler()
    return PolygonSampler(polygon)
