from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple, Tuple

from shapely.geometry import Polygon, box
from shapely.geometry.base import BaseGeometry


class Coordinate(NamedTuple):
    lon: float  # degrees, x
    lat: float  # degrees, y


class Triangle(NamedTuple):
    a: Coordinate
    b: Coordinate
    c: Coordinate

    def to_polygon(self) -> Polygon:
        return Polygon([self.a, self.b, self.c])

    def area(self) -> float:
        """Unsigned planar area in squared degrees."""
        return float(self.to_polygon().area)


@dataclass(frozen=True)
class BoundingBox:
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @classmethod
    def from_geometry(cls, geom: BaseGeometry) -> "BoundingBox":
        minx, miny, maxx, maxy = map(float, geom.bounds)
        return cls(minx, miny, maxx, maxy)

    @property
    def width(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def height(self) -> float:
        return self.max_lat - self.min_lat

    def corners(self) -> Tuple[Coordinate, Coordinate, Coordinate, Coordinate]:
        """
        Corners in sweep order:

          c1 -- c2
          |      |
          c0 -- c3
        """
        c0 = Coordinate(self.min_lon, self.min_lat)
        c1 = Coordinate(self.min_lon, self.max_lat)
        c2 = Coordinate(self.max_lon, self.max_lat)
        c3 = Coordinate(self.max_lon, self.min_lat)
        return c0, c1, c2, c3

    def contains(self, c: Coordinate, eps: float = 0.0) -> bool:
        return (
            self.min_lon - eps <= c.lon <= self.max_lon + eps
            and self.min_lat - eps <= c.lat <= self.max_lat + eps
        )

    def to_polygon(self) -> Polygon:
        return box(self.min_lon, self.min_lat, self.max_lon, self.max_lat)
