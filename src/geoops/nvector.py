"""
n-vectors: unit surface normals of a spherical earth model.

Blending geographic coordinates is straightforward in this representation:
combine the vectors linearly, renormalise, convert back.
https://en.wikipedia.org/wiki/N-vector
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .datastructures import Coordinate


@dataclass(frozen=True)
class NVector:
    x: float
    y: float
    z: float

    # numpy scalars on the left defer to __rmul__
    __array_ufunc__ = None

    def __add__(self, other: "NVector") -> "NVector":
        if not isinstance(other, NVector):
            return NotImplemented
        return NVector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __mul__(self, s: float) -> "NVector":
        if isinstance(s, NVector):
            return NotImplemented
        s = float(s)
        return NVector(s * self.x, s * self.y, s * self.z)

    __rmul__ = __mul__

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def norm(self) -> float:
        return float(np.linalg.norm(self.as_array()))

    def normalized(self, eps: float = 0.0) -> "NVector":
        """
        Scale to unit length. eps is added to the norm, so a (near) zero vector
        yields a (near) zero vector instead of NaNs.
        """
        return (1.0 / (self.norm() + eps)) * self


def to_nvector(c: Coordinate) -> NVector:
    lon, lat = np.radians(float(c[0])), np.radians(float(c[1]))
    cos_lat = np.cos(lat)
    return NVector(
        float(np.cos(lon) * cos_lat),
        float(np.sin(lon) * cos_lat),
        float(np.sin(lat)),
    )


def from_nvector(v: NVector) -> Coordinate:
    """
    Inverse of to_nvector; the vector need not be unit length.
    Longitude is arbitrary (0) at the poles.
    """
    lat = np.arctan2(v.z, np.sqrt(v.x * v.x + v.y * v.y))
    lon = np.arctan2(v.y, v.x)
    return Coordinate(float(np.degrees(lon)), float(np.degrees(lat)))
