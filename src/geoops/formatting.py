from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Sequence

import numpy as np
from shapely.geometry import GeometryCollection, Point
from shapely.geometry.base import BaseGeometry


class OutputFormat(str, Enum):
    CSV = "csv"          # one WKT geometry per line
    ONELINE = "oneline"  # single GEOMETRYCOLLECTION

    def __str__(self) -> str:
        return self.value


def points_from_coordinates(coords: Sequence) -> List[Point]:
    arr = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
    return [Point(float(x), float(y)) for x, y in arr]


def format_geometries(geoms: Iterable[BaseGeometry], fmt: OutputFormat = OutputFormat.CSV) -> str:
    geoms = list(geoms)
    fmt = OutputFormat(fmt)
    if fmt is OutputFormat.ONELINE:
        return GeometryCollection(geoms).wkt
    return "\n".join(g.wkt for g in geoms)


def format_cells(cells: Iterable[str], fmt: OutputFormat = OutputFormat.CSV) -> str:
    """Cell IDs one per line, or comma separated for oneline."""
    sep = "," if OutputFormat(fmt) is OutputFormat.ONELINE else "\n"
    return sep.join(cells)
