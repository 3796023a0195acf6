from __future__ import annotations

import logging
from typing import List, Sequence, Union

import shapely
from shapely import wkt
from shapely.errors import ShapelyError
from shapely.geometry import MultiPolygon, Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.validation import explain_validity

from .datastructures import Coordinate, Triangle
from .errors import GeometryConversionError

logger = logging.getLogger(__name__)


def parse_wkt(text: str) -> BaseGeometry:
    if text is None or not text.strip():
        raise GeometryConversionError("empty WKT input")
    try:
        return wkt.loads(text.strip())
    except ShapelyError as exc:
        raise GeometryConversionError(f"invalid WKT: {exc}") from exc


def require_valid(geom: BaseGeometry) -> BaseGeometry:
    """Reject self-intersecting or otherwise invalid geometries up front."""
    if not geom.is_empty and not geom.is_valid:
        raise GeometryConversionError(f"invalid {geom.geom_type}: {explain_validity(geom)}")
    return geom


def as_polygon(geom: BaseGeometry) -> Polygon:
    """
    Polygon passes through, a single-part MultiPolygon is unwrapped,
    anything else (or an invalid polygon) is rejected.
    """
    if isinstance(geom, Polygon):
        return require_valid(geom)
    if isinstance(geom, MultiPolygon) and len(geom.geoms) == 1:
        return require_valid(geom.geoms[0])
    raise GeometryConversionError(f"expected a Polygon, got {geom.geom_type}")


def as_areal(geom: BaseGeometry) -> Union[Polygon, MultiPolygon]:
    if isinstance(geom, (Polygon, MultiPolygon)) and not geom.is_empty:
        return require_valid(geom)
    raise GeometryConversionError(f"expected a non-empty (Multi)Polygon, got {geom.geom_type}")


def triangulate(polygon: Polygon) -> List[Triangle]:
    """
    Constrained Delaunay triangulation of the polygon interior (holes and
    concave parts are respected). Empty input gives no triangles; invalid
    input raises GeometryConversionError.
    """
    polygon = as_polygon(polygon)
    if polygon.is_empty or polygon.area == 0.0:
        return []

    tris = shapely.constrained_delaunay_triangles(polygon)

    out: List[Triangle] = []
    for g in tris.geoms:
        coords = list(g.exterior.coords)[:3]
        if len(coords) < 3:
            continue
        out.append(Triangle(*(Coordinate(float(c[0]), float(c[1])) for c in coords)))

    logger.debug("triangulated polygon with %d vertices into %d triangles",
                 len(polygon.exterior.coords) - 1, len(out))
    return out


def cell_from_corners(p: Coordinate, q: Coordinate) -> Polygon:
    """Axis-aligned rectangle spanned by two opposite corners."""
    return box(min(p[0], q[0]), min(p[1], q[1]), max(p[0], q[0]), max(p[1], q[1]))


def explode_polygons(geom: BaseGeometry) -> List[Polygon]:
    """Non-empty polygon parts of any geometry; lines and points are dropped."""
    if geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        return [geom]
    if hasattr(geom, "geoms"):
        return [p for g in geom.geoms for p in explode_polygons(g)]
    return []


def cut_by_cells(geom: BaseGeometry, cells: Sequence[Polygon]) -> List[Polygon]:
    """
    Intersect a geometry with each cell polygon. Each returned polygon lies in
    exactly one cell; multi-part intersections are split into separate parts.
    """
    out: List[Polygon] = []
    for cell in cells:
        out.extend(explode_polygons(geom.intersection(cell)))

    logger.debug("cut geometry by %d cells into %d parts", len(cells), len(out))
    return out
