"""H3 cell coverings, cuts, cell polygons and (un)compaction, backed by h3."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, List

import h3
from shapely.geometry import GeometryCollection, MultiPoint, MultiPolygon, Point, Polygon
from shapely.geometry.base import BaseGeometry

from .config import H3_MAX_RESOLUTION, H3_MIN_RESOLUTION
from .errors import GeometryConversionError, InvalidParameterError
from .geometry import as_areal, cut_by_cells, require_valid

logger = logging.getLogger(__name__)


class H3CellFormat(str, Enum):
    HEX = "hex"
    OCTAL = "octal"
    BINARY = "binary"

    def __str__(self) -> str:
        return self.value


class H3CoverMode(str, Enum):
    INTERSECTS = "intersects"  # every cell touching the geometry (minimal full cover)
    CONTAINS = "contains"      # only cells entirely inside the geometry
    CENTROID = "centroid"      # cells whose centre lies inside the geometry

    def __str__(self) -> str:
        return self.value


# names of h3's containment flags
_CONTAINMENT = {
    H3CoverMode.INTERSECTS: "overlap",
    H3CoverMode.CONTAINS: "full",
    H3CoverMode.CENTROID: "center",
}


def _check_resolution(level: int) -> int:
    level = int(level)
    if not H3_MIN_RESOLUTION <= level <= H3_MAX_RESOLUTION:
        raise InvalidParameterError(
            f"H3 resolution must be within [{H3_MIN_RESOLUTION}, {H3_MAX_RESOLUTION}], got {level}"
        )
    return level


def _polygon_cells(polygon: Polygon, res: int, mode: H3CoverMode) -> List[str]:
    shape = h3.geo_to_h3shape(polygon)
    return list(h3.h3shape_to_cells_experimental(shape, res, contain=_CONTAINMENT[mode]))


def _covering(geom: BaseGeometry, res: int, mode: H3CoverMode) -> List[str]:
    if geom.is_empty:
        return []
    if isinstance(geom, Point):
        return [h3.latlng_to_cell(geom.y, geom.x, res)]
    if isinstance(geom, Polygon):
        return _polygon_cells(geom, res, mode)
    if isinstance(geom, (MultiPoint, MultiPolygon, GeometryCollection)):
        return [c for g in geom.geoms for c in _covering(g, res, mode)]
    raise GeometryConversionError(f"cannot cover a {geom.geom_type} with H3 cells")


def h3_covering(geom: BaseGeometry, level: int, mode: H3CoverMode = H3CoverMode.INTERSECTS) -> List[str]:
    """
    H3 cells of resolution `level` for points, polygons and collections of
    them. Cells are de-duplicated and sorted.
    """
    res = _check_resolution(level)
    mode = H3CoverMode(mode)
    cells = sorted(set(_covering(require_valid(geom), res, mode)))

    logger.debug("H3 covering at resolution %d (%s): %d cells", res, mode.value, len(cells))
    return cells


def h3_cell_to_polygon(cell: str) -> Polygon:
    """Cell boundary in lon/lat; a hexagon except for the twelve pentagons."""
    return Polygon([(lng, lat) for lat, lng in h3.cell_to_boundary(cell)])


def h3_cut(geom: BaseGeometry, level: int) -> List[Polygon]:
    """Split an areal geometry along the cells intersecting it."""
    geom = as_areal(geom)
    cells = h3_covering(geom, level, H3CoverMode.INTERSECTS)
    return cut_by_cells(geom, [h3_cell_to_polygon(c) for c in cells])


def parse_h3_cell(text: str) -> str:
    text = (text or "").strip().lower()
    try:
        valid = bool(text) and h3.is_valid_cell(text)
    except (ValueError, TypeError, h3.H3BaseException):
        valid = False
    if not valid:
        raise InvalidParameterError(f"not an H3 cell index: {text!r}")
    return text


def parse_h3_cells(values: Iterable[str]) -> List[str]:
    """Cell indices from arguments that may each hold a comma-separated list."""
    return [parse_h3_cell(v) for value in values for v in value.replace(",", " ").split()]


def compact(cells: Iterable[str]) -> List[str]:
    cells = list(cells)
    try:
        return sorted(h3.compact_cells(cells))
    except (ValueError, h3.H3BaseException) as exc:
        raise InvalidParameterError(f"cannot compact cells: {exc}") from exc


def uncompact(cells: Iterable[str], level: int) -> List[str]:
    res = _check_resolution(level)
    cells = list(cells)
    try:
        return sorted(h3.uncompact_cells(cells, res))
    except (ValueError, h3.H3BaseException) as exc:
        raise InvalidParameterError(f"cannot uncompact cells to resolution {res}: {exc}") from exc


def format_h3_cell(cell: str, fmt: H3CellFormat = H3CellFormat.HEX) -> str:
    fmt = H3CellFormat(fmt)
    if fmt is H3CellFormat.OCTAL:
        return format(h3.str_to_int(cell), "o")
    if fmt is H3CellFormat.BINARY:
        return format(h3.str_to_int(cell), "b")
    return cell
