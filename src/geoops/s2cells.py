"""
S2 cell coverings and cuts, backed by s2sphere.

Coverings are computed for the geometry's bounding box rather than the
geometry itself: fast, but the covering may include cells that only touch
the box.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

import s2sphere
from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry

from .config import S2_MAX_LEVEL, S2_MIN_LEVEL
from .datastructures import BoundingBox
from .errors import GeometryConversionError, InvalidParameterError
from .geometry import as_areal, cut_by_cells, require_valid

logger = logging.getLogger(__name__)

# s2sphere needs a number; large enough to never limit a fixed-level covering
UNBOUNDED_CELLS = 2 ** 31 - 1


class S2CellFormat(str, Enum):
    LONG = "long"  # 64-bit id in decimal
    HEX = "hex"    # compact token
    QUAD = "quad"  # face/child-position path

    def __str__(self) -> str:
        return self.value


def _check_level(level: int) -> int:
    level = int(level)
    if not S2_MIN_LEVEL <= level <= S2_MAX_LEVEL:
        raise InvalidParameterError(f"S2 level must be within [{S2_MIN_LEVEL}, {S2_MAX_LEVEL}], got {level}")
    return level


def s2_covering(geom: BaseGeometry, level: int, max_cells: Optional[int] = None) -> List[s2sphere.CellId]:
    """Cells of exactly `level` covering the bounding box of geom."""
    level = _check_level(level)
    if max_cells is not None and max_cells < 1:
        raise InvalidParameterError("max_cells must be >= 1")
    if geom.is_empty:
        raise GeometryConversionError("cannot cover an empty geometry")

    bbox = BoundingBox.from_geometry(require_valid(geom))
    rect = s2sphere.LatLngRect.from_point_pair(
        s2sphere.LatLng.from_degrees(bbox.min_lat, bbox.min_lon),
        s2sphere.LatLng.from_degrees(bbox.max_lat, bbox.max_lon),
    )

    coverer = s2sphere.RegionCoverer()
    coverer.min_level = level
    coverer.max_level = level
    coverer.max_cells = max_cells if max_cells is not None else UNBOUNDED_CELLS
    cells = coverer.get_covering(rect)

    logger.debug("S2 covering of %s at level %d: %d cells", bbox, level, len(cells))
    return cells


def s2_cell_to_polygon(cell_id: s2sphere.CellId) -> Polygon:
    """Quadrilateral through the cell's four vertices, in lon/lat."""
    cell = s2sphere.Cell(cell_id)
    coords = []
    for k in range(4):
        ll = s2sphere.LatLng.from_point(cell.get_vertex(k))
        coords.append((ll.lng().degrees, ll.lat().degrees))
    return Polygon(coords)


def s2_cut(geom: BaseGeometry, level: int, max_cells: Optional[int] = None) -> List[Polygon]:
    """Split an areal geometry along the cells of its S2 covering."""
    geom = as_areal(geom)
    cells = s2_covering(geom, level, max_cells)
    return cut_by_cells(geom, [s2_cell_to_polygon(c) for c in cells])


def parse_s2_cell(text: str) -> s2sphere.CellId:
    """Accepts a decimal cell id or a hex token."""
    text = (text or "").strip()
    if not text:
        raise InvalidParameterError("empty S2 cell id")
    try:
        cell_id = s2sphere.CellId(int(text)) if text.isdigit() else s2sphere.CellId.from_token(text)
    except ValueError as exc:
        raise InvalidParameterError(f"not an S2 cell id: {text!r}") from exc
    if not cell_id.is_valid():
        raise InvalidParameterError(f"not an S2 cell id: {text!r}")
    return cell_id


def _quad_path(cell_id: s2sphere.CellId) -> str:
    # face in the top 3 bits, then two bits per level
    raw = cell_id.id()
    digits = "".join(str((raw >> (61 - 2 * k)) & 3) for k in range(1, cell_id.level() + 1))
    return f"{raw >> 61}/{digits}"


def format_s2_cell(cell_id: s2sphere.CellId, fmt: S2CellFormat = S2CellFormat.LONG) -> str:
    fmt = S2CellFormat(fmt)
    if fmt is S2CellFormat.HEX:
        return cell_id.to_token()
    if fmt is S2CellFormat.QUAD:
        return _quad_path(cell_id)
    return str(cell_id.id())
