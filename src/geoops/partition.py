from __future__ import annotations

import logging
import math
from typing import List, Optional

from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry
from shapely.prepared import prep

from .datastructures import BoundingBox
from .errors import InvalidParameterError
from .geometry import as_areal, cell_from_corners
from .interpolation import lerp

logger = logging.getLogger(__name__)


def _sweep_steps(edge_budget: float, edge_proportion: float) -> int:
    # step count from the ratio, not an accumulated float sum,
    # so 1/3 gives exactly 3 steps
    return max(1, int(math.ceil(edge_budget / edge_proportion - 1e-9)))


def partition_region(
    polygon: BaseGeometry,
    edge_proportion: float,
    area_threshold: Optional[float] = None,
) -> List[Polygon]:
    """
    Approximately partition a geometry into uniform rectangular cells.

    The minimal bounding box is swept in steps of edge_proportion along both
    axes (0.5 -> 2x2 cells, 1/3 -> 3x3 cells, >= 1.0 -> the bounding box
    itself). Cell corners are placed with n-vector interpolation along the box
    edges, which reduces distortion for boxes spanning a wide latitude range.

    Key design detail:
    - Without area_threshold a cell is kept if it intersects the geometry.
    - With area_threshold a cell is kept if intersection_area / cell_area
      >= area_threshold (1.0 keeps only cells interior to the geometry).
    - For MultiPolygons the bounding box spans all parts, so cells between
      disjoint parts are swept too; the threshold behaves unintuitively there.

    Cells are returned in sweep order (rows c0 -> c1, columns c0 -> c3).
    """
    edge_proportion = float(edge_proportion)
    if not math.isfinite(edge_proportion) or edge_proportion <= 0.0:
        raise InvalidParameterError("edge_proportion must be a finite value > 0")
    if area_threshold is not None:
        area_threshold = float(area_threshold)
        if not (0.0 <= area_threshold <= 1.0):
            raise InvalidParameterError("area_threshold must be within [0, 1]")

    geom = as_areal(polygon)
    bbox = BoundingBox.from_geometry(geom)

    # edge_proportion > 1.0 would be a dilation; return the bbox instead
    edge_budget = max(1.0, edge_proportion)
    n_steps = _sweep_steps(edge_budget, edge_proportion)

    #  c1 -- c2
    #  |      |
    #  c0 -- c3
    c0, c1, c2, c3 = bbox.corners()

    prepared = prep(geom)
    cells: List[Polygon] = []

    lp_prev = (c0, c3)
    for ix in range(n_steps):
        fx = ix * edge_proportion
        tx = min(fx + edge_proportion, 1.0)
        # line in the c0 -> c3 direction, lerped towards c1
        lp = (lerp(tx, c0, c1), lerp(tx, c3, c2))

        for iy in range(n_steps):
            fy = iy * edge_proportion
            ty = min(fy + edge_proportion, 1.0)
            cell = cell_from_corners(
                lerp(fy, lp_prev[0], lp_prev[1]),
                lerp(ty, lp[0], lp[1]),
            )

            if area_threshold is None:
                if prepared.intersects(cell):
                    cells.append(cell)
            else:
                if cell.area == 0.0:
                    continue
                ratio = geom.intersection(cell).area / cell.area
                if ratio >= area_threshold:
                    cells.append(cell)

        lp_prev = lp

    logger.debug(
        "partitioned bbox %s into %dx%d grid, kept %d cells",
        bbox, n_steps, n_steps, len(cells),
    )
    return cells
