from __future__ import annotations

import numpy as np
from scipy.stats import chisquare
from shapely.geometry import box


# p-values below this fail the statistical tests; raise it to demand closer
# agreement, lower it to tolerate more deviation
SIGNIFICANCE = 1e-3

# area bins that expect fewer samples than this are left out of the test
MIN_EXPECTED_PER_BIN = 20.0

# tilted quadrilateral in Utah, ~0.14 deg across
SMALL_POLYGON_WKT = (
    "POLYGON ((-109.950142 38.19799, -109.888687 38.236292, "
    "-109.807663 38.157237, -109.929199 38.146438, -109.950142 38.19799))"
)


def count_categories(indices: np.ndarray, n: int) -> np.ndarray:
    return np.bincount(np.asarray(indices, dtype=np.int64), minlength=n)


def chisquare_pvalue(observed: np.ndarray, probabilities: np.ndarray) -> float:
    observed = np.asarray(observed, dtype=np.float64)
    p = np.asarray(probabilities, dtype=np.float64)
    expected = p / p.sum() * observed.sum()
    return float(chisquare(observed, expected).pvalue)


def grid_bins(polygon, n_bins: int):
    """
    Split the polygon's bounds into n_bins x n_bins planar boxes.
    Returns (boxes, area share of the polygon per box).
    """
    minx, miny, maxx, maxy = polygon.bounds
    xs = np.linspace(minx, maxx, n_bins + 1)
    ys = np.linspace(miny, maxy, n_bins + 1)

    boxes = []
    shares = []
    for j in range(n_bins):
        for i in range(n_bins):
            b = box(xs[i], ys[j], xs[i + 1], ys[j + 1])
            boxes.append(b)
            shares.append(polygon.intersection(b).area / polygon.area)
    return boxes, np.asarray(shares, dtype=np.float64)


def bin_points(points: np.ndarray, polygon, n_bins: int) -> np.ndarray:
    """Counts per grid box, same order as grid_bins."""
    minx, miny, maxx, maxy = polygon.bounds
    pts = np.asarray(points, dtype=np.float64)
    ix = np.clip(((pts[:, 0] - minx) / (maxx - minx) * n_bins).astype(int), 0, n_bins - 1)
    iy = np.clip(((pts[:, 1] - miny) / (maxy - miny) * n_bins).astype(int), 0, n_bins - 1)
    return np.bincount(iy * n_bins + ix, minlength=n_bins * n_bins)


def uniformity_pvalue(points: np.ndarray, polygon, n_bins: int = 4) -> float:
    """
    Chi-square p-value of the sample counts against the planar area share of
    each grid box. Sparse boxes are dropped and the rest renormalised.
    """
    _, shares = grid_bins(polygon, n_bins)
    counts = bin_points(points, polygon, n_bins)

    keep = shares * len(points) >= MIN_EXPECTED_PER_BIN
    return chisquare_pvalue(counts[keep], shares[keep])
