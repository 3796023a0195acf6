import matplotlib.pyplot as plt
import numpy as np


def plot_partition(cells, polygon=None, points=None, ax=None):
    if ax is None:
        fig, ax = plt.subplots()

    for cell in cells:
        ax.plot(*np.asarray(cell.exterior.coords).T, "-k", linewidth=0.8)

    if polygon is not None:
        parts = getattr(polygon, "geoms", [polygon])
        for part in parts:
            ax.plot(*np.asarray(part.exterior.coords).T, "-b")

    if points is not None and len(points):
        pts = np.asarray(points, dtype=np.float64)
        ax.plot(pts[:, 0], pts[:, 1], ".r", markersize=2)

    ax.set_aspect("equal")
    ax.set_xlabel("lon")
    ax.set_ylabel("lat")
    ax.set_title("Partition (lon/lat)")
    return ax
