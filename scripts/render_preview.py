import sys

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from geoops.geometry import as_polygon, parse_wkt
from geoops.partition import partition_region
from geoops.samplers import PolygonSampler, create_rng
from geoops.visualize import plot_partition

DEFAULT_WKT = (
    "POLYGON ((-109.950142 38.19799, -109.888687 38.236292, "
    "-109.807663 38.157237, -109.929199 38.146438, -109.950142 38.19799))"
)


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    out_path = argv[0] if argv else "preview.png"
    text = argv[1] if len(argv) > 1 else DEFAULT_WKT

    polygon = as_polygon(parse_wkt(text))
    cells = partition_region(polygon, 0.25)
    points = PolygonSampler(polygon).sample_points(2000, create_rng(0))

    ax = plot_partition(cells, polygon=polygon, points=points)
    ax.figure.savefig(out_path, dpi=150)
    plt.close(ax.figure)
    print("Wrote:", out_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
