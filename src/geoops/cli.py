"""Command-line tool for some handy geographic operations."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence, TextIO

from .config import (
    DEFAULT_H3_COVER_LEVEL,
    DEFAULT_H3_CUT_LEVEL,
    DEFAULT_NUM_SAMPLES,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_S2_LEVEL,
    DEFAULT_SEED,
)
from .errors import GeoOpsError
from .formatting import OutputFormat, format_cells, format_geometries, points_from_coordinates
from .geometry import as_polygon, parse_wkt, triangulate
from .h3cells import (
    H3CellFormat,
    H3CoverMode,
    compact,
    format_h3_cell,
    h3_cell_to_polygon,
    h3_covering,
    h3_cut,
    parse_h3_cell,
    parse_h3_cells,
    uncompact,
)
from .logging_config import resolve_log_level, setup_logging
from .partition import partition_region
from .s2cells import S2CellFormat, format_s2_cell, parse_s2_cell, s2_cell_to_polygon, s2_covering, s2_cut
from .samplers import create_rng, make_sampler

logger = logging.getLogger(__name__)

FORMAT_CHOICES = [f.value for f in OutputFormat]


def _add_format_arg(parser: argparse.ArgumentParser, what: str, geometries: bool = True) -> None:
    if geometries:
        help_text = (f"By default, outputs each {what} as WKT on a separate line. "
                     "'oneline' consolidates them into a single WKT GEOMETRYCOLLECTION.")
    else:
        help_text = (f"By default, outputs each {what} on a separate line. "
                     "'oneline' joins them with commas.")
    parser.add_argument(
        "-f", "--format",
        choices=FORMAT_CHOICES,
        default=DEFAULT_OUTPUT_FORMAT,
        help=help_text,
    )


def _add_level_arg(parser: argparse.ArgumentParser, default: int, help_text: str) -> None:
    parser.add_argument("-l", "--level", type=int, default=default, help=help_text)


def _add_s2_args(parser: argparse.ArgumentParser) -> None:
    _add_level_arg(parser, DEFAULT_S2_LEVEL, "The S2 cell level [0, 30] at which to perform the covering.")
    parser.add_argument(
        "-m", "--max-num-s2-cells",
        type=int,
        default=None,
        help="Max number of S2 cells to return.",
    )


def _add_h3_cell_format_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--h3-cell-format",
        choices=[f.value for f in H3CellFormat],
        default=H3CellFormat.HEX.value,
        help="The output format for H3 cells.",
    )


def _add_cells_arg(parser: argparse.ArgumentParser, verb: str) -> None:
    parser.add_argument(
        "cells",
        nargs="*",
        help=f"H3 cell indices to {verb}, separated by commas or spaces. "
             "Omit or pass '-' to read from stdin.",
    )


def _add_wkt_arg(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument(
        "wkt",
        nargs="?",
        default="-",
        help=f"{help_text} Omit or pass '-' to read from stdin.",
    )


def build_cli() -> argparse.ArgumentParser:
    """Construct the top-level CLI."""

    parser = argparse.ArgumentParser(
        prog="geoops",
        description="Commandline tool for some handy geographic operations.",
    )
    parser.add_argument(
        "-d", "--debug",
        action="count",
        default=0,
        help="Turn debugging information on (repeat for more).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # rand
    rand = sub.add_parser("rand", help="Commands involving RNG.")
    rand.add_argument("-s", "--seed", type=int, default=DEFAULT_SEED, help="Random seed to use.")
    rand_sub = rand.add_subparsers(dest="subcommand", required=True)

    point = rand_sub.add_parser("point", help="Sample random points.")
    point.add_argument(
        "-w", "--wkt",
        default=None,
        help="Polygon to sample from (area weighted). Without it, longitude and "
             "latitude are drawn uniformly over the whole globe.",
    )
    point.add_argument(
        "-n", "--num-samples",
        type=int,
        default=DEFAULT_NUM_SAMPLES,
        help="Number of samples to return.",
    )
    _add_format_arg(point, "sampled point")

    # geom
    geom = sub.add_parser("geom", help="General geometry commands.")
    geom_sub = geom.add_subparsers(dest="subcommand", required=True)

    split = geom_sub.add_parser("split", help="Subdivide a geometry's bounding box into cells.")
    _add_wkt_arg(split, "A valid WKT string encoding the geometry to subdivide.")
    split.add_argument(
        "-e", "--edge-proportion",
        type=float,
        required=True,
        help="Proportion of each cell's edge length relative to the geometry's bounding box. "
             "0.5 gives 4 cells, 1/3 gives 9 cells; values >= 1.0 return the minimal bounding box.",
    )
    split.add_argument(
        "-t", "--threshold",
        type=float,
        default=None,
        help="Cells must overlap the geometry by at least this fraction of their area. "
             "0.5 requires 50%% overlap, 1.0 selects only interior cells. "
             "May behave unintuitively for multi-geometries.",
    )
    _add_format_arg(split, "cell")

    tri = geom_sub.add_parser("triangulate", help="Triangulate a polygon.")
    _add_wkt_arg(tri, "A valid WKT string encoding a polygon.")
    _add_format_arg(tri, "triangle")

    # s2
    s2 = sub.add_parser("s2", help="Commands related to S2 cells.")
    s2_sub = s2.add_subparsers(dest="subcommand", required=True)

    s2_cover = s2_sub.add_parser("cover", help="Cover a geometry's bounding box with S2 cells.")
    _add_wkt_arg(s2_cover, "A valid WKT string encoding the geometry to cover.")
    _add_s2_args(s2_cover)
    s2_cover.add_argument(
        "--s2-cell-format",
        choices=[f.value for f in S2CellFormat],
        default=S2CellFormat.LONG.value,
        help="Format for the S2 cell IDs.",
    )
    _add_format_arg(s2_cover, "cell ID", geometries=False)

    s2_cut = s2_sub.add_parser("cut", help="Cut a geometry along S2 cell boundaries.")
    _add_wkt_arg(s2_cut, "A valid WKT string encoding the geometry to cut.")
    _add_s2_args(s2_cut)
    _add_format_arg(s2_cut, "piece")

    s2_poly = s2_sub.add_parser("cell-to-poly", help="Print the polygon of an S2 cell.")
    s2_poly.add_argument("cell", help="An S2 cell ID (decimal) or token (hex).")

    # h3
    h3 = sub.add_parser("h3", help="Commands related to H3 cells.")
    h3_sub = h3.add_subparsers(dest="subcommand", required=True)

    h3_cover = h3_sub.add_parser("cover", help="Cover a geometry with H3 cells.")
    _add_wkt_arg(h3_cover, "A valid WKT string encoding the geometry to cover.")
    _add_level_arg(h3_cover, DEFAULT_H3_COVER_LEVEL, "H3 resolution [0, 15] of the covering.")
    h3_cover.add_argument(
        "-m", "--mode",
        choices=[m.value for m in H3CoverMode],
        default=H3CoverMode.INTERSECTS.value,
        help="Which cells to keep. By default, the minimal covering that completely "
             "contains the geometry.",
    )
    _add_h3_cell_format_arg(h3_cover)
    _add_format_arg(h3_cover, "cell ID", geometries=False)

    h3_cut = h3_sub.add_parser("cut", help="Cut a geometry along H3 cell boundaries.")
    _add_wkt_arg(h3_cut, "A valid WKT string encoding the geometry to cut.")
    _add_level_arg(h3_cut, DEFAULT_H3_CUT_LEVEL, "H3 resolution [0, 15] of the cells.")
    _add_format_arg(h3_cut, "piece")

    h3_poly = h3_sub.add_parser("cell-to-poly", help="Print the polygon of an H3 cell.")
    h3_poly.add_argument("cell", help="An H3 cell index.")

    h3_compact = h3_sub.add_parser("compact", help="Compact a set of H3 cells.")
    _add_cells_arg(h3_compact, "compact")
    _add_h3_cell_format_arg(h3_compact)
    _add_format_arg(h3_compact, "cell ID", geometries=False)

    h3_uncompact = h3_sub.add_parser("uncompact", help="Uncompact a set of H3 cells.")
    _add_cells_arg(h3_uncompact, "uncompact")
    h3_uncompact.add_argument(
        "-l", "--level",
        type=int,
        required=True,
        help="The H3 resolution to uncompact to.",
    )
    _add_h3_cell_format_arg(h3_uncompact)
    _add_format_arg(h3_uncompact, "cell ID", geometries=False)

    return parser


def _read_wkt(value: Optional[str], stdin: TextIO) -> str:
    if value is None or value == "-":
        return stdin.read()
    return value


def _run_rand(args: argparse.Namespace, stdin: TextIO) -> str:
    polygon = None
    if args.wkt is not None:
        polygon = as_polygon(parse_wkt(_read_wkt(args.wkt, stdin)))
    sampler = make_sampler(polygon)

    rng = create_rng(args.seed)
    coords = sampler.sample_points(args.num_samples, rng)
    logger.info("sampled %d points with %s (seed=%d)", len(coords), type(sampler).__name__, args.seed)
    return format_geometries(points_from_coordinates(coords), OutputFormat(args.format))


def _run_split(args: argparse.Namespace, stdin: TextIO) -> str:
    geometry = parse_wkt(_read_wkt(args.wkt, stdin))
    cells = partition_region(geometry, args.edge_proportion, args.threshold)
    logger.info("split into %d cells", len(cells))
    return format_geometries(cells, OutputFormat(args.format))


def _run_triangulate(args: argparse.Namespace, stdin: TextIO) -> str:
    polygon = as_polygon(parse_wkt(_read_wkt(args.wkt, stdin)))
    triangles = [t.to_polygon() for t in triangulate(polygon)]
    logger.info("triangulated into %d triangles", len(triangles))
    return format_geometries(triangles, OutputFormat(args.format))


def _run_s2_cover(args: argparse.Namespace, stdin: TextIO) -> str:
    geometry = parse_wkt(_read_wkt(args.wkt, stdin))
    cells = s2_covering(geometry, args.level, args.max_num_s2_cells)
    logger.info("covered with %d S2 cells at level %d", len(cells), args.level)
    fmt = S2CellFormat(args.s2_cell_format)
    return format_cells((format_s2_cell(c, fmt) for c in cells), OutputFormat(args.format))


def _run_s2_cut(args: argparse.Namespace, stdin: TextIO) -> str:
    geometry = parse_wkt(_read_wkt(args.wkt, stdin))
    pieces = s2_cut(geometry, args.level, args.max_num_s2_cells)
    logger.info("cut into %d pieces by S2 cells at level %d", len(pieces), args.level)
    return format_geometries(pieces, OutputFormat(args.format))


def _run_s2_cell_to_poly(args: argparse.Namespace, stdin: TextIO) -> str:
    return s2_cell_to_polygon(parse_s2_cell(args.cell)).wkt


def _run_h3_cover(args: argparse.Namespace, stdin: TextIO) -> str:
    geometry = parse_wkt(_read_wkt(args.wkt, stdin))
    cells = h3_covering(geometry, args.level, H3CoverMode(args.mode))
    logger.info("covered with %d H3 cells at resolution %d", len(cells), args.level)
    fmt = H3CellFormat(args.h3_cell_format)
    return format_cells((format_h3_cell(c, fmt) for c in cells), OutputFormat(args.format))


def _run_h3_cut(args: argparse.Namespace, stdin: TextIO) -> str:
    geometry = parse_wkt(_read_wkt(args.wkt, stdin))
    pieces = h3_cut(geometry, args.level)
    logger.info("cut into %d pieces by H3 cells at resolution %d", len(pieces), args.level)
    return format_geometries(pieces, OutputFormat(args.format))


def _run_h3_cell_to_poly(args: argparse.Namespace, stdin: TextIO) -> str:
    return h3_cell_to_polygon(parse_h3_cell(args.cell)).wkt


def _read_cells(values: Sequence[str], stdin: TextIO) -> List[str]:
    if not values or list(values) == ["-"]:
        values = [stdin.read()]
    return parse_h3_cells(values)


def _run_h3_compact(args: argparse.Namespace, stdin: TextIO) -> str:
    cells = compact(_read_cells(args.cells, stdin))
    fmt = H3CellFormat(args.h3_cell_format)
    return format_cells((format_h3_cell(c, fmt) for c in cells), OutputFormat(args.format))


def _run_h3_uncompact(args: argparse.Namespace, stdin: TextIO) -> str:
    cells = uncompact(_read_cells(args.cells, stdin), args.level)
    fmt = H3CellFormat(args.h3_cell_format)
    return format_cells((format_h3_cell(c, fmt) for c in cells), OutputFormat(args.format))


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """CLI entry point. Returns the process exit status."""

    parser = build_cli()
    args = parser.parse_args(argv)

    setup_logging(resolve_log_level(args.debug))

    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    handlers = {
        ("rand", "point"): _run_rand,
        ("geom", "split"): _run_split,
        ("geom", "triangulate"): _run_triangulate,
        ("s2", "cover"): _run_s2_cover,
        ("s2", "cut"): _run_s2_cut,
        ("s2", "cell-to-poly"): _run_s2_cell_to_poly,
        ("h3", "cover"): _run_h3_cover,
        ("h3", "cut"): _run_h3_cut,
        ("h3", "cell-to-poly"): _run_h3_cell_to_poly,
        ("h3", "compact"): _run_h3_compact,
        ("h3", "uncompact"): _run_h3_uncompact,
    }
    key = (args.command, args.subcommand)

    try:
        out = handlers[key](args, stdin)
    except GeoOpsError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1

    if out:
        stdout.write(out + "\n")
    return 0
