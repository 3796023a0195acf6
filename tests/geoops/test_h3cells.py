import h3
import pytest
from shapely.geometry import LineString, MultiPoint, Point, Polygon, box
from shapely.ops import unary_union

from geoops.errors import GeometryConversionError, InvalidParameterError
from geoops.h3cells import (
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

# roughly San Francisco, lon/lat
SF = box(-122.5, 37.7, -122.35, 37.82)


def test_point_covering_is_its_cell():
    cells = h3_covering(Point(-122.418, 37.775), 9)
    assert cells == [h3.latlng_to_cell(37.775, -122.418, 9)]


def test_multipoint_covering_is_deduplicated():
    pts = MultiPoint([(-122.418, 37.775), (-122.418, 37.775), (2.35, 48.85)])
    cells = h3_covering(pts, 5)
    assert len(cells) == 2
    assert cells == sorted(cells)


def test_cover_modes_are_nested():
    contains = set(h3_covering(SF, 7, H3CoverMode.CONTAINS))
    centroid = set(h3_covering(SF, 7, "centroid"))
    intersects = set(h3_covering(SF, 7))

    assert contains
    assert contains <= centroid <= intersects
    assert len(intersects) > len(contains)
    assert all(h3.get_resolution(c) == 7 for c in intersects)


def test_centroid_mode_keeps_cells_centred_inside():
    for cell in h3_covering(SF, 7, H3CoverMode.CENTROID):
        lat, lng = h3.cell_to_latlng(cell)
        assert SF.buffer(1e-9).contains(Point(lng, lat))


def test_intersecting_covering_covers_polygon():
    cells = h3_covering(SF, 7, H3CoverMode.INTERSECTS)
    union = unary_union([h3_cell_to_polygon(c) for c in cells])
    assert union.buffer(1e-6).covers(SF)


def test_cell_polygon():
    cell = h3.latlng_to_cell(37.775, -122.418, 9)
    poly = h3_cell_to_polygon(cell)

    assert len(poly.exterior.coords) == 7
    assert poly.is_valid
    assert poly.contains(Point(-122.418, 37.775))


def test_cut_pieces_fill_polygon():
    region = Polygon([(-122.5, 37.7), (-122.35, 37.7), (-122.35, 37.82), (-122.42, 37.75), (-122.5, 37.82)])
    pieces = h3_cut(region, 7)

    assert len(pieces) > 1
    assert all(p.geom_type == "Polygon" for p in pieces)
    for p in pieces:
        assert region.buffer(1e-9).covers(p)
    assert sum(p.area for p in pieces) == pytest.approx(region.area, rel=1e-5)


def test_cut_rejects_non_areal():
    with pytest.raises(GeometryConversionError):
        h3_cut(LineString([(0, 0), (1, 1)]), 5)


def test_covering_rejects_lines_and_invalid_polygons():
    with pytest.raises(GeometryConversionError):
        h3_covering(LineString([(0, 0), (1, 1)]), 5)
    with pytest.raises(GeometryConversionError):
        h3_covering(Polygon([(0, 0), (10, 10), (10, 0), (0, 10)]), 5)


@pytest.mark.parametrize("level", [-1, 16])
def test_rejects_bad_resolution(level):
    with pytest.raises(InvalidParameterError):
        h3_covering(SF, level)
    with pytest.raises(InvalidParameterError):
        uncompact([h3.latlng_to_cell(37.775, -122.418, 5)], level)


def test_compact_and_uncompact():
    parent = h3.latlng_to_cell(37.775, -122.418, 6)
    children = sorted(h3.cell_to_children(parent, 8))

    assert compact(children) == [parent]
    assert uncompact([parent], 8) == children
    assert uncompact([parent], 6) == [parent]


def test_uncompact_to_coarser_resolution_fails():
    cell = h3.latlng_to_cell(37.775, -122.418, 8)
    with pytest.raises(InvalidParameterError):
        uncompact([cell], 5)


def test_parse_cells():
    a = h3.latlng_to_cell(37.775, -122.418, 9)
    b = h3.latlng_to_cell(48.85, 2.35, 9)

    assert parse_h3_cell(" " + a.upper() + "\n") == a
    assert parse_h3_cells([f"{a},{b}", a]) == [a, b, a]
    assert parse_h3_cells(["", " "]) == []


@pytest.mark.parametrize("text", ["", "not-a-cell", "ffffffffffffffff", "0"])
def test_parse_rejects_invalid_cells(text):
    with pytest.raises(InvalidParameterError):
        parse_h3_cell(text)


def test_cell_formats():
    cell = h3.latlng_to_cell(37.775, -122.418, 9)
    value = h3.str_to_int(cell)

    assert format_h3_cell(cell) == cell
    assert int(format_h3_cell(cell, H3CellFormat.OCTAL), 8) == value
    assert int(format_h3_cell(cell, "binary"), 2) == value
