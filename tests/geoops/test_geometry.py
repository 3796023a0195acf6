import pytest
from shapely.geometry import LineString, MultiPolygon, Point, Polygon, box

from geoops.datastructures import BoundingBox, Coordinate, Triangle
from geoops.errors import GeometryConversionError
from geoops.geometry import (
    as_areal,
    as_polygon,
    cell_from_corners,
    cut_by_cells,
    explode_polygons,
    parse_wkt,
    triangulate,
)


def test_parse_wkt():
    g = parse_wkt("  POLYGON ((0 0, 1 0, 1 1, 0 1, 0 0))\n")
    assert g.geom_type == "Polygon"
    assert g.area == pytest.approx(1.0)


@pytest.mark.parametrize("text", ["", "   ", "POLYGON ((0 0, 1 0", "not wkt at all"])
def test_parse_wkt_rejects_garbage(text):
    with pytest.raises(GeometryConversionError):
        parse_wkt(text)


def test_as_polygon():
    p = box(0, 0, 1, 1)
    assert as_polygon(p) is p
    assert as_polygon(MultiPolygon([p])).equals(p)

    with pytest.raises(GeometryConversionError):
        as_polygon(MultiPolygon([p, box(2, 2, 3, 3)]))
    with pytest.raises(GeometryConversionError):
        as_polygon(LineString([(0, 0), (1, 1)]))
    with pytest.raises(GeometryConversionError):
        as_polygon(Point(0, 0))


def test_as_areal():
    mp = MultiPolygon([box(0, 0, 1, 1), box(2, 2, 3, 3)])
    assert as_areal(mp) is mp
    with pytest.raises(GeometryConversionError):
        as_areal(Polygon())


def test_triangulate_square():
    tris = triangulate(box(0, 0, 2, 2))
    assert len(tris) == 2
    assert all(isinstance(t, Triangle) for t in tris)
    assert sum(t.area() for t in tris) == pytest.approx(4.0)


def test_triangulate_respects_hole_and_concavity():
    shell = [(0, 0), (10, 0), (10, 10), (0, 10)]
    hole = [(4, 4), (6, 4), (6, 6), (4, 6)]
    poly = Polygon(shell, [hole])

    tris = triangulate(poly)
    assert sum(t.area() for t in tris) == pytest.approx(poly.area)

    l_shape = Polygon([(0, 0), (4, 0), (4, 4), (2, 1), (0, 4)])
    tris = triangulate(l_shape)
    assert sum(t.area() for t in tris) == pytest.approx(l_shape.area)
    for t in tris:
        assert l_shape.buffer(1e-9).covers(t.to_polygon())


def test_triangulate_empty_is_empty():
    assert triangulate(Polygon()) == []


BOWTIE = "POLYGON ((0 0, 10 10, 10 0, 0 10, 0 0))"


def test_invalid_polygons_rejected():
    bowtie = parse_wkt(BOWTIE)
    collinear = Polygon([(0, 0), (1, 1), (2, 2)])

    for geom in (bowtie, collinear, MultiPolygon([bowtie])):
        with pytest.raises(GeometryConversionError):
            as_polygon(geom)
        with pytest.raises(GeometryConversionError):
            as_areal(geom)
        with pytest.raises(GeometryConversionError):
            triangulate(geom)


def test_invalid_polygon_error_explains_why():
    with pytest.raises(GeometryConversionError, match="Self-intersection"):
        as_polygon(parse_wkt(BOWTIE))


def test_cell_from_corners_normalises():
    cell = cell_from_corners(Coordinate(5.0, 1.0), Coordinate(2.0, 4.0))
    assert cell.bounds == (2.0, 1.0, 5.0, 4.0)


def test_bounding_box():
    bb = BoundingBox.from_geometry(Polygon([(2, 1), (7, 3), (4, 8)]))
    assert (bb.width, bb.height) == (5.0, 7.0)

    c0, c1, c2, c3 = bb.corners()
    assert c0 == Coordinate(2.0, 1.0)
    assert c1 == Coordinate(2.0, 8.0)
    assert c2 == Coordinate(7.0, 8.0)
    assert c3 == Coordinate(7.0, 1.0)

    assert bb.contains(Coordinate(3.0, 3.0))
    assert not bb.contains(Coordinate(8.0, 3.0))
    assert bb.contains(Coordinate(7.0 + 1e-12, 3.0), eps=1e-9)
    assert bb.to_polygon().area == pytest.approx(35.0)


def test_explode_polygons():
    gc = parse_wkt(
        "GEOMETRYCOLLECTION (POLYGON ((0 0, 1 0, 1 1, 0 0)), LINESTRING (0 0, 1 1), "
        "MULTIPOLYGON (((2 2, 3 2, 3 3, 2 2)), ((4 4, 5 4, 5 5, 4 4))))"
    )
    parts = explode_polygons(gc)
    assert len(parts) == 3
    assert all(p.geom_type == "Polygon" for p in parts)
    assert explode_polygons(LineString([(0, 0), (1, 1)])) == []
    assert explode_polygons(Polygon()) == []


def test_cut_by_cells_splits_into_single_cell_pieces():
    # U shape: the top cell cuts it into two separate arms
    u_shape = Polygon([(0, 0), (3, 0), (3, 3), (2, 3), (2, 1), (1, 1), (1, 3), (0, 3)])
    cells = [box(0, 0, 3, 1.5), box(0, 1.5, 3, 3), box(10, 10, 11, 11)]

    pieces = cut_by_cells(u_shape, cells)
    assert len(pieces) == 3
    assert all(p.geom_type == "Polygon" for p in pieces)
    assert sum(p.area for p in pieces) == pytest.approx(u_shape.area)


def test_cut_by_cells_drops_touching_edges():
    pieces = cut_by_cells(box(0, 0, 1, 1), [box(1, 0, 2, 1), box(0, 0, 1, 1)])
    assert len(pieces) == 1
    assert pieces[0].equals(box(0, 0, 1, 1))
