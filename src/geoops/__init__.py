from .datastructures import BoundingBox, Coordinate, Triangle
from .errors import DegenerateWeightsError, GeometryConversionError, GeoOpsError, InvalidParameterError
from .h3cells import h3_cell_to_polygon, h3_covering, h3_cut
from .interpolation import lerp
from .nvector import NVector, from_nvector, to_nvector
from .partition import partition_region
from .s2cells import s2_cell_to_polygon, s2_covering, s2_cut
from .samplers import GeoSampler, PolygonSampler, UniformSampler, create_rng, make_sampler
from .triangles import sample_point_in_triangle
from .weighted import WeightedTable, build_weighted_table

__all__ = [
    "BoundingBox",
    "Coordinate",
    "Triangle",
    "NVector",
    "to_nvector",
    "from_nvector",
    "lerp",
    "WeightedTable",
    "build_weighted_table",
    "sample_point_in_triangle",
    "partition_region",
    "GeoSampler",
    "UniformSampler",
    "PolygonSampler",
    "create_rng",
    "make_sampler",
    "s2_covering",
    "s2_cut",
    "s2_cell_to_polygon",
    "h3_covering",
    "h3_cut",
    "h3_cell_to_polygon",
    "GeoOpsError",
    "InvalidParameterError",
    "GeometryConversionError",
    "DegenerateWeightsError",
]
