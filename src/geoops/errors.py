class GeoOpsError(Exception):
    """Base class for errors raised by geoops."""


class InvalidParameterError(GeoOpsError, ValueError):
    """A numeric parameter is outside its meaningful range."""


class GeometryConversionError(GeoOpsError, TypeError):
    """Input geometry cannot be interpreted as the required shape."""


class DegenerateWeightsError(GeoOpsError, ValueError):
    """Weight vector carries no probability mass (empty or zero sum)."""
