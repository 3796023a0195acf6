# --------------------------- CONSTANTS --------------------------

# added to the norm before renormalising blended n-vectors
LERP_EPS = 1e-8

MIN_LAT = -90.0
MAX_LAT = 90.0
MIN_LNG = -180.0
MAX_LNG = 180.0

# --------------------------- CLI DEFAULTS -----------------------

DEFAULT_SEED = 0
DEFAULT_NUM_SAMPLES = 1
DEFAULT_OUTPUT_FORMAT = "csv"

# overrides the -d/--debug verbosity when set, e.g. GEOOPS_LOG_LEVEL=DEBUG
LOG_LEVEL_ENV = "GEOOPS_LOG_LEVEL"

# --------------------------- CELL GRIDS -------------------------

S2_MIN_LEVEL = 0
S2_MAX_LEVEL = 30
H3_MIN_RESOLUTION = 0
H3_MAX_RESOLUTION = 15

DEFAULT_S2_LEVEL = 12
DEFAULT_H3_COVER_LEVEL = 12
DEFAULT_H3_CUT_LEVEL = 6
