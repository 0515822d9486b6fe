"""
Constants declarations for geodetics
"""
import math
import sys

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_B = 6356752.314245  # Minor axis (meters)
WGS84_F = 1 / 298.257223563  # Flattening

# Smallest float difference considered significant
EPSILON = sys.float_info.epsilon

# Vincenty iteration controls
VINCENTY_TOLERANCE = 1e-12  # radians, approx 0.006mm
VINCENTY_DIRECT_MAX_ITERATIONS = 100
VINCENTY_INVERSE_MAX_ITERATIONS = 1000

# Rounding precision applied by the convenience wrappers
DISTANCE_PRECISION = 3  # millimetres
BEARING_PRECISION = 7  # 0.001 arcseconds

# Helmert unit normalisation
ARCSECONDS_TO_RADIANS = math.pi / (180 * 3600)
MILLIARCSECONDS_TO_RADIANS = ARCSECONDS_TO_RADIANS / 1000
PPM = 1e6
PPB = 1e9
MILLIMETRES = 1000
