from geodetics._version import __version__  # noqa: F401
from geodetics.utils.logging import LOGGER
from geodetics.exceptions import (
    ConvergenceError, DomainError, FormatError, GeodeticError, InvalidInputError,
    NoTransformPathError, UnknownDatumError, UnknownReferenceFrameError
)
from geodetics.ellipsoids import (
    DATUMS, ELLIPSOIDS, REFERENCE_FRAMES, Datum, Ellipsoid, ReferenceFrame
)
from geodetics.transform_params import TRANSFORM_PARAMS, TransformParams
from geodetics.coordinates import CartesianPoint, GeodeticPoint
from geodetics.conversion import to_cartesian, to_geodetic
from geodetics.geodesic import vincenty_direct, vincenty_inverse
from geodetics.helmert import convert_datum, convert_reference_frame

__all__ = [
    'CartesianPoint',
    'ConvergenceError',
    'DATUMS',
    'Datum',
    'DomainError',
    'ELLIPSOIDS',
    'Ellipsoid',
    'FormatError',
    'GeodeticError',
    'GeodeticPoint',
    'InvalidInputError',
    'NoTransformPathError',
    'REFERENCE_FRAMES',
    'ReferenceFrame',
    'TRANSFORM_PARAMS',
    'TransformParams',
    'UnknownDatumError',
    'UnknownReferenceFrameError',
    'convert_datum',
    'convert_reference_frame',
    'to_cartesian',
    'to_geodetic',
    'vincenty_direct',
    'vincenty_inverse',
    'LOGGER',
]
