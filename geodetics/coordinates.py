"""
Representations of points on (geodetic) and relative to (geocentric cartesian) the earth
"""

__all__ = ['CartesianPoint', 'GeodeticPoint']

from typing import Optional, Tuple, Union, TYPE_CHECKING

import numpy as np

from geodetics._const import EPSILON
from geodetics.ellipsoids import (
    ELLIPSOIDS, Datum, Ellipsoid, ReferenceFrame, get_datum, get_reference_frame
)
from geodetics.exceptions import InvalidInputError
from geodetics.utils.functions import as_finite_float, wrap90, wrap180

if TYPE_CHECKING:  # pragma: no cover
    from geodetics.geodesic import DirectResult, InverseResult


_DatumLike = Union[str, Datum, None]
_FrameLike = Union[str, ReferenceFrame, None]


def _resolve_context(
    datum: _DatumLike,
    reference_frame: _FrameLike,
    epoch: Optional[float]
) -> Tuple[Optional[Datum], Optional[ReferenceFrame], Optional[float]]:
    """
    Validates the frame context of a point. A point belongs to no frame, to a datum, or to a
    reference frame observed at an epoch; never to a datum and a reference frame at once.
    """
    if datum is not None and reference_frame is not None:
        raise InvalidInputError(
            f'a point may have a datum ({datum}) or a reference frame ({reference_frame}), '
            'not both'
        )

    if datum is not None:
        datum = get_datum(datum)

    if reference_frame is not None:
        reference_frame = get_reference_frame(reference_frame)

    if epoch is not None:
        if reference_frame is None:
            raise InvalidInputError(f'epoch {epoch!r} given without a reference frame')
        epoch = as_finite_float(epoch, 'epoch', InvalidInputError)

    return datum, reference_frame, epoch


class _FrameContextMixin:
    """Shared accessors for the optional datum / reference frame a point belongs to"""

    __slots__ = ()

    _datum: Optional[Datum]
    _reference_frame: Optional[ReferenceFrame]
    _epoch: Optional[float]

    def __setattr__(self, key, value):
        if hasattr(self, '_frozen'):
            raise AttributeError(
                f'{self.__class__.__name__} is immutable; use .replace() to create a new point'
            )
        super().__setattr__(key, value)

    def _freeze(self):
        object.__setattr__(self, '_frozen', True)

    @property
    def datum(self) -> Optional[Datum]:
        """The datum this point is defined within, if any"""
        return self._datum

    @property
    def reference_frame(self) -> Optional[ReferenceFrame]:
        """The reference frame this point is defined within, if any"""
        return self._reference_frame

    @property
    def epoch(self) -> Optional[float]:
        """
        The observation epoch (decimal year) of this point. Defaults to the reference epoch of
        the point's reference frame; None when the point has no reference frame.
        """
        if self._epoch is not None:
            return self._epoch

        if self._reference_frame is not None:
            return self._reference_frame.epoch

        return None

    @property
    def ellipsoid(self) -> Ellipsoid:
        """The ellipsoid of this point's datum or reference frame, defaulting to WGS84"""
        if self._datum is not None:
            return self._datum.ellipsoid

        if self._reference_frame is not None:
            return self._reference_frame.ellipsoid

        return ELLIPSOIDS['WGS84']

    def _context_kwargs(self) -> dict:
        return {
            'datum': self._datum,
            'reference_frame': self._reference_frame,
            'epoch': self._epoch,
        }

    def _context_repr(self) -> str:
        if self._datum is not None:
            return f' ({self._datum.name})'

        if self._reference_frame is not None:
            if self.epoch != self._reference_frame.epoch:
                return f' ({self._reference_frame.name}@{self.epoch})'
            return f' ({self._reference_frame.name})'

        return ''

    def _same_context(self, other: '_FrameContextMixin') -> bool:
        return (
            self.datum == other.datum and
            self.reference_frame == other.reference_frame and
            self.epoch == other.epoch
        )


class GeodeticPoint(_FrameContextMixin):
    """
    A geodetic latitude/longitude/height point on an ellipsoidal model earth.

    Latitudes beyond a pole reflect back (91 -> 89) and longitudes wrap around the
    antimeridian (181 -> -179). Points are immutable; use .replace() to derive a new point.

    Args:
        latitude:
            Geodetic latitude, in degrees

        longitude:
            Longitude, in degrees

        height:
            (Default 0.0) Height above the ellipsoid, in meters

        datum:
            (Optional) The datum (or datum name) the point is defined within

        reference_frame:
            (Optional) The reference frame (or frame name) the point is defined within

        epoch:
            (Optional) Observation epoch as a decimal year; only valid with a reference frame,
            defaults to the frame's reference epoch
    """

    __slots__ = ('_latitude', '_longitude', '_height', '_datum', '_reference_frame', '_epoch',
                 '_frozen')

    def __init__(
        self,
        latitude: float,
        longitude: float,
        height: float = 0.0,
        datum: _DatumLike = None,
        reference_frame: _FrameLike = None,
        epoch: Optional[float] = None,
    ):
        lat = as_finite_float(latitude, 'latitude', InvalidInputError)
        lon = as_finite_float(longitude, 'longitude', InvalidInputError)
        height = as_finite_float(height, 'height', InvalidInputError)

        self._latitude = wrap90(lat)
        self._longitude = wrap180(lon)
        self._height = height
        self._datum, self._reference_frame, self._epoch = _resolve_context(
            datum, reference_frame, epoch
        )
        self._freeze()

    def __eq__(self, other):
        if not isinstance(other, GeodeticPoint):
            return False

        return (
            self.latitude == other.latitude and
            self.longitude == other.longitude and
            self.height == other.height and
            self._same_context(other)
        )

    def __hash__(self):
        return hash((self.latitude, self.longitude, self.height, self.datum,
                     self.reference_frame, self.epoch))

    def __repr__(self):
        return (
            f'<GeodeticPoint({self.latitude}, {self.longitude}, {self.height})'
            f'{self._context_repr()}>'
        )

    @property
    def latitude(self) -> float:
        """Geodetic latitude, in degrees north of the equator"""
        return self._latitude

    @property
    def longitude(self) -> float:
        """Longitude, in degrees east of the reference meridian"""
        return self._longitude

    @property
    def height(self) -> float:
        """Height above the ellipsoid, in meters"""
        return self._height

    def equals(self, other: 'GeodeticPoint', tolerance: float = EPSILON) -> bool:
        """
        Test whether another point is equal to this one within a tolerance (degrees for
        latitude and longitude, meters for height). Frame context must match exactly.

        Args:
            other:
                The point to compare against

            tolerance:
                (Default machine epsilon) The largest difference considered equal

        Returns:
            bool
        """
        if not isinstance(other, GeodeticPoint):
            raise InvalidInputError(f'invalid point {other!r}')

        return (
            abs(self.latitude - other.latitude) <= tolerance and
            abs(self.longitude - other.longitude) <= tolerance and
            abs(self.height - other.height) <= tolerance and
            self._same_context(other)
        )

    def replace(self, **changes) -> 'GeodeticPoint':
        """
        Create a new point from this one with some attributes changed, e.g.
        `point.replace(height=0)`. The new point is validated and wrapped as usual.

        Keyword Args:
            latitude, longitude, height, datum, reference_frame, epoch

        Returns:
            GeodeticPoint
        """
        kwargs = {
            'latitude': self.latitude,
            'longitude': self.longitude,
            'height': self.height,
            **self._context_kwargs(),
        }
        unknown = set(changes) - set(kwargs)
        if unknown:
            raise InvalidInputError(f'unknown GeodeticPoint attributes: {sorted(unknown)}')

        kwargs.update(changes)
        return GeodeticPoint(**kwargs)

    def to_float(self) -> Tuple[float, float, float]:
        """Returns the point as a (latitude, longitude, height) tuple"""
        return self.latitude, self.longitude, self.height

    def to_cartesian(self) -> 'CartesianPoint':
        """Converts this point to geocentric (ECEF) cartesian coordinates on the same frame"""
        from geodetics.conversion import to_cartesian  # pylint: disable=import-outside-toplevel

        return to_cartesian(self)

    def convert_datum(self, to_datum: Union[str, Datum]) -> 'GeodeticPoint':
        """
        Converts this point to a different datum using a 7-parameter Helmert transform.

        Args:
            to_datum:
                The datum (or datum name) to convert to

        Returns:
            GeodeticPoint
        """
        from geodetics.helmert import convert_datum  # pylint: disable=import-outside-toplevel

        return convert_datum(self.to_cartesian(), to_datum).to_geodetic()

    def convert_reference_frame(
        self,
        to_frame: Union[str, ReferenceFrame]
    ) -> 'GeodeticPoint':
        """
        Converts this point to a different reference frame using 14-parameter Helmert
        transforms, at this point's observation epoch.

        Args:
            to_frame:
                The reference frame (or frame name) to convert to

        Returns:
            GeodeticPoint
        """
        from geodetics.helmert import (  # pylint: disable=import-outside-toplevel
            convert_reference_frame
        )

        cartesian = self.to_cartesian()
        converted = convert_reference_frame(cartesian, to_frame)
        if converted is cartesian:
            return self

        return converted.to_geodetic()

    def direct(self, distance: float, initial_bearing: float) -> 'DirectResult':
        """Vincenty direct solution from this point; see geodetics.geodesic.vincenty_direct"""
        from geodetics.geodesic import vincenty_direct  # pylint: disable=import-outside-toplevel

        return vincenty_direct(self, distance, initial_bearing)

    def inverse(self, other: 'GeodeticPoint') -> 'InverseResult':
        """Vincenty inverse solution to another point; see geodetics.geodesic.vincenty_inverse"""
        from geodetics.geodesic import vincenty_inverse  # pylint: disable=import-outside-toplevel

        return vincenty_inverse(self, other)

    def destination_point(self, distance: float, initial_bearing: float) -> 'GeodeticPoint':
        """
        Returns the destination point having travelled the given distance along a geodesic
        given by initial bearing from this point.

        Args:
            distance:
                Distance travelled, in meters

            initial_bearing:
                Initial bearing, in degrees clockwise from north

        Returns:
            GeodeticPoint
        """
        return self.direct(distance, initial_bearing).point

    def final_bearing_on(self, distance: float, initial_bearing: float) -> float:
        """Final bearing after travelling a geodesic from this point, rounded to 0.001″"""
        from geodetics.geodesic import final_bearing_on  # pylint: disable=import-outside-toplevel

        return final_bearing_on(self, distance, initial_bearing)

    def distance_to(self, other: 'GeodeticPoint') -> float:
        """Geodesic distance to another point in meters, rounded to 1mm (NaN if unresolved)"""
        from geodetics.geodesic import distance_to  # pylint: disable=import-outside-toplevel

        return distance_to(self, other)

    def initial_bearing_to(self, other: 'GeodeticPoint') -> float:
        """Initial bearing to another point in degrees, rounded to 0.001″ (NaN if unresolved)"""
        from geodetics.geodesic import (  # pylint: disable=import-outside-toplevel
            initial_bearing_to
        )

        return initial_bearing_to(self, other)

    def final_bearing_to(self, other: 'GeodeticPoint') -> float:
        """Final bearing arriving at another point, rounded to 0.001″ (NaN if unresolved)"""
        from geodetics.geodesic import final_bearing_to  # pylint: disable=import-outside-toplevel

        return final_bearing_to(self, other)

    def intermediate_point_to(self, other: 'GeodeticPoint', fraction: float) -> 'GeodeticPoint':
        """
        Returns the point at a given fraction of the geodesic between this point and another.

        Args:
            other:
                The far end of the geodesic

            fraction:
                0 returns this point, 1 returns the other point

        Returns:
            GeodeticPoint
        """
        from geodetics.geodesic import (  # pylint: disable=import-outside-toplevel
            intermediate_point
        )

        return intermediate_point(self, other, fraction)


class CartesianPoint(_FrameContextMixin):
    """
    A geocentric, earth-centred earth-fixed (ECEF) cartesian point, in meters.

    x points to 0°N 0°E, y to 0°N 90°E, and z to 90°N. The optional datum or reference frame
    identifies the prime meridian and the ellipsoid used when converting back to geodetic
    coordinates.

    Args:
        x, y, z:
            Coordinates in meters

        datum:
            (Optional) The datum (or datum name) the point is defined within

        reference_frame:
            (Optional) The reference frame (or frame name) the point is defined within

        epoch:
            (Optional) Observation epoch as a decimal year; only valid with a reference frame
    """

    __slots__ = ('_x', '_y', '_z', '_datum', '_reference_frame', '_epoch', '_frozen')

    def __init__(
        self,
        x: float,
        y: float,
        z: float,
        datum: _DatumLike = None,
        reference_frame: _FrameLike = None,
        epoch: Optional[float] = None,
    ):
        self._x = as_finite_float(x, 'x', InvalidInputError)
        self._y = as_finite_float(y, 'y', InvalidInputError)
        self._z = as_finite_float(z, 'z', InvalidInputError)
        self._datum, self._reference_frame, self._epoch = _resolve_context(
            datum, reference_frame, epoch
        )
        self._freeze()

    def __eq__(self, other):
        if not isinstance(other, CartesianPoint):
            return False

        return self.to_float() == other.to_float() and self._same_context(other)

    def __hash__(self):
        return hash((*self.to_float(), self.datum, self.reference_frame, self.epoch))

    def __iter__(self):
        return iter(self.to_float())

    def __repr__(self):
        return f'<CartesianPoint({self.x}, {self.y}, {self.z}){self._context_repr()}>'

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> float:
        return self._z

    @classmethod
    def from_numpy(cls, xyz: np.ndarray, **context) -> 'CartesianPoint':
        """
        Creates a CartesianPoint from a length-3 array.

        Keyword Args:
            datum, reference_frame, epoch

        Returns:
            CartesianPoint
        """
        if xyz.shape != (3,):
            raise InvalidInputError(f'expected an array of shape (3,), got {xyz.shape}')

        return cls(*(float(v) for v in xyz), **context)

    def replace(self, **changes) -> 'CartesianPoint':
        """
        Create a new point from this one with some attributes changed.

        Keyword Args:
            x, y, z, datum, reference_frame, epoch

        Returns:
            CartesianPoint
        """
        kwargs = {'x': self.x, 'y': self.y, 'z': self.z, **self._context_kwargs()}
        unknown = set(changes) - set(kwargs)
        if unknown:
            raise InvalidInputError(f'unknown CartesianPoint attributes: {sorted(unknown)}')

        kwargs.update(changes)
        return CartesianPoint(**kwargs)

    def to_float(self) -> Tuple[float, float, float]:
        """Returns the point as an (x, y, z) tuple"""
        return self.x, self.y, self.z

    def to_numpy(self) -> np.ndarray:
        """Returns the point as a length-3 array"""
        return np.array(self.to_float())

    def to_str(self, precision: int = 0) -> str:
        """
        Renders the point as '[x,y,z]', followed by the datum or reference frame if set. The
        observation epoch is included when it differs from the frame's reference epoch,
        e.g. '[4027894,307046,4919475](ITRF2014@2012.0)'.

        Args:
            precision:
                (Default 0) Number of decimal places

        Returns:
            str
        """
        out = f'[{self.x:.{precision}f},{self.y:.{precision}f},{self.z:.{precision}f}]'
        return out + self._context_repr().strip()

    def to_geodetic(self, ellipsoid: Optional[Ellipsoid] = None) -> GeodeticPoint:
        """
        Converts this point to a geodetic latitude/longitude point on the same frame.

        Args:
            ellipsoid:
                (Optional) Ellipsoid to convert on; defaults to the ellipsoid of this point's
                datum or reference frame, else WGS84

        Returns:
            GeodeticPoint
        """
        from geodetics.conversion import to_geodetic  # pylint: disable=import-outside-toplevel

        return to_geodetic(self, ellipsoid)

    def convert_datum(self, to_datum: Union[str, Datum]) -> 'CartesianPoint':
        """Converts this point to a new datum; see geodetics.helmert.convert_datum"""
        from geodetics.helmert import convert_datum  # pylint: disable=import-outside-toplevel

        return convert_datum(self, to_datum)

    def convert_reference_frame(
        self,
        to_frame: Union[str, ReferenceFrame],
        epoch: Optional[float] = None,
    ) -> 'CartesianPoint':
        """Converts this point to a new reference frame; see geodetics.helmert"""
        from geodetics.helmert import (  # pylint: disable=import-outside-toplevel
            convert_reference_frame
        )

        return convert_reference_frame(self, to_frame, epoch)
