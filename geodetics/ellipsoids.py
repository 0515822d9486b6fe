"""
Ellipsoids, datums, and reference frames, with registries of published geodetic constants
"""

__all__ = [
    'DATUMS', 'ELLIPSOIDS', 'REFERENCE_FRAMES', 'Datum', 'Ellipsoid', 'ReferenceFrame',
    'get_datum', 'get_ellipsoid', 'get_reference_frame'
]

from types import MappingProxyType
from typing import Mapping, Tuple, Union

from pydantic import validate_call

from geodetics._const import WGS84_A, WGS84_B, WGS84_F
from geodetics.exceptions import (
    InvalidInputError, UnknownDatumError, UnknownReferenceFrameError
)

HelmertParams = Tuple[float, float, float, float, float, float, float]


class Ellipsoid:
    """
    Reference ellipsoid, defined by its semi-major axis (a), semi-minor axis (b) and
    flattening (f).

    Published tables give f independently of a and b, so f is kept exactly as supplied
    rather than being recomputed as (a-b)/a.
    """

    __slots__ = ('_name', '_a', '_b', '_f')

    @validate_call
    def __init__(self, name: str, a: float, b: float, f: float):
        if not a > 0:
            raise InvalidInputError(
                f'invalid ellipsoid {name}: semi-major axis {a} must be positive'
            )
        if not 0 < b <= a:
            raise InvalidInputError(
                f'invalid ellipsoid {name}: semi-minor axis {b} must be in (0, {a}]'
            )
        if not 0 <= f < 1:
            raise InvalidInputError(
                f'invalid ellipsoid {name}: flattening {f} must be in [0, 1)'
            )

        self._name, self._a, self._b, self._f = name, a, b, f

    def __eq__(self, other):
        if not isinstance(other, Ellipsoid):
            return False

        return (self.a, self.b, self.f) == (other.a, other.b, other.f)

    def __hash__(self):
        return hash((self.a, self.b, self.f))

    def __repr__(self):
        return f'<Ellipsoid {self.name} a={self.a} b={self.b} f={self.f}>'

    @property
    def name(self) -> str:
        return self._name

    @property
    def a(self) -> float:
        """Semi-major axis, in meters"""
        return self._a

    @property
    def b(self) -> float:
        """Semi-minor axis, in meters"""
        return self._b

    @property
    def f(self) -> float:
        """Flattening"""
        return self._f

    @property
    def e2(self) -> float:
        """First eccentricity squared, (a²-b²)/a², computed from f for better conditioning"""
        return 2 * self._f - self._f * self._f

    @property
    def ep2(self) -> float:
        """Second eccentricity squared, (a²-b²)/b²"""
        e2 = self.e2
        return e2 / (1 - e2)


class Datum:
    """
    A (static) geodetic datum: an ellipsoid plus the 7-parameter Helmert transform which
    converts WGS84 coordinates into this datum.

    Transform parameters are (tx, ty, tz, s, rx, ry, rz) in meters, parts-per-million and
    arcseconds respectively.
    """

    __slots__ = ('_name', '_ellipsoid', '_transform')

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(self, name: str, ellipsoid: Ellipsoid, transform: HelmertParams):
        self._name = name
        self._ellipsoid = ellipsoid
        self._transform = transform

    def __eq__(self, other):
        if not isinstance(other, Datum):
            return False

        return (
            self.name == other.name and
            self.ellipsoid == other.ellipsoid and
            self.transform == other.transform
        )

    def __hash__(self):
        return hash((self.name, self.transform))

    def __repr__(self):
        return f'<Datum {self.name} ({self.ellipsoid.name})>'

    @property
    def name(self) -> str:
        return self._name

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid

    @property
    def transform(self) -> HelmertParams:
        """Helmert parameters converting WGS84 into this datum"""
        return self._transform


class ReferenceFrame:
    """
    A (dynamic) terrestrial reference frame, with the reference epoch (decimal year) of its
    realisation and its ellipsoid.
    """

    __slots__ = ('_name', '_epoch', '_ellipsoid')

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(self, name: str, epoch: float, ellipsoid: Ellipsoid):
        self._name = name
        self._epoch = epoch
        self._ellipsoid = ellipsoid

    def __eq__(self, other):
        if not isinstance(other, ReferenceFrame):
            return False

        return (
            self.name == other.name and
            self.epoch == other.epoch and
            self.ellipsoid == other.ellipsoid
        )

    def __hash__(self):
        return hash((self.name, self.epoch))

    def __repr__(self):
        return f'<ReferenceFrame {self.name}@{self.epoch}>'

    @property
    def name(self) -> str:
        return self._name

    @property
    def epoch(self) -> float:
        """Reference epoch, as a decimal year"""
        return self._epoch

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid


def _freeze(items) -> Mapping:
    return MappingProxyType({item.name: item for item in items})


ELLIPSOIDS: Mapping[str, Ellipsoid] = _freeze([
    Ellipsoid('WGS84', WGS84_A, WGS84_B, WGS84_F),
    Ellipsoid('Airy1830', 6377563.396, 6356256.909, 1 / 299.3249646),
    Ellipsoid('AiryModified', 6377340.189, 6356034.448, 1 / 299.3249646),
    Ellipsoid('Bessel1841', 6377397.155, 6356078.962822, 1 / 299.15281285),
    Ellipsoid('Clarke1866', 6378206.4, 6356583.8, 1 / 294.978698214),
    Ellipsoid('Clarke1880IGN', 6378249.2, 6356515.0, 1 / 293.466021294),
    Ellipsoid('GRS80', 6378137, 6356752.314140, 1 / 298.257222101),
    Ellipsoid('Intl1924', 6378388, 6356911.946128, 1 / 297),  # aka Hayford
    Ellipsoid('WGS72', 6378135, 6356750.52, 1 / 298.26),
])

DATUMS: Mapping[str, Datum] = _freeze([
    # transforms from WGS84: tx, ty, tz (m), s (ppm), rx, ry, rz (arcsec)
    Datum('ED50', ELLIPSOIDS['Intl1924'], (89.5, 93.8, 123.1, -1.2, 0.0, 0.0, 0.156)),
    Datum('ETRS89', ELLIPSOIDS['GRS80'], (0, 0, 0, 0, 0, 0, 0)),
    Datum(
        'Irl1975', ELLIPSOIDS['AiryModified'],
        (-482.530, 130.596, -564.557, -8.150, 1.042, 0.214, 0.631)
    ),
    Datum('NAD27', ELLIPSOIDS['Clarke1866'], (8, -160, -176, 0, 0, 0, 0)),
    Datum(
        'NAD83', ELLIPSOIDS['GRS80'],
        (0.9956, -1.9103, -0.5215, -0.00062, 0.025915, 0.009426, 0.011599)
    ),
    Datum('NTF', ELLIPSOIDS['Clarke1880IGN'], (168, 60, -320, 0, 0, 0, 0)),
    Datum(
        'OSGB36', ELLIPSOIDS['Airy1830'],
        (-446.448, 125.157, -542.060, 20.4894, -0.1502, -0.2470, -0.8421)
    ),
    Datum('Potsdam', ELLIPSOIDS['Bessel1841'], (-582, -105, -414, -8.3, 1.04, 0.35, -3.08)),
    Datum('TokyoJapan', ELLIPSOIDS['Bessel1841'], (148, -507, -685, 0, 0, 0, 0)),
    Datum('WGS72', ELLIPSOIDS['WGS72'], (0, 0, -4.5, -0.22, 0, 0, 0.554)),
    Datum('WGS84', ELLIPSOIDS['WGS84'], (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)),
])

REFERENCE_FRAMES: Mapping[str, ReferenceFrame] = _freeze([
    ReferenceFrame('ITRF2014', 2010.0, ELLIPSOIDS['GRS80']),
    ReferenceFrame('ITRF2008', 2005.0, ELLIPSOIDS['GRS80']),
    ReferenceFrame('ITRF2005', 2000.0, ELLIPSOIDS['GRS80']),
    ReferenceFrame('ITRF2000', 1997.0, ELLIPSOIDS['GRS80']),
    ReferenceFrame('ITRF93', 1988.0, ELLIPSOIDS['GRS80']),
    ReferenceFrame('ITRF91', 1988.0, ELLIPSOIDS['GRS80']),
    ReferenceFrame('WGS84g1762', 2005.0, ELLIPSOIDS['WGS84']),
    ReferenceFrame('WGS84g1674', 2005.0, ELLIPSOIDS['WGS84']),
    ReferenceFrame('WGS84g1150', 2001.0, ELLIPSOIDS['WGS84']),
    ReferenceFrame('ETRF2000', 2005.0, ELLIPSOIDS['GRS80']),  # ETRF2000(R08)
    ReferenceFrame('NAD83', 1997.0, ELLIPSOIDS['GRS80']),  # CORS96
    ReferenceFrame('GDA94', 1994.0, ELLIPSOIDS['GRS80']),
])


def get_ellipsoid(ellipsoid: Union[str, Ellipsoid]) -> Ellipsoid:
    """
    Look up a registered ellipsoid by name. Ellipsoid instances are passed through.

    Args:
        ellipsoid:
            An ellipsoid name (e.g. 'WGS84') or an Ellipsoid

    Returns:
        Ellipsoid
    """
    if isinstance(ellipsoid, Ellipsoid):
        return ellipsoid

    try:
        return ELLIPSOIDS[ellipsoid]
    except (KeyError, TypeError):
        raise UnknownDatumError(
            f'unrecognised ellipsoid {ellipsoid!r}; expected one of {", ".join(ELLIPSOIDS)}'
        ) from None


def get_datum(datum: Union[str, Datum]) -> Datum:
    """
    Look up a registered datum by name. Datum instances are passed through.

    Args:
        datum:
            A datum name (e.g. 'OSGB36') or a Datum

    Returns:
        Datum
    """
    if isinstance(datum, Datum):
        return datum

    try:
        return DATUMS[datum]
    except (KeyError, TypeError):
        raise UnknownDatumError(
            f'unrecognised datum {datum!r}; expected one of {", ".join(DATUMS)}'
        ) from None


def get_reference_frame(frame: Union[str, ReferenceFrame]) -> ReferenceFrame:
    """
    Look up a registered reference frame by name. ReferenceFrame instances are passed through.

    Args:
        frame:
            A reference frame name (e.g. 'ITRF2014') or a ReferenceFrame

    Returns:
        ReferenceFrame
    """
    if isinstance(frame, ReferenceFrame):
        return frame

    try:
        return REFERENCE_FRAMES[frame]
    except (KeyError, TypeError):
        raise UnknownReferenceFrameError(
            f'unrecognised reference frame {frame!r}; '
            f'expected one of {", ".join(REFERENCE_FRAMES)}'
        ) from None
