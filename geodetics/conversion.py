"""
Conversion between geodetic (latitude/longitude/height) and geocentric cartesian (ECEF)
coordinates on an ellipsoid
"""
__all__ = ['to_cartesian', 'to_geodetic']

import math
from typing import Optional

from geodetics.coordinates import CartesianPoint, GeodeticPoint
from geodetics.ellipsoids import Ellipsoid
from geodetics.exceptions import InvalidInputError
from geodetics.utils.logging import warn_once


def to_cartesian(point: GeodeticPoint) -> CartesianPoint:
    """
    Converts a geodetic point to geocentric cartesian coordinates, on the ellipsoid of the
    point's datum or reference frame (WGS84 if it has neither).

        x = (ν+h)⋅cosφ⋅cosλ, y = (ν+h)⋅cosφ⋅sinλ, z = (ν⋅(1-e²)+h)⋅sinφ

    where ν = a/√(1−e²⋅sin²φ) is the radius of curvature in the prime vertical.

    Args:
        point:
            The geodetic point

    Returns:
        CartesianPoint, carrying the same datum / reference frame / epoch as the point
    """
    if not isinstance(point, GeodeticPoint):
        raise InvalidInputError(f'invalid point {point!r}')

    ellipsoid = point.ellipsoid
    phi, lam, h = math.radians(point.latitude), math.radians(point.longitude), point.height

    sin_phi, cos_phi = math.sin(phi), math.cos(phi)
    sin_lam, cos_lam = math.sin(lam), math.cos(lam)

    e2 = ellipsoid.e2
    nu = ellipsoid.a / math.sqrt(1 - e2 * sin_phi * sin_phi)

    return CartesianPoint(
        (nu + h) * cos_phi * cos_lam,
        (nu + h) * cos_phi * sin_lam,
        (nu * (1 - e2) + h) * sin_phi,
        datum=point.datum,
        reference_frame=point.reference_frame,
        epoch=point.epoch if point.reference_frame else None,
    )


def to_geodetic(
    cartesian: CartesianPoint,
    ellipsoid: Optional[Ellipsoid] = None
) -> GeodeticPoint:
    """
    Converts a geocentric cartesian point to geodetic latitude/longitude/height using
    Bowring's (1985) parametric latitude method, a single closed-form pass accurate to well
    under a millimetre for terrestrial points.

    Args:
        cartesian:
            The cartesian point

        ellipsoid:
            (Optional) The ellipsoid to convert on. Defaults to the ellipsoid of the point's
            datum or reference frame, else WGS84.

    Returns:
        GeodeticPoint, carrying the same datum / reference frame / epoch as the cartesian point
    """
    if not isinstance(cartesian, CartesianPoint):
        raise InvalidInputError(f'invalid cartesian point {cartesian!r}')

    if ellipsoid is None:
        ellipsoid = cartesian.ellipsoid
    elif not isinstance(ellipsoid, Ellipsoid):
        raise InvalidInputError(f'invalid ellipsoid {ellipsoid!r}')
    elif (cartesian.datum or cartesian.reference_frame) and ellipsoid != cartesian.ellipsoid:
        warn_once(
            'Explicit ellipsoid %s overrides the ellipsoid of the point\'s datum or reference '
            'frame. (this warning will not repeat)',
            ellipsoid.name
        )

    x, y, z = cartesian.to_float()
    a, b = ellipsoid.a, ellipsoid.b
    e2 = ellipsoid.e2  # 1st eccentricity squared ≡ (a²−b²)/a²
    ep2 = ellipsoid.ep2  # 2nd eccentricity squared ≡ (a²−b²)/b²

    p = math.sqrt(x * x + y * y)  # distance from minor axis
    r = math.sqrt(p * p + z * z)  # polar radius

    if p == 0:
        # On the minor axis; tanβ is undefined
        phi = math.copysign(math.pi / 2, z) if z != 0 else 0.0
    else:
        # parametric latitude (Bowring eqn.17, replacing tanβ = z⋅a / p⋅b)
        tan_beta = (b * z) / (a * p) * (1 + ep2 * b / r)
        sin_beta = tan_beta / math.sqrt(1 + tan_beta * tan_beta)
        cos_beta = sin_beta / tan_beta if tan_beta != 0 else 1.0

        # geodetic latitude (Bowring eqn.18: tanφ = z+ε²⋅b⋅sin³β / p−e²⋅a⋅cos³β)
        phi = math.atan2(
            z + ep2 * b * sin_beta ** 3,
            p - e2 * a * cos_beta ** 3
        )
        if math.isnan(phi):
            phi = 0.0

    lam = math.atan2(y, x)

    # height above ellipsoid (Bowring eqn.7)
    sin_phi, cos_phi = math.sin(phi), math.cos(phi)
    nu = a / math.sqrt(1 - e2 * sin_phi * sin_phi)  # length of the normal to the minor axis
    h = p * cos_phi + z * sin_phi - (a * a / nu)

    return GeodeticPoint(
        math.degrees(phi),
        math.degrees(lam),
        h,
        datum=cartesian.datum,
        reference_frame=cartesian.reference_frame,
        epoch=cartesian.epoch if cartesian.reference_frame else None,
    )
