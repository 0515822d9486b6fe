"""
Geodesic (shortest path on the ellipsoid) calculations using Vincenty's direct and inverse
solutions, accurate to within 0.5mm distance and 0.000015″ bearing.

Vincenty, T. (1975) "Direct and Inverse Solutions of Geodesics on the Ellipsoid with
Application of Nested Equations", Survey Review 23(176). Equation numbers below refer to it.
"""

__all__ = [
    'DirectResult', 'InverseResult',
    'destination_point', 'distance_to', 'final_bearing_on', 'final_bearing_to',
    'initial_bearing_to', 'intermediate_point', 'vincenty_direct', 'vincenty_inverse',
]

import math
from typing import NamedTuple, Tuple

from geodetics._const import (
    BEARING_PRECISION, DISTANCE_PRECISION, EPSILON, VINCENTY_DIRECT_MAX_ITERATIONS,
    VINCENTY_INVERSE_MAX_ITERATIONS, VINCENTY_TOLERANCE
)
from geodetics.coordinates import GeodeticPoint
from geodetics.exceptions import ConvergenceError, DomainError, InvalidInputError
from geodetics.utils.functions import as_finite_float, round_half_up, wrap360
from geodetics.utils.logging import LOGGER


class DirectResult(NamedTuple):
    """
    Result of the Vincenty direct solution. iterations counts the passes made before the
    converging one, so a solution settling on its first pass reports 0.
    """
    point: GeodeticPoint
    final_bearing: float
    iterations: int


class InverseResult(NamedTuple):
    """Result of the Vincenty inverse solution; iterations counted as for DirectResult"""
    distance: float
    initial_bearing: float
    final_bearing: float
    iterations: int
    antipodal: bool


# -------------------------------------------------------------------------
# Series expansions shared by the direct and inverse solutions
# -------------------------------------------------------------------------

def _series_coefficients(cosSqAlpha: float, a: float, b: float) -> Tuple[float, float]:
    """Returns Vincenty's A and B coefficients (eq. 3 & 4)"""
    uSq = cosSqAlpha * (a * a - b * b) / (b * b)
    A = 1 + uSq / 16384 * (4096 + uSq * (-768 + uSq * (320 - 175 * uSq)))
    B = uSq / 1024 * (256 + uSq * (-128 + uSq * (74 - 47 * uSq)))
    return A, B


def _delta_sigma(B: float, sinSigma: float, cosSigma: float, cos2SigmaM: float) -> float:
    """Returns Δσ, the difference between the auxiliary sphere and ellipsoid arcs (eq. 6)"""
    return B * sinSigma * (
        cos2SigmaM + B / 4 * (
            cosSigma * (-1 + 2 * cos2SigmaM ** 2) -
            B / 6 * cos2SigmaM * (-3 + 4 * sinSigma ** 2) * (-3 + 4 * cos2SigmaM ** 2)
        )
    )


def _c_coefficient(f: float, cosSqAlpha: float) -> float:
    """eq. 10"""
    return f / 16 * cosSqAlpha * (4 + f * (4 - 3 * cosSqAlpha))


def _longitude_correction(
    C: float,
    f: float,
    sinAlpha: float,
    sigma: float,
    sinSigma: float,
    cosSigma: float,
    cos2SigmaM: float,
) -> float:
    """The difference between auxiliary sphere and ellipsoid longitudes (eq. 11)"""
    return (1 - C) * f * sinAlpha * (
        sigma + C * sinSigma * (cos2SigmaM + C * cosSigma * (-1 + 2 * cos2SigmaM ** 2))
    )


# -------------------------------------------------------------------------
# Direct solution
# -------------------------------------------------------------------------

def vincenty_direct(
    origin: GeodeticPoint,
    distance: float,
    initial_bearing: float
) -> DirectResult:
    """
    Vincenty direct solution: the destination point and final bearing having travelled a
    distance along a geodesic from an origin at a given initial bearing.

    The ellipsoid is taken from the origin's datum or reference frame (WGS84 if neither).

    Args:
        origin:
            The starting point; must be on the surface of the ellipsoid (height 0)

        distance:
            Distance to travel along the geodesic, in meters

        initial_bearing:
            Initial bearing, in degrees clockwise from north

    Returns:
        DirectResult of (destination point, final bearing in [0, 360), iterations). A zero
        distance returns the origin itself with a NaN final bearing.

    Raises:
        FormatError: distance or bearing is not a finite number
        DomainError: origin is not on the surface of the ellipsoid
        ConvergenceError: the formula failed to converge
    """
    s = as_finite_float(distance, 'distance')
    if s == 0:
        return DirectResult(origin, math.nan, 0)

    bearing = as_finite_float(initial_bearing, 'bearing')
    if not isinstance(origin, GeodeticPoint):
        raise InvalidInputError(f'invalid point {origin!r}')
    if origin.height != 0:
        raise DomainError(
            f'point must be on the surface of the ellipsoid (height {origin.height} != 0)'
        )

    ellipsoid = origin.ellipsoid
    a, b, f = ellipsoid.a, ellipsoid.b, ellipsoid.f

    phi1, lambda1 = math.radians(origin.latitude), math.radians(origin.longitude)
    alpha1 = math.radians(bearing)
    sinAlpha1, cosAlpha1 = math.sin(alpha1), math.cos(alpha1)

    # U = reduced latitude, tanU = (1-f)⋅tanφ
    tanU1 = (1 - f) * math.tan(phi1)
    cosU1 = 1 / math.sqrt(1 + tanU1 ** 2)
    sinU1 = tanU1 * cosU1

    sigma1 = math.atan2(tanU1, cosAlpha1)  # angular distance from the equator to P1 (eq. 1)
    sinAlpha = cosU1 * sinAlpha1  # azimuth of the geodesic at the equator (eq. 2)
    cosSqAlpha = 1 - sinAlpha ** 2
    A, B = _series_coefficients(cosSqAlpha, a, b)

    sigma = s / (b * A)  # first approximation (eq. 7)
    iterations = 0
    while True:
        cos2SigmaM = math.cos(2 * sigma1 + sigma)  # eq. 5
        sinSigma, cosSigma = math.sin(sigma), math.cos(sigma)
        deltaSigma = _delta_sigma(B, sinSigma, cosSigma, cos2SigmaM)
        sigma_prev = sigma
        sigma = s / (b * A) + deltaSigma  # eq. 7

        if abs(sigma - sigma_prev) <= VINCENTY_TOLERANCE:
            break
        iterations += 1
        if iterations >= VINCENTY_DIRECT_MAX_ITERATIONS:
            raise ConvergenceError('Vincenty direct formula failed to converge', iterations)

    # Back-substitution uses the trig values of the final iterate
    tmp = sinU1 * sinSigma - cosU1 * cosSigma * cosAlpha1
    phi2 = math.atan2(
        sinU1 * cosSigma + cosU1 * sinSigma * cosAlpha1,
        (1 - f) * math.sqrt(sinAlpha ** 2 + tmp ** 2)
    )  # eq. 8
    lam = math.atan2(
        sinSigma * sinAlpha1,
        cosU1 * cosSigma - sinU1 * sinSigma * cosAlpha1
    )  # eq. 9
    C = _c_coefficient(f, cosSqAlpha)
    L = lam - _longitude_correction(C, f, sinAlpha, sigma, sinSigma, cosSigma, cos2SigmaM)
    lambda2 = lambda1 + L

    alpha2 = math.atan2(sinAlpha, -tmp)  # final bearing (eq. 12)

    destination = origin.replace(
        latitude=math.degrees(phi2),
        longitude=math.degrees(lambda2),
        height=0.0,
    )
    return DirectResult(destination, wrap360(math.degrees(alpha2)), iterations)


# -------------------------------------------------------------------------
# Inverse solution
# -------------------------------------------------------------------------

def _longitude_difference(p1: GeodeticPoint, p2: GeodeticPoint) -> float:
    """
    λ2 - λ1 in radians. -180 and 180 are the same meridian; the positive one is taken for p1
    so the difference stays in [-2π, 2π].
    """
    lambda1 = math.pi if p1.longitude == -180 else math.radians(p1.longitude)
    return math.radians(p2.longitude) - lambda1


def _is_antipodal(L: float, phi1: float, phi2: float) -> bool:
    return abs(L) > math.pi / 2 or abs(phi2 - phi1) > math.pi / 2


def _inverse(p1: GeodeticPoint, p2: GeodeticPoint) -> InverseResult:
    """
    Vincenty inverse solution proper; raises ConvergenceError when λ runs beyond π or the
    iteration cap is reached.
    """
    ellipsoid = p1.ellipsoid
    a, b, f = ellipsoid.a, ellipsoid.b, ellipsoid.f

    phi1, phi2 = math.radians(p1.latitude), math.radians(p2.latitude)
    L = _longitude_difference(p1, p2)

    tanU1 = (1 - f) * math.tan(phi1)
    cosU1 = 1 / math.sqrt(1 + tanU1 ** 2)
    sinU1 = tanU1 * cosU1
    tanU2 = (1 - f) * math.tan(phi2)
    cosU2 = 1 / math.sqrt(1 + tanU2 ** 2)
    sinU2 = tanU2 * cosU2

    antipodal = _is_antipodal(L, phi1, phi2)

    Lambda = L
    sinLambda, cosLambda = math.sin(Lambda), math.cos(Lambda)
    sigma = math.pi if antipodal else 0.
    sinSigma, cosSigma = 0., -1. if antipodal else 1.
    sinSqSigma = 0.
    cos2SigmaM = 1.
    sinAlpha, cosSqAlpha = 0., 1.

    iterations = 0
    while True:
        sinLambda, cosLambda = math.sin(Lambda), math.cos(Lambda)

        # eq. 14
        sinSqSigma = (
            (cosU2 * sinLambda) ** 2 +
            (cosU1 * sinU2 - sinU1 * cosU2 * cosLambda) ** 2
        )
        if abs(sinSqSigma) < EPSILON:
            # Coincident or exactly antipodal points; λ/σ fall back on L
            break

        sinSigma = math.sqrt(sinSqSigma)
        cosSigma = sinU1 * sinU2 + cosU1 * cosU2 * cosLambda  # eq. 15
        sigma = math.atan2(sinSigma, cosSigma)  # eq. 16
        sinAlpha = cosU1 * cosU2 * sinLambda / sinSigma  # eq. 17
        cosSqAlpha = 1 - sinAlpha ** 2

        # eq. 18; on the equatorial line cos²α = 0
        cos2SigmaM = cosSigma - 2 * sinU1 * sinU2 / cosSqAlpha if cosSqAlpha != 0 else 0.

        C = _c_coefficient(f, cosSqAlpha)
        Lambda_prev = Lambda
        Lambda = L + _longitude_correction(
            C, f, sinAlpha, sigma, sinSigma, cosSigma, cos2SigmaM
        )

        iteration_check = abs(Lambda) - math.pi if antipodal else abs(Lambda)
        if iteration_check > math.pi:
            raise ConvergenceError('λ > π', iterations)

        if abs(Lambda - Lambda_prev) <= VINCENTY_TOLERANCE:
            break
        iterations += 1
        if iterations >= VINCENTY_INVERSE_MAX_ITERATIONS:
            raise ConvergenceError('Vincenty inverse formula failed to converge', iterations)

    A, B = _series_coefficients(cosSqAlpha, a, b)
    deltaSigma = _delta_sigma(B, sinSigma, cosSigma, cos2SigmaM)

    s = b * A * (sigma - deltaSigma)  # eq. 19

    # Exactly antipodal points have sin²σ = 0 and atan2 is discontinuous there; the geodesic
    # is then meridional, due north (or due south)
    if abs(sinSqSigma) < EPSILON:
        alpha1, alpha2 = 0., math.pi
    else:
        alpha1 = math.atan2(cosU2 * sinLambda, cosU1 * sinU2 - sinU1 * cosU2 * cosLambda)  # eq. 20
        alpha2 = math.atan2(cosU1 * sinLambda, -sinU1 * cosU2 + cosU1 * sinU2 * cosLambda)  # eq. 21

    coincident = abs(s) < EPSILON
    return InverseResult(
        distance=s,
        initial_bearing=math.nan if coincident else wrap360(math.degrees(alpha1)),
        final_bearing=math.nan if coincident else wrap360(math.degrees(alpha2)),
        iterations=iterations,
        antipodal=antipodal,
    )


def vincenty_inverse(p1: GeodeticPoint, p2: GeodeticPoint) -> InverseResult:
    """
    Vincenty inverse solution: the distance and initial/final bearings of the geodesic
    between two points on the same ellipsoid. Heights are ignored.

    Nearly-antipodal points are ill-conditioned; when the solution does not converge the
    result carries NaN distance and bearings rather than raising.

    Args:
        p1:
            The start point

        p2:
            The end point

    Returns:
        InverseResult of (distance in meters, initial bearing, final bearing, iterations,
        antipodal). Bearings are in [0, 360), or NaN for coincident points.
    """
    for point in (p1, p2):
        if not isinstance(point, GeodeticPoint):
            raise InvalidInputError(f'invalid point {point!r}')

    if p1.ellipsoid != p2.ellipsoid:
        raise InvalidInputError(
            f'points must be on the same ellipsoid ({p1.ellipsoid.name} != {p2.ellipsoid.name})'
        )

    try:
        return _inverse(p1, p2)
    except ConvergenceError as e:
        LOGGER.debug('Vincenty inverse unresolved between %r and %r: %s', p1, p2, e)
        return InverseResult(
            distance=math.nan,
            initial_bearing=math.nan,
            final_bearing=math.nan,
            iterations=e.iterations,
            antipodal=_is_antipodal(
                _longitude_difference(p1, p2),
                math.radians(p1.latitude),
                math.radians(p2.latitude),
            ),
        )


# -------------------------------------------------------------------------
# Convenience wrappers
# -------------------------------------------------------------------------

def destination_point(
    origin: GeodeticPoint,
    distance: float,
    initial_bearing: float
) -> GeodeticPoint:
    """Destination point having travelled a distance along a geodesic from an origin"""
    return vincenty_direct(origin, distance, initial_bearing).point


def final_bearing_on(origin: GeodeticPoint, distance: float, initial_bearing: float) -> float:
    """
    Final bearing having travelled a distance along a geodesic from an origin, in degrees
    rounded to 0.001″ (NaN for a zero distance).
    """
    bearing = vincenty_direct(origin, distance, initial_bearing).final_bearing
    return round_half_up(bearing, BEARING_PRECISION)


def distance_to(p1: GeodeticPoint, p2: GeodeticPoint) -> float:
    """Geodesic distance between two points in meters, rounded to 1mm (NaN if unresolved)"""
    return round_half_up(vincenty_inverse(p1, p2).distance, DISTANCE_PRECISION)


def initial_bearing_to(p1: GeodeticPoint, p2: GeodeticPoint) -> float:
    """Initial bearing from p1 to p2 in degrees, rounded to 0.001″ (NaN if unresolved)"""
    return round_half_up(vincenty_inverse(p1, p2).initial_bearing, BEARING_PRECISION)


def final_bearing_to(p1: GeodeticPoint, p2: GeodeticPoint) -> float:
    """Final bearing arriving at p2 from p1 in degrees, rounded to 0.001″ (NaN if unresolved)"""
    return round_half_up(vincenty_inverse(p1, p2).final_bearing, BEARING_PRECISION)


def intermediate_point(p1: GeodeticPoint, p2: GeodeticPoint, fraction: float) -> GeodeticPoint:
    """
    The point at a given fraction of the geodesic between two points.

    Args:
        p1:
            The start point

        p2:
            The end point

        fraction:
            Fraction of the distance along the geodesic; 0 returns p1 and 1 returns p2

    Returns:
        GeodeticPoint
    """
    fraction = as_finite_float(fraction, 'fraction')
    if fraction == 0:
        return p1
    if fraction == 1:
        return p2

    inverse = vincenty_inverse(p1, p2)
    if math.isnan(inverse.initial_bearing):
        return p1

    return destination_point(p1, inverse.distance * fraction, inverse.initial_bearing)
