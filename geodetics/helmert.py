"""
Helmert similarity transforms between cartesian frames.

Datums (static) are converted with 7-parameter transforms via WGS84. Reference frames
(dynamic) are converted with 14-parameter transforms whose parameters drift at annual
rates, chaining through an intermediate frame where no direct parameters are published.
"""

__all__ = [
    'TransformGraph', 'apply_helmert_7', 'apply_helmert_14', 'convert_datum',
    'convert_reference_frame', 'TRANSFORM_GRAPH',
]

from collections import defaultdict
from itertools import product
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from geodetics._const import (
    ARCSECONDS_TO_RADIANS, MILLIARCSECONDS_TO_RADIANS, MILLIMETRES, PPB, PPM
)
from geodetics.coordinates import CartesianPoint
from geodetics.ellipsoids import (
    DATUMS, REFERENCE_FRAMES, Datum, ReferenceFrame, get_datum, get_reference_frame
)
from geodetics.exceptions import InvalidInputError, NoTransformPathError
from geodetics.transform_params import TRANSFORM_PARAMS, TransformParams
from geodetics.utils.functions import as_finite_float
from geodetics.utils.logging import warn_once


def _similarity_matrix(scale: float, rx: float, ry: float, rz: float) -> np.ndarray:
    """
    Small-angle rotation and scale matrix, so that x' = t + M @ x expands to

        x' = tx + x⋅s − y⋅rz + z⋅ry
        y' = ty + x⋅rz + y⋅s − z⋅rx
        z' = tz − x⋅ry + y⋅rx + z⋅s
    """
    return np.array([
        [scale, -rz, ry],
        [rz, scale, -rx],
        [-ry, rx, scale],
    ])


def _apply(cartesian: CartesianPoint, shift: np.ndarray, matrix: np.ndarray) -> CartesianPoint:
    return CartesianPoint.from_numpy(shift + matrix @ cartesian.to_numpy())


def apply_helmert_7(
    cartesian: CartesianPoint,
    transform: Sequence[float]
) -> CartesianPoint:
    """
    Applies a Helmert 7-parameter transform to a cartesian point.

    Args:
        cartesian:
            The point to transform

        transform:
            (tx, ty, tz, s, rx, ry, rz); shifts in meters, scale in parts-per-million,
            rotations in arcseconds

    Returns:
        CartesianPoint, without a datum
    """
    if len(transform) != 7:
        raise InvalidInputError(f'expected 7 transform parameters, got {len(transform)}')

    tx, ty, tz, s, rx, ry, rz = transform
    matrix = _similarity_matrix(
        s / PPM + 1,  # normalise ppm to (s+1)
        rx * ARCSECONDS_TO_RADIANS,
        ry * ARCSECONDS_TO_RADIANS,
        rz * ARCSECONDS_TO_RADIANS,
    )
    return _apply(cartesian, np.array([tx, ty, tz], dtype=float), matrix)


def apply_helmert_14(
    cartesian: CartesianPoint,
    params: Sequence[float],
    rates: Sequence[float],
    dt: float,
) -> CartesianPoint:
    """
    Applies a Helmert 14-parameter transform to a cartesian point, with each parameter
    advanced by its annual rate over dt years.

    Args:
        cartesian:
            The point to transform

        params:
            (tx, ty, tz, s, rx, ry, rz); shifts in millimetres, scale in parts-per-billion,
            rotations in milliarcseconds

        rates:
            Annual rates of change of the params, in the same units

        dt:
            Observation epoch minus the reference epoch of the params, in years

    Returns:
        CartesianPoint, without a reference frame
    """
    if len(params) != 7 or len(rates) != 7:
        raise InvalidInputError(
            f'expected 7 params and 7 rates, got {len(params)} and {len(rates)}'
        )

    combined = np.asarray(params, dtype=float) + np.asarray(rates, dtype=float) * dt
    shift = combined[:3] / MILLIMETRES
    rx, ry, rz = combined[4:] * MILLIARCSECONDS_TO_RADIANS
    matrix = _similarity_matrix(1 + combined[3] / PPB, rx, ry, rz)
    return _apply(cartesian, shift, matrix)


# -------------------------------------------------------------------------
# Datums
# -------------------------------------------------------------------------

def convert_datum(cartesian: CartesianPoint, to_datum: Union[str, Datum]) -> CartesianPoint:
    """
    Converts a cartesian point to a new datum using Helmert 7-parameter transforms.

    Only WGS84 -> datum parameters are stored. Converting into WGS84 applies the datum's
    parameters negated (a first-order approximation of the inverse), and converting
    between two non-WGS84 datums goes via WGS84. A point without a datum is treated as WGS84.

    Args:
        cartesian:
            The point to convert

        to_datum:
            The datum (or registered datum name) to convert to

    Returns:
        CartesianPoint tagged with the new datum
    """
    to_datum = get_datum(to_datum)
    if not isinstance(cartesian, CartesianPoint):
        raise InvalidInputError(f'invalid cartesian point {cartesian!r}')
    if cartesian.reference_frame is not None:
        raise InvalidInputError(
            f'cannot convert the datum of a point in reference frame '
            f'{cartesian.reference_frame.name}; use convert_reference_frame()'
        )

    wgs84 = DATUMS['WGS84']
    from_datum = cartesian.datum or wgs84

    if from_datum == wgs84:
        source, transform = cartesian, to_datum.transform
    elif to_datum == wgs84:
        source, transform = cartesian, tuple(-p for p in from_datum.transform)
    else:
        source, transform = convert_datum(cartesian, wgs84), to_datum.transform

    return apply_helmert_7(source, transform).replace(datum=to_datum)


# -------------------------------------------------------------------------
# Reference frames
# -------------------------------------------------------------------------

class TransformGraph:
    """
    Directed graph of reference frames, with an edge for every stored set of transform
    parameters and a reverse edge (all 14 values negated) for each of those.

    Routes of up to two hops between every pair of known frames are resolved once, at
    construction. Preference, first match in parameter-table order:
        1. a stored direct transform
        2. the reverse of a stored direct transform
        3. two stored transforms through an intermediate frame
        4. two stored transforms ending at the source, both reversed
        5. one stored and one reversed transform through an intermediate frame

    Args:
        params:
            Transform parameters, keyed 'SOURCE→TARGET'

        frames:
            Names of the frames to resolve routes between
    """

    MAX_HOPS = 2

    def __init__(self, params: Mapping[str, TransformParams], frames: Sequence[str]):
        self._stored: Dict[Tuple[str, str], TransformParams] = {
            (tx.source, tx.target): tx for tx in params.values()
        }
        self._from: Dict[str, List[TransformParams]] = defaultdict(list)
        for tx in params.values():
            self._from[tx.source].append(tx)

        # frame -> [(neighbour, transform, is_forward)]
        self._edges: Dict[str, List[Tuple[str, TransformParams, bool]]] = defaultdict(list)
        for tx in params.values():
            self._edges[tx.source].append((tx.target, tx, True))
        for tx in params.values():
            self._edges[tx.target].append((tx.source, tx.reversed(), False))

        self._routes: Dict[Tuple[str, str], Tuple[TransformParams, ...]] = {}
        for source, target in product(frames, frames):
            if source == target:
                continue
            route = self._search(source, target)
            if route is not None:
                self._routes[(source, target)] = route

    def _search(self, source: str, target: str) -> Optional[Tuple[TransformParams, ...]]:
        """Bounded search preferring stored transforms over reversed ones"""
        if (source, target) in self._stored:
            return (self._stored[(source, target)],)
        if (target, source) in self._stored:
            return (self._stored[(target, source)].reversed(),)

        # source -> middle -> target, both stored
        for tx1 in self._from[source]:
            tx2 = self._stored.get((tx1.target, target))
            if tx2 is not None:
                return (tx1, tx2)

        # target -> middle -> source stored, applied backwards
        for tx2 in self._from[target]:
            tx1 = self._stored.get((tx2.target, source))
            if tx1 is not None:
                return (tx1.reversed(), tx2.reversed())

        # mixed directions
        for middle, tx1, fwd1 in self._edges[source]:
            for node, tx2, fwd2 in self._edges[middle]:
                if node == target and fwd1 != fwd2:
                    return (tx1, tx2)

        return None

    def route(self, source: str, target: str) -> Tuple[TransformParams, ...]:
        """
        The transforms to apply, in order, to convert from one frame to another.

        Args:
            source:
                Name of the frame to convert from

            target:
                Name of the frame to convert to

        Returns:
            Tuple of TransformParams; empty when source and target are the same frame
        """
        if source == target:
            return ()

        try:
            return self._routes[(source, target)]
        except KeyError:
            raise NoTransformPathError(
                f'no transform path from {source} to {target} within {self.MAX_HOPS} hops'
            ) from None

    def has_route(self, source: str, target: str) -> bool:
        return source == target or (source, target) in self._routes


TRANSFORM_GRAPH = TransformGraph(TRANSFORM_PARAMS, list(REFERENCE_FRAMES))


def _is_itrf_wgs84_pair(source: ReferenceFrame, target: ReferenceFrame) -> bool:
    """
    WGS84(G730/G873/G1150) are coincident with ITRF at the 10-centimetre level, and WGS84(G1674)
    and ITRF2014/ITRF2008 'are likely to agree at the centimeter level'.
    """
    return (
        (source.name.startswith('ITRF') and target.name.startswith('WGS84')) or
        (source.name.startswith('WGS84') and target.name.startswith('ITRF'))
    )


def convert_reference_frame(
    cartesian: CartesianPoint,
    to_frame: Union[str, ReferenceFrame],
    epoch: Optional[float] = None,
    graph: TransformGraph = TRANSFORM_GRAPH,
) -> CartesianPoint:
    """
    Converts a cartesian point to a new reference frame using Helmert 14-parameter
    transforms, chaining through an intermediate frame where necessary.

    Each transform is evaluated at dt = observation epoch - its own reference epoch.

    Args:
        cartesian:
            The point to convert; must have a reference frame

        to_frame:
            The reference frame (or registered frame name) to convert to

        epoch:
            (Optional) Epoch the transforms are evaluated at, as a decimal year; defaults to
            the point's epoch. The result keeps the point's own epoch either way.

        graph:
            (Default TRANSFORM_GRAPH) Routes between frames

    Returns:
        CartesianPoint tagged with the new frame and the source point's epoch. The point itself
        is returned unchanged when the frames are the same, or are ITRF and WGS84
        realisations treated as coincident.
    """
    to_frame = get_reference_frame(to_frame)
    if not isinstance(cartesian, CartesianPoint):
        raise InvalidInputError(f'invalid cartesian point {cartesian!r}')
    if cartesian.reference_frame is None:
        raise InvalidInputError('cartesian point has no reference frame')

    from_frame = cartesian.reference_frame
    observed = cartesian.epoch if epoch is None else as_finite_float(
        epoch, 'epoch', InvalidInputError
    )

    if from_frame.name == to_frame.name:
        return cartesian

    if _is_itrf_wgs84_pair(from_frame, to_frame):
        warn_once(
            'ITRF and WGS84 realisations are treated as coincident (agreement at the '
            'centimetre level); %s -> %s returned unchanged. (this warning will not repeat)',
            from_frame.name, to_frame.name
        )
        return cartesian

    converted = cartesian
    for tx in graph.route(from_frame.name, to_frame.name):
        converted = apply_helmert_14(converted, tx.params, tx.rates, observed - tx.epoch)

    return converted.replace(reference_frame=to_frame, epoch=cartesian.epoch)
