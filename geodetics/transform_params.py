"""
14-parameter Helmert transformation parameters between (dynamic) ITRS reference frames, and
from ITRS frames to (static) regional frames NAD83, ETRF2000 and GDA94.

Parameters are published values; base parameters (tx, ty, tz, s, rx, ry, rz) are in
millimetres, parts-per-billion and milliarcseconds, rates in the same units per year.
"""

__all__ = ['TRANSFORM_PARAMS', 'TransformParams']

from types import MappingProxyType
from typing import Mapping, Tuple

from pydantic import validate_call

_ARROW = '→'

Params14 = Tuple[float, float, float, float, float, float, float]


class TransformParams:
    """
    Directed transform between two named reference frames, valid about reference epoch t0.

    Args:
        source:
            Name of the reference frame being converted from

        target:
            Name of the reference frame being converted to

        epoch:
            Reference epoch (decimal year) of the parameters

        params:
            tx, ty, tz (mm), s (ppb), rx, ry, rz (mas)

        rates:
            Annual rates of change of each parameter
    """

    __slots__ = ('_source', '_target', '_epoch', '_params', '_rates')

    @validate_call
    def __init__(
        self,
        source: str,
        target: str,
        epoch: float,
        params: Params14,
        rates: Params14,
    ):
        self._source = source
        self._target = target
        self._epoch = epoch
        self._params = params
        self._rates = rates

    def __eq__(self, other):
        if not isinstance(other, TransformParams):
            return False

        return (
            self.key == other.key and
            self.epoch == other.epoch and
            self.params == other.params and
            self.rates == other.rates
        )

    def __hash__(self):
        return hash((self.key, self.epoch, self.params, self.rates))

    def __repr__(self):
        return f'<TransformParams {self.key}@{self.epoch}>'

    @property
    def source(self) -> str:
        return self._source

    @property
    def target(self) -> str:
        return self._target

    @property
    def key(self) -> str:
        """Name pair in the form 'SOURCE→TARGET'"""
        return f'{self._source}{_ARROW}{self._target}'

    @property
    def epoch(self) -> float:
        return self._epoch

    @property
    def params(self) -> Params14:
        return self._params

    @property
    def rates(self) -> Params14:
        return self._rates

    def reversed(self) -> 'TransformParams':
        """
        The transform in the opposite direction, approximated by negating all 14 values.

        Returns:
            TransformParams
        """
        return TransformParams(
            self._target,
            self._source,
            self._epoch,
            tuple(-p for p in self._params),
            tuple(-r for r in self._rates),
        )


_PARAMS = [
    # ITRF2014 to older ITRF realisations (IERS)
    TransformParams(
        'ITRF2014', 'ITRF2008', 2010.0,
        (1.6, 1.9, 2.4, -0.02, 0.00, 0.00, 0.00),
        (0.0, 0.0, -0.1, 0.03, 0.00, 0.00, 0.00),
    ),
    TransformParams(
        'ITRF2014', 'ITRF2005', 2010.0,
        (2.6, 1.0, -2.3, 0.92, 0.00, 0.00, 0.00),
        (0.3, 0.0, -0.1, 0.03, 0.00, 0.00, 0.00),
    ),
    TransformParams(
        'ITRF2014', 'ITRF2000', 2010.0,
        (0.7, 1.2, -26.1, 2.12, 0.00, 0.00, 0.00),
        (0.1, 0.1, -1.9, 0.11, 0.00, 0.00, 0.00),
    ),
    TransformParams(
        'ITRF2014', 'ITRF93', 2010.0,
        (-50.4, 3.3, -60.2, 4.29, -2.81, -3.38, 0.40),
        (-2.8, -0.1, -2.5, 0.12, -0.11, -0.19, 0.07),
    ),
    TransformParams(
        'ITRF2014', 'ITRF91', 2010.0,
        (27.4, 15.5, -76.8, 4.49, 0.00, 0.00, 0.26),
        (0.1, -0.5, -3.3, 0.12, 0.00, 0.00, 0.02),
    ),
    # ITRF2008 to older ITRF realisations
    TransformParams(
        'ITRF2008', 'ITRF2005', 2000.0,
        (-2.0, -0.9, -4.7, 0.94, 0.00, 0.00, 0.00),
        (0.3, 0.0, 0.0, 0.00, 0.00, 0.00, 0.00),
    ),
    TransformParams(
        'ITRF2008', 'ITRF2000', 2000.0,
        (-1.9, -1.7, -10.5, 1.34, 0.00, 0.00, 0.00),
        (0.1, 0.1, -1.8, 0.08, 0.00, 0.00, 0.00),
    ),
    TransformParams(
        'ITRF2005', 'ITRF2000', 2000.0,
        (0.1, -0.8, -5.8, 0.40, 0.000, 0.000, 0.000),
        (-0.2, 0.1, -1.8, 0.08, 0.000, 0.000, 0.000),
    ),
    # ITRS to ETRF2000 (EUREF TN)
    TransformParams(
        'ITRF2014', 'ETRF2000', 2000.0,
        (53.7, 51.2, -55.1, 1.02, 0.891, 5.390, -8.712),
        (0.1, 0.1, -1.9, 0.11, 0.081, 0.490, -0.792),
    ),
    TransformParams(
        'ITRF2008', 'ETRF2000', 2000.0,
        (52.1, 49.3, -58.5, 1.34, 0.891, 5.390, -8.712),
        (0.1, 0.1, -1.8, 0.08, 0.081, 0.490, -0.792),
    ),
    TransformParams(
        'ITRF2005', 'ETRF2000', 2000.0,
        (54.1, 50.2, -53.8, 0.40, 0.891, 5.390, -8.712),
        (-0.2, 0.1, -1.8, 0.08, 0.081, 0.490, -0.792),
    ),
    TransformParams(
        'ITRF2000', 'ETRF2000', 2000.0,
        (54.0, 51.0, -48.0, 0.00, 0.891, 5.390, -8.712),
        (0.0, 0.0, 0.0, 0.00, 0.081, 0.490, -0.792),
    ),
    # ITRS to NAD83 (NGS HTDP)
    TransformParams(
        'ITRF2014', 'NAD83', 2010.0,
        (1005.30, -1909.21, -541.57, -0.36891, -26.78138, 0.42027, -10.93206),
        (0.79, -0.60, -1.44, -0.07201, -0.06667, 0.75744, 0.05133),
    ),
    TransformParams(
        'ITRF2008', 'NAD83', 1997.0,
        (993.43, -1903.31, -526.55, 1.71504, 25.91467, 9.42645, 11.59935),
        (0.79, -0.60, -1.34, -0.10201, 0.06667, -0.75744, -0.05133),
    ),
    TransformParams(
        'ITRF2000', 'NAD83', 1997.0,
        (995.6, -1901.3, -521.5, 0.615, 25.915, 9.426, 11.599),
        (0.7, -0.7, 0.5, -0.182, 0.06667, -0.75744, -0.05133),
    ),
    # ITRS to GDA94 (Dawson & Woods, 2010)
    TransformParams(
        'ITRF2008', 'GDA94', 1994.0,
        (-84.68, -19.42, 32.01, 9.710, -0.4254, 2.2578, 2.4015),
        (1.42, 1.34, 0.90, 0.109, 1.5461, 1.1820, 1.1551),
    ),
    TransformParams(
        'ITRF2005', 'GDA94', 1994.0,
        (-79.73, -6.86, 38.03, 6.636, -0.0351, 2.1211, 2.1411),
        (2.25, -0.62, -0.56, 0.294, 1.4707, 1.1443, 1.1701),
    ),
    TransformParams(
        'ITRF2000', 'GDA94', 1994.0,
        (-45.91, -29.85, -20.37, 7.070, -1.6705, 0.4594, 1.9356),
        (-4.66, 3.55, 11.24, 0.249, 1.7454, 1.4868, 1.2240),
    ),
]

TRANSFORM_PARAMS: Mapping[str, TransformParams] = MappingProxyType(
    {tx.key: tx for tx in _PARAMS}
)
