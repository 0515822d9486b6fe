"""Module for miscellaneous multi-use functions"""

__all__ = [
    'as_finite_float', 'round_half_up', 'wrap90', 'wrap180', 'wrap360'
]

import math
from numbers import Real
from typing import Any, Type

from geodetics.exceptions import FormatError, InvalidInputError


def as_finite_float(
    value: Any,
    name: str,
    error: Type[InvalidInputError] = FormatError
) -> float:
    """
    Validates that a value is a finite real number and returns it as a float.

    Args:
        value:
            The value to check

        name:
            The name of the argument, used in the error message

        error:
            (Default FormatError) The exception type to raise when validation fails

    Returns:
        float
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise error(f'invalid {name} {value!r}; expected a real number')

    value = float(value)
    if not math.isfinite(value):
        raise error(f'invalid {name} {value!r}; expected a finite number')

    return value


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = value + 10 ** -(precision + 12)

    return round(mod, precision)


def wrap90(degrees: float) -> float:
    """
    Constrains degrees to [-90, 90] (latitude) using a triangle wave, so values beyond a
    pole reflect back, e.g. 91 -> 89, -91 -> -89.

    Values already in range are returned untouched.
    """
    if -90 <= degrees <= 90:
        return degrees

    return abs((degrees - 90) % 360 - 180) - 90


def wrap180(degrees: float) -> float:
    """
    Constrains degrees to [-180, 180] (longitude) using a sawtooth wave,
    e.g. 181 -> -179, -181 -> 179.

    Values already in range are returned untouched.
    """
    if -180 <= degrees <= 180:
        return degrees

    return (degrees - 180) % 360 - 180


def wrap360(degrees: float) -> float:
    """Constrains degrees to [0, 360) (bearings), e.g. -1 -> 359, 361 -> 1"""
    if 0 <= degrees < 360:
        return degrees

    wrapped = degrees % 360
    # tiny negative values round up to exactly 360
    return 0.0 if wrapped == 360 else wrapped
