"""
Error taxonomy for geodetics

Every error subclasses a built-in exception as well, so callers may catch either the
geodetics-specific type or the standard one (e.g. ValueError).
"""

__all__ = [
    'ConvergenceError', 'DomainError', 'FormatError', 'GeodeticError', 'InvalidInputError',
    'NoTransformPathError', 'UnknownDatumError', 'UnknownReferenceFrameError',
]


class GeodeticError(Exception):
    """Base class for all geodetics errors"""


class InvalidInputError(GeodeticError, ValueError):
    """A point, ellipsoid, or other argument is malformed"""


class FormatError(InvalidInputError, TypeError):
    """A numeric argument is missing, non-numeric, or not finite"""


class DomainError(InvalidInputError):
    """An argument is well-formed but outside the domain of the calculation"""


class UnknownDatumError(InvalidInputError, KeyError):
    """A datum or ellipsoid is not registered"""

    def __str__(self):
        # KeyError repr()s its message; keep it readable
        return str(self.args[0]) if self.args else ''


class UnknownReferenceFrameError(InvalidInputError, KeyError):
    """A reference frame is not registered"""

    def __str__(self):
        return str(self.args[0]) if self.args else ''


class ConvergenceError(GeodeticError, ArithmeticError):
    """An iterative solution failed to converge"""

    def __init__(self, message: str, iterations: int = 0):
        super().__init__(message)
        self.iterations = iterations


class NoTransformPathError(GeodeticError, LookupError):
    """No chain of stored transform parameters connects two reference frames"""
