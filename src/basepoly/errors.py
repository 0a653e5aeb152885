"""Error taxonomy for basepoly.

Every failure is terminal for the solve call that raised it. Each error
class carries a stable machine-readable ``kind`` so callers can render or
dispatch on it without parsing messages.
"""

import copy


class SolverError(ValueError):
    """Base class for all decode, interpolation and verification failures."""

    kind = 'SolverError'

    def __init__(self, message: str, key: str = None):
        super().__init__(message)
        self.key = key

    def with_key(self, key: str) -> 'SolverError':
        """Copy of this error with the point key attached and prefixed."""
        err = copy.copy(self)
        err.key = key
        err.args = (f"Point {key}: {self}",)
        return err

    def to_dict(self) -> dict:
        return {'kind': self.kind, 'message': str(self)}


class MissingField(SolverError):
    """Required input field absent or of the wrong type."""
    kind = 'MissingField'


class InvalidCount(SolverError):
    """keys.n or keys.k is not a positive integer."""
    kind = 'InvalidCount'


class InvalidBase(SolverError):
    """Declared base outside 2..62."""
    kind = 'InvalidBase'


class EmptyValue(SolverError):
    """Digit string is empty."""
    kind = 'EmptyValue'


class InvalidDigit(SolverError):
    """Character outside 0-9, a-z, A-Z."""
    kind = 'InvalidDigit'

    def __init__(self, message: str, char=None, position: int = None,
                 key: str = None):
        super().__init__(message, key)
        self.char = char
        self.position = position


class DigitOutOfRange(InvalidDigit):
    """Digit value not below the declared base."""
    kind = 'DigitOutOfRange'


class InsufficientPoints(SolverError):
    """Fewer decoded points than the required subset size."""
    kind = 'InsufficientPoints'


class DuplicateAbscissa(SolverError):
    """Two points in the active set share an x value."""
    kind = 'DuplicateAbscissa'


class NonIntegerResult(SolverError):
    """Accumulated rational is not a whole number."""
    kind = 'NonIntegerResult'


class VerificationFailed(SolverError):
    """Polynomial through the selected subset misses a supplied point."""
    kind = 'VerificationFailed'

    def __init__(self, message: str, points: list = None, key: str = None):
        super().__init__(message, key)
        self.points = points or []
