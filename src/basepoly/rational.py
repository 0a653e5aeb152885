"""Exact rational arithmetic over Python ints.

Used to accumulate Lagrange sums without floating-point error. Every value
is kept reduced with a positive denominator, so equality and integrality
checks are exact.
"""

from basepoly.digits import to_decimal
from basepoly.errors import NonIntegerResult


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of |a| and |b| via Euclid.

    gcd(0, x) = |x|; gcd(0, 0) is taken as 1 so callers can always divide.
    """
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a or 1


class Rational:
    """Reduced fraction numerator/denominator with denominator > 0."""

    __slots__ = ('_num', '_den')

    def __init__(self, numerator: int, denominator: int = 1):
        if denominator == 0:
            raise ZeroDivisionError("Rational with zero denominator")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        g = gcd(numerator, denominator)
        self._num = numerator // g
        self._den = denominator // g

    @property
    def numerator(self) -> int:
        return self._num

    @property
    def denominator(self) -> int:
        return self._den

    def __add__(self, other):
        if isinstance(other, int):
            other = Rational(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return add(self, other)

    __radd__ = __add__

    def __eq__(self, other):
        if isinstance(other, int):
            return self._den == 1 and self._num == other
        if isinstance(other, Rational):
            return self._num == other._num and self._den == other._den
        return NotImplemented

    def __hash__(self):
        return hash((self._num, self._den))

    def __repr__(self):
        return f"Rational({to_decimal(self._num)}, {to_decimal(self._den)})"

    def __str__(self):
        if self._den == 1:
            return to_decimal(self._num)
        return f"{to_decimal(self._num)}/{to_decimal(self._den)}"

    @staticmethod
    def zero():
        return Rational(0)


def add(a: Rational, b: Rational) -> Rational:
    """(a.n*b.d + b.n*a.d) / (a.d*b.d), reduced."""
    return Rational(
        a.numerator * b.denominator + b.numerator * a.denominator,
        a.denominator * b.denominator,
    )


def is_integer(r: Rational) -> bool:
    return r.numerator % r.denominator == 0


def to_int(r: Rational) -> int:
    """Integer value of r; raises NonIntegerResult if r is not whole."""
    if not is_integer(r):
        raise NonIntegerResult(f"Value is not an integer: {r}")
    return r.numerator // r.denominator
