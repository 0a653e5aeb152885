"""Exact Lagrange interpolation over the integers.

Points are (x, y) pairs of Python ints. The interpolating polynomial is
never expanded into coefficients; it is evaluated directly at the target:

    P(t) = sum_i y_i * prod_{j!=i} (t - x_j) / (x_i - x_j)

with each term folded into a reduced Rational running sum.
"""

from basepoly.digits import to_decimal
from basepoly.errors import DuplicateAbscissa, InsufficientPoints, NonIntegerResult
from basepoly.rational import Rational, is_integer


def poly_eval_low(coeffs: list, x: int) -> int:
    """Evaluate polynomial at x using Horner's method.

    coeffs = [a_0, a_1, ..., a_d] (lowest degree first)
    Returns a_0 + a_1 * x + ... + a_d * x^d exactly.
    """
    result = 0
    for c in reversed(coeffs):
        result = result * x + c
    return result


def lagrange_term(points: list, i: int, target: int) -> Rational:
    """Compute y_i * L_i(target) as a reduced Rational."""
    xi, yi = points[i]
    num = yi
    den = 1
    for j, (xj, _) in enumerate(points):
        if j == i:
            continue
        if xi == xj:
            raise DuplicateAbscissa(
                f"Duplicate x value {to_decimal(xi)} in point set (denominator zero)"
            )
        num *= target - xj
        den *= xi - xj
    return Rational(num, den)


def interpolate_at(target: int, points: list) -> Rational:
    """Exact value of the interpolating polynomial at target, as a Rational."""
    if not points:
        raise InsufficientPoints("No points provided for interpolation")

    total = Rational.zero()
    for i in range(len(points)):
        total = total + lagrange_term(points, i, target)
    return total


def evaluate(target: int, points: list) -> int:
    """Evaluate the interpolating polynomial through points at target.

    Args:
        target: Integer abscissa to evaluate at.
        points: Non-empty list of (x, y) with pairwise-distinct x.

    Returns:
        P(target) as an int. Raises NonIntegerResult if the exact value is
        not whole, i.e. the points do not lie on an integer polynomial.
    """
    total = interpolate_at(target, points)
    if not is_integer(total):
        raise NonIntegerResult(
            f"Non-integer evaluation at x={to_decimal(target)}: {total}"
        )
    return total.numerator


def constant_term(points: list) -> int:
    """P(0) via Lagrange interpolation at x=0."""
    return evaluate(0, points)


def find_mismatches(selected: list, points: list) -> list:
    """Return the points whose y differs from the polynomial through selected.

    Evaluates the selected-subset polynomial at every point's x with
    evaluate(), so a non-integer value raises NonIntegerResult naming that x.
    An empty list means all points are consistent.
    """
    mismatches = []
    for p in points:
        x, y = p
        if evaluate(x, selected) != y:
            mismatches.append(p)
    return mismatches
