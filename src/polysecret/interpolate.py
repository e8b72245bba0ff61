"""Exact Lagrange interpolation at x = 0 over the rationals.

The secret is the constant term f(0) of the unique degree-(k-1) polynomial
through k points:

    f(0) = sum_i y_i * L_i(0),   L_i(0) = prod_{j!=i} (0 - x_j) / (x_i - x_j)

Every basis value is carried as an exact ``Fraction``; nothing is divided
until the sum is complete, and a sum that does not reduce to an integer is
reported instead of truncated.
"""

from fractions import Fraction

from polysecret.errors import (
    DuplicateX, InconsistentShares, InsufficientPoints, InvalidThreshold,
    NonIntegralResult,
)
from polysecret.shares import Point


def _coords(p):
    # Point, or any (x, y) pair: tuple, list, ...
    if isinstance(p, Point):
        return p.x, p.y
    x, y = p
    return x, y


def check_distinct(xs: list):
    """Raise DuplicateX for the first repeated x-coordinate."""
    seen = {}
    for i, x in enumerate(xs):
        if x in seen:
            raise DuplicateX(x, seen[x], i)
        seen[x] = i


def lagrange_basis_at_zero(xs: list, i: int) -> Fraction:
    """Compute Lagrange basis coefficient L_i(0) exactly.

    xs = list of distinct x-coordinates.
    Returns prod_{j!=i} (0 - x_j) / (x_i - x_j) as a Fraction.
    """
    xi = xs[i]
    num = 1
    den = 1
    for j, xj in enumerate(xs):
        if j == i:
            continue
        num *= -xj          # (0 - x_j)
        den *= xi - xj      # (x_i - x_j)
    return Fraction(num, den)


def interpolate_at_zero(points: list, k: int) -> int:
    """Reconstruct f(0) from the first k of the given points.

    Args:
        points: Sequence of Point or (x, y) pairs, in selection order.
        k: Threshold; the polynomial has degree k - 1.

    Returns:
        The exact integer f(0).

    Raises:
        InvalidThreshold: k < 1.
        InsufficientPoints: fewer than k points.
        DuplicateX: two selected points share an x.
        NonIntegralResult: the selected points do not lie on an integer
            polynomial of degree k - 1.
    """
    if k < 1:
        raise InvalidThreshold(None, k, "k must be >= 1")
    if len(points) < k:
        raise InsufficientPoints(k, len(points))

    total = constant_term(points[:k])
    if total.denominator != 1:
        raise NonIntegralResult(total.numerator, total.denominator)
    return total.numerator


def constant_term(points: list) -> Fraction:
    """Exact f(0) of the polynomial through all of the given points."""
    selected = [_coords(p) for p in points]
    xs = [x for x, _ in selected]
    check_distinct(xs)

    total = Fraction(0)
    for i, (_, yi) in enumerate(selected):
        total += yi * lagrange_basis_at_zero(xs, i)
    return total


def cross_check(points: list, k: int) -> int:
    """Reconstruct from every window of k consecutive points and compare.

    With n points there are n - k + 1 windows. All of them must yield the
    same secret; a single corrupt share makes the windows containing it
    disagree with the rest (or fail to be integral).

    Returns:
        The common secret.

    Raises:
        InconsistentShares: windows produced different secrets.
        NonIntegralResult: all windows agree on a non-integer value.
        InvalidThreshold, InsufficientPoints, DuplicateX: as for
            interpolate_at_zero, with duplicates checked across all points.
    """
    if k < 1:
        raise InvalidThreshold(None, k, "k must be >= 1")
    if len(points) < k:
        raise InsufficientPoints(k, len(points))
    check_distinct([_coords(p)[0] for p in points])

    windows = {}
    for start in range(len(points) - k + 1):
        windows[start] = constant_term(points[start:start + k])

    if len(set(windows.values())) > 1:
        raise InconsistentShares(windows)
    secret = windows[0]
    if secret.denominator != 1:
        raise NonIntegralResult(secret.numerator, secret.denominator)
    return secret.numerator
