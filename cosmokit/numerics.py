"""Numerical helpers: grids, table lookup, interpolation, integration and root finding."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

__all__ = [
    "sgn",
    "fill_linear",
    "fill_logarithmic",
    "locate",
    "locate_by",
    "locate_sorted_index",
    "closest",
    "interpolate_y",
    "arctanh",
    "median",
    "value_range",
    "polint",
    "integrate",
    "bisection_search",
    "brent_root",
]

_ROMBERG_MAX_STEPS = 34
_ROMBERG_ORDER = 6
_BISECTION_MAX_STEPS = 100_000_000
_BRENT_MAX_ITER = 100
_BRENT_EPS = 3.0e-8


def sgn(val: float) -> int:
    """Return -1, 0 or 1 according to the sign of ``val``."""
    return (0 < val) - (val < 0)


def fill_linear(n: int, lo: float, hi: float) -> list[float]:
    """Return ``n`` equally spaced points covering ``[lo, hi]``."""
    if n == 0:
        return []
    if n < 2:
        raise ValueError("a grid needs at least two points")
    return [lo + (hi - lo) * i / (n - 1) for i in range(n)]


def fill_logarithmic(n: int, lo: float, hi: float) -> list[float]:
    """Return ``n`` logarithmically equally spaced points covering ``[lo, hi]``."""
    if n == 0:
        return []
    if n < 2:
        raise ValueError("a grid needs at least two points")
    log_lo, log_hi = math.log(lo), math.log(hi)
    return [math.exp(log_lo + (log_hi - log_lo) * i / (n - 1)) for i in range(n)]


def locate(v: Sequence[float], x: float) -> int:
    """Index ``j`` such that ``v[j]`` and ``v[j+1]`` bracket ``x``.

    ``v`` may be ascending or descending. Below the table gives -1, above it
    ``len(v) - 1``; an empty table gives -1.
    """
    n = len(v)
    if n == 0:
        return -1
    if x == v[0]:
        return 0
    if x == v[-1]:
        return n - 1
    lower, upper = -1, n
    ascending = v[-1] >= v[0]
    while upper - lower > 1:
        mid = (upper + lower) // 2
        if (x >= v[mid]) == ascending:
            lower = mid
        else:
            upper = mid
    return lower


def locate_by(v: Sequence, x, less_than: Callable[[object, object], bool]) -> int:
    """Like :func:`locate` for an ascending table ordered by ``less_than(x, item)``."""
    n = len(v)
    if n == 0 or less_than(x, v[0]):
        return -1
    if not less_than(x, v[-1]):
        return n - 1
    lower, upper = -1, n
    while upper - lower > 1:
        mid = (upper + lower) // 2
        if less_than(x, v[mid]):
            upper = mid
        else:
            lower = mid
    return lower


def locate_sorted_index(
    v: Sequence[float], sorted_index: Sequence[int], value: float
) -> tuple[int, int]:
    """Find the element of unsorted ``v`` with the largest value not above ``value``.

    ``sorted_index`` orders ``v`` ascending or descending. Returns the index into
    ``v`` and the rank, i.e. the position of that index within ``sorted_index``.
    """
    n = len(v)
    if n <= 1:
        return 0, 0
    if n != len(sorted_index):
        raise ValueError("sorted_index is the wrong size")

    imin, imax = 0, n - 1
    fmax = v[sorted_index[imax]]
    fmin = v[sorted_index[imin]]
    if fmin > fmax:
        imin, imax = imax, imin
        fmin, fmax = fmax, fmin

    if value <= fmin:
        return sorted_index[imin], imin
    if value >= fmax:
        return sorted_index[imax], imax

    current = (imax + imin) // 2
    fcurrent = v[sorted_index[current]]
    while abs(imax - imin) > 1:
        if fcurrent > value:
            imax = current
        else:
            imin = current
        current = (imax + imin) // 2
        fcurrent = v[sorted_index[current]]
    return sorted_index[imin], imin


def closest(v: Sequence[float], x: float) -> int:
    """Index of the element of sorted ``v`` nearest to ``x``."""
    index = locate(v, x)
    if index == -1:
        return 0
    if index == len(v) - 1:
        return index
    return index if (x - v[index]) < (v[index + 1] - x) else index + 1


def interpolate_y(x: Sequence[float], y: Sequence[float], xi: float) -> float:
    """Interpolate the tabulated function ``y(x)`` at ``xi``.

    A cubic scheme is used away from the table ends and a linear one near
    them; outside the table the end values are returned.
    """
    n = len(x)
    if n != len(y):
        raise ValueError("x and y must have the same length")
    if n < 2:
        raise ValueError("interpolation needs at least two points")

    if x[-1] > x[0]:
        if xi > x[-1]:
            return y[-1]
        if xi < x[0]:
            return y[0]
    if x[-1] < x[0]:
        if xi < x[-1]:
            return y[-1]
        if xi > x[0]:
            return y[0]

    i = min(max(locate(x, xi), 0), n - 2)
    f = (xi - x[i]) / (x[i + 1] - x[i])
    if 1 < i < n - 2:
        f2 = f * f
        a0 = y[i + 2] - y[i + 1] - y[i - 1] + y[i]
        a1 = y[i - 1] - y[i] - a0
        a2 = y[i + 1] - y[i - 1]
        a3 = y[i]
        return a0 * f * f2 + a1 * f2 + a2 * f + a3
    return f * y[i + 1] + (1 - f) * y[i]


def arctanh(x: float) -> float:
    """Inverse hyperbolic tangent."""
    return 0.5 * math.log((1 + x) / (1 - x))


def median(values: Sequence[float]) -> float:
    """Median of ``values``; 0 for an empty sequence."""
    ordered = sorted(values)
    size = len(ordered)
    if size == 0:
        return 0
    mid = size // 2
    if size % 2 == 0:
        return (ordered[mid] + ordered[mid - 1]) / 2
    return ordered[mid]


def value_range(values: Sequence[float]) -> tuple[float, float]:
    """Return ``(minimum, maximum)``; both are NaN for an empty sequence."""
    if not values:
        return math.nan, math.nan
    return min(values), max(values)


def polint(xa: Sequence[float], ya: Sequence[float], x: float) -> tuple[float, float]:
    """Neville polynomial interpolation through the points; returns ``(y, error)``."""
    n = len(xa)
    if n == 0 or n != len(ya):
        raise ValueError("polint needs matching, non-empty tables")

    ns = min(range(n), key=lambda i: abs(x - xa[i]))
    c = list(ya)
    d = list(ya)
    y = ya[ns]
    dy = 0.0
    for m in range(1, n):
        for i in range(n - m):
            ho = xa[i] - x
            hp = xa[i + m] - x
            w = c[i + 1] - d[i]
            den = ho - hp
            if den == 0.0:
                raise ValueError("coincident abscissas in polint")
            den = w / den
            d[i] = hp * den
            c[i] = ho * den
        if 2 * ns < n - m:
            dy = c[ns]
        else:
            dy = d[ns - 1]
            ns -= 1
        y += dy
    return y, dy


def _trapezoid_refine(func: Callable[[float], float], a: float, b: float, step: int, previous: float) -> float:
    if step == 1:
        return 0.5 * (b - a) * (func(a) + func(b))
    points = 1 << (step - 2)
    delta = (b - a) / points
    total = sum(func(a + (k + 0.5) * delta) for k in range(points))
    return 0.5 * (previous + (b - a) * total / points)


def integrate(func: Callable[[float], float], a: float, b: float, tol: float) -> float:
    """Romberg integration of ``func`` from ``a`` to ``b`` to fractional accuracy ``tol``."""
    if a == b:
        return 0.0
    steps: list[float] = []
    sums: list[float] = []
    h = 1.0
    s = 0.0
    for j in range(1, _ROMBERG_MAX_STEPS + 1):
        s = _trapezoid_refine(func, a, b, j, s)
        steps.append(h)
        sums.append(s)
        if j >= _ROMBERG_ORDER:
            estimate, error = polint(steps[-_ROMBERG_ORDER:], sums[-_ROMBERG_ORDER:], 0.0)
            if abs(error) <= tol * abs(estimate):
                return estimate
        h *= 0.25
    raise ValueError("too many steps in integrate")


def bisection_search(
    func: Callable[[float], float], fvalue: float, x1: float, x2: float, xacc: float
) -> float:
    """Find ``x`` between ``x1`` and ``x2`` where ``func(x) == fvalue`` by bisection."""
    f1 = func(x1) - fvalue
    f2 = func(x2) - fvalue
    if f1 * f2 > 0:
        raise ValueError("not bracketed")
    count = 0
    while abs(x1 - x2) > xacc and count < _BISECTION_MAX_STEPS:
        count += 1
        xnew = (x1 + x2) / 2
        fnew = func(xnew) - fvalue
        if fnew * f1 < 0:
            x2 = xnew
        else:
            x1 = xnew
            f1 = fnew
    return (x1 + x2) / 2


def brent_root(func: Callable[[float], float], x1: float, x2: float, tol: float) -> float:
    """Brent's method for a root of ``func`` bracketed by ``x1`` and ``x2``."""
    a, b, c = x1, x2, x2
    fa, fb = func(a), func(b)
    if (fa > 0.0 and fb > 0.0) or (fa < 0.0 and fb < 0.0):
        raise ValueError(
            f"root must be bracketed: f({x1:e})={fa:e}, f({x2:e})={fb:e}"
        )
    fc = fb
    d = e = b - a
    for _ in range(_BRENT_MAX_ITER):
        if (fb > 0.0 and fc > 0.0) or (fb < 0.0 and fc < 0.0):
            c, fc = a, fa
            d = e = b - a
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb
        tol1 = 2.0 * _BRENT_EPS * abs(b) + 0.5 * tol
        xm = 0.5 * (c - b)
        if abs(xm) <= tol1 or fb == 0.0:
            return b
        if abs(e) >= tol1 and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                p = 2.0 * xm * s
                q = 1.0 - s
            else:
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * xm * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)
            if p > 0.0:
                q = -q
            p = abs(p)
            min1 = 3.0 * xm * q - abs(tol1 * q)
            min2 = abs(e * q)
            if 2.0 * p < min(min1, min2):
                e = d
                d = p / q
            else:
                d = xm
                e = d
        else:
            d = xm
            e = d
        a, fa = b, fb
        if abs(d) > tol1:
            b += d
        else:
            b += abs(tol1) if xm >= 0.0 else -abs(tol1)
        fb = func(b)
    raise RuntimeError("maximum number of iterations exceeded in brent_root")