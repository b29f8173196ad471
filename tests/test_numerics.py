import bisect
import math
import operator
import statistics

import pytest

from cosmokit.numerics import (
    arctanh,
    bisection_search,
    brent_root,
    closest,
    fill_linear,
    fill_logarithmic,
    integrate,
    interpolate_y,
    locate,
    locate_by,
    locate_sorted_index,
    median,
    polint,
    sgn,
    value_range,
)


@pytest.mark.parametrize("x", [-7.5, -1, 3, 0.25])
def test_sgn_times_magnitude_restores_value(x):
    assert sgn(x) * abs(x) == x


def test_sgn_of_zero():
    assert sgn(0) == 0


def test_fill_linear_endpoints_and_spacing():
    grid = fill_linear(11, 0.1, 0.99)
    assert len(grid) == 11
    assert grid[0] == pytest.approx(0.1)
    assert grid[-1] == pytest.approx(0.99)
    steps = [b - a for a, b in zip(grid, grid[1:])]
    assert all(s == pytest.approx(steps[0]) for s in steps)


def test_fill_linear_too_few_points():
    with pytest.raises(ValueError):
        fill_linear(1, 0.0, 1.0)


def test_fill_logarithmic_constant_ratio():
    grid = fill_logarithmic(9, 1.0e-3, 1.0e4)
    assert grid[0] == pytest.approx(1.0e-3)
    assert grid[-1] == pytest.approx(1.0e4)
    ratios = [b / a for a, b in zip(grid, grid[1:])]
    assert all(r == pytest.approx(ratios[0]) for r in ratios)


@pytest.mark.parametrize("x", [0.5, 1.5, 2.2, 3.9, 4.0 - 1e-9])
def test_locate_brackets_value_ascending(x):
    v = [0.0, 1.0, 2.0, 3.0, 4.0]
    j = locate(v, x)
    assert v[j] <= x < v[j + 1]


@pytest.mark.parametrize("x", [0.5, 1.5, 3.9])
def test_locate_brackets_value_descending(x):
    v = [4.0, 3.0, 2.0, 1.0, 0.0]
    j = locate(v, x)
    assert v[j] >= x > v[j + 1]


def test_locate_edges():
    v = [0.0, 1.0, 2.0, 3.0]
    assert locate(v, -5.0) == -1
    assert locate(v, 10.0) == len(v) - 1
    assert locate(v, v[0]) == 0
    assert locate(v, v[-1]) == len(v) - 1
    assert locate([], 1.0) == -1


@pytest.mark.parametrize("x", [-1.0, 0.0, 0.7, 2.0, 2.5, 9.0, 100.0])
def test_locate_by_matches_bisect(x):
    v = [0.0, 1.0, 2.0, 2.0, 5.0, 9.0]
    assert locate_by(v, x, operator.lt) == bisect.bisect_right(v, x) - 1


@pytest.mark.parametrize("value", [-10.0, 0.3, 2.5, 4.0, 7.9, 50.0])
def test_locate_sorted_index_finds_largest_not_above(value):
    v = [5.0, -2.0, 8.0, 0.3, 4.0, 7.0]
    order = sorted(range(len(v)), key=v.__getitem__)
    index, rank = locate_sorted_index(v, order, value)
    assert order[rank] == index
    below = [x for x in v if x <= value]
    expected = max(below) if below else min(v)
    assert v[index] == expected


def test_locate_sorted_index_descending_order():
    v = [5.0, -2.0, 8.0, 0.3, 4.0, 7.0]
    order = sorted(range(len(v)), key=v.__getitem__, reverse=True)
    index, rank = locate_sorted_index(v, order, 4.5)
    assert order[rank] == index
    assert v[index] == 4.0


def test_locate_sorted_index_size_mismatch():
    with pytest.raises(ValueError):
        locate_sorted_index([1.0, 2.0, 3.0], [0, 1], 2.0)


@pytest.mark.parametrize("x", [-3.0, 0.2, 0.9, 1.6, 2.4, 7.0])
def test_closest_is_nearest(x):
    v = [0.0, 1.0, 2.0, 3.0]
    c = closest(v, x)
    assert abs(v[c] - x) == min(abs(a - x) for a in v)


def test_interpolate_y_hits_nodes():
    x = [float(i) for i in range(8)]
    y = [math.sin(a) for a in x]
    for xi, yi in zip(x, y):
        assert interpolate_y(x, y, xi) == pytest.approx(yi)


def test_interpolate_y_linear_near_ends():
    x = [float(i) for i in range(8)]
    y = [2.0 * a + 1.0 for a in x]
    assert interpolate_y(x, y, 0.25) == pytest.approx(2.0 * 0.25 + 1.0)
    assert interpolate_y(x, y, 6.5) == pytest.approx(2.0 * 6.5 + 1.0)


def test_interpolate_y_clamps_outside():
    x = [1.0, 2.0, 3.0, 4.0]
    y = [10.0, 20.0, 30.0, 40.0]
    assert interpolate_y(x, y, -4.0) == y[0]
    assert interpolate_y(x, y, 9.0) == y[-1]
    xr, yr = x[::-1], y[::-1]
    assert interpolate_y(xr, yr, -4.0) == yr[-1]
    assert interpolate_y(xr, yr, 9.0) == yr[0]


def test_interpolate_y_stays_between_neighbours_for_smooth_data():
    x = fill_linear(30, 0.0, 3.0)
    y = [math.exp(a) for a in x]
    value = interpolate_y(x, y, 1.55)
    assert value == pytest.approx(math.exp(1.55), rel=1e-2)


@pytest.mark.parametrize("x", [-0.9, -0.3, 0.0, 0.5, 0.99])
def test_arctanh_matches_math(x):
    assert arctanh(x) == pytest.approx(math.atanh(x))


@pytest.mark.parametrize("values", [[3.0, 1.0, 2.0], [4.0, 1.0, 3.0, 2.0], [7.0]])
def test_median_matches_statistics(values):
    assert median(values) == statistics.median(values)


def test_median_of_empty_is_zero():
    assert median([]) == 0


def test_value_range():
    values = [3.0, -1.5, 8.25, 0.0]
    assert value_range(values) == (min(values), max(values))
    lo, hi = value_range([])
    assert math.isnan(lo) and math.isnan(hi)


def test_polint_reproduces_quadratic():
    def quad(t):
        return 3.0 * t * t - 2.0 * t + 0.5

    xa = [0.0, 1.0, 2.5]
    ya = [quad(t) for t in xa]
    y, _ = polint(xa, ya, 1.7)
    assert y == pytest.approx(quad(1.7))


def test_polint_rejects_duplicate_abscissas():
    with pytest.raises(ValueError):
        polint([1.0, 1.0, 2.0], [0.0, 1.0, 2.0], 0.5)


def test_integrate_cosine():
    assert integrate(math.cos, 0.0, 1.0, 1e-10) == pytest.approx(math.sin(1.0), rel=1e-9)


def test_integrate_exponential_reversed_limits():
    forward = integrate(math.exp, 0.0, 1.0, 1e-10)
    backward = integrate(math.exp, 1.0, 0.0, 1e-10)
    assert forward == pytest.approx(math.e - 1.0, rel=1e-9)
    assert backward == pytest.approx(-forward)


def test_integrate_empty_interval():
    assert integrate(math.exp, 2.0, 2.0, 1e-6) == 0.0


def test_bisection_search_square_root():
    root = bisection_search(lambda t: t * t, 2.0, 0.0, 2.0, 1e-12)
    assert root == pytest.approx(math.sqrt(2.0), abs=1e-10)


def test_bisection_search_not_bracketed():
    with pytest.raises(ValueError):
        bisection_search(lambda t: t * t, -1.0, 0.0, 2.0, 1e-6)


def test_brent_root_cubic():
    root = brent_root(lambda t: t**3 - t - 2.0, 1.0, 2.0, 1e-12)
    assert root**3 - root - 2.0 == pytest.approx(0.0, abs=1e-9)


def test_brent_root_not_bracketed():
    with pytest.raises(ValueError):
        brent_root(math.exp, 0.0, 1.0, 1e-8)