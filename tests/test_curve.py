"""Tests for RangeCurve domain-interval min/max queries."""

import logging
import math
import random

import pytest

from rangeCurve.curve import CurveContractError
from rangeCurve.curve import RangeCurve


def brute_force_min_max(xs, ys, xmin, xmax):
    """Linear-scan reference: samples inside [xmin, xmax] plus interpolated bounds."""
    result = None

    def add(value):
        nonlocal result
        result = (value, value) if result is None else (min(result[0], value), max(result[1], value))

    for x, y in zip(xs, ys):
        if xmin <= x <= xmax and y is not None:
            add(y)

    for i in range(1, len(xs)):
        y0, y1 = ys[i - 1], ys[i]
        if y0 is None or y1 is None:
            continue
        for bound in (xmin, xmax):
            if xs[i - 1] < bound < xs[i]:
                add(y0 + (bound - xs[i - 1]) / (xs[i] - xs[i - 1]) * (y1 - y0))
    return result


def assert_min_max(actual, expected):
    if expected is None:
        assert actual is None
    else:
        assert actual is not None
        assert actual == pytest.approx(expected)


def random_curve_data(rng: random.Random, n: int, gap_ratio: float):
    xs, x = [], rng.uniform(-10, 10)
    for _ in range(n):
        x += rng.uniform(0.1, 2.0)
        xs.append(x)
    ys = [None if rng.random() < gap_ratio else rng.uniform(-50, 50) for _ in range(n)]
    return xs, ys


class TestConstruction:
    def test_mismatched_lengths_rejected(self):
        with pytest.raises(CurveContractError, match="same length"):
            RangeCurve([0.0, 1.0], [0.0])

    def test_empty_rejected(self):
        with pytest.raises(CurveContractError, match="at least one sample"):
            RangeCurve([], [])

    @pytest.mark.parametrize(
        "xs", [[0.0, 0.0, 1.0], [0.0, 2.0, 1.0], [3.0, 2.0], [0.0, math.nan, 2.0], [math.nan]]
    )
    def test_non_increasing_rejected(self, xs):
        with pytest.raises(CurveContractError):
            RangeCurve(xs, [1.0] * len(xs))

    @pytest.mark.parametrize(
        ("xs", "index"),
        [([-math.inf, 0.0], 0), ([0.0, 1.0, math.inf], 2), ([math.inf], 0), ([math.nan], 0)],
    )
    def test_non_finite_x_rejected(self, xs, index):
        with pytest.raises(CurveContractError, match="must be finite") as exc_info:
            RangeCurve(xs, [1.0] * len(xs))
        assert exc_info.value.index == index

    def test_contract_error_reports_index(self):
        with pytest.raises(CurveContractError) as exc_info:
            RangeCurve([0.0, 1.0, 1.0, 2.0], [None] * 4)
        assert exc_info.value.index == 2
        assert "strictly increasing" in str(exc_info.value)
        assert "index 2" in str(exc_info.value)

    def test_contract_error_is_value_error(self):
        with pytest.raises(ValueError):
            RangeCurve([1.0], [])

    def test_rejection_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="rangeCurve.curve"):
            with pytest.raises(CurveContractError):
                RangeCurve([1.0, 0.0], [1.0, 2.0])
        assert "Rejected curve samples" in caplog.text

    def test_build_is_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="rangeCurve.curve"):
            RangeCurve([0.0, 1.0, 2.0], [0.0, None, 2.0])
        assert "3 samples, 1 gaps, 3 tree nodes" in caplog.text

    def test_accessors_return_the_same_sequences(self, linear_curve_data):
        xs, ys = linear_curve_data
        curve = RangeCurve(xs, ys)
        assert curve.x_values is xs
        assert curve.y_values is ys

    def test_tuples_are_accepted(self):
        curve = RangeCurve((0.0, 1.0), (None, 4.0))
        assert curve.get_min_max_over_domain_interval(0.0, 1.0) == (4.0, 4.0)

    def test_from_pairs(self):
        curve = RangeCurve.from_pairs([(0.0, 1.0), (1.0, None), (2.0, 3.0)])
        assert list(curve.x_values) == [0.0, 1.0, 2.0]
        assert list(curve.y_values) == [1.0, None, 3.0]

    def test_domain_and_len(self):
        curve = RangeCurve([-1.0, 0.5, 4.0], [1.0, 2.0, 3.0])
        assert curve.domain == (-1.0, 4.0)
        assert len(curve) == 3
        assert "samples=3" in repr(curve)


class TestInterpolation:
    """Fixed scenarios on small curves; gaps are None."""

    def test_interpolation(self, linear_curve_data):
        curve = RangeCurve(*linear_curve_data)
        assert curve.get_min_max_over_domain_interval(0.5, 1.5) == (0.5, 1.5)

    def test_interpolation_at_end(self, linear_curve_data):
        curve = RangeCurve(*linear_curve_data)
        assert curve.get_min_max_over_domain_interval(1.5, 2.5) == (1.5, 2.0)

    def test_interpolation_at_start(self, linear_curve_data):
        curve = RangeCurve(*linear_curve_data)
        assert curve.get_min_max_over_domain_interval(-0.5, 0.5) == (0.0, 0.5)

    def test_query_above_range(self, linear_curve_data):
        curve = RangeCurve(*linear_curve_data)
        assert curve.get_min_max_over_domain_interval(3, 4) is None

    def test_query_below_range(self, linear_curve_data):
        curve = RangeCurve(*linear_curve_data)
        assert curve.get_min_max_over_domain_interval(-4, -3) is None

    def test_interpolated_values_do_not_hide_samples(self):
        curve = RangeCurve([0.0, 1.0, 2.0, 3.0], [0.0, -1.0, 4.0, 3.0])
        assert curve.get_min_max_over_domain_interval(0.5, 2.5) == (-1.0, 4.0)

    def test_empty_result_between_gaps(self):
        curve = RangeCurve([0.0, 1.0, 2.0, 3.0], [0.0, None, None, 3.0])
        assert curve.get_min_max_over_domain_interval(0.5, 2.5) is None

    def test_no_interpolation_across_gap_upper(self):
        curve = RangeCurve([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, None, 3.0])
        assert curve.get_min_max_over_domain_interval(0.5, 2.5) == (0.5, 1.0)

    def test_no_interpolation_across_gap_lower(self):
        curve = RangeCurve([0.0, 1.0, 2.0, 3.0], [0.0, None, 2.0, 3.0])
        assert curve.get_min_max_over_domain_interval(0.5, 2.5) == (2.0, 2.5)

    def test_interval_between_two_samples(self, linear_curve_data):
        curve = RangeCurve(*linear_curve_data)
        assert curve.get_min_max_over_domain_interval(1.25, 1.75) == (1.25, 1.75)

    def test_interval_between_two_samples_next_to_gap(self):
        curve = RangeCurve([0.0, 1.0, 2.0], [0.0, None, 2.0])
        assert curve.get_min_max_over_domain_interval(1.25, 1.75) is None

    def test_bounds_on_samples_do_not_interpolate(self, linear_curve_data):
        curve = RangeCurve(*linear_curve_data)
        assert curve.get_min_max_over_domain_interval(1.0, 2.0) == (1.0, 2.0)
        assert curve.get_min_max_over_domain_interval(0.0, 0.0) == (0.0, 0.0)

    def test_point_query_between_samples(self, linear_curve_data):
        curve = RangeCurve(*linear_curve_data)
        assert curve.get_min_max_over_domain_interval(0.25, 0.25) == (0.25, 0.25)

    def test_point_query_on_gap(self):
        curve = RangeCurve([0.0, 1.0, 2.0], [0.0, None, 2.0])
        assert curve.get_min_max_over_domain_interval(1.0, 1.0) is None

    def test_descending_segment(self):
        curve = RangeCurve([0.0, 10.0], [100.0, 0.0])
        assert curve.get_min_max_over_domain_interval(2.5, 5.0) == (50.0, 75.0)

    def test_16_values(self):
        curve = RangeCurve([float(i) for i in range(16)], [float(i) for i in range(16)])
        assert curve.get_min_max_over_domain_interval(5.0, 13.0) == (5.0, 13.0)

    def test_1024_values(self):
        curve = RangeCurve([float(i) for i in range(1024)], [float(i) for i in range(1024)])
        assert curve.get_min_max_over_domain_interval(101.0, 653.0) == (101.0, 653.0)


class TestSingleSample:
    def test_single_sample_inside(self):
        curve = RangeCurve([1.0], [5.0])
        assert curve.get_min_max_over_domain_interval(0.0, 2.0) == (5.0, 5.0)
        assert curve.get_min_max_over_domain_interval(1.0, 1.0) == (5.0, 5.0)

    def test_single_sample_outside(self):
        curve = RangeCurve([1.0], [5.0])
        assert curve.get_min_max_over_domain_interval(1.5, 2.0) is None
        assert curve.get_min_max_over_domain_interval(0.0, 0.5) is None

    def test_single_gap(self):
        curve = RangeCurve([1.0], [None])
        assert curve.get_min_max_over_domain_interval(0.0, 2.0) is None


class TestQueryPreconditions:
    def test_reversed_interval_rejected(self, linear_curve_data):
        curve = RangeCurve(*linear_curve_data)
        with pytest.raises(CurveContractError, match="must not exceed"):
            curve.get_min_max_over_domain_interval(1.5, 0.5)

    @pytest.mark.parametrize(("xmin", "xmax"), [(math.nan, 1.0), (0.0, math.nan)])
    def test_nan_bounds_rejected(self, linear_curve_data, xmin, xmax):
        curve = RangeCurve(*linear_curve_data)
        with pytest.raises(CurveContractError):
            curve.get_min_max_over_domain_interval(xmin, xmax)

    def test_infinite_bounds_cover_everything(self):
        curve = RangeCurve([0.0, 1.0, 2.0], [3.0, None, -3.0])
        assert curve.get_min_max_over_domain_interval(-math.inf, math.inf) == (-3.0, 3.0)


class TestAgainstBruteForce:
    @pytest.mark.parametrize("n", [*range(1, 21), 64, 100, 1024, 1500])
    def test_full_domain_is_linear_scan(self, n):
        rng = random.Random(n)
        xs, ys = random_curve_data(rng, n, gap_ratio=0.3)
        curve = RangeCurve(xs, ys)

        present = [y for y in ys if y is not None]
        expected = (min(present), max(present)) if present else None
        assert curve.get_min_max_over_domain_interval(xs[0], xs[-1]) == expected

    @pytest.mark.parametrize("n", [*range(1, 21), 33, 257, 1024, 1031])
    @pytest.mark.parametrize("gap_ratio", [0.0, 0.3, 0.8])
    def test_random_intervals(self, n, gap_ratio):
        rng = random.Random(n * 100 + int(gap_ratio * 10))
        xs, ys = random_curve_data(rng, n, gap_ratio)
        curve = RangeCurve(xs, ys)

        for _ in range(200):
            if rng.random() < 0.2:
                # Bounds exactly on samples
                a, b = rng.choice(xs), rng.choice(xs)
            else:
                a = rng.uniform(xs[0] - 2, xs[-1] + 2)
                b = rng.uniform(xs[0] - 2, xs[-1] + 2)
            xmin, xmax = min(a, b), max(a, b)
            assert_min_max(
                curve.get_min_max_over_domain_interval(xmin, xmax),
                brute_force_min_max(xs, ys, xmin, xmax),
            )

    def test_repeated_queries_are_identical(self):
        rng = random.Random(42)
        xs, ys = random_curve_data(rng, 300, gap_ratio=0.25)
        xs_before, ys_before = list(xs), list(ys)
        curve = RangeCurve(xs, ys)

        intervals = [tuple(sorted((rng.uniform(-20, 600), rng.uniform(-20, 600)))) for _ in range(50)]
        first = [curve.get_min_max_over_domain_interval(lo, hi) for lo, hi in intervals]
        second = [curve.get_min_max_over_domain_interval(lo, hi) for lo, hi in intervals]

        assert first == second
        assert xs == xs_before
        assert ys == ys_before
