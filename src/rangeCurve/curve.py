"""
Explicit single-valued curve y = f(x) with fast min/max queries over x-intervals.

The curve is sampled at strictly increasing x values; any y value may be missing
(a gap). Between two consecutive non-gap samples the curve is treated as a
straight line, so a query boundary falling strictly between them contributes
an interpolated value. Interpolation never reaches across a gap.

Usage:
    curve = RangeCurve([0.0, 1.0, 2.0], [0.0, 1.0, 2.0])
    curve.get_min_max_over_domain_interval(0.5, 1.5)  # (0.5, 1.5)
    curve.get_min_max_over_domain_interval(3.0, 4.0)  # None
"""

import logging
import math
from bisect import bisect_left
from bisect import bisect_right
from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from .interval_tree import IntervalTreeMinMax
from .interval_tree import MinMax
from .interval_tree import merge_min_max
from .interval_tree import min_max_of

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CurveContractError(ValueError):
    """Raised when a curve is built from, or queried with, invalid arguments."""

    reason: str
    index: Optional[int] = None

    def __str__(self) -> str:
        if self.index is None:
            return self.reason
        return f"{self.reason} (at index {self.index})"


class RangeCurve:
    """
    Sampled curve answering min/max over arbitrary x-intervals in O(log n).

    Architecture:
    - x/y sequences: kept by reference, never copied nor mutated
    - IntervalTreeMinMax: precomputed min/max of every dyadic index range
    - Domain queries: binary search on x, tree lookup, boundary interpolation

    The sequences are shared with the caller; they must not be mutated while
    the curve is in use.
    """

    def __init__(self, x_values: Sequence[float], y_values: Sequence[Optional[float]]):
        """
        Build the curve.

        Args:
            x_values: Sample x values; strictly increasing, non-empty
            y_values: Sample y values aligned with x_values; None marks a gap

        Raises:
            CurveContractError: If lengths differ, input is empty or
                x values are not finite and strictly increasing
        """
        self._validate_samples(x_values, y_values)

        self._x_values = x_values
        self._y_values = y_values
        self._tree = IntervalTreeMinMax(y_values)

        logger.debug(
            "RangeCurve built: %d samples, %d gaps, %d tree nodes",
            len(x_values),
            sum(1 for y in y_values if y is None),
            len(self._tree),
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[float, Optional[float]]]) -> "RangeCurve":
        """Build a curve from (x, y) pairs; y may be None."""
        x_values: list[float] = []
        y_values: list[Optional[float]] = []
        for x, y in pairs:
            x_values.append(x)
            y_values.append(y)
        return cls(x_values, y_values)

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def x_values(self) -> Sequence[float]:
        return self._x_values

    @property
    def y_values(self) -> Sequence[Optional[float]]:
        return self._y_values

    @property
    def domain(self) -> tuple[float, float]:
        """First and last sample x value."""
        return self._x_values[0], self._x_values[-1]

    def __len__(self) -> int:
        return len(self._x_values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(samples={len(self)}, domain={self.domain})"

    # ========================================================================
    # Queries
    # ========================================================================

    def get_min_max_over_domain_interval(self, xmin: float, xmax: float) -> Optional[MinMax]:
        """
        Return min and max y over x in [xmin, xmax].

        Sample values inside the interval are aggregated directly. Each bound
        that falls strictly between two non-gap samples also contributes the
        linearly interpolated value at that bound.

        Args:
            xmin: Lower x bound (inclusive)
            xmax: Upper x bound (inclusive)

        Returns:
            (min, max), or None if neither a sample value nor an interpolated
            bound value lies in the interval

        Raises:
            CurveContractError: If xmin > xmax or either bound is NaN
        """
        if not xmin <= xmax:
            raise CurveContractError(f"xmin must not exceed xmax, got [{xmin}, {xmax}]")

        xs = self._x_values
        # First sample with x >= xmin
        lo_idx = bisect_left(xs, xmin)
        if lo_idx == len(xs):
            return None

        # Last sample with x <= xmax
        hi_idx = bisect_right(xs, xmax) - 1
        if hi_idx < 0:
            return None

        lo_interp = self._interpolate_lower(lo_idx, xmin)
        hi_interp = self._interpolate_upper(hi_idx, xmax)
        boundary = min_max_of(lo_interp, hi_interp)

        # No sample in [xmin, xmax]; both bounds sit between the same two samples
        if hi_idx < lo_idx:
            return boundary

        return merge_min_max(self._tree.query(lo_idx, hi_idx), boundary)

    def _interpolate_lower(self, lo_idx: int, xmin: float) -> Optional[float]:
        """Interpolated y at xmin if xmin lies strictly between samples lo_idx - 1 and lo_idx."""
        xs = self._x_values
        if lo_idx == 0 or xs[lo_idx] <= xmin:
            return None
        return self._interpolate(lo_idx - 1, xmin)

    def _interpolate_upper(self, hi_idx: int, xmax: float) -> Optional[float]:
        """Interpolated y at xmax if xmax lies strictly between samples hi_idx and hi_idx + 1."""
        xs = self._x_values
        if hi_idx >= len(xs) - 1 or xs[hi_idx] == xmax or xs[hi_idx + 1] <= xmax:
            return None
        return self._interpolate(hi_idx, xmax)

    def _interpolate(self, left_idx: int, x: float) -> Optional[float]:
        """
        Linear interpolation between samples left_idx and left_idx + 1.

        Returns None if either sample is a gap.
        """
        x0, x1 = self._x_values[left_idx], self._x_values[left_idx + 1]
        y0, y1 = self._y_values[left_idx], self._y_values[left_idx + 1]
        if y0 is None or y1 is None or x0 == x1:
            return None
        return y0 + (x - x0) / (x1 - x0) * (y1 - y0)

    # ========================================================================
    # Validation
    # ========================================================================

    @staticmethod
    def _validate_samples(x_values: Sequence[float], y_values: Sequence[Optional[float]]) -> None:
        """
        Check the construction contract.

        Raises:
            CurveContractError: On the first violation found
        """
        if len(x_values) != len(y_values):
            error = CurveContractError(
                f"x and y must have the same length, got {len(x_values)} and {len(y_values)}"
            )
        elif len(x_values) == 0:
            error = CurveContractError("curve needs at least one sample")
        else:
            error = None
            for i in range(1, len(x_values)):
                # NaN fails this comparison too
                if not x_values[i] > x_values[i - 1]:
                    error = CurveContractError("x values must be strictly increasing", index=i)
                    break
            # Ordered, so only the end samples can be infinite
            if error is None:
                for i in (0, len(x_values) - 1):
                    if not math.isfinite(x_values[i]):
                        error = CurveContractError("x values must be finite", index=i)
                        break

        if error is not None:
            logger.warning("Rejected curve samples: %s", error)
            raise error
